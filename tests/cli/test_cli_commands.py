"""CLI command tests using Click CliRunner.

Strategy: patch get_components at each command module's import point so the
commands run against a store in tmp_path with the bundled dictionary, and
patch config loading in cli.main so no user config is read.
"""

import importlib
import json
from contextlib import ExitStack
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from cli.config_models import DiaryConfig
from cli.main import cli
from diary.analyzer import DiaryWriter, MoodAnalyzer
from diary.dictionary import load_dictionary
from diary.storage import EntryStore

COMMAND_MODULES = ["journal", "mood", "trends", "export"]


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def components(tmp_path):
    store = EntryStore(tmp_path / "data")
    dictionary = load_dictionary()
    analyzer = MoodAnalyzer(dictionary)
    return {
        "config": DiaryConfig(),
        "store": store,
        "dictionary": dictionary,
        "analyzer": analyzer,
        "writer": DiaryWriter(store, analyzer),
    }


@pytest.fixture
def invoke(runner, components):
    """Invoke the CLI with components and config patched."""

    def _invoke(*args, **kwargs):
        with ExitStack() as stack:
            # cli.commands re-exports groups named like their modules, so
            # patch the module objects rather than dotted string targets
            for name in COMMAND_MODULES:
                module = importlib.import_module(f"cli.commands.{name}")
                stack.enter_context(
                    patch.object(module, "get_components", return_value=components)
                )
            stack.enter_context(patch("cli.main.load_config_model", return_value=DiaryConfig()))
            stack.enter_context(patch("cli.main.setup_logging"))
            return runner.invoke(cli, list(args), **kwargs)

    return _invoke


class TestMain:
    def test_version(self, invoke):
        result = invoke("--version")
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_config_error(self, runner):
        with patch("cli.main.load_config_model", side_effect=ValueError("bad yaml")):
            result = runner.invoke(cli, ["stats"])
        assert result.exit_code == 1
        assert "Config error" in result.output


class TestJournalCommands:
    def test_write(self, invoke, components):
        result = invoke("journal", "write", "오늘은 정말 행복하고 좋은 하루였다")
        assert result.exit_code == 0, result.output
        assert "Saved" in result.output

        entries = components["store"].get_entries()
        assert len(entries) == 1
        assert entries[0]["sentiment"]["label"] == "very_positive"
        assert set(entries[0]["keywords"]) == {"행복", "좋다"}

    def test_write_past_date(self, invoke, components):
        result = invoke("journal", "write", "-d", "2024-05-01", "tired and sad")
        assert result.exit_code == 0, result.output
        assert components["store"].get_entries()[0]["date"].startswith("2024-05-01")
        assert components["store"].get_mood_color_by_date("2024-05-01") == "very_negative"

    def test_write_future_date(self, invoke, components):
        result = invoke("journal", "write", "-d", "2999-01-01", "happy")
        assert result.exit_code == 1
        assert components["store"].get_entries() == []

    def test_write_bad_date(self, invoke):
        result = invoke("journal", "write", "-d", "01/05/2024", "happy")
        assert result.exit_code == 2

    def test_analyze(self, invoke, components):
        result = invoke("journal", "analyze", "오늘은 정말 행복하고 좋은 하루였다")
        assert result.exit_code == 0, result.output
        assert "행복" in result.output
        assert "score=+1.000" in result.output
        assert components["store"].get_entries() == []

    def test_analyze_no_keywords(self, invoke):
        result = invoke("journal", "analyze", "nothing here")
        assert result.exit_code == 0
        assert "No dictionary keywords found." in result.output

    def test_list_empty(self, invoke):
        result = invoke("journal", "list")
        assert result.exit_code == 0
        assert "No entries found." in result.output

    def test_list(self, invoke, components):
        components["writer"].write("happy")
        result = invoke("journal", "list")
        assert result.exit_code == 0
        assert "No entries found." not in result.output

    def test_show_by_prefix(self, invoke, components):
        entry = components["writer"].write("happy day")
        result = invoke("journal", "show", entry["id"][:8])
        assert result.exit_code == 0, result.output
        assert "happy day" in result.output

    @pytest.mark.parametrize("sentiment", [{"label": "positive", "score": None}, {"score": "high"}, "broken"])
    def test_list_and_show_malformed_sentiment(self, invoke, components, sentiment):
        """Imported entries with a bad sentiment still list and show."""
        components["store"].save_entry(
            {"id": "abc12345", "date": "2024-05-20T09:00:00", "text": "restored", "sentiment": sentiment}
        )
        result = invoke("journal", "list")
        assert result.exit_code == 0, result.output
        assert "+0.00" in result.output

        result = invoke("journal", "show", "abc12345")
        assert result.exit_code == 0, result.output
        assert "(50%)" in result.output

    def test_show_missing(self, invoke):
        result = invoke("journal", "show", "nope")
        assert result.exit_code == 1
        assert "Entry not found" in result.output

    def test_delete(self, invoke, components):
        entry = components["writer"].write("happy")
        result = invoke("journal", "delete", entry["id"][:8], "--yes")
        assert result.exit_code == 0, result.output
        assert components["store"].get_entries() == []


class TestMoodCommands:
    def test_stats_empty(self, invoke):
        result = invoke("stats")
        assert result.exit_code == 0
        assert "No entries in the last 14 days." in result.output

    def test_stats(self, invoke, components):
        components["writer"].write("happy")
        components["writer"].write("sad")
        result = invoke("stats", "-d", "30")
        assert result.exit_code == 0, result.output
        assert "Average:" in result.output
        assert "Top keywords:" in result.output

    def test_stats_rejects_window(self, invoke):
        result = invoke("stats", "-d", "7")
        assert result.exit_code == 2

    def test_calendar(self, invoke, components):
        components["store"].save_mood_color("2024-05-20", "positive")
        result = invoke("calendar", "--month", "2024-05")
        assert result.exit_code == 0, result.output
        assert "2024년 5월" in result.output

    def test_calendar_bad_month(self, invoke):
        result = invoke("calendar", "--month", "2024-13")
        assert result.exit_code == 2


class TestSeriesCommand:
    def test_sentiment_series(self, invoke, components):
        components["writer"].write("happy")
        result = invoke("series", "-d", "14")
        assert result.exit_code == 0, result.output
        assert "Trend:" in result.output

    def test_word_series_empty(self, invoke):
        result = invoke("series", "--words")
        assert result.exit_code == 0
        assert "No keywords recorded yet." in result.output

    def test_word_series(self, invoke, components):
        components["writer"].write("happy and tired")
        result = invoke("series", "--words", "-d", "14")
        assert result.exit_code == 0, result.output
        assert "행복" in result.output


class TestExportCommands:
    def test_export_and_import(self, invoke, components, tmp_path):
        components["writer"].write("happy")
        backup = tmp_path / "backup.json"

        result = invoke("export", "json", "-o", str(backup))
        assert result.exit_code == 0, result.output
        assert len(json.loads(backup.read_text(encoding="utf-8"))["entries"]) == 1

        components["store"].clear_all()
        result = invoke("import", str(backup), "--yes")
        assert result.exit_code == 0, result.output
        assert "Imported 1 entries" in result.output
        assert len(components["store"].get_entries()) == 1

    def test_import_invalid(self, invoke, tmp_path):
        backup = tmp_path / "bad.json"
        backup.write_text(json.dumps({"version": "1.0"}), encoding="utf-8")
        result = invoke("import", str(backup), "--yes")
        assert result.exit_code == 1
        assert "Import failed" in result.output

    def test_export_markdown(self, invoke, components, tmp_path):
        components["writer"].write("happy")
        output = tmp_path / "md"
        result = invoke("export", "markdown", "-o", str(output))
        assert result.exit_code == 0, result.output
        assert len(list(output.glob("*.md"))) == 1
