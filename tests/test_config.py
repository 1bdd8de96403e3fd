"""Tests for config loading and the pydantic config models."""

from pathlib import Path

import pytest

from cli.config import extract_options, load_config_model, sentiment_thresholds
from cli.config_models import DiaryConfig
from diary.matching import EditDistanceMatch


class TestConfigModels:
    def test_defaults(self):
        """An empty config uses default settings."""
        config = DiaryConfig()
        assert config.analysis.policy == "affix"
        assert config.analysis.mode == "direct"
        assert config.sentiment.positive_threshold == 0.3
        assert config.stats.default_days == 14
        assert config.logging.level == "WARNING"
        assert config.paths.dictionary is None

    def test_paths_expanded(self):
        """Paths expand ~."""
        config = DiaryConfig.from_dict({"paths": {"data_dir": "~/diary-data"}})
        assert config.paths.data_dir == Path.home() / "diary-data"

    def test_log_level_normalized(self):
        """Log levels are upper-cased."""
        assert DiaryConfig.from_dict({"logging": {"level": "debug"}}).logging.level == "DEBUG"

    @pytest.mark.parametrize(
        "data",
        [
            {"sentiment": {"positive_threshold": 0.7}},
            {"sentiment": {"negative_threshold": 0.1}},
            {"stats": {"default_days": 7}},
            {"analysis": {"policy": "stemmer"}},
            {"analysis": {"mode": "parallel"}},
            {"analysis": {"min_token_length": 0}},
            {"logging": {"level": "LOUD"}},
        ],
    )
    def test_invalid_values(self, data):
        """Out-of-range settings fail validation."""
        with pytest.raises(ValueError):
            DiaryConfig.from_dict(data)

    def test_round_trip(self):
        """to_dict output validates back to the same config."""
        config = DiaryConfig.from_dict({"stats": {"default_days": 90}})
        assert DiaryConfig.from_dict(config.to_dict()) == config


class TestLoadConfig:
    def test_load_from_file(self, tmp_path):
        """Settings load from a YAML file."""
        path = tmp_path / "config.yaml"
        path.write_text(
            "analysis:\n  policy: edit_distance\n  max_edit_distance: 2\n"
            "sentiment:\n  normalize: false\n",
            encoding="utf-8",
        )
        config = load_config_model(path)
        assert config.analysis.policy == "edit_distance"
        assert config.sentiment.normalize is False

    def test_empty_file(self, tmp_path):
        """An empty file gives defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config_model(path) == DiaryConfig()

    def test_invalid_yaml(self, tmp_path):
        """Broken YAML raises ValueError."""
        path = tmp_path / "config.yaml"
        path.write_text("analysis: [unclosed", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_config_model(path)

    def test_validation_error(self, tmp_path):
        """Invalid values raise ValueError."""
        path = tmp_path / "config.yaml"
        path.write_text("stats:\n  default_days: 3\n", encoding="utf-8")
        with pytest.raises(ValueError, match="Config validation failed"):
            load_config_model(path)


class TestConfigAdapters:
    def test_extract_options(self):
        """Analysis settings become ExtractOptions."""
        config = DiaryConfig.from_dict(
            {"analysis": {"policy": "edit_distance", "max_edit_distance": 2, "mode": "indexed"}}
        )
        options = extract_options(config)
        policy = options.resolve_policy()
        assert isinstance(policy, EditDistanceMatch)
        assert policy.max_distance == 2
        assert options.mode == "indexed"

    def test_sentiment_thresholds(self):
        """Sentiment settings become SentimentThresholds."""
        config = DiaryConfig.from_dict({"sentiment": {"very_positive_threshold": 0.8}})
        thresholds = sentiment_thresholds(config)
        assert thresholds.very_positive == 0.8
        assert thresholds.classify(0.7) == "positive"
