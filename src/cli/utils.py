"""Shared CLI utilities."""

import structlog
from rich.console import Console

console = Console()
logger = structlog.get_logger()

MOOD_STYLE = {
    "very_positive": "bold green",
    "positive": "green",
    "neutral": "dim",
    "negative": "yellow",
    "very_negative": "bold red",
}


def get_components() -> dict:
    """Initialize store, dictionary and analysis pipeline from config."""
    from cli.config import extract_options, load_config_model, sentiment_thresholds
    from diary.analyzer import DiaryWriter, MoodAnalyzer
    from diary.dictionary import load_dictionary
    from diary.storage import EntryStore

    config = load_config_model()

    store = EntryStore(config.paths.data_dir)
    dictionary = load_dictionary(config.paths.dictionary)
    analyzer = MoodAnalyzer(
        dictionary,
        extract_options=extract_options(config),
        thresholds=sentiment_thresholds(config),
    )
    writer = DiaryWriter(store, analyzer)

    return {
        "config": config,
        "store": store,
        "dictionary": dictionary,
        "analyzer": analyzer,
        "writer": writer,
    }


def mood_markup(label: str, text: str | None = None) -> str:
    """Rich markup for a mood label."""
    style = MOOD_STYLE.get(label, "dim")
    return f"[{style}]{text if text is not None else label}[/]"
