"""Shared test fixtures for mood-diary."""

import sys
from datetime import date, datetime, timedelta
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

TODAY = date(2024, 5, 20)


@pytest.fixture
def small_dictionary():
    """Tiny ordered dictionary for predictable matching."""
    from diary.dictionary import WordDictionary

    return WordDictionary.from_dict(
        {
            "happy": {"synonyms": ["happy", "glad"], "weight": 1.0, "sentiment": "positive"},
            "good": {"synonyms": ["good", "nice"], "weight": 1.0, "sentiment": "positive"},
            "sad": {"synonyms": ["sad", "down"], "weight": 1.0, "sentiment": "negative"},
            "angry": {"synonyms": ["angry", "mad"], "weight": 2.0, "sentiment": "negative"},
            "work": {"synonyms": ["work", "office"], "weight": 0.5, "sentiment": "neutral"},
        }
    )


@pytest.fixture
def store(tmp_path):
    """Empty entry store in a temp directory."""
    from diary.storage import EntryStore

    return EntryStore(tmp_path / "data")


def _make_entry(entry_id, day, label="neutral", score=0.0, keywords=None, counts=None, text="entry"):
    """Entry dict in the persisted shape, dated at noon on ``day``."""
    keywords = keywords or []
    return {
        "id": entry_id,
        "date": datetime.combine(day, datetime.min.time()).replace(hour=12).isoformat(),
        "text": text,
        "keywords": keywords,
        "counts": counts if counts is not None else {k: 1 for k in keywords},
        "weighted": {k: 1.0 for k in keywords},
        "sentiment": {
            "label": label,
            "score": score,
            "rawScore": score,
            "confidence": 1.0,
            "details": {},
        },
        "botReply": "",
    }


@pytest.fixture
def today():
    """Fixed reference day for windowed aggregation."""
    return TODAY


@pytest.fixture
def make_entry():
    return _make_entry


@pytest.fixture
def sample_entries():
    """Entries spread over the last six weeks before TODAY."""
    return [
        _make_entry("e1", TODAY, "very_positive", 1.0, ["행복", "좋다"], {"행복": 2, "좋다": 1}),
        _make_entry("e2", TODAY, "negative", -0.5, ["피곤"], {"피곤": 1}),
        _make_entry("e3", TODAY - timedelta(days=1), "positive", 0.4, ["좋다"], {"좋다": 3}),
        _make_entry("e4", TODAY - timedelta(days=3), "very_negative", -1.0, ["슬픔", "피곤"]),
        _make_entry("e5", TODAY - timedelta(days=10), "neutral", 0.0, ["일"]),
        _make_entry("e6", TODAY - timedelta(days=40), "positive", 0.5, ["행복"], {"행복": 5}),
    ]
