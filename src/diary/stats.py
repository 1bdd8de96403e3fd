"""Mood statistics and chart-ready time series from diary entries.

Every function here takes the in-memory entry list and recomputes from
scratch. Entries with missing or malformed fields count as neutral with a
zero score instead of aborting the aggregation.
"""

from collections import defaultdict
from collections.abc import Iterable, Mapping
from datetime import date, datetime, timedelta
from typing import Optional

import numpy as np

from shared_types import NEGATIVE_LABELS, POSITIVE_LABELS, SentimentLabel

from .sentiment import as_number

TOP_KEYWORDS = 10
TREND_THRESHOLD = 0.01  # score change per day


def _entries(entries) -> list[Mapping]:
    if not isinstance(entries, Iterable) or isinstance(entries, (str, bytes, Mapping)):
        return []
    return [e for e in entries if isinstance(e, Mapping)]


def _entry_day(entry: Mapping) -> Optional[str]:
    """YYYY-MM-DD part of the entry's ISO timestamp."""
    value = entry.get("date")
    if isinstance(value, (date, datetime)):
        return value.isoformat()[:10]
    if isinstance(value, str) and len(value) >= 10:
        return value[:10]
    return None


def _entry_date(entry: Mapping) -> Optional[date]:
    day = _entry_day(entry)
    if day is None:
        return None
    try:
        return date.fromisoformat(day)
    except ValueError:
        return None


def _label(entry: Mapping) -> str:
    sentiment = entry.get("sentiment")
    if isinstance(sentiment, Mapping) and isinstance(sentiment.get("label"), str):
        return sentiment["label"]
    return SentimentLabel.NEUTRAL


def _score(entry: Mapping) -> float:
    sentiment = entry.get("sentiment")
    if not isinstance(sentiment, Mapping):
        return 0.0
    return as_number(sentiment.get("score"))


def _counts(entry: Mapping) -> dict[str, int]:
    counts = entry.get("counts")
    if not isinstance(counts, Mapping):
        return {}
    return {
        k: v for k, v in counts.items()
        if isinstance(k, str) and isinstance(v, (int, float)) and not isinstance(v, bool)
    }


def _keywords(entry: Mapping) -> list[str]:
    keywords = entry.get("keywords")
    if not isinstance(keywords, (list, tuple)):
        return []
    return [k for k in keywords if isinstance(k, str)]


def _group(label: str) -> str:
    if label in POSITIVE_LABELS:
        return "positive"
    if label in NEGATIVE_LABELS:
        return "negative"
    return "neutral"


def trailing_dates(days: int, today: Optional[date] = None) -> list[str]:
    """N consecutive YYYY-MM-DD strings ending today, oldest first."""
    today = today or date.today()
    return [(today - timedelta(days=i)).isoformat() for i in range(days - 1, -1, -1)]


def _by_day(entries: list[Mapping]) -> dict[str, list[Mapping]]:
    grouped = defaultdict(list)
    for entry in entries:
        day = _entry_day(entry)
        if day:
            grouped[day].append(entry)
    return grouped


def compute_sentiment_time_series(
    entries, days: int = 14, *, today: Optional[date] = None
) -> dict:
    """Per-day positive/negative/neutral counts and mean score.

    Returns:
        {dates, positive, negative, neutral, avgScores}, each of length ``days``
    """
    dates = trailing_dates(days, today)
    grouped = _by_day(_entries(entries))

    series = {"dates": dates, "positive": [], "negative": [], "neutral": [], "avgScores": []}
    for day in dates:
        day_entries = grouped.get(day, [])
        tally = {"positive": 0, "negative": 0, "neutral": 0}
        total_score = 0.0
        for entry in day_entries:
            tally[_group(_label(entry))] += 1
            total_score += _score(entry)

        for group, count in tally.items():
            series[group].append(count)
        series["avgScores"].append(
            round(total_score / len(day_entries), 3) if day_entries else 0
        )
    return series


def _top(totals: dict[str, float], n: int = TOP_KEYWORDS) -> list[tuple[str, float]]:
    # stable sort keeps first-seen order for ties
    return sorted(totals.items(), key=lambda kv: kv[1], reverse=True)[:n]


def compute_word_time_series(
    entries, days: int = 14, *, today: Optional[date] = None
) -> dict:
    """Daily counts of the ten most frequent keywords.

    The ranking uses keyword counts over the whole collection; the daily
    sums only cover the trailing window.

    Returns:
        {dates, words, data: {word: [count per day]}}
    """
    entries = _entries(entries)
    dates = trailing_dates(days, today)

    totals: dict[str, float] = {}
    for entry in entries:
        for word, count in _counts(entry).items():
            totals[word] = totals.get(word, 0) + count
    words = [word for word, _ in _top(totals)]

    grouped = _by_day(entries)
    data = {word: [] for word in words}
    for day in dates:
        day_counts = [_counts(e) for e in grouped.get(day, [])]
        for word in words:
            data[word].append(sum(c.get(word, 0) for c in day_counts))

    return {"dates": dates, "words": words, "data": data}


def get_stats_by_date_range(
    entries, days: int = 30, *, today: Optional[date] = None
) -> dict:
    """Label counts, average score and top keywords for the last ``days`` days.

    ``positive`` and ``negative`` include their very_* entries, which are
    also reported separately. ``topKeywords`` counts entries mentioning each
    keyword.
    """
    today = today or date.today()
    start = today - timedelta(days=days)

    selected = []
    for entry in _entries(entries):
        entry_date = _entry_date(entry)
        if entry_date is not None and start <= entry_date <= today:
            selected.append(entry)

    stats = {
        "total": len(selected),
        "positive": 0,
        "negative": 0,
        "neutral": 0,
        "veryPositive": 0,
        "veryNegative": 0,
        "avgScore": 0,
        "topKeywords": {},
    }

    total_score = 0.0
    keyword_freq: dict[str, int] = {}
    for entry in selected:
        label = _label(entry)
        if label == SentimentLabel.VERY_POSITIVE:
            stats["veryPositive"] += 1
        elif label == SentimentLabel.VERY_NEGATIVE:
            stats["veryNegative"] += 1
        stats[_group(label)] += 1

        total_score += _score(entry)
        for keyword in _keywords(entry):
            keyword_freq[keyword] = keyword_freq.get(keyword, 0) + 1

    if selected:
        stats["avgScore"] = round(total_score / len(selected), 3)
    stats["topKeywords"] = dict(_top(keyword_freq))
    return stats


def mood_trend(series: dict) -> dict:
    """Direction of daily average scores across a sentiment time series.

    Fits a least-squares line through the days that have entries.

    Returns:
        {direction: improving|declining|stable, slope, days}
    """
    columns = [series.get(group) or [] for group in ("positive", "negative", "neutral")]
    points = []
    for i, score in enumerate(series.get("avgScores") or []):
        if any(i < len(col) and col[i] for col in columns):
            points.append((i, score))

    if len(points) < 2:
        return {"direction": "stable", "slope": 0.0, "days": len(points)}

    x = np.array([p[0] for p in points], dtype=float)
    y = np.array([p[1] for p in points], dtype=float)
    slope = float(np.polyfit(x, y, 1)[0])

    if slope > TREND_THRESHOLD:
        direction = "improving"
    elif slope < -TREND_THRESHOLD:
        direction = "declining"
    else:
        direction = "stable"
    return {"direction": direction, "slope": round(slope, 4), "days": len(points)}
