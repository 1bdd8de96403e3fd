"""Tests for mood statistics and time series."""

from datetime import timedelta

import pytest

from diary.stats import (
    compute_sentiment_time_series,
    compute_word_time_series,
    get_stats_by_date_range,
    mood_trend,
    trailing_dates,
)


class TestTrailingDates:
    def test_ends_today_oldest_first(self, today):
        """Dates run oldest to newest and end on today."""
        dates = trailing_dates(3, today)
        assert dates == ["2024-05-18", "2024-05-19", "2024-05-20"]

    @pytest.mark.parametrize("days", [0, -5])
    def test_non_positive_window(self, today, days):
        """Zero or negative windows give no dates."""
        assert trailing_dates(days, today) == []


class TestSentimentTimeSeries:
    def test_daily_buckets(self, sample_entries, today):
        """Each day gets its label counts and mean score."""
        series = compute_sentiment_time_series(sample_entries, 14, today=today)
        assert series["dates"][0] == "2024-05-07"
        assert series["dates"][-1] == "2024-05-20"

        # today: one very_positive (1.0) and one negative (-0.5)
        assert series["positive"][-1] == 1
        assert series["negative"][-1] == 1
        assert series["avgScores"][-1] == 0.25
        assert series["positive"][-2] == 1
        assert series["avgScores"][-2] == 0.4
        assert series["negative"][-4] == 1
        assert series["avgScores"][-4] == -1.0
        assert series["neutral"][3] == 1
        assert series["avgScores"][3] == 0

    def test_outside_window_ignored(self, sample_entries, today):
        """Entries older than the window are not counted."""
        series = compute_sentiment_time_series(sample_entries, 14, today=today)
        assert sum(series["positive"]) + sum(series["negative"]) + sum(series["neutral"]) == 5

    @pytest.mark.parametrize("days", [14, 30, 90])
    def test_lengths(self, today, days):
        """Every series has one value per day."""
        series = compute_sentiment_time_series([], days, today=today)
        for key in ("dates", "positive", "negative", "neutral", "avgScores"):
            assert len(series[key]) == days
        assert set(series["avgScores"]) == {0}

    def test_malformed_entries(self, today):
        """Broken entries count as neutral with score 0."""
        entries = [
            None,
            "x",
            {},
            {"date": 5},
            {"date": "2024-05-20"},
            {"date": "2024-05-20T10:00:00", "sentiment": None},
            {"date": "2024-05-20", "sentiment": {"label": 3, "score": "high"}},
        ]
        series = compute_sentiment_time_series(entries, 7, today=today)
        assert series["neutral"][-1] == 3
        assert series["avgScores"][-1] == 0

    @pytest.mark.parametrize("bad_score", [float("inf"), float("-inf"), float("nan"), None])
    def test_non_finite_scores_count_as_zero(self, make_entry, today, bad_score):
        """Infinite, NaN or null scores do not poison the daily mean."""
        entries = [
            make_entry("good", today, "positive", 0.5),
            make_entry("bad", today, "positive", bad_score),
        ]
        series = compute_sentiment_time_series(entries, 3, today=today)
        assert series["avgScores"][-1] == 0.25
        assert get_stats_by_date_range(entries, 14, today=today)["avgScore"] == 0.25

    def test_none_entries(self, today):
        """None instead of a list gives zeroed series."""
        series = compute_sentiment_time_series(None, 5, today=today)
        assert series["positive"] == [0] * 5


class TestWordTimeSeries:
    def test_ranking_and_daily_counts(self, sample_entries, today):
        """Words rank by total counts; days sum counts within the window."""
        series = compute_word_time_series(sample_entries, 14, today=today)
        assert series["words"] == ["행복", "좋다", "피곤", "슬픔", "일"]
        assert len(series["dates"]) == 14
        assert series["data"]["행복"][-1] == 2
        assert sum(series["data"]["행복"]) == 2
        assert series["data"]["좋다"][-2:] == [3, 1]
        assert series["data"]["피곤"][-1] == 1
        assert series["data"]["피곤"][-4] == 1

    def test_top_ten_cap(self, make_entry, today):
        """At most ten words are tracked."""
        entries = [
            make_entry(f"e{i}", today, keywords=[f"word{i}"], counts={f"word{i}": i + 1})
            for i in range(15)
        ]
        series = compute_word_time_series(entries, 14, today=today)
        assert len(series["words"]) == 10
        assert series["words"][0] == "word14"
        assert set(series["data"]) == set(series["words"])

    def test_no_entries(self, today):
        """No entries still yields the full date axis."""
        series = compute_word_time_series([], 30, today=today)
        assert len(series["dates"]) == 30
        assert series["words"] == []
        assert series["data"] == {}


class TestStatsByDateRange:
    def test_thirty_days(self, sample_entries, today):
        """Label counts include very_* entries in their group."""
        stats = get_stats_by_date_range(sample_entries, 30, today=today)
        assert stats["total"] == 5
        assert stats["positive"] == 2
        assert stats["veryPositive"] == 1
        assert stats["negative"] == 2
        assert stats["veryNegative"] == 1
        assert stats["neutral"] == 1
        assert stats["avgScore"] == -0.02
        assert list(stats["topKeywords"]) == ["좋다", "피곤", "행복", "슬픔", "일"]
        assert stats["topKeywords"]["좋다"] == 2

    def test_ninety_days_includes_older(self, sample_entries, today):
        """A wider window picks up older entries."""
        assert get_stats_by_date_range(sample_entries, 90, today=today)["total"] == 6

    def test_window_is_inclusive(self, make_entry, today):
        """today - days is included; older and future entries are not."""
        entries = [
            make_entry("edge", today - timedelta(days=14)),
            make_entry("old", today - timedelta(days=15)),
            make_entry("future", today + timedelta(days=1)),
        ]
        assert get_stats_by_date_range(entries, 14, today=today)["total"] == 1

    def test_top_keywords_capped(self, make_entry, today):
        """topKeywords holds at most ten entries."""
        entries = [make_entry(f"e{i}", today, keywords=[f"w{i}"]) for i in range(12)]
        assert len(get_stats_by_date_range(entries, 14, today=today)["topKeywords"]) == 10

    def test_empty(self, today):
        """No entries gives zeroed stats."""
        stats = get_stats_by_date_range([], 30, today=today)
        assert stats["total"] == 0
        assert stats["avgScore"] == 0
        assert stats["topKeywords"] == {}


class TestMoodTrend:
    def _series(self, scores):
        return {
            "positive": [1 if s is not None else 0 for s in scores],
            "negative": [0] * len(scores),
            "neutral": [0] * len(scores),
            "avgScores": [s if s is not None else 0 for s in scores],
        }

    def test_improving(self):
        """Rising scores read as improving; empty days are skipped."""
        trend = mood_trend(self._series([-0.5, None, 0.0, 0.5]))
        assert trend["direction"] == "improving"
        assert trend["days"] == 3

    def test_declining(self):
        """Falling scores read as declining."""
        assert mood_trend(self._series([0.8, 0.2, -0.4]))["direction"] == "declining"

    def test_flat(self):
        """Constant scores read as stable."""
        assert mood_trend(self._series([0.3, 0.3, 0.3]))["direction"] == "stable"

    def test_too_few_days(self):
        """One day with entries is not enough for a trend."""
        assert mood_trend(self._series([None, 0.9, None])) == {"direction": "stable", "slope": 0.0, "days": 1}
