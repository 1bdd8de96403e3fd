from .analyzer import DiaryWriter, MoodAnalyzer, analyze_text
from .dictionary import DictionaryError, WordDictionary, load_dictionary
from .keywords import ExtractOptions, KeywordExtractor, extract_keywords, highlight_keywords
from .sentiment import (
    SentimentEstimator,
    SentimentThresholds,
    estimate_sentiment,
    label_to_emoji,
    label_to_text,
    score_to_percent,
)
from .stats import (
    compute_sentiment_time_series,
    compute_word_time_series,
    get_stats_by_date_range,
)
from .storage import EntryStore

__all__ = [
    "DiaryWriter",
    "MoodAnalyzer",
    "analyze_text",
    "DictionaryError",
    "WordDictionary",
    "load_dictionary",
    "ExtractOptions",
    "KeywordExtractor",
    "extract_keywords",
    "highlight_keywords",
    "SentimentEstimator",
    "SentimentThresholds",
    "estimate_sentiment",
    "label_to_emoji",
    "label_to_text",
    "score_to_percent",
    "compute_sentiment_time_series",
    "compute_word_time_series",
    "get_stats_by_date_range",
    "EntryStore",
]
