"""Shared enums and types for mood-diary."""

from enum import StrEnum


class Polarity(StrEnum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class SentimentLabel(StrEnum):
    VERY_POSITIVE = "very_positive"
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"
    VERY_NEGATIVE = "very_negative"


class MatchPolicyName(StrEnum):
    AFFIX = "affix"
    EXACT = "exact"
    EDIT_DISTANCE = "edit_distance"


class ExtractionMode(StrEnum):
    DIRECT = "direct"
    INDEXED = "indexed"


POSITIVE_LABELS = frozenset({SentimentLabel.POSITIVE, SentimentLabel.VERY_POSITIVE})
NEGATIVE_LABELS = frozenset({SentimentLabel.NEGATIVE, SentimentLabel.VERY_NEGATIVE})
