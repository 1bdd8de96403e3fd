"""Weighted keyword sentiment estimation for diary entries."""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Optional

from shared_types import Polarity, SentimentLabel

from .dictionary import WordDictionary, load_dictionary

LABEL_TEXT = {
    SentimentLabel.VERY_POSITIVE: "매우 긍정적",
    SentimentLabel.POSITIVE: "긍정적",
    SentimentLabel.NEUTRAL: "중립적",
    SentimentLabel.NEGATIVE: "부정적",
    SentimentLabel.VERY_NEGATIVE: "매우 부정적",
}

LABEL_EMOJI = {
    SentimentLabel.VERY_POSITIVE: "😄",
    SentimentLabel.POSITIVE: "😊",
    SentimentLabel.NEUTRAL: "😐",
    SentimentLabel.NEGATIVE: "😔",
    SentimentLabel.VERY_NEGATIVE: "😢",
}

UNKNOWN_LABEL_TEXT = "알 수 없음"
UNKNOWN_LABEL_EMOJI = "🤔"

# Full confidence needs at least this many polarity-bearing keywords
MIN_CONFIDENCE_KEYWORDS = 3


@dataclass(frozen=True)
class SentimentThresholds:
    positive: float = 0.3
    negative: float = -0.3
    very_positive: float = 0.6
    very_negative: float = -0.6
    normalize: bool = True

    def classify(self, score: float) -> SentimentLabel:
        """Map a score to a label. Boundaries are inclusive."""
        if score >= self.very_positive:
            return SentimentLabel.VERY_POSITIVE
        if score >= self.positive:
            return SentimentLabel.POSITIVE
        if score <= self.very_negative:
            return SentimentLabel.VERY_NEGATIVE
        if score <= self.negative:
            return SentimentLabel.NEGATIVE
        return SentimentLabel.NEUTRAL


@dataclass(frozen=True)
class SentimentDetails:
    positive_count: int = 0
    negative_count: int = 0
    total_words: int = 0
    total_weight: float = 0.0

    def to_dict(self) -> dict:
        return {
            "positiveCount": self.positive_count,
            "negativeCount": self.negative_count,
            "totalWords": self.total_words,
            "totalWeight": self.total_weight,
        }


@dataclass(frozen=True)
class SentimentResult:
    label: SentimentLabel = SentimentLabel.NEUTRAL
    score: float = 0.0
    raw_score: float = 0.0
    confidence: float = 0.0
    details: SentimentDetails = field(default_factory=SentimentDetails)

    def to_dict(self) -> dict:
        return {
            "label": str(self.label),
            "score": self.score,
            "rawScore": self.raw_score,
            "confidence": self.confidence,
            "details": self.details.to_dict(),
        }


def _clamp(value: float, low: float = -1.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def as_number(value) -> float:
    """Coerce a stored weight or score; non-numeric, NaN and inf become 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    if math.isnan(value) or math.isinf(value):
        return 0.0
    return float(value)


class SentimentEstimator:
    """Turn accumulated keyword weights into a score, label and confidence."""

    def __init__(
        self,
        dictionary: Optional[WordDictionary] = None,
        thresholds: Optional[SentimentThresholds] = None,
    ):
        self.dictionary = dictionary if dictionary is not None else load_dictionary()
        self.thresholds = thresholds or SentimentThresholds()

    def estimate(self, weighted) -> SentimentResult:
        """Estimate sentiment from a {keyword: accumulated weight} mapping.

        Keys missing from the dictionary, or with neutral polarity, add to the
        total weight but not to the score direction.
        """
        if not isinstance(weighted, Mapping) or not weighted:
            return SentimentResult()

        raw_score = 0.0
        total_weight = 0.0
        positive_count = 0
        negative_count = 0

        for key, value in weighted.items():
            weight = as_number(value)
            total_weight += abs(weight)

            polarity = self.dictionary.polarity(key)
            if polarity == Polarity.POSITIVE:
                raw_score += weight
                positive_count += 1
            elif polarity == Polarity.NEGATIVE:
                raw_score -= weight
                negative_count += 1

        if self.thresholds.normalize and total_weight > 0:
            score = _clamp(raw_score / total_weight)
        else:
            score = _clamp(raw_score)

        total_words = len(weighted)
        confidence = min(
            1.0, (positive_count + negative_count) / max(MIN_CONFIDENCE_KEYWORDS, total_words)
        )

        return SentimentResult(
            label=self.thresholds.classify(score),
            score=round(score, 3),
            raw_score=round(raw_score, 3),
            confidence=round(confidence, 3),
            details=SentimentDetails(
                positive_count=positive_count,
                negative_count=negative_count,
                total_words=total_words,
                total_weight=round(total_weight, 3),
            ),
        )


def estimate_sentiment(
    weighted,
    options: Optional[SentimentThresholds] = None,
    dictionary: Optional[WordDictionary] = None,
) -> SentimentResult:
    """Estimate sentiment with a one-off estimator."""
    return SentimentEstimator(dictionary, options).estimate(weighted)


def label_to_text(label) -> str:
    """Korean display text for a label."""
    try:
        return LABEL_TEXT[SentimentLabel(label)]
    except ValueError:
        return UNKNOWN_LABEL_TEXT


def label_to_emoji(label) -> str:
    try:
        return LABEL_EMOJI[SentimentLabel(label)]
    except ValueError:
        return UNKNOWN_LABEL_EMOJI


def score_to_percent(score: float) -> int:
    """Map a score in [-1, 1] to 0..100, rounding halves up."""
    return math.floor((score + 1) * 50 + 0.5)


def to_legacy_label(label) -> str:
    """Collapse the five-level label to positive/neutral/negative."""
    if label == SentimentLabel.VERY_POSITIVE:
        return str(SentimentLabel.POSITIVE)
    if label == SentimentLabel.VERY_NEGATIVE:
        return str(SentimentLabel.NEGATIVE)
    return str(label)
