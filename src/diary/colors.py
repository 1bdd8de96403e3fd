"""Mood colour palettes for calendar and chart rendering."""

import re

from shared_types import SentimentLabel

SENTIMENT_COLORS = {
    SentimentLabel.VERY_POSITIVE: "#10B981",
    SentimentLabel.POSITIVE: "#34D399",
    SentimentLabel.NEUTRAL: "#94A3B8",
    SentimentLabel.NEGATIVE: "#F59E0B",
    SentimentLabel.VERY_NEGATIVE: "#EF4444",
}

GRADIENTS = {
    SentimentLabel.VERY_POSITIVE: ("#10B981", "#34D399"),
    SentimentLabel.POSITIVE: ("#34D399", "#6EE7B7"),
    SentimentLabel.NEUTRAL: ("#94A3B8", "#CBD5E1"),
    SentimentLabel.NEGATIVE: ("#F59E0B", "#FCD34D"),
    SentimentLabel.VERY_NEGATIVE: ("#EF4444", "#F87171"),
}

PASTELS = {
    SentimentLabel.VERY_POSITIVE: "#D4EDDA",
    SentimentLabel.POSITIVE: "#E8F5E9",
    SentimentLabel.NEUTRAL: "#F5F7FA",
    SentimentLabel.NEGATIVE: "#FFF3CD",
    SentimentLabel.VERY_NEGATIVE: "#F8D7DA",
}

# (upper bound, low colour, high colour, segment start) for score gradients
_SCORE_STOPS = [
    (-0.6, "#DC2626", "#EF4444", -1.0),
    (-0.2, "#EF4444", "#F59E0B", -0.6),
    (0.2, "#F59E0B", "#94A3B8", -0.2),
    (0.6, "#94A3B8", "#34D399", 0.2),
    (1.0, "#34D399", "#10B981", 0.6),
]
_SEGMENT_WIDTH = 0.4

_HEX = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


def _lookup(table: dict, label):
    try:
        return table[SentimentLabel(label)]
    except ValueError:
        return table[SentimentLabel.NEUTRAL]


def label_to_color(label) -> str:
    """Primary colour for a label; unknown labels get the neutral colour."""
    return _lookup(SENTIMENT_COLORS, label)


def label_to_gradient(label) -> tuple[str, str]:
    return _lookup(GRADIENTS, label)


def label_to_pastel(label) -> str:
    """Soft background colour used for calendar cells."""
    return _lookup(PASTELS, label)


def hex_to_rgb(value: str) -> tuple[int, int, int]:
    match = _HEX.match(value)
    if not match:
        return (0, 0, 0)
    return tuple(int(part, 16) for part in match.groups())


def rgb_to_hex(r: int, g: int, b: int) -> str:
    return f"#{r:02x}{g:02x}{b:02x}"


def interpolate_color(start: str, end: str, ratio: float) -> str:
    ratio = max(0.0, min(1.0, ratio))
    c1 = hex_to_rgb(start)
    c2 = hex_to_rgb(end)
    mixed = [round(a + (b - a) * ratio) for a, b in zip(c1, c2)]
    return rgb_to_hex(*mixed)


def score_to_gradient_color(score: float) -> str:
    """Continuous colour for a score, from deep red (-1) to green (+1)."""
    score = max(-1.0, min(1.0, score))
    for upper, low, high, start in _SCORE_STOPS:
        if score <= upper:
            return interpolate_color(low, high, (score - start) / _SEGMENT_WIDTH)
    return SENTIMENT_COLORS[SentimentLabel.VERY_POSITIVE]


def score_to_opacity(score: float) -> float:
    """Stronger sentiment -> more opaque, between 0.3 and 1.0."""
    return min(0.3 + abs(score) * 0.7, 1.0)


def score_to_text_color(score: float) -> str:
    return "#1F2937" if score > 0 else "#F9FAFB"


def probability_to_color(probability: float) -> str:
    """Legacy colour scale for a 0..1 positive probability."""
    if probability >= 0.7:
        return "#FFD93D"
    if probability >= 0.5:
        return "#6BCB77"
    if probability >= 0.3:
        return "#94A3B8"
    if probability >= 0.15:
        return "#4D96FF"
    return "#6A4C93"


def color_theme(label) -> dict:
    return {
        "primary": label_to_color(label),
        "pastel": label_to_pastel(label),
        "gradient": label_to_gradient(label),
    }
