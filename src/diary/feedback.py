"""Supportive replies shown after an entry is written.

Replies are picked at random among templates, so unlike extraction and
scoring they are not deterministic unless a seeded ``random.Random`` is
passed in.
"""

import random
from typing import Optional

from shared_types import SentimentLabel

from .sentiment import label_to_emoji

LOW_CONFIDENCE = 0.3

THANKS_REPLY = "작성해주셔서 감사합니다. 오늘의 감정이 기록되었어요."


def _first(keywords: list[str], template: str, fallback: str = "") -> str:
    return template.format(k0=keywords[0]) if keywords else fallback


def _first_two(keywords: list[str], template: str, fallback: str = "") -> str:
    if len(keywords) > 1:
        return template.format(k0=keywords[0], k1=keywords[1])
    return fallback


def _candidates(label: str, keywords: list[str]) -> list[str]:
    if label == SentimentLabel.VERY_POSITIVE:
        return [
            "와! 정말 멋진 하루셨네요! "
            + _first(keywords, "특히 '{k0}'에 대한 이야기가 인상적이에요. ")
            + "이런 기분 오래 지속되길 바라요!",
            "너무 좋은 하루였나 봐요! 행복이 느껴져요. "
            + _first_two(keywords, "'{k0}'와 '{k1}'이 함께한 하루라니 완벽하네요!"),
            "정말 환상적인 하루였군요! 이런 날들이 자주 있기를 바래요. "
            + _first(keywords, "'{k0}'를 통해 많은 기쁨을 느끼셨네요!"),
        ]
    if label == SentimentLabel.POSITIVE:
        return [
            "좋은 하루를 보내셨네요! "
            + _first(keywords, "'{k0}'에 대해 더 이야기해주시겠어요?", "계속 이런 기분 유지하세요!"),
            "기분 좋은 일이 있었나 봐요. "
            + _first(keywords, "'{k0}'가 오늘의 하이라이트였나요?", "행복한 하루 되세요!"),
            "오늘은 긍정적인 하루였어요! "
            + _first_two(keywords, "'{k0}'와 '{k1}'이 함께했네요."),
        ]
    if label == SentimentLabel.VERY_NEGATIVE:
        return [
            "오늘 정말 힘든 하루를 보내셨군요. "
            + _first(keywords, "'{k0}' 때문에 많이 힘드셨나요? ")
            + "괜찮으세요? 더 이야기하고 싶으시면 언제든 적어주세요. 당신의 감정을 존중합니다.",
        ]
    if label == SentimentLabel.NEGATIVE:
        return [
            "조금 힘든 하루였나 봐요. "
            + _first(keywords, "'{k0}' 때문이신가요? ")
            + "필요하면 더 이야기해주세요.",
            "오늘은 좋지 않은 일이 있었나 봐요. "
            + _first(keywords, "'{k0}'에 대해 더 말씀해주시겠어요?", "힘내세요!"),
            "힘든 감정을 느끼셨네요. "
            + _first(keywords, "'{k0}'가 부담스러우셨나요? ")
            + "천천히 이야기해주세요.",
        ]
    return [
        "평범한 하루였네요. "
        + _first(keywords, "'{k0}'에 대해 더 이야기해주시겠어요?", "더 말씀해주시면 좋겠어요."),
    ]


def generate_reply(entry: Optional[dict], rng: Optional[random.Random] = None) -> str:
    """Build a reply for an entry dict with ``sentiment`` and ``keywords``."""
    if not entry or not isinstance(entry.get("sentiment"), dict):
        return THANKS_REPLY

    sentiment = entry["sentiment"]
    label = sentiment.get("label", SentimentLabel.NEUTRAL)
    confidence = sentiment.get("confidence") or 0
    keywords = [k for k in entry.get("keywords") or [] if isinstance(k, str)]
    emoji = label_to_emoji(label)

    if confidence < LOW_CONFIDENCE:
        return f"{emoji} 오늘의 감정을 기록했어요. 더 자세히 말씀해주시면 더 잘 이해할 수 있어요."

    choice = (rng or random).choice(_candidates(label, keywords))
    return f"{emoji} {choice.strip()}"
