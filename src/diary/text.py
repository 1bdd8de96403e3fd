"""Text normalization and tokenization for diary entries."""

import re
from typing import Iterator, NamedTuple

# ASCII word characters, whitespace, Hangul compatibility jamo (consonants
# U+3131-U+314E, vowels U+314F-U+3163) and Hangul syllables survive; the rest
# becomes a space.
_DISALLOWED = re.compile(r"[^A-Za-z0-9_\sㄱ-ㅎㅏ-ㅣ가-힣]")
_WHITESPACE = re.compile(r"\s+")
_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)


class Token(NamedTuple):
    index: int
    text: str


def normalize_text(text) -> str:
    """Normalize raw diary text for matching.

    Non-string or empty input yields "". ASCII letters are lower-cased,
    everything outside word characters and Hangul becomes a space, and
    whitespace runs collapse to a single space.
    """
    if not text or not isinstance(text, str):
        return ""

    text = text.strip().translate(_ASCII_LOWER)
    text = _DISALLOWED.sub(" ", text)
    return _WHITESPACE.sub(" ", text).strip()


def tokenize(text: str) -> list[str]:
    """Split normalized text on whitespace, dropping empty tokens."""
    if not text:
        return []
    return [t for t in _WHITESPACE.split(text) if t]


def iter_tokens(text: str) -> Iterator[Token]:
    """Yield (index, token) pairs for normalized text."""
    for i, t in enumerate(tokenize(text)):
        yield Token(i, t)
