"""Synonym matching policies used by the keyword extractor.

A policy decides whether a normalized token matches a dictionary synonym.
Policies that can enumerate the synonyms a token could possibly match
(``candidates``) let the indexed extractor use hash lookups instead of a
full scan of the synonym table.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from shared_types import MatchPolicyName


class MatchPolicy(ABC):
    """Strategy interface for token/synonym comparison."""

    name: str = ""

    def __init__(self, case_sensitive: bool = False):
        self.case_sensitive = case_sensitive

    def fold(self, text: str) -> str:
        """Apply the policy's casing rule to a token or synonym."""
        return text if self.case_sensitive else text.lower()

    def test(self, token: str, synonym: str) -> bool:
        """Fold both sides, then compare. Empty synonyms never match."""
        if not synonym:
            return False
        return self.matches(self.fold(token), self.fold(synonym))

    @abstractmethod
    def matches(self, token: str, synonym: str) -> bool:
        """Compare an already folded token and synonym."""

    def candidates(self, token: str) -> Optional[Iterable[str]]:
        """Synonyms (folded) that could match token, or None to force a scan."""
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(case_sensitive={self.case_sensitive})"


class ExactMatch(MatchPolicy):
    """Token must equal the synonym."""

    name = MatchPolicyName.EXACT

    def matches(self, token: str, synonym: str) -> bool:
        return token == synonym

    def candidates(self, token: str) -> Iterable[str]:
        return (token,)


class AffixMatch(MatchPolicy):
    """Token contains the synonym and starts or ends with it.

    Lets inflected forms match their stem ("행복하고" -> "행복") without
    matching a synonym buried in the middle of a longer word.
    """

    name = MatchPolicyName.AFFIX

    def matches(self, token: str, synonym: str) -> bool:
        return synonym in token and (token.startswith(synonym) or token.endswith(synonym))

    def candidates(self, token: str) -> Iterable[str]:
        seen = set()
        for i in range(1, len(token) + 1):
            for piece in (token[:i], token[-i:]):
                if piece not in seen:
                    seen.add(piece)
                    yield piece


class EditDistanceMatch(MatchPolicy):
    """Token is within ``max_distance`` Levenshtein edits of the synonym."""

    name = MatchPolicyName.EDIT_DISTANCE

    def __init__(self, case_sensitive: bool = False, max_distance: int = 1):
        super().__init__(case_sensitive)
        if max_distance < 0:
            raise ValueError(f"max_distance must be >= 0, got {max_distance}")
        self.max_distance = max_distance

    def matches(self, token: str, synonym: str) -> bool:
        if abs(len(token) - len(synonym)) > self.max_distance:
            return False
        return levenshtein(token, synonym) <= self.max_distance


def levenshtein(a: str, b: str) -> int:
    """Edit distance between two strings (insert/delete/substitute)."""
    if a == b:
        return 0
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, 1):
        current = [i]
        for j, cb in enumerate(b, 1):
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + (ca != cb),
                )
            )
        previous = current
    return previous[-1]


def build_policy(
    name: str = MatchPolicyName.AFFIX,
    case_sensitive: bool = False,
    max_distance: int = 1,
) -> MatchPolicy:
    """Create a policy by name (affix, exact, edit_distance)."""
    if name == MatchPolicyName.AFFIX:
        return AffixMatch(case_sensitive)
    if name == MatchPolicyName.EXACT:
        return ExactMatch(case_sensitive)
    if name == MatchPolicyName.EDIT_DISTANCE:
        return EditDistanceMatch(case_sensitive, max_distance=max_distance)
    raise ValueError(
        f"Unknown match policy '{name}'. Must be one of {[p.value for p in MatchPolicyName]}"
    )
