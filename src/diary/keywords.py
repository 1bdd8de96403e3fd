"""Dictionary-driven keyword extraction and highlighting."""

from dataclasses import dataclass, field
from functools import cached_property
from typing import Optional

import structlog

from shared_types import ExtractionMode, MatchPolicyName

from .dictionary import DictionaryEntry, WordDictionary, load_dictionary
from .matching import MatchPolicy, build_policy
from .text import iter_tokens, normalize_text

logger = structlog.get_logger()


@dataclass
class ExtractOptions:
    """Extraction settings.

    ``policy`` may be a MatchPolicy instance or a policy name; when unset,
    ``exact_match`` picks between exact and affix matching.
    """

    exact_match: bool = False
    case_sensitive: bool = False
    min_token_length: int = 1
    policy: MatchPolicy | str | None = None
    max_edit_distance: int = 1
    mode: str = ExtractionMode.DIRECT

    def resolve_policy(self) -> MatchPolicy:
        if isinstance(self.policy, MatchPolicy):
            return self.policy
        name = self.policy or (MatchPolicyName.EXACT if self.exact_match else MatchPolicyName.AFFIX)
        return build_policy(name, self.case_sensitive, self.max_edit_distance)


@dataclass
class KeywordMatchSet:
    keywords: list[str] = field(default_factory=list)
    counts: dict[str, int] = field(default_factory=dict)
    weighted: dict[str, float] = field(default_factory=dict)
    positions: dict[str, list[int]] = field(default_factory=dict)
    total_tokens: int = 0
    matched_tokens: int = 0

    @property
    def match_rate(self) -> float:
        if not self.total_tokens:
            return 0
        return round(self.matched_tokens / self.total_tokens, 3)

    def record(self, entry: DictionaryEntry, index: int) -> None:
        key = entry.canonical_key
        self.counts[key] = self.counts.get(key, 0) + 1
        self.weighted[key] = self.weighted.get(key, 0) + entry.weight
        self.positions.setdefault(key, []).append(index)

    def finalize(self) -> "KeywordMatchSet":
        # sorted() is stable, so ties keep first-discovery order
        self.keywords = sorted(self.counts, key=lambda k: self.counts[k], reverse=True)
        return self

    def to_dict(self) -> dict:
        return {
            "keywords": list(self.keywords),
            "counts": dict(self.counts),
            "weighted": dict(self.weighted),
            "positions": {k: list(v) for k, v in self.positions.items()},
            "meta": {
                "totalTokens": self.total_tokens,
                "matchedTokens": self.matched_tokens,
                "matchRate": self.match_rate,
            },
        }


class KeywordExtractor:
    """Match diary tokens against an injected word dictionary.

    Each token position is claimed by at most one dictionary key: the first
    key, in dictionary order, that has a matching synonym. Direct and
    indexed modes share this rule and differ only in how candidates are
    found.
    """

    def __init__(
        self,
        dictionary: Optional[WordDictionary] = None,
        options: Optional[ExtractOptions] = None,
    ):
        self.dictionary = dictionary if dictionary is not None else load_dictionary()
        self.options = options or ExtractOptions()
        self.policy = self.options.resolve_policy()
        if self.options.mode not in tuple(ExtractionMode):
            raise ValueError(
                f"Invalid mode '{self.options.mode}'. Must be one of {tuple(ExtractionMode)}"
            )

    @cached_property
    def _index(self) -> dict[str, list[tuple[int, DictionaryEntry]]]:
        """Folded synonym -> [(dictionary order, entry)], built once."""
        index: dict[str, list[tuple[int, DictionaryEntry]]] = {}
        for order, entry in enumerate(self.dictionary.values()):
            for syn in entry.synonyms:
                if syn:
                    index.setdefault(self.policy.fold(syn), []).append((order, entry))
        return index

    def extract(self, text) -> KeywordMatchSet:
        """Extract keyword counts, weights and token positions from raw text."""
        result = KeywordMatchSet()
        if not text or not isinstance(text, str):
            return result

        matcher = self._match_indexed if self.options.mode == ExtractionMode.INDEXED else self._match_direct
        min_len = self.options.min_token_length

        for token in iter_tokens(normalize_text(text)):
            result.total_tokens += 1
            if len(token.text) < min_len:
                continue
            entry = matcher(token.text)
            if entry is not None:
                result.record(entry, token.index)
                result.matched_tokens += 1

        logger.debug(
            "keywords_extracted",
            mode=str(self.options.mode),
            tokens=result.total_tokens,
            matched=result.matched_tokens,
            keys=len(result.counts),
        )
        return result.finalize()

    def _match_direct(self, token: str) -> Optional[DictionaryEntry]:
        for entry in self.dictionary.values():
            for syn in entry.synonyms:
                if self.policy.test(token, syn):
                    return entry
        return None

    def _match_indexed(self, token: str) -> Optional[DictionaryEntry]:
        folded = self.policy.fold(token)
        index = self._index
        best: Optional[tuple[int, DictionaryEntry]] = None

        candidates = self.policy.candidates(folded)
        if candidates is None:
            # Policy has no lookup support: fall back to scanning every synonym
            hits = (
                hit
                for syn, syn_hits in index.items()
                if self.policy.matches(folded, syn)
                for hit in syn_hits
            )
        else:
            hits = (hit for syn in candidates for hit in index.get(syn, ()))

        for order, entry in hits:
            if best is None or order < best[0]:
                best = (order, entry)
        return best[1] if best else None


def extract_keywords(
    text,
    options: Optional[ExtractOptions] = None,
    dictionary: Optional[WordDictionary] = None,
) -> KeywordMatchSet:
    """Extract keywords from text with a one-off extractor."""
    return KeywordExtractor(dictionary, options).extract(text)


@dataclass(frozen=True)
class Segment:
    text: str
    is_keyword: bool = False
    keyword: Optional[str] = None

    def to_dict(self) -> dict:
        data = {"text": self.text, "isKeyword": self.is_keyword}
        if self.keyword is not None:
            data["keyword"] = self.keyword
        return data


def _lower_same_length(text: str) -> str:
    """Lower-case text, leaving characters whose lower form changes length."""
    return "".join(c.lower() if len(c.lower()) == 1 else c for c in text)


def highlight_keywords(
    text: str,
    keywords,
    dictionary: Optional[WordDictionary] = None,
) -> list[Segment]:
    """Split raw text into plain and keyword segments.

    Synonyms of each keyword are searched literally (case-insensitive) in the
    original text. Overlapping matches are dropped in favour of the one that
    starts first; concatenating the segments gives back the original text.
    """
    if not text or not isinstance(text, str):
        return []
    if not keywords:
        return [Segment(text)]

    dictionary = dictionary if dictionary is not None else load_dictionary()
    haystack = _lower_same_length(text)

    matches = []
    for keyword in keywords:
        entry = dictionary.get(keyword)
        if entry is None:
            continue
        for syn in entry.synonyms:
            if not syn:
                continue
            needle = _lower_same_length(syn)
            start = haystack.find(needle)
            while start != -1:
                matches.append((start, start + len(needle), keyword))
                start = haystack.find(needle, start + 1)

    matches.sort(key=lambda m: m[0])

    segments = []
    cursor = 0
    for start, end, keyword in matches:
        if start < cursor:
            continue
        if cursor < start:
            segments.append(Segment(text[cursor:start]))
        segments.append(Segment(text[start:end], True, keyword))
        cursor = end

    if cursor < len(text):
        segments.append(Segment(text[cursor:]))
    return segments
