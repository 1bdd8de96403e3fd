"""Word dictionary: canonical keyword -> synonyms, weight and polarity."""

import json
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Optional

import structlog
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from shared_types import Polarity

logger = structlog.get_logger()

DEFAULT_DICTIONARY_FILE = "word_dictionary.yaml"


class DictionaryError(ValueError):
    """Raised when a dictionary file cannot be parsed or validated."""


class _EntrySchema(BaseModel):
    """Validation model for one raw dictionary record."""

    synonyms: list[str] = Field(default_factory=list)
    weight: float = 1.0
    sentiment: Polarity = Polarity.NEUTRAL

    @field_validator("synonyms")
    @classmethod
    def drop_blank_synonyms(cls, v: list[str]) -> list[str]:
        return [s for s in v if s and s.strip()]

    @field_validator("weight")
    @classmethod
    def validate_weight(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"weight must be >= 0, got {v}")
        return v


@dataclass(frozen=True)
class DictionaryEntry:
    canonical_key: str
    synonyms: tuple[str, ...]
    weight: float = 1.0
    sentiment: Polarity = Polarity.NEUTRAL


class WordDictionary(Mapping):
    """Read-only, ordered mapping of canonical key to DictionaryEntry.

    Iteration order is the order of the source data; the keyword extractor
    relies on it to decide which key claims a token.
    """

    def __init__(self, entries: Mapping[str, DictionaryEntry] | list[DictionaryEntry]):
        if isinstance(entries, Mapping):
            entries = list(entries.values())
        table: dict[str, DictionaryEntry] = {}
        for entry in entries:
            if entry.canonical_key in table:
                raise DictionaryError(f"Duplicate dictionary key: {entry.canonical_key}")
            table[entry.canonical_key] = entry
        self._entries = MappingProxyType(table)

    def __getitem__(self, key: str) -> DictionaryEntry:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"WordDictionary({len(self)} keys)"

    def polarity(self, key: str) -> Optional[Polarity]:
        """Polarity for key, or None if the key is unknown."""
        entry = self._entries.get(key)
        return entry.sentiment if entry else None

    @classmethod
    def from_dict(cls, data: Mapping) -> "WordDictionary":
        """Build from {key: {synonyms, weight, sentiment}} raw data."""
        if not isinstance(data, Mapping):
            raise DictionaryError("Dictionary data must be a mapping of key -> entry")

        entries = []
        for key, raw in data.items():
            if raw is None:
                raw = {}
            try:
                parsed = _EntrySchema.model_validate(raw)
            except ValidationError as e:
                raise DictionaryError(f"Invalid dictionary entry '{key}': {e}") from e
            entries.append(
                DictionaryEntry(
                    canonical_key=str(key),
                    synonyms=tuple(parsed.synonyms),
                    weight=parsed.weight,
                    sentiment=parsed.sentiment,
                )
            )
        return cls(entries)

    @classmethod
    def load(cls, path: str | Path) -> "WordDictionary":
        """Load a dictionary from a .yaml/.yml or .json file."""
        path = Path(path).expanduser()
        text = path.read_text(encoding="utf-8")
        try:
            if path.suffix == ".json":
                data = json.loads(text)
            else:
                data = yaml.safe_load(text) or {}
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise DictionaryError(f"Could not parse dictionary file {path}: {e}") from e

        dictionary = cls.from_dict(data)
        logger.debug("dictionary_loaded", path=str(path), keys=len(dictionary))
        return dictionary


@lru_cache(maxsize=1)
def default_dictionary() -> WordDictionary:
    """Bundled Korean/English dictionary, loaded once per process."""
    source = resources.files("diary").joinpath("data").joinpath(DEFAULT_DICTIONARY_FILE)
    data = yaml.safe_load(source.read_text(encoding="utf-8")) or {}
    dictionary = WordDictionary.from_dict(data)
    logger.debug("dictionary_loaded", path="<bundled>", keys=len(dictionary))
    return dictionary


def load_dictionary(path: Optional[str | Path] = None) -> WordDictionary:
    """Load dictionary from path, or the bundled default when path is None."""
    if path is None:
        return default_dictionary()
    return WordDictionary.load(path)
