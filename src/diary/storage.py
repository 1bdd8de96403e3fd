"""JSON-file persistence for diary entries and daily mood colours."""

import json
import os
from datetime import datetime
from pathlib import Path
from typing import Optional

import structlog

from shared_types import SentimentLabel

logger = structlog.get_logger()

ENTRIES_FILE = "entries.json"
MOOD_COLORS_FILE = "mood_colors.json"
MAX_TEXT_LENGTH = 100_000  # 100KB


def _sort_key(entry: dict) -> str:
    return str(entry.get("date") or "")


class EntryStore:
    """Stores entries as one JSON list and mood colours as one JSON map.

    Every write rewrites the whole file; callers serialise access.
    """

    def __init__(self, data_dir: str | Path):
        self.data_dir = Path(data_dir).expanduser().resolve()
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.entries_path = self.data_dir / ENTRIES_FILE
        self.mood_colors_path = self.data_dir / MOOD_COLORS_FILE

    def _read_json(self, path: Path, default):
        if not path.exists():
            return default
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning("store_file_corrupt", path=str(path), error=str(e))
            return default
        if not isinstance(data, type(default)):
            logger.warning("store_file_unexpected_shape", path=str(path))
            return default
        return data

    def _write_json(self, path: Path, data) -> None:
        tmp = path.with_suffix(path.suffix + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        os.replace(tmp, path)

    # === Entries ===

    def get_entries(self) -> list[dict]:
        """All entries, newest first."""
        entries = [e for e in self._read_json(self.entries_path, []) if isinstance(e, dict)]
        entries.sort(key=_sort_key, reverse=True)
        return entries

    def get_entry(self, entry_id: str) -> Optional[dict]:
        for entry in self.get_entries():
            if entry.get("id") == entry_id:
                return entry
        return None

    def get_entries_by_date(self, day: str) -> list[dict]:
        """Entries whose timestamp falls on day (YYYY-MM-DD)."""
        return [e for e in self.get_entries() if _sort_key(e)[:10] == day]

    def save_entry(self, entry: dict) -> dict:
        """Insert or replace an entry by id.

        Raises:
            ValueError: If the entry has no id or its text is too long
        """
        if not entry.get("id"):
            raise ValueError("Entry must have an id")
        if len(entry.get("text") or "") > MAX_TEXT_LENGTH:
            raise ValueError(f"Entry text exceeds max length ({MAX_TEXT_LENGTH} chars)")

        entries = self.get_entries()
        for i, existing in enumerate(entries):
            if existing.get("id") == entry["id"]:
                entries[i] = entry
                break
        else:
            entries.append(entry)

        entries.sort(key=_sort_key, reverse=True)
        self._write_json(self.entries_path, entries)
        logger.info("entry_saved", entry_id=entry["id"], total=len(entries))
        return entry

    def update_entry(self, entry_id: str, updates: dict) -> bool:
        """Merge updates into an existing entry. False if it does not exist."""
        entries = self.get_entries()
        for i, existing in enumerate(entries):
            if existing.get("id") == entry_id:
                entries[i] = {**existing, **updates, "id": entry_id}
                self._write_json(self.entries_path, entries)
                return True
        return False

    def delete_entry(self, entry_id: str) -> bool:
        entries = self.get_entries()
        remaining = [e for e in entries if e.get("id") != entry_id]
        if len(remaining) == len(entries):
            return False
        self._write_json(self.entries_path, remaining)
        logger.info("entry_deleted", entry_id=entry_id)
        return True

    def replace_all(self, entries: list[dict], mood_colors: Optional[dict] = None) -> None:
        """Overwrite stored entries (and mood colours when given)."""
        self._write_json(self.entries_path, sorted(entries, key=_sort_key, reverse=True))
        if mood_colors is not None:
            self._write_json(self.mood_colors_path, dict(mood_colors))

    def clear_all(self) -> None:
        for path in (self.entries_path, self.mood_colors_path):
            if path.exists():
                path.unlink()
        logger.info("store_cleared", data_dir=str(self.data_dir))

    # === Mood colours ===

    def save_mood_color(self, day: str, label: str) -> None:
        """Record the mood label for a day. Later saves overwrite earlier ones.

        Raises:
            ValueError: If day is not YYYY-MM-DD or label is not a sentiment label
        """
        datetime.strptime(day, "%Y-%m-%d")
        colors = self.get_mood_colors()
        colors[day] = str(SentimentLabel(label))
        self._write_json(self.mood_colors_path, colors)

    def get_mood_colors(self) -> dict[str, str]:
        return self._read_json(self.mood_colors_path, {})

    def get_mood_color_by_date(self, day: str) -> Optional[str]:
        return self.get_mood_colors().get(day)
