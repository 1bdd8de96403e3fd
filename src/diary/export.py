"""Diary export and import."""

import json
from datetime import datetime
from pathlib import Path

import frontmatter
import structlog

from .sentiment import label_to_text
from .storage import EntryStore

logger = structlog.get_logger()

EXPORT_VERSION = "1.0"


class DiaryExporter:
    """Export the entry store to JSON or Markdown, and import JSON backups."""

    def __init__(self, store: EntryStore):
        self.store = store

    def export_json(self, output_path: Path) -> int:
        """Export all entries and mood colours to a JSON backup.

        Returns:
            Number of entries exported
        """
        entries = self.store.get_entries()
        export_data = {
            "version": EXPORT_VERSION,
            "exportDate": datetime.now().isoformat(),
            "entries": entries,
            "moodColors": self.store.get_mood_colors(),
        }

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(export_data, f, ensure_ascii=False, indent=2, default=str)

        logger.info("diary_exported", path=str(output_path), count=len(entries))
        return len(entries)

    def import_json(self, input_path: Path) -> int:
        """Replace stored entries (and mood colours) with a JSON backup.

        Returns:
            Number of entries imported

        Raises:
            ValueError: If the file is not valid JSON or has no entries list
        """
        try:
            data = json.loads(Path(input_path).read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in backup file: {e}")

        if not isinstance(data, dict) or not isinstance(data.get("entries"), list):
            raise ValueError("Invalid data format")

        entries = [e for e in data["entries"] if isinstance(e, dict)]
        mood_colors = data.get("moodColors")
        self.store.replace_all(entries, mood_colors if isinstance(mood_colors, dict) else None)

        logger.info("diary_imported", path=str(input_path), count=len(entries))
        return len(entries)

    def export_markdown(self, output_dir: Path) -> int:
        """Write one Markdown file with YAML front matter per entry.

        Returns:
            Number of files written
        """
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        written = 0
        for entry in self.store.get_entries():
            sentiment = entry.get("sentiment") or {}
            label = sentiment.get("label", "neutral")

            body = [entry.get("text", "")]
            if entry.get("botReply"):
                body += ["", f"> {entry['botReply']}"]

            post = frontmatter.Post("\n".join(body))
            post["id"] = entry.get("id")
            post["date"] = entry.get("date")
            post["mood"] = label
            post["mood_text"] = label_to_text(label)
            post["score"] = sentiment.get("score", 0)
            post["keywords"] = entry.get("keywords", [])

            day = str(entry.get("date") or "undated")[:10]
            filepath = output_dir / f"{day}_{entry.get('id', written)}.md"
            with open(filepath, "w", encoding="utf-8") as f:
                f.write(frontmatter.dumps(post))
            written += 1

        logger.info("diary_exported_markdown", path=str(output_dir), count=written)
        return written
