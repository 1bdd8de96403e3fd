"""CLI command modules."""

from .export import export, import_backup
from .journal import journal
from .mood import mood_calendar, stats
from .trends import series

__all__ = [
    "journal",
    "stats",
    "mood_calendar",
    "series",
    "export",
    "import_backup",
]
