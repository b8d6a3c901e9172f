"""Pure diary entry logic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date, datetime

KEY_PREFIX = "diary_"
ENTRY_SUFFIX = ".txt"


def entry_day(value: date | datetime) -> date:
    """Truncate a datetime to its calendar day."""
    if isinstance(value, datetime):
        return value.date()
    return value


def storage_key(entry_date: date | datetime) -> str:
    """
    Storage key for a date.

    Always `diary_YYYY-MM-DD`, zero-padded, so the same day resolves to the
    same location across restarts.
    """
    day = entry_day(entry_date)
    return f"{KEY_PREFIX}{day.year:04d}-{day.month:02d}-{day.day:02d}"


def entry_filename(entry_date: date | datetime) -> str:
    """Filename for a date's entry."""
    return storage_key(entry_date) + ENTRY_SUFFIX


@dataclass
class DiaryEntry:
    """A single day's diary text."""

    date: date
    text: str = ""

    def __post_init__(self):
        self.date = entry_day(self.date)

    @property
    def key(self) -> str:
        return storage_key(self.date)

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()
