"""Diary entry storage interface."""

from datetime import date
from typing import Protocol


class EntryStore(Protocol):
    """Interface for reading and writing diary entries, one per date."""

    def read(self, entry_date: date) -> str | None:
        """Read entry text for a date. Returns None if not found."""
        ...

    def write(self, entry_date: date, text: str) -> None:
        """Write/overwrite the entry for a date. Raises OSError on failure."""
        ...

    def exists(self, entry_date: date) -> bool:
        """Check if an entry exists for a date."""
        ...
