"""File-based diary entry storage adapter."""

import logging
import os
import tempfile
import threading
from datetime import date, datetime
from pathlib import Path

from diary.core.entry import entry_filename, storage_key

logger = logging.getLogger(__name__)

LOCK_STRIPES = 64


def atomic_write_text(path: Path, text: str, encoding: str = "utf-8") -> None:
    """
    Replace `path` with `text` in one step.

    Writes a temp file in the same directory, fsyncs it, then renames it over
    the target. Readers see either the old content or the new, never a mix.
    """
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


class FileEntryStore:
    """
    File-based diary storage.

    Implements EntryStore protocol. Each day gets a `diary_YYYY-MM-DD.txt`
    file, UTF-8 encoded.
    """

    def __init__(self, entries_dir: Path | str):
        self.entries_dir = Path(entries_dir).expanduser()
        self.entries_dir.mkdir(parents=True, exist_ok=True)
        self._locks = [threading.Lock() for _ in range(LOCK_STRIPES)]

    def _lock_for(self, key: str) -> threading.Lock:
        # Same key always maps to the same stripe
        return self._locks[hash(key) % LOCK_STRIPES]

    def path_for_date(self, entry_date: date | datetime) -> Path:
        """Get the file path for a given date."""
        return self.entries_dir / entry_filename(entry_date)

    def read(self, entry_date: date | datetime) -> str | None:
        """Read entry text for a date. Returns None if not found."""
        path = self.path_for_date(entry_date)
        with self._lock_for(storage_key(entry_date)):
            try:
                with open(path, encoding="utf-8", newline="") as f:
                    return f.read()
            except FileNotFoundError:
                return None

    def write(self, entry_date: date | datetime, text: str) -> None:
        """Write/overwrite the entry for a date."""
        key = storage_key(entry_date)
        path = self.path_for_date(entry_date)
        with self._lock_for(key):
            try:
                atomic_write_text(path, text)
            except OSError as e:
                logger.error(f"Failed to write {key}: {e}")
                raise
        logger.debug(f"Saved {key} ({len(text)} chars)")

    def exists(self, entry_date: date | datetime) -> bool:
        """Check if an entry exists for a date."""
        return self.path_for_date(entry_date).is_file()
