"""JSON file preference store adapter."""

import json
import logging
import threading
from pathlib import Path

from diary.core.settings import DEFAULT_FONT_SIZE, FONT_SIZE_KEY

from .file_entries import atomic_write_text

logger = logging.getLogger(__name__)


class FileSettingsStore:
    """
    Preference store backed by a single JSON file.

    Implements SettingsStore protocol. Keys other than `font_size` are kept
    as-is when the font size is written.
    """

    def __init__(self, preferences_file: Path | str, default_font_size: int = DEFAULT_FONT_SIZE):
        self.preferences_file = Path(preferences_file).expanduser()
        self.default_font_size = default_font_size
        self._lock = threading.Lock()

    def _load(self) -> dict:
        try:
            data = json.loads(self.preferences_file.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        return data

    def get_font_size(self) -> int:
        """Return the stored font size, or the default if unset or unreadable."""
        with self._lock:
            try:
                value = self._load().get(FONT_SIZE_KEY)
            except Exception as e:
                logger.warning(f"Could not read {self.preferences_file}, using default font size: {e}")
                return self.default_font_size

        if value is None:
            return self.default_font_size
        if isinstance(value, bool) or not isinstance(value, int):
            logger.warning(f"Ignoring non-integer font size {value!r}")
            return self.default_font_size
        return value

    def set_font_size(self, value: int) -> None:
        """Persist the font size. Any integer is accepted."""
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"font size must be an int, got {type(value).__name__}")

        with self._lock:
            try:
                data = self._load()
            except Exception as e:
                logger.warning(f"Overwriting unreadable preferences {self.preferences_file}: {e}")
                data = {}
            data[FONT_SIZE_KEY] = value
            self.preferences_file.parent.mkdir(parents=True, exist_ok=True)
            atomic_write_text(self.preferences_file, json.dumps(data, indent=2) + "\n")
        logger.debug(f"Font size set to {value}")
