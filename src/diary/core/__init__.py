"""Functional core - pure business logic with no I/O."""

from .entry import DiaryEntry, entry_day, entry_filename, storage_key
from .settings import (
    DEFAULT_FONT_SIZE,
    FONT_SIZE_KEY,
    MAX_FONT_SIZE,
    MIN_FONT_SIZE,
    is_valid_font_size,
)

__all__ = [
    # Entries
    "DiaryEntry",
    "entry_day",
    "entry_filename",
    "storage_key",
    # Settings
    "DEFAULT_FONT_SIZE",
    "FONT_SIZE_KEY",
    "MAX_FONT_SIZE",
    "MIN_FONT_SIZE",
    "is_valid_font_size",
]
