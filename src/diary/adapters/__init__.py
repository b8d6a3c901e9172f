"""Adapters - I/O implementations of ports."""

from .file_entries import FileEntryStore
from .file_settings import FileSettingsStore

__all__ = [
    "FileEntryStore",
    "FileSettingsStore",
]
