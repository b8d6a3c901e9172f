"""Ports - interfaces/protocols for external dependencies."""

from .entry_store import EntryStore
from .settings_store import SettingsStore
from .presenter import Presenter

__all__ = [
    "EntryStore",
    "SettingsStore",
    "Presenter",
]
