"""Shared workflow layer between CLI and Telegram.

The presentation layers never touch files directly: they resolve stores here
and run the save/open/startup flows through these functions.
"""

import asyncio
import logging
from datetime import date
from pathlib import Path

from .adapters.file_entries import FileEntryStore
from .adapters.file_settings import FileSettingsStore
from .config import DEFAULT_ENTRIES_DIR, DEFAULT_PREFERENCES_FILE, Config
from .core.entry import entry_day
from .ports import EntryStore, SettingsStore

logger = logging.getLogger(__name__)


def get_entry_store(config: Config) -> FileEntryStore:
    """Resolve entries directory from config."""
    if config.entries_dir:
        return FileEntryStore(Path(config.entries_dir).expanduser())
    return FileEntryStore(DEFAULT_ENTRIES_DIR)


def get_settings_store(config: Config) -> FileSettingsStore:
    """Resolve preferences file from config."""
    if config.preferences_file:
        return FileSettingsStore(Path(config.preferences_file).expanduser())
    return FileSettingsStore(DEFAULT_PREFERENCES_FILE)


def load_font_size(settings: SettingsStore) -> int:
    """Startup: read the font size. Never fails."""
    return settings.get_font_size()


def open_entry(entries: EntryStore, entry_date: date) -> str:
    """Text to show when a date is selected. Empty if nothing was saved."""
    text = entries.read(entry_day(entry_date))
    return text if text is not None else ""


def save_entry(
    entries: EntryStore,
    settings: SettingsStore,
    entry_date: date,
    text: str,
    font_size: int | None = None,
) -> None:
    """
    Save button: write the entry, then remember the font size.

    Entry write failures propagate so the caller can tell the user.
    """
    day = entry_day(entry_date)
    entries.write(day, text)
    if font_size is not None:
        settings.set_font_size(font_size)
    logger.info(f"Saved diary entry for {day.isoformat()}")


# ============== Async variants ==============


async def aload_font_size(settings: SettingsStore) -> int:
    return await asyncio.to_thread(load_font_size, settings)


async def aread_entry(entries: EntryStore, entry_date: date) -> str | None:
    return await asyncio.to_thread(entries.read, entry_day(entry_date))


async def aopen_entry(entries: EntryStore, entry_date: date) -> str:
    return await asyncio.to_thread(open_entry, entries, entry_date)


async def asave_entry(
    entries: EntryStore,
    settings: SettingsStore,
    entry_date: date,
    text: str,
    font_size: int | None = None,
) -> None:
    await asyncio.to_thread(save_entry, entries, settings, entry_date, text, font_size)


async def aset_font_size(settings: SettingsStore, value: int) -> None:
    await asyncio.to_thread(settings.set_font_size, value)
