"""Settings storage interface."""

from typing import Protocol


class SettingsStore(Protocol):
    """Interface for the persisted display settings."""

    def get_font_size(self) -> int:
        """Return the stored font size, or the default on any failure."""
        ...

    def set_font_size(self, value: int) -> None:
        """Persist the font size, replacing any prior value."""
        ...
