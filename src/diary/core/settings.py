"""Display settings - font size bounds and defaults."""

FONT_SIZE_KEY = "font_size"
DEFAULT_FONT_SIZE = 16
MIN_FONT_SIZE = 12
MAX_FONT_SIZE = 30


def is_valid_font_size(value: int) -> bool:
    """Font sizes the UI allows (12-30). The store itself accepts any integer."""
    return MIN_FONT_SIZE <= value <= MAX_FONT_SIZE

