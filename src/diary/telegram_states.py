"""Conversation states for Telegram bot."""

from enum import IntEnum, auto


class WriteStates(IntEnum):
    """States for the write-entry conversation."""

    DATE = auto()
    TEXT = auto()
