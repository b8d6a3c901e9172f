"""Presentation capability interface."""

from datetime import date
from typing import Protocol


class Presenter(Protocol):
    """What a user interface must offer the workflows: choosing a date and showing a message."""

    def pick_date(self) -> date:
        ...

    def notify(self, message: str) -> None:
        ...
