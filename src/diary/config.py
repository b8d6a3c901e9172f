"""Configuration management for Diary."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

DIARY_HOME = Path(os.environ.get("DIARY_HOME", Path.home() / "diary"))
CONFIG_FILE = DIARY_HOME / "config" / "diary.conf"
DEFAULT_ENTRIES_DIR = DIARY_HOME / "entries"
DEFAULT_PREFERENCES_FILE = DIARY_HOME / "config" / "user_preferences.json"


@dataclass
class Config:
    """Diary configuration."""

    entries_dir: str = ""
    preferences_file: str = ""
    timezone: str = "UTC"
    # Telegram bot settings
    telegram_bot_token: str = ""
    telegram_allowed_users: list[int] = field(default_factory=list)
    telegram_reminder_time: str = "21:00"


def _unquote(value: str) -> str:
    """Strip surrounding quotes, or an inline comment from an unquoted value."""
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def _parse_user_ids(value: str) -> list[int]:
    users = []
    for raw in value.split(","):
        raw = raw.strip()
        if not raw:
            continue
        try:
            users.append(int(raw))
        except ValueError:
            logger.warning(f"Ignoring invalid Telegram user id: {raw!r}")
    return users


def load_config(path: Path | None = None) -> Config:
    """Load configuration from diary.conf file."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "entries_dir":
                config.entries_dir = value
            case "preferences_file":
                config.preferences_file = value
            case "timezone":
                config.timezone = value
            case "telegram_bot_token":
                config.telegram_bot_token = value
            case "telegram_allowed_users":
                config.telegram_allowed_users = _parse_user_ids(value)
            case "telegram_reminder_time":
                config.telegram_reminder_time = value

    return config
