"""Configuration management for taskroutine."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

TASKROUTINE_HOME = Path(os.environ.get("TASKROUTINE_HOME", Path.home() / "taskroutine"))
CONFIG_FILE = TASKROUTINE_HOME / "config" / "taskroutine.conf"
DATA_DIR = TASKROUTINE_HOME / "data"

NOTIFY_CHANNELS = ("console", "telegram")


@dataclass
class Config:
    """taskroutine configuration."""

    data_dir: str = ""
    notify_channel: str = "console"
    notify_sound: bool = True
    misfire_grace_seconds: int = 60
    # Telegram delivery settings
    telegram_bot_token: str = ""
    telegram_chat_id: str = ""


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from taskroutine.conf file."""
    config = Config()
    config_file = config_file or CONFIG_FILE

    if not config_file.exists():
        return config

    for line in config_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = value.strip()

        # Handle quoted values with inline comments: "value" # comment
        if value[:1] in ('"', "'"):
            quote = value[0]
            end_quote = value.find(quote, 1)
            value = value[1:end_quote] if end_quote != -1 else value[1:]
        elif "#" in value:
            # Unquoted: strip inline comments
            value = value.split("#")[0].strip()

        match key:
            case "data_dir":
                config.data_dir = value
            case "notify_channel":
                channel = value.lower()
                if channel in NOTIFY_CHANNELS:
                    config.notify_channel = channel
                else:
                    logger.warning(f"Unknown NOTIFY_CHANNEL {value!r}, using console")
            case "notify_sound":
                config.notify_sound = _parse_bool(value)
            case "misfire_grace_seconds":
                try:
                    config.misfire_grace_seconds = max(1, int(value))
                except ValueError:
                    logger.warning(f"Invalid MISFIRE_GRACE_SECONDS: {value!r}")
            case "telegram_bot_token":
                config.telegram_bot_token = value
            case "telegram_chat_id":
                config.telegram_chat_id = value

    return config
