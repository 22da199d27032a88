"""Configuration management for practical."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

PRACTICAL_HOME = Path(os.environ.get("PRACTICAL_HOME", Path.home() / "practical"))
CONFIG_FILE = PRACTICAL_HOME / "config" / "practical.conf"
DATA_DIR = PRACTICAL_HOME / "data"


@dataclass
class Config:
    """practical configuration."""

    api_base_url: str = ""
    api_token: str = ""
    request_timeout: float = 10.0
    preferences_file: str = ""
    preferences_ttl: float = 300.0
    urgent_days: int = 0
    timezone: str = "UTC"
    date_format: str = "MM/dd/yyyy"
    time_format: str = "12h"

    @property
    def preferences_path(self) -> Path:
        if self.preferences_file:
            return Path(self.preferences_file).expanduser()
        return DATA_DIR / "preferences.json"


def _strip_value(value: str) -> str:
    """Unquote a value, or drop an inline comment from an unquoted one."""
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def _parse_number(key: str, value: str, cast, default):
    try:
        return cast(value)
    except ValueError:
        logger.warning(f"Invalid {key.upper()} value {value!r}, using {default}")
        return default


def load_config(path: Path | None = None) -> Config:
    """Load configuration from practical.conf file."""
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
        value = _strip_value(value.strip())

        match key:
            case "api_base_url":
                config.api_base_url = value.rstrip("/")
            case "api_token":
                config.api_token = value
            case "request_timeout":
                config.request_timeout = _parse_number(key, value, float, config.request_timeout)
            case "preferences_file":
                config.preferences_file = value
            case "preferences_ttl":
                config.preferences_ttl = _parse_number(key, value, float, config.preferences_ttl)
            case "urgent_days":
                config.urgent_days = _parse_number(key, value, int, config.urgent_days)
            case "timezone":
                config.timezone = value
            case "date_format":
                config.date_format = value
            case "time_format":
                config.time_format = value

    return config
