"""Configuration management for Diary."""

import logging
import os
from dataclasses import dataclass
from datetime import tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

DIARY_HOME = Path(os.environ.get("DIARY_HOME", Path.home() / "diary"))
CONFIG_FILE = DIARY_HOME / "config" / "diary.conf"
DATA_DIR = DIARY_HOME / "data"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class Config:
    """Diary configuration."""

    data_dir: str = ""
    timezone: str = ""  # empty means system local time
    seed_samples: bool = True
    export_preview_chars: int = 1000

    def resolved_data_dir(self) -> Path:
        if self.data_dir:
            return Path(self.data_dir).expanduser()
        return DATA_DIR

    def tz(self) -> tzinfo | None:
        """Configured zone for calendar-day math, or None for system local."""
        if not self.timezone:
            return None
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(f"Unknown timezone {self.timezone!r}, using system local time")
            return None


def _strip_value(value: str) -> str:
    # Handle quoted values with inline comments: "value" # comment
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


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
        value = _strip_value(value.strip())

        match key:
            case "data_dir":
                config.data_dir = value
            case "timezone":
                config.timezone = value
            case "seed_samples":
                if value.lower() in _TRUE:
                    config.seed_samples = True
                elif value.lower() in _FALSE:
                    config.seed_samples = False
                else:
                    logger.warning(f"Invalid SEED_SAMPLES value: {value}")
            case "export_preview_chars":
                try:
                    config.export_preview_chars = int(value)
                except ValueError:
                    logger.warning(f"Invalid EXPORT_PREVIEW_CHARS value: {value}")

    return config
