"""
Configuration loader for the osu!.db decoder

Loads settings from the environment, after reading an optional .env file
"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env file from the working directory (existing variables win)
load_dotenv(Path.cwd() / '.env', override=False)

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def _int_env(name: str, default: int) -> Optional[int]:
    """Read an integer setting; None if the value is not a number (see validate)"""
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        return None


class Config:
    """Decoder configuration"""

    # Logging
    LOG_LEVEL: str = os.getenv('OSUDB_LOG_LEVEL', 'WARNING').upper()
    LOG_FILE: Optional[str] = os.getenv('OSUDB_LOG_FILE') or None

    # Largest buffer decode() accepts, 0 = unlimited
    MAX_BUFFER_SIZE: Optional[int] = _int_env('OSUDB_MAX_BUFFER_SIZE', 0)

    @classmethod
    def reload(cls):
        """Re-read all settings from the environment"""
        cls.LOG_LEVEL = os.getenv('OSUDB_LOG_LEVEL', 'WARNING').upper()
        cls.LOG_FILE = os.getenv('OSUDB_LOG_FILE') or None
        cls.MAX_BUFFER_SIZE = _int_env('OSUDB_MAX_BUFFER_SIZE', 0)

    @classmethod
    def validate(cls):
        """Validate configuration"""
        errors = []

        if cls.LOG_LEVEL not in LOG_LEVELS:
            errors.append(f"OSUDB_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got '{cls.LOG_LEVEL}'")
        if cls.MAX_BUFFER_SIZE is None:
            errors.append(
                f"OSUDB_MAX_BUFFER_SIZE must be an integer, got '{os.getenv('OSUDB_MAX_BUFFER_SIZE')}'"
            )
        elif cls.MAX_BUFFER_SIZE < 0:
            errors.append(f"OSUDB_MAX_BUFFER_SIZE must not be negative, got {cls.MAX_BUFFER_SIZE}")

        if errors:
            raise ValueError("Configuration errors:\n" + "\n".join(f"  - {e}" for e in errors))

    @classmethod
    def log_level(cls) -> int:
        """Numeric logging level for LOG_LEVEL"""
        return getattr(logging, cls.LOG_LEVEL)

    @classmethod
    def log_file(cls) -> Optional[Path]:
        return Path(cls.LOG_FILE) if cls.LOG_FILE else None
