"""Configuration management"""
import os
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from dotenv import load_dotenv

load_dotenv()

# Storage
# - 'json' (default): one JSON file per store namespace under DATA_PATH
# - 'memory': nothing is written, state lives for the session only
STORAGE_BACKEND: str = os.getenv("STORAGE_BACKEND", "json").lower()
DATA_PATH: Path = Path(os.getenv("DATA_PATH", "./data"))

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# Calendar days ("today") are evaluated in this timezone
TIMEZONE: str = os.getenv("TIMEZONE", "UTC")

# Streaks
# 0 scans every completion; a positive value caps the backward walk
STREAK_LOOKBACK_DAYS: int = int(os.getenv("STREAK_LOOKBACK_DAYS", "0"))

# Owner used by the entry point when no user is given
DEFAULT_USER_ID: str = os.getenv("DEFAULT_USER_ID", "default-user")

VALID_STORAGE_BACKENDS = ("json", "memory")
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# Validation
def validate_config() -> None:
    """Validate configuration"""
    if STORAGE_BACKEND not in VALID_STORAGE_BACKENDS:
        raise ValueError(
            f"STORAGE_BACKEND must be one of {', '.join(VALID_STORAGE_BACKENDS)}, got '{STORAGE_BACKEND}'"
        )
    if LOG_LEVEL not in VALID_LOG_LEVELS:
        raise ValueError(f"LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)}, got '{LOG_LEVEL}'")
    try:
        ZoneInfo(TIMEZONE)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"TIMEZONE '{TIMEZONE}' is not a known timezone") from e
    if STREAK_LOOKBACK_DAYS < 0:
        raise ValueError("STREAK_LOOKBACK_DAYS must be 0 (unbounded) or positive")
    if not DEFAULT_USER_ID:
        raise ValueError("DEFAULT_USER_ID is required")
