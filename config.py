"""Centralized configuration for environment variables and game constants."""

import logging
import os
from pathlib import Path

SEED_ENV = "FRANCHISE_SEED"
DATA_DIR_ENV = "FRANCHISE_DATA_DIR"
LOG_LEVEL_ENV = "FRANCHISE_LOG_LEVEL"

DEFAULT_DATA_DIR = Path(__file__).resolve().parent / "data" / "leagues"

# Game rules
REGULAR_SEASON_MAX_INNINGS = 6
GAMES_PER_MATCHUP = 4
SERIES_WINS_NEEDED = 2
SAVE_MAX_MARGIN = 3
LINEUP_SIZE = 9


def get_seed() -> int | None:
    """Return the configured random seed, or None if not set."""
    raw = os.environ.get(SEED_ENV, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        import sys

        print(f"Error: {SEED_ENV} must be an integer, got {raw!r}.", file=sys.stderr)
        sys.exit(1)


def get_data_dir() -> Path:
    """Return the directory league documents are stored in."""
    raw = os.environ.get(DATA_DIR_ENV, "")
    return Path(raw) if raw else DEFAULT_DATA_DIR


def get_log_level() -> int:
    """Return the logging level name from the environment (default WARNING)."""
    name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING
