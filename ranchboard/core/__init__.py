"""Core configuration and infrastructure helpers."""

from .config import (
    CHANNEL_ID,
    DATABASE_URL,
    DISCORD_TOKEN,
    LEADERBOARD_INTERVAL_SECONDS,
    LEADERBOARD_RESET_ANCHOR,
    LEADERBOARD_TITLE,
    LOG_LEVEL,
    PORT,
)
from .database import build_engine, engine, get_session
from .logger import configure_logging, logger
from .time import utcnow

__all__ = [
    "CHANNEL_ID",
    "DATABASE_URL",
    "DISCORD_TOKEN",
    "LEADERBOARD_INTERVAL_SECONDS",
    "LEADERBOARD_RESET_ANCHOR",
    "LEADERBOARD_TITLE",
    "LOG_LEVEL",
    "PORT",
    "build_engine",
    "configure_logging",
    "engine",
    "get_session",
    "logger",
    "utcnow",
]
