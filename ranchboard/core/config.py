"""Application settings and environment helpers."""

from __future__ import annotations

import os
from datetime import datetime, timezone
from typing import Optional
from urllib.parse import quote_plus

from dotenv import load_dotenv

load_dotenv(override=False)


def _require_env(name: str) -> str:
    """Return a required environment variable or raise an error."""

    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing required environment variable: {name}")
    return value


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc


def _env_datetime(name: str) -> Optional[datetime]:
    raw = os.getenv(name)
    if not raw:
        return None
    try:
        value = datetime.fromisoformat(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an ISO-8601 datetime") from exc
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


# Database -------------------------------------------------------------------
PGHOST = os.getenv("PGHOST", "localhost")
PGUSER = os.getenv("PGUSER", "postgres")
PGPASSWORD = os.getenv("PGPASSWORD", "")
PGDATABASE = os.getenv("PGDATABASE", "postgres")
PGPORT = _env_int("PGPORT", 5432)
PGSSLMODE = os.getenv("PGSSLMODE") or None


def _normalize_database_url(url: str) -> str:
    """Map the ``postgres://`` scheme used by hosting providers to a SQLAlchemy URL."""

    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return "postgresql+psycopg2://" + url[len(prefix):]
    return url


DATABASE_URL = _normalize_database_url(os.getenv("DATABASE_URL") or "") or (
    f"postgresql+psycopg2://{quote_plus(PGUSER)}:{quote_plus(PGPASSWORD)}"
    f"@{PGHOST}:{PGPORT}/{PGDATABASE}"
)


# Discord --------------------------------------------------------------------
DISCORD_TOKEN = os.getenv("DISCORD_TOKEN") or None
if DISCORD_TOKEN:
    _require_env("CHANNEL_ID")
CHANNEL_ID = _env_int("CHANNEL_ID", 0)


# Runtime behaviour ----------------------------------------------------------
PORT = _env_int("PORT", 8080)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

LEADERBOARD_INTERVAL_SECONDS = _env_int("LEADERBOARD_INTERVAL_SECONDS", 60)
LEADERBOARD_TITLE = os.getenv("LEADERBOARD_TITLE", "Beaver Farms Leaderboard")
LEADERBOARD_RESET_ANCHOR = _env_datetime("LEADERBOARD_RESET_ANCHOR")


__all__ = [
    "CHANNEL_ID",
    "DATABASE_URL",
    "DISCORD_TOKEN",
    "LEADERBOARD_INTERVAL_SECONDS",
    "LEADERBOARD_RESET_ANCHOR",
    "LEADERBOARD_TITLE",
    "LOG_LEVEL",
    "PGDATABASE",
    "PGHOST",
    "PGPORT",
    "PGSSLMODE",
    "PGUSER",
    "PORT",
]
