"""Service layer helpers."""

from .leaderboard import (
    LeaderboardRow,
    current_window_start,
    format_leaderboard,
    top_players,
)

__all__ = [
    "LeaderboardRow",
    "current_window_start",
    "format_leaderboard",
    "top_players",
]
