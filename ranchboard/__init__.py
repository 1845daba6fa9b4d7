"""Ranch webhook ingestion and Discord leaderboard service."""

__version__ = "0.1.0"
