"""Leaderboard endpoints."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends
from sqlmodel import Session

from ...core import LEADERBOARD_RESET_ANCHOR, get_session, utcnow
from ...services.leaderboard import current_window_start, top_players

router = APIRouter(tags=["leaderboard"])


@router.get("/leaderboard")
def get_leaderboard(session: Session = Depends(get_session)) -> Dict[str, Any]:
    """Get the current top players."""

    since = current_window_start(LEADERBOARD_RESET_ANCHOR, utcnow())
    rows = top_players(session, since=since)

    return {
        "since": since.isoformat() if since else None,
        "entries": [row.to_dict(rank) for rank, row in enumerate(rows, start=1)],
    }


__all__ = ["router"]
