"""Leaderboard aggregation and report formatting."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import case, func
from sqlmodel import Session, select

from ..models import ActionRecord

MILK = "milk"
EGGS = "eggs"
LEADERBOARD_LIMIT = 10
RESET_PERIOD = timedelta(weeks=1)


@dataclass(frozen=True)
class LeaderboardRow:
    """Aggregated totals for one player."""

    player_name: str
    milk: float
    eggs: float

    @property
    def total(self) -> float:
        return self.milk + self.eggs

    def to_dict(self, rank: int) -> Dict[str, Any]:
        return {
            "rank": rank,
            "player_name": self.player_name,
            "milk": self.milk,
            "eggs": self.eggs,
            "total": self.total,
        }


def current_window_start(
    anchor: Optional[datetime], now: datetime, period: timedelta = RESET_PERIOD
) -> Optional[datetime]:
    """Return the start of the reset window containing ``now``.

    Windows are ``period`` long and begin at ``anchor``. Before the anchor the
    first window is used. ``None`` means no reset is configured.
    """

    if anchor is None:
        return None
    if now <= anchor:
        return anchor
    elapsed = (now - anchor) // period
    return anchor + elapsed * period


def _action_sum(label: str):
    return func.coalesce(
        func.sum(case((ActionRecord.action == label, ActionRecord.amount), else_=0)),
        0,
    )


def top_players(
    session: Session,
    *,
    since: Optional[datetime] = None,
    limit: int = LEADERBOARD_LIMIT,
) -> List[LeaderboardRow]:
    """Sum milk and eggs per player name, highest combined total first."""

    milk = _action_sum(MILK).label("milk")
    eggs = _action_sum(EGGS).label("eggs")
    total = (_action_sum(MILK) + _action_sum(EGGS)).label("total")

    statement = select(ActionRecord.player_name, milk, eggs, total)
    if since is not None:
        statement = statement.where(ActionRecord.created_at >= since)
    statement = (
        statement.group_by(ActionRecord.player_name)
        .order_by(total.desc(), ActionRecord.player_name.asc())
        .limit(limit)
    )

    return [
        LeaderboardRow(
            player_name=row.player_name,
            milk=float(row.milk),
            eggs=float(row.eggs),
        )
        for row in session.exec(statement).all()
    ]


def format_amount(value: float) -> str:
    value = round(float(value), 2)
    if value.is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0")


def format_leaderboard(rows: Sequence[LeaderboardRow], title: str) -> str:
    """Render rows as the multi-line chat message."""

    lines = [f"🏆 {title}", ""]
    if not rows:
        lines.append("No deliveries recorded yet.")
        return "\n".join(lines)

    for rank, row in enumerate(rows[:LEADERBOARD_LIMIT], start=1):
        lines.extend(
            [
                f"{rank}. {row.player_name}",
                f"🥛 Milk: {format_amount(row.milk)}",
                f"🥚 Eggs: {format_amount(row.eggs)}",
                f"📦 Total: {format_amount(row.total)}",
                "",
            ]
        )
    return "\n".join(lines).rstrip("\n")


__all__ = [
    "EGGS",
    "LEADERBOARD_LIMIT",
    "LeaderboardRow",
    "MILK",
    "current_window_start",
    "format_amount",
    "format_leaderboard",
    "top_players",
]
