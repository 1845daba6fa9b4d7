"""Database model and webhook schema for player actions."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Optional

from pydantic import field_validator
from sqlalchemy import DateTime
from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class ActionRecord(SQLModel, table=True):
    """One immutable player action reported by the game server."""

    __tablename__ = "action_records"

    id: Optional[int] = ORMField(default=None, primary_key=True)
    user_id: str = ORMField(index=True)
    player_name: str = ORMField(index=True)
    action: str = ORMField(index=True)
    amount: float
    created_at: datetime = ORMField(
        default_factory=utcnow, sa_type=DateTime(timezone=True), index=True
    )


class ActionWebhook(SQLModel):
    """Request body posted to the ranch webhook."""

    user_id: str = ORMField(alias="userId")
    player_name: str = ORMField(alias="playerName")
    action: str
    amount: float

    @field_validator("user_id", mode="before")
    @classmethod
    def _numeric_ids_as_text(cls, value):
        # Game servers send numeric ids; store them as text.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("amount")
    @classmethod
    def _finite_amount(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("amount must be a finite number")
        return value

    def to_record(self) -> ActionRecord:
        return ActionRecord(
            user_id=self.user_id,
            player_name=self.player_name,
            action=self.action,
            amount=self.amount,
        )


__all__ = ["ActionRecord", "ActionWebhook"]
