"""Game server webhook receiver."""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from ...core import get_session
from ...models import ActionWebhook

router = APIRouter(tags=["webhook"])

logger = logging.getLogger(__name__)


@router.post("/ranch-webhook")
def receive_action(
    body: ActionWebhook, session: Session = Depends(get_session)
) -> Dict[str, Any]:
    """Persist one player action reported by the game server."""

    logger.info(
        "webhook.received",
        extra={"player_name": body.player_name, "action": body.action, "amount": body.amount},
    )

    record = body.to_record()
    try:
        session.add(record)
        session.commit()
        session.refresh(record)
    except SQLAlchemyError:
        session.rollback()
        logger.exception("webhook.insert_failed", extra={"player_name": body.player_name})
        raise HTTPException(500, "Database error")

    return {"ok": True, "id": record.id}


__all__ = ["router"]
