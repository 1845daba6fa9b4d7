"""Aggregate API routers."""

from fastapi import APIRouter

from .leaderboard import router as leaderboard_router
from .system import router as system_router
from .webhook import router as webhook_router

ALL_ROUTERS: tuple[APIRouter, ...] = (
    system_router,
    webhook_router,
    leaderboard_router,
)

__all__ = ["ALL_ROUTERS"]
