"""FastAPI application factory and configuration."""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from sqlmodel import SQLModel

from . import __version__
from . import models  # noqa: F401 - ensure models are registered with SQLModel
from .api import register_routes
from .core import (
    CHANNEL_ID,
    DISCORD_TOKEN,
    LEADERBOARD_INTERVAL_SECONDS,
    LEADERBOARD_RESET_ANCHOR,
    LEADERBOARD_TITLE,
    PORT,
    configure_logging,
    engine,
)
from .discord_bot import RanchBot

logger = logging.getLogger(__name__)


def _log_bot_exit(task: asyncio.Task) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("discord.stopped", exc_info=exc)


@asynccontextmanager
async def lifespan(app: FastAPI):
    SQLModel.metadata.create_all(engine)

    bot: Optional[RanchBot] = None
    if DISCORD_TOKEN:
        bot = RanchBot(
            engine,
            CHANNEL_ID,
            interval_seconds=LEADERBOARD_INTERVAL_SECONDS,
            title=LEADERBOARD_TITLE,
            reset_anchor=LEADERBOARD_RESET_ANCHOR,
        )
        task = asyncio.create_task(bot.start(DISCORD_TOKEN))
        task.add_done_callback(_log_bot_exit)
    else:
        logger.warning("discord.disabled", extra={"reason": "DISCORD_TOKEN not set"})
    app.state.bot = bot

    yield

    if bot is not None:
        await bot.close()


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title="Ranch Leaderboard API", version=__version__, lifespan=lifespan)
    register_routes(app)
    return app


app = create_app()


def main() -> None:
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=PORT, log_config=None)


if __name__ == "__main__":
    main()
