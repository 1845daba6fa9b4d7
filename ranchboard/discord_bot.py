"""Discord client that keeps the leaderboard message up to date."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import List, Optional

import discord
from discord.ext import tasks
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from .core.time import utcnow
from .services.leaderboard import (
    LeaderboardRow,
    current_window_start,
    format_leaderboard,
    top_players,
)

logger = logging.getLogger(__name__)

# How far back to look for the message we posted last time.
HISTORY_SCAN_LIMIT = 10


class LeaderboardReporter:
    """Query the totals and publish them to one channel.

    Failures are logged and the tick is skipped. ``publish`` returns whether
    a message went out.
    """

    def __init__(
        self,
        client: discord.Client,
        engine: Engine,
        channel_id: int,
        *,
        title: str,
        reset_anchor: Optional[datetime] = None,
    ) -> None:
        self.client = client
        self.engine = engine
        self.channel_id = channel_id
        self.title = title
        self.reset_anchor = reset_anchor

    def _load_rows(self, since: Optional[datetime]) -> List[LeaderboardRow]:
        with Session(self.engine) as session:
            return top_players(session, since=since)

    async def _resolve_channel(self):
        channel = self.client.get_channel(self.channel_id)
        if channel is not None:
            return channel
        try:
            return await self.client.fetch_channel(self.channel_id)
        except (discord.NotFound, discord.Forbidden):
            logger.error("leaderboard.channel_not_found", extra={"channel_id": self.channel_id})
            return None
        except (discord.HTTPException, discord.InvalidData):
            logger.exception("leaderboard.channel_fetch_failed", extra={"channel_id": self.channel_id})
            return None

    async def _previous_message(self, channel) -> Optional[discord.Message]:
        me = self.client.user
        if me is None:
            return None
        async for message in channel.history(limit=HISTORY_SCAN_LIMIT):
            if message.author.id == me.id:
                return message
        return None

    async def publish(self) -> bool:
        since = current_window_start(self.reset_anchor, utcnow())
        try:
            rows = await asyncio.to_thread(self._load_rows, since)
        except SQLAlchemyError:
            logger.exception("leaderboard.query_failed")
            return False

        channel = await self._resolve_channel()
        if channel is None:
            return False
        if not hasattr(channel, "history"):
            logger.error("leaderboard.channel_not_messageable", extra={"channel_id": self.channel_id})
            return False

        content = format_leaderboard(rows, self.title)
        try:
            previous = await self._previous_message(channel)
            if previous is not None:
                await previous.edit(content=content)
            else:
                await channel.send(content)
        except discord.HTTPException:
            logger.exception("leaderboard.delivery_failed", extra={"channel_id": self.channel_id})
            return False

        logger.info(
            "leaderboard.updated",
            extra={"channel_id": self.channel_id, "rows": len(rows), "edited": previous is not None},
        )
        return True


class RanchBot(discord.Client):
    """Long-lived chat client; posts the leaderboard on a fixed interval."""

    def __init__(
        self,
        engine: Engine,
        channel_id: int,
        *,
        interval_seconds: int = 60,
        title: str = "Beaver Farms Leaderboard",
        reset_anchor: Optional[datetime] = None,
    ) -> None:
        intents = discord.Intents.default()
        intents.guilds = True
        intents.guild_messages = True
        super().__init__(intents=intents)
        self.interval_seconds = interval_seconds
        self.reporter = LeaderboardReporter(
            self, engine, channel_id, title=title, reset_anchor=reset_anchor
        )

    async def setup_hook(self) -> None:
        self.publish_leaderboard.change_interval(seconds=self.interval_seconds)
        self.publish_leaderboard.start()

    async def on_ready(self) -> None:
        logger.info("discord.ready", extra={"user": str(self.user)})

    @tasks.loop(seconds=60)
    async def publish_leaderboard(self) -> None:
        # An exception escaping here would stop the loop for good.
        try:
            await self.reporter.publish()
        except Exception:
            logger.exception("leaderboard.tick_failed")

    @publish_leaderboard.before_loop
    async def _wait_until_ready(self) -> None:
        await self.wait_until_ready()


__all__ = ["HISTORY_SCAN_LIMIT", "LeaderboardReporter", "RanchBot"]
