"""Leaderboard reporter against in-process Discord fakes."""

from types import SimpleNamespace

import discord
import pytest
from sqlmodel import create_engine

from ranchboard.core import engine
from ranchboard.discord_bot import LeaderboardReporter, RanchBot
from ranchboard.models import ActionRecord

BOT_ID = 1
CHANNEL_ID = 555


class FakeMessage:
    def __init__(self, author_id: int):
        self.author = SimpleNamespace(id=author_id)
        self.edits: list[str] = []

    async def edit(self, *, content: str):
        self.edits.append(content)


class FakeChannel:
    def __init__(self, history=()):
        self._history = list(history)
        self.sent: list[str] = []

    async def history(self, limit: int):
        for message in self._history[:limit]:
            yield message

    async def send(self, content: str):
        self.sent.append(content)
        return FakeMessage(BOT_ID)


class FakeClient:
    def __init__(self, channel=None, fetch_error=None):
        self.user = SimpleNamespace(id=BOT_ID)
        self._channel = channel
        self._fetch_error = fetch_error

    def get_channel(self, channel_id: int):
        return self._channel

    async def fetch_channel(self, channel_id: int):
        if self._fetch_error is not None:
            raise self._fetch_error
        return self._channel


def _reporter(client, db_engine=engine):
    return LeaderboardReporter(client, db_engine, CHANNEL_ID, title="Beaver Farms Leaderboard")


def _seed(session):
    session.add(ActionRecord(user_id="1", player_name="A", action="milk", amount=3))
    session.add(ActionRecord(user_id="2", player_name="B", action="eggs", amount=8))
    session.commit()


@pytest.mark.asyncio
async def test_sends_new_message_when_none_posted(session):
    _seed(session)
    channel = FakeChannel(history=[FakeMessage(author_id=99)])

    assert await _reporter(FakeClient(channel)).publish() is True

    assert len(channel.sent) == 1
    text = channel.sent[0]
    assert text.startswith("🏆 Beaver Farms Leaderboard")
    assert text.index("1. B") < text.index("2. A")


@pytest.mark.asyncio
async def test_edits_previous_bot_message(session):
    _seed(session)
    ours = FakeMessage(author_id=BOT_ID)
    channel = FakeChannel(history=[FakeMessage(author_id=99), ours])

    assert await _reporter(FakeClient(channel)).publish() is True

    assert channel.sent == []
    assert len(ours.edits) == 1
    assert "🥚 Eggs: 8" in ours.edits[0]


@pytest.mark.asyncio
async def test_fetches_uncached_channel():
    channel = FakeChannel()
    client = FakeClient(channel)
    client.get_channel = lambda _id: None

    assert await _reporter(client).publish() is True
    assert channel.sent == ["🏆 Beaver Farms Leaderboard\n\nNo deliveries recorded yet."]


@pytest.mark.asyncio
async def test_missing_channel_is_skipped():
    not_found = discord.NotFound(SimpleNamespace(status=404, reason="Not Found"), "Unknown Channel")
    client = FakeClient(channel=None, fetch_error=not_found)

    assert await _reporter(client).publish() is False


@pytest.mark.asyncio
async def test_query_failure_is_skipped():
    channel = FakeChannel()
    # No tables exist in a fresh in-memory database.
    empty_engine = create_engine("sqlite://")

    assert await _reporter(FakeClient(channel), empty_engine).publish() is False
    assert channel.sent == []


@pytest.mark.asyncio
async def test_delivery_failure_is_skipped():
    class RejectingChannel(FakeChannel):
        async def send(self, content: str):
            raise discord.Forbidden(SimpleNamespace(status=403, reason="Forbidden"), "Missing Access")

    assert await _reporter(FakeClient(RejectingChannel())).publish() is False


@pytest.mark.asyncio
async def test_channel_fetch_server_error_is_skipped():
    unavailable = discord.HTTPException(
        SimpleNamespace(status=503, reason="Service Unavailable"), "upstream"
    )
    client = FakeClient(channel=None, fetch_error=unavailable)

    assert await _reporter(client).publish() is False


@pytest.mark.asyncio
async def test_channel_without_history_is_skipped():
    category = SimpleNamespace(id=CHANNEL_ID, name="ranch")

    assert await _reporter(FakeClient(category)).publish() is False


@pytest.mark.asyncio
async def test_bot_loop_survives_unexpected_errors():
    class ExplodingReporter:
        calls = 0

        async def publish(self):
            self.calls += 1
            raise RuntimeError("unexpected")

    bot = RanchBot(create_engine("sqlite://"), CHANNEL_ID, interval_seconds=60)
    bot.reporter = ExplodingReporter()

    await bot.publish_leaderboard()
    await bot.publish_leaderboard()

    assert bot.reporter.calls == 2
