from __future__ import annotations

"""Pytest fixtures for the webhook API and the leaderboard reporter.

Tests run against a throw-away SQLite file; Discord is never contacted.
"""

import os
import sys
import tempfile
from pathlib import Path
from typing import Iterator

import pytest
from sqlmodel import Session, SQLModel
from starlette.testclient import TestClient

# ---------------------------------------------------------------------------
# Runtime env for the application
# ---------------------------------------------------------------------------

_DB_DIR = tempfile.mkdtemp(prefix="ranchboard-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{Path(_DB_DIR) / 'test.db'}"
os.environ["DISCORD_TOKEN"] = ""
os.environ.pop("LEADERBOARD_RESET_ANCHOR", None)

# Ensure project root on PYTHONPATH so `import ranchboard` works when pytest is run
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from ranchboard.app import app  # noqa: E402
from ranchboard.core import engine  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_tables() -> Iterator[None]:
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    yield
    app.dependency_overrides.clear()


@pytest.fixture()
def api_client() -> TestClient:
    return TestClient(app)


@pytest.fixture()
def session() -> Iterator[Session]:
    with Session(engine) as db:
        yield db
