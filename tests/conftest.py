# tests/conftest.py
import asyncio
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from helpdesk.comments.application import CommentService
from helpdesk.config import Settings
from helpdesk.infrastructure.database import Database
from helpdesk.main import create_app
from helpdesk.tickets.application import TicketCreateDTO, TicketService

START = datetime(2026, 1, 15, 10, 0, tzinfo=timezone.utc)


class FakeClock:
    """Advances by ``tick`` on every reading; ``advance`` jumps ahead."""

    def __init__(self, start: datetime = START, tick: timedelta = timedelta(milliseconds=1)):
        self.now = start
        self.tick = tick

    def __call__(self) -> datetime:
        current = self.now
        self.now += self.tick
        return current

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


def parse_ts(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'helpdesk.db'}",
        environment="test",
        log_level="WARNING",
    )


@pytest.fixture
def client(settings, clock):
    app = create_app(settings, clock=clock)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def run():
    """Runs coroutines on one event loop for the whole test."""
    loop = asyncio.new_event_loop()
    yield loop.run_until_complete
    loop.close()


@pytest.fixture
def database(run, settings):
    db = Database(settings.database_url)
    db.init()
    run(db.create_tables())
    yield db
    run(db.close())


@pytest.fixture
def tickets(database, clock):
    return TicketService(database, clock)


@pytest.fixture
def comments(database, clock):
    return CommentService(database, clock)


@pytest.fixture
def make_ticket(run, tickets):
    def _make(**fields):
        payload = {"title": "T1", "description": "D1", "priority": "medium", **fields}
        return run(tickets.create_ticket(TicketCreateDTO(**payload)))
    return _make
