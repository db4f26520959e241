"""Shared fixtures: an in-memory store, a fixed signing secret and an HTTP client wired to both."""

import itertools

import pytest
from fastapi.testclient import TestClient

from app import create_app
from backend import MemoryBackend
from countries import Country
from dependencies import get_kv, get_secret
from services.conversation_directory import ConversationDirectory
from services.message_log import MessageLog
from services.seat_registry import SeatRegistry
from tokens import Claims

TEST_SECRET = "test-secret"


@pytest.fixture
def secret():
    return TEST_SECRET


@pytest.fixture
def kv():
    return MemoryBackend()


@pytest.fixture
def room_id(faker):
    return f"room-{faker.uuid4()}"


@pytest.fixture
def clock():
    """Deterministic millisecond clock advancing by 5ms per call."""
    ticks = itertools.count(1_760_000_000_000, 5)
    return lambda: next(ticks)


@pytest.fixture
def registry(kv, secret):
    return SeatRegistry(kv, secret)


@pytest.fixture
def directory(kv):
    return ConversationDirectory(kv)


@pytest.fixture
def message_log(kv, directory, clock):
    return MessageLog(kv, directory, clock=clock)


@pytest.fixture
def claims_for(room_id):
    def _claims(country, room=None):
        return Claims(room_id=room or room_id, country=Country(country))

    return _claims


@pytest.fixture
def client(kv, secret):
    app = create_app()
    app.dependency_overrides[get_kv] = lambda: kv
    app.dependency_overrides[get_secret] = lambda: secret
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def login(client):
    """Claim a seat over HTTP and return ready-to-use auth headers."""

    def _login(room, country):
        r = client.post("/api/auth", json={"room_id": room, "country": country})
        assert r.status_code == 200, r.text
        return {"Authorization": f"Bearer {r.json()['access_token']}"}

    return _login
