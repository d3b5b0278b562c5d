"""Shared pytest fixtures."""

from datetime import UTC, datetime, timedelta

import bcrypt
import pytest
from fastapi.testclient import TestClient

from pingate.app import App
from pingate.config import Config
from pingate.web.server import create_fastapi_app

TEST_PIN = "4698"


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2026, 1, 1, 8, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.current

    def advance(self, milliseconds: int = 0, **kwargs: float) -> None:
        self.current += timedelta(milliseconds=milliseconds, **kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fast_salt():
    """Cheap bcrypt salt so tests do not spend seconds hashing."""
    return bcrypt.gensalt(rounds=4).decode("utf-8")


@pytest.fixture
def make_config(fast_salt):
    def factory(**overrides) -> Config:
        values = {"pin": TEST_PIN, "pin_salt": fast_salt, "_env_file": None}
        values.update(overrides)
        return Config(**values)

    return factory


@pytest.fixture
def config(make_config):
    return make_config()


@pytest.fixture
def make_client(make_config, clock, monkeypatch):
    """Build a TestClient whose session store and rate limiter read the fake clock."""
    monkeypatch.setattr("pingate.core.modules.session.store.now", clock)
    monkeypatch.setattr("pingate.core.modules.ratelimit.service.now", clock)
    clients: list[TestClient] = []

    def factory(**overrides) -> TestClient:
        cfg = make_config(**overrides)
        client = TestClient(create_fastapi_app(App(cfg), cfg))
        client.__enter__()
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()
