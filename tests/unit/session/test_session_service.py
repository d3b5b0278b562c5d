"""Tests for SessionService and its lifespan wiring."""

import asyncio

import pytest

from pingate.core.core import Core
from pingate.core.modules.session.models import AuthToken
from pingate.errors import AuthenticationError


@pytest.fixture
def core(config, clock, monkeypatch):
    monkeypatch.setattr("pingate.core.modules.session.store.now", clock)
    return Core(config)


class TestSessionService:
    def test_authenticate_live_token(self, core):
        service = core.services.session
        issued = service.create_session("10.0.0.5")

        validation = service.authenticate(issued.token)

        assert validation.session.token == issued.token

    def test_authenticate_unknown_token(self, core):
        with pytest.raises(AuthenticationError):
            core.services.session.authenticate(AuthToken("never-issued"))

    def test_authenticate_expired_token(self, core, clock):
        service = core.services.session
        issued = service.create_session("10.0.0.5")
        clock.advance(hours=8)

        with pytest.raises(AuthenticationError):
            service.authenticate(issued.token)

    def test_lifespan_starts_and_stops_sweep(self, core):
        """Test that the sweep task runs exactly while the core is up."""
        store = core.services.session.store

        async def scenario() -> tuple[bool, bool]:
            async with core.lifespan():
                running = store.is_running
            return running, store.is_running

        assert asyncio.run(scenario()) == (True, False)

    def test_separate_cores_do_not_share_sessions(self, config, core):
        issued = core.services.session.create_session("10.0.0.5")

        other = Core(config)

        assert other.services.session.validate_token(issued.token).valid is False
