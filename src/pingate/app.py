from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import PackageNotFoundError, version

import structlog

from pingate.config import Config
from pingate.core.core import Core
from pingate.core.modules.session.models import AuthToken, IssuedToken, TokenValidation
from pingate.errors import InvalidCredentialError

logger = structlog.get_logger(__name__)


def get_package_version() -> str:
    try:
        return version("pingate")
    except PackageNotFoundError:
        return "unknown"


class App:
    """Facade for all application operations, delegates to Core services."""

    def __init__(self, config: Config) -> None:
        self._core = Core(config)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    async def verify_pin(self, pin: str, remote_address: str) -> IssuedToken:
        """Check a supervisor PIN and open a session for the caller.

        Every attempt counts against the caller's rate limit, malformed ones included.
        """
        self._core.services.ratelimit.hit(remote_address)
        try:
            self._core.services.pin.verify(pin)
        except InvalidCredentialError:
            logger.warning("invalid_pin_attempt", address=remote_address)
            raise
        issued = self._core.services.session.create_session(remote_address)
        self._core.services.ratelimit.reset(remote_address)
        return issued

    async def validate_token(self, auth_token: AuthToken) -> TokenValidation:
        """Check a token without raising; unknown or expired tokens yield valid=False."""
        return self._core.services.session.validate_token(auth_token)

    async def authenticate(self, auth_token: AuthToken) -> TokenValidation:
        """Gate for protected operations (raises AuthenticationError)."""
        return self._core.services.session.authenticate(auth_token)

    async def logout(self, auth_token: AuthToken) -> None:
        """Invalidate a session. Unknown tokens are accepted silently."""
        self._core.services.session.invalidate_session(auth_token)

    async def get_version(self) -> dict[str, str]:
        """Get package version and build information."""
        config = self._core.config
        return {
            "version": get_package_version(),
            "git_commit_hash": config.git_commit_hash,
            "git_commit_date": config.git_commit_date,
            "build_time": config.build_time,
        }
