import structlog

from pingate.config import Config
from pingate.core.core import Service
from pingate.core.modules.session.models import AuthToken, IssuedToken, TokenValidation
from pingate.core.modules.session.store import SessionTokenStore
from pingate.errors import AuthenticationError

logger = structlog.get_logger(__name__)


class SessionService(Service):
    """Owns the token store and ties its sweep task to the application lifespan."""

    def __init__(self, config: Config) -> None:
        super().__init__(config)
        self.store = SessionTokenStore(ttl=config.token_ttl, sweep_interval=config.sweep_interval_seconds)

    async def on_start(self) -> None:
        self.store.start()
        logger.info("session_sweep_started", interval_seconds=self.config.sweep_interval_seconds)

    async def on_stop(self) -> None:
        await self.store.stop()

    def create_session(self, remote_address: str) -> IssuedToken:
        return self.store.issue(remote_address)

    def validate_token(self, auth_token: AuthToken) -> TokenValidation:
        return self.store.validate(auth_token)

    def authenticate(self, auth_token: AuthToken) -> TokenValidation:
        """Validate a token for a protected operation, raising AuthenticationError if it is not live."""
        validation = self.store.validate(auth_token)
        if not validation.valid:
            raise AuthenticationError
        return validation

    def invalidate_session(self, auth_token: AuthToken) -> None:
        self.store.revoke(auth_token)
