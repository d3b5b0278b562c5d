import bcrypt
import structlog

from pingate.config import Config
from pingate.core.core import Service
from pingate.core.modules.pin.validators import validate_pin_format
from pingate.errors import InvalidCredentialError, InvalidFormatError

logger = structlog.get_logger(__name__)


def hash_pin(pin: str, salt: str | None = None) -> str:
    """Hash a PIN with bcrypt, using the given salt or a fresh one."""
    salt_bytes = salt.encode("utf-8") if salt else bcrypt.gensalt()
    return bcrypt.hashpw(pin.encode("utf-8"), salt_bytes).decode("utf-8")


class PinService(Service):
    """Checks supervisor PINs against the configured salted hash."""

    def __init__(self, config: Config) -> None:
        super().__init__(config)
        if config.pin_hash is not None:
            self._pin_hash = config.pin_hash.encode("utf-8")
        else:
            # Config guarantees a raw PIN when no hash is configured
            self._pin_hash = hash_pin(str(config.pin), config.pin_salt).encode("utf-8")

    def verify(self, pin: str) -> None:
        """Verify a PIN.

        Raises:
            InvalidFormatError: If the PIN is not exactly 4 digits (no hash is computed)
            InvalidCredentialError: If the PIN does not match
        """
        try:
            validate_pin_format(pin)
        except InvalidFormatError:
            logger.debug("malformed_pin_rejected")
            raise

        if not bcrypt.checkpw(pin.encode("utf-8"), self._pin_hash):
            raise InvalidCredentialError
