import math
import threading
from collections.abc import Callable
from datetime import datetime

import structlog

from pingate.config import Config
from pingate.core.core import Service
from pingate.errors import RateLimitError
from pingate.utils import now

logger = structlog.get_logger(__name__)


class RateLimitService(Service):
    """Sliding-window attempt quota per client address.

    Guards PIN verification: a 4-digit secret has only 10,000 values.
    """

    def __init__(self, config: Config, clock: Callable[[], datetime] | None = None) -> None:
        super().__init__(config)
        self._clock = clock or now
        self._attempts: dict[str, list[datetime]] = {}
        self._lock = threading.Lock()

    def hit(self, address: str) -> None:
        """Record an attempt for an address.

        Raises:
            RateLimitError: If the address already used its quota in the current window
        """
        if not self.config.rate_limit_enabled:
            return

        current = self._clock()
        window = self.config.rate_limit_window
        with self._lock:
            self._drop_stale(current - window)
            attempts = [ts for ts in self._attempts.get(address, []) if ts > current - window]
            if len(attempts) >= self.config.rate_limit_max_attempts:
                self._attempts[address] = attempts
                retry_after = (attempts[0] + window - current).total_seconds()
            else:
                attempts.append(current)
                self._attempts[address] = attempts
                retry_after = None

        if retry_after is not None:
            logger.warning("pin_rate_limited", address=address)
            raise RateLimitError(retry_after=max(math.ceil(retry_after), 1))

    def attempts(self, address: str) -> int:
        """Number of attempts recorded for an address in the current window."""
        window_start = self._clock() - self.config.rate_limit_window
        with self._lock:
            live = [ts for ts in self._attempts.get(address, []) if ts > window_start]
            if live:
                self._attempts[address] = live
            else:
                self._attempts.pop(address, None)
        return len(live)

    def tracked_addresses(self) -> int:
        with self._lock:
            return len(self._attempts)

    def _drop_stale(self, window_start: datetime) -> None:
        # Caller holds the lock. Only addresses active in the last window survive.
        stale = [address for address, attempts in self._attempts.items() if attempts[-1] <= window_start]
        for address in stale:
            del self._attempts[address]

    def reset(self, address: str) -> None:
        """Forget all attempts for an address."""
        with self._lock:
            self._attempts.pop(address, None)
