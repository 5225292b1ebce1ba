import threading
import time
from typing import Callable, Optional

from linkcheck.exceptions import ConfigError, RateLimitWaitError


class RateLimiter:
    """Token bucket limiting outbound request rate and burst.

    The bucket starts full with `burst` tokens and refills at `rate` tokens
    per second up to `burst`. Each `wait` consumes one token, sleeping until
    one is available. Reservations are made under the lock and the sleep
    happens outside it, so concurrent callers queue up fairly.
    """

    def __init__(
        self,
        rate: float,
        burst: int,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if rate is None or float(rate) <= 0:
            raise ConfigError("rate", f"must be positive, got {rate!r}")
        if burst is None or int(burst) < 1:
            raise ConfigError("burst", f"must be at least 1, got {burst!r}")
        self.rate = float(rate)
        self.burst = int(burst)
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._tokens = float(self.burst)
        self._updated = clock()

    def _refill(self, now: float) -> None:
        elapsed = max(0.0, now - self._updated)
        self._tokens = min(float(self.burst), self._tokens + elapsed * self.rate)
        self._updated = now

    def reserve(self, timeout: Optional[float] = None) -> float:
        """Take a token and return how long the caller must wait before using it.

        Raises RateLimitWaitError, without consuming anything, when the wait
        would exceed `timeout`.
        """
        with self._lock:
            now = self._clock()
            self._refill(now)
            delay = 0.0
            if self._tokens < 1.0:
                delay = (1.0 - self._tokens) / self.rate
            if timeout is not None and delay > timeout:
                raise RateLimitWaitError(
                    f"rate limiter wait of {delay:.3f}s would exceed timeout of {timeout:.3f}s"
                )
            # The token may go negative: later callers see the debt and wait longer.
            self._tokens -= 1.0
            return delay

    def wait(self, timeout: Optional[float] = None) -> None:
        """Block until a token is available."""
        delay = self.reserve(timeout)
        if delay > 0:
            self._sleep(delay)

    @property
    def tokens(self) -> float:
        with self._lock:
            self._refill(self._clock())
            return self._tokens
