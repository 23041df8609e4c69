"""A token-bucket rate limiter."""

from __future__ import annotations

import threading
import time
from typing import Callable

# One token per nanosecond, as the comment endpoint is configured.
DEFAULT_INTERVAL = 1e-9


class RateLimiter:
    """Hands out one token every ``interval`` seconds, holding at most ``burst``."""

    def __init__(self, interval: float = DEFAULT_INTERVAL, burst: int = 1,
                 clock: Callable[[], float] = time.monotonic) -> None:
        if interval <= 0 or burst < 1:
            raise ValueError("interval must be positive and burst at least 1")
        self.interval, self.burst, self._clock = interval, burst, clock
        self._tokens = float(burst)
        self._last = clock()
        self._lock = threading.Lock()

    def reserve(self) -> bool:
        """Take a token if one is available now; return whether one was taken."""
        with self._lock:
            now = self._clock()
            gained = max(0.0, now - self._last) / self.interval
            self._last = now
            self._tokens = min(float(self.burst), self._tokens + gained)
            if self._tokens < 1.0:
                return False
            self._tokens -= 1.0
            return True