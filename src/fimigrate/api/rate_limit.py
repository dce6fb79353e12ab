"""Token-bucket rate limiter for client-side request pacing.

Tokens are replenished at a fixed *rate* (tokens per second) up to a
*burst* ceiling.  A caller that asks for more tokens than are available
sleeps for the deficit.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable


class TokenBucket:
    """Thread-safe token bucket.

    Parameters
    ----------
    rate_rps:
        Sustained token-refill rate in tokens per second.
    burst:
        Maximum number of tokens the bucket can hold.
    clock:
        Monotonic clock, injectable for tests.
    sleep:
        Sleep function, injectable for tests.
    """

    __slots__ = ("_clock", "_lock", "_sleep", "burst", "last_refill", "rate", "tokens")

    def __init__(
        self,
        rate_rps: float,
        burst: int = 10,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if rate_rps <= 0:
            raise ValueError(f"rate_rps must be > 0, got {rate_rps}")
        if burst < 1:
            raise ValueError(f"burst must be >= 1, got {burst}")

        self.rate: float = rate_rps
        self.burst: int = burst
        self.tokens: float = float(burst)
        self._clock = clock
        self._sleep = sleep
        self.last_refill: float = clock()
        self._lock = threading.Lock()

    def acquire(self, tokens: int = 1) -> float:
        """Take *tokens* from the bucket, blocking if necessary.

        Returns the number of seconds waited (``0.0`` when the tokens were
        immediately available).
        """
        with self._lock:
            now = self._clock()
            elapsed = now - self.last_refill
            self.tokens = min(self.burst, self.tokens + elapsed * self.rate)
            self.last_refill = now

            if self.tokens >= tokens:
                self.tokens -= tokens
                return 0.0

            deficit = tokens - self.tokens
            wait = deficit / self.rate
            self.tokens = 0.0

        self._sleep(wait)
        return wait
