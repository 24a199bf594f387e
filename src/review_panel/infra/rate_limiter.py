from __future__ import annotations

import math
import threading
import time
from dataclasses import dataclass
from typing import Callable

from ..core.ports import LoggerPort


@dataclass
class RateLimitEntry:
    count: int
    reset_at: float


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    limit: int
    remaining: int
    reset_epoch_seconds: int

    def headers(self) -> dict[str, str]:
        return {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(self.reset_epoch_seconds),
        }

    def retry_after(self, now: float) -> int:
        """Seconds until the window resets (at least 1)."""
        return max(1, math.ceil(self.reset_epoch_seconds - now))


class RateLimiter:
    """Fixed-window request counter keyed by client identifier.

    Rejected requests neither increment the counter nor extend the window.
    Expired entries are replaced lazily on access and removed in bulk by
    ``sweep()``, which ``start_sweeper()`` runs on a daemon thread.
    """

    def __init__(
        self,
        *,
        logger: LoggerPort,
        window_seconds: float = 60,
        max_requests: int = 10,
        sweep_interval_seconds: float = 300,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._logger = logger
        self._window = window_seconds
        self._max = max_requests
        self._sweep_interval = sweep_interval_seconds
        self._clock = clock

        self._entries: dict[str, RateLimitEntry] = {}
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._sweeper: threading.Thread | None = None

    @property
    def limit(self) -> int:
        return self._max

    def now(self) -> float:
        return self._clock()

    def check(self, identifier: str) -> RateLimitResult:
        """Count one request for ``identifier`` and say whether it may proceed."""
        with self._lock:
            now = self._clock()
            entry = self._entries.get(identifier)

            if entry is None or entry.reset_at < now:
                reset_at = now + self._window
                self._entries[identifier] = RateLimitEntry(count=1, reset_at=reset_at)
                return RateLimitResult(
                    allowed=True,
                    limit=self._max,
                    remaining=self._max - 1,
                    reset_epoch_seconds=math.ceil(reset_at),
                )

            if entry.count >= self._max:
                count = entry.count
                reset_at = entry.reset_at
                denied = True
            else:
                entry.count += 1
                count = entry.count
                reset_at = entry.reset_at
                denied = False

        if denied:
            self._logger.warning("rate_limit_exceeded", identifier=identifier, count=count)
            return RateLimitResult(
                allowed=False,
                limit=self._max,
                remaining=0,
                reset_epoch_seconds=math.ceil(reset_at),
            )

        return RateLimitResult(
            allowed=True,
            limit=self._max,
            remaining=self._max - count,
            reset_epoch_seconds=math.ceil(reset_at),
        )

    def sweep(self) -> int:
        """Remove entries whose window has passed. Returns the number removed."""
        with self._lock:
            now = self._clock()
            expired = [key for key, entry in self._entries.items() if entry.reset_at < now]
            for key in expired:
                del self._entries[key]
            remaining = len(self._entries)

        if expired:
            self._logger.debug("rate_limit_cleanup", cleaned=len(expired), remaining=remaining)
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def start_sweeper(self) -> None:
        """Run ``sweep()`` every ``sweep_interval_seconds`` until ``stop()``."""
        if self._sweeper is not None and self._sweeper.is_alive():
            return
        self._stop_event.clear()
        self._sweeper = threading.Thread(target=self._sweep_loop, name="rate-limit-sweeper", daemon=True)
        self._sweeper.start()

    def stop(self) -> None:
        self._stop_event.set()
        if self._sweeper is not None:
            self._sweeper.join(timeout=5)
            self._sweeper = None

    def _sweep_loop(self) -> None:
        while not self._stop_event.wait(self._sweep_interval):
            self.sweep()
