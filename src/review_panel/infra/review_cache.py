from __future__ import annotations

import re
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable

from ..core.domain.models import CacheEntry
from ..core.domain.review import ReviewResult
from ..core.ports import LoggerPort


DEFAULT_TTL_SECONDS = 24 * 60 * 60

_SCHEME_PREFIX = re.compile(r"^https?://(www\.)?")


def cache_key(url: str) -> str:
    """Normalize a URL into a cache key so spellings of one resource collide.

    Lowercases, strips one trailing slash and a leading ``http(s)://`` with optional ``www.``.
    """
    normalized = url.lower()
    if normalized.endswith("/"):
        normalized = normalized[:-1]
    normalized = _SCHEME_PREFIX.sub("", normalized, count=1)
    return f"review:{normalized}"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CacheStats:
    entries: int
    urls: list[str]


class ReviewCache:
    """In-memory review cache validated by TTL and commit fingerprint.

    Entries live for the process lifetime at most; nothing is persisted. A read
    checks, in order: presence, expiry, fingerprint. Expired or stale entries are
    deleted by the read that finds them.
    """

    def __init__(
        self,
        *,
        logger: LoggerPort,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._logger = logger
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, url: str, current_fingerprint: str) -> CacheEntry | None:
        key = cache_key(url)
        with self._lock:
            entry = self._entries.get(key)

            if entry is None:
                outcome = "miss"
            elif entry.expires_at < self._clock():
                del self._entries[key]
                outcome = "expired"
            elif entry.commit_hash != current_fingerprint:
                del self._entries[key]
                outcome = "stale"
            else:
                outcome = "hit"

        if outcome == "miss":
            self._logger.info("cache_miss", url=url)
            return None
        if outcome == "expired":
            self._logger.info("cache_expired", url=url)
            return None
        if outcome == "stale":
            self._logger.info(
                "cache_stale",
                url=url,
                cached_commit=entry.commit_hash[:7],
                current_commit=current_fingerprint[:7],
            )
            return None

        self._logger.info("cache_hit", url=url, commit=entry.commit_hash[:7])
        return entry

    def set(self, url: str, fingerprint: str, review: ReviewResult) -> CacheEntry:
        now = self._clock()
        entry = CacheEntry(
            review=review,
            commit_hash=fingerprint,
            normalized_url=url,
            cached_at=now,
            expires_at=now + self._ttl,
        )
        with self._lock:
            self._entries[cache_key(url)] = entry

        self._logger.info(
            "cache_set",
            url=url,
            commit=fingerprint[:7],
            expires_at=entry.expires_at.isoformat(),
        )
        return entry

    def invalidate(self, url: str) -> bool:
        with self._lock:
            removed = self._entries.pop(cache_key(url), None)
        if removed is None:
            return False
        self._logger.info("cache_invalidated", url=url)
        return True

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
        self._logger.info("cache_cleared")

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                entries=len(self._entries),
                urls=[e.normalized_url for e in self._entries.values()],
            )
