"""In-memory cache holding a single payload with a time-to-live."""

from dataclasses import dataclass
from typing import Any

from .config import DEFAULT_CACHE_TTL_MS
from .protocols import Clock


@dataclass(frozen=True)
class CacheEntry:
    payload: Any
    fetched_at_millis: int


class TimedCache:
    """Holds one payload until it is older than ``ttl_millis``.

    The entry is replaced as a whole on ``put`` so a reader sees either the
    previous entry or the new one.
    """

    def __init__(self, clock: Clock, ttl_millis: int = DEFAULT_CACHE_TTL_MS):
        self._clock = clock
        self.ttl_millis = ttl_millis
        self._entry: CacheEntry | None = None

    @property
    def entry(self) -> CacheEntry | None:
        return self._entry

    def is_fresh(self) -> bool:
        if self._entry is None:
            return False
        return self._clock.now_millis() - self._entry.fetched_at_millis < self.ttl_millis

    def get(self) -> Any:
        """Return the cached payload, or None when missing or expired."""
        if not self.is_fresh():
            return None
        return self._entry.payload

    def put(self, payload: Any) -> CacheEntry:
        self._entry = CacheEntry(payload=payload, fetched_at_millis=self._clock.now_millis())
        return self._entry

    def clear(self) -> None:
        self._entry = None
