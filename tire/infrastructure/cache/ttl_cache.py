from __future__ import annotations

from collections.abc import Callable
from threading import Lock
import time

from tire.application.dto.tokens import GetTokensOutput


DEFAULT_TTL_SECONDS = 30.0


class TtlResultCache:
    """In-process cache of pipeline results.

    Entries are never swept in the background; a stale entry is dropped when
    a lookup finds it. The number of distinct keys is not bounded.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[GetTokensOutput, float]] = {}
        self._lock = Lock()

    def get(self, key: str) -> GetTokensOutput | None:
        now = self._clock()
        with self._lock:
            cached = self._entries.get(key)
            if cached is None:
                return None
            value, stored_at = cached
            if now - stored_at > self.ttl_seconds:
                self._entries.pop(key, None)
                return None
            return value

    def put(self, key: str, value: GetTokensOutput) -> None:
        stored_at = self._clock()
        with self._lock:
            self._entries[key] = (value, stored_at)

    def size(self) -> int:
        with self._lock:
            return len(self._entries)
