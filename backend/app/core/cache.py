"""In-memory cache with TTL expiry and LRU eviction."""

import time
from collections import OrderedDict
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class TTLCache(Generic[T]):
    """Simple in-memory cache with per-entry TTL and LRU eviction."""

    def __init__(self, ttl_seconds: int, max_size: int, clock: Callable[[], float] = time.monotonic):
        self._ttl_seconds = ttl_seconds
        self._max_size = max_size
        self._clock = clock
        self._store: OrderedDict[str, tuple[float, T]] = OrderedDict()

    def get(self, key: str) -> T | None:
        """Return a value if present and not expired."""
        entry = self._store.get(key)
        if entry is None:
            return None

        ts, value = entry
        if self._clock() - ts > self._ttl_seconds:
            self._store.pop(key, None)
            return None

        self._store.move_to_end(key)
        return value

    def set(self, key: str, value: T) -> None:
        """Store a value and apply LRU eviction."""
        self._store[key] = (self._clock(), value)
        self._store.move_to_end(key)
        while len(self._store) > self._max_size:
            self._store.popitem(last=False)

    def clear(self) -> None:
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)
