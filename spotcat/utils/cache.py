"""In-memory result cache for catalog lookups."""

from __future__ import annotations

import time
from collections import OrderedDict
from threading import RLock
from typing import Any, Callable, Hashable, Optional, Tuple

MISSING = object()


def cache_key(operation: str, *args: Hashable) -> Tuple[Hashable, ...]:
    """Deterministic key for one catalog call: the operation name followed by its arguments."""
    return (operation,) + tuple(args)


class ResultCache:
    """Thread-safe memo of catalog results.

    With the defaults (``maxsize=None``, ``ttl=None``) entries never expire and
    are never evicted; ``clear()`` is the only invalidation. Either bound can
    be switched on for long-lived processes that see many distinct queries.
    """

    def __init__(
        self,
        maxsize: Optional[int] = None,
        ttl: Optional[float] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if maxsize is not None and maxsize <= 0:
            raise ValueError("maxsize must be positive")
        if ttl is not None and ttl <= 0:
            raise ValueError("ttl must be positive")
        self.maxsize = maxsize
        self.ttl = ttl
        self._clock = clock
        self._data: "OrderedDict[Hashable, Tuple[Any, Optional[float]]]" = OrderedDict()
        self._lock = RLock()

    def get(self, key: Hashable, default: Any = MISSING) -> Any:
        with self._lock:
            entry = self._data.get(key)
            if entry is None:
                return default
            value, expiry = entry
            if expiry is not None and expiry <= self._clock():
                self._data.pop(key, None)
                return default
            if self.maxsize is not None:
                self._data.move_to_end(key)
            return value

    def put(self, key: Hashable, value: Any) -> None:
        with self._lock:
            expiry = self._clock() + self.ttl if self.ttl is not None else None
            if key in self._data:
                self._data.move_to_end(key)
            self._data[key] = (value, expiry)
            if self.maxsize is not None:
                while len(self._data) > self.maxsize:
                    self._data.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __contains__(self, key: Hashable) -> bool:
        return self.get(key) is not MISSING


__all__ = ["ResultCache", "cache_key", "MISSING"]
