"""Time-bounded memoization of rendered operation output."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Tuple

from cachetools import TTLCache

from docscout.config import DEFAULT_CACHE_TTL

LOGGER = logging.getLogger(__name__)

ALL = "all"
LATEST = "latest"


def cache_key(operation: str, **arguments: Optional[str]) -> Tuple[str, ...]:
    """Stable key so that calls differing only in omitted arguments share a line.

    An omitted ``version`` becomes ``latest``; any other omitted argument
    becomes ``all``.
    """
    parts = [operation]
    for name, value in arguments.items():
        if value is None or value == "":
            value = LATEST if name == "version" else ALL
        parts.append(str(value))
    return tuple(parts)


class ResultCache:
    """Rendered text keyed by operation and arguments, expiring after ``ttl`` seconds."""

    def __init__(
        self,
        ttl: float = DEFAULT_CACHE_TTL,
        maxsize: int = 4096,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._entries: TTLCache = TTLCache(maxsize=maxsize, ttl=ttl, timer=timer)

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: Tuple[str, ...]) -> Optional[str]:
        value = self._entries.get(key)
        if value is not None:
            LOGGER.debug("Cache hit: %s", key)
        return value

    def set(self, key: Tuple[str, ...], value: str) -> None:
        self._entries[key] = value

    def clear(self) -> None:
        self._entries.clear()
