"""Query result cache interface and an in-process implementation."""

import logging
import threading
import time
from typing import Any, Optional, Protocol, Union, runtime_checkable

from dblayer.utils.serialization import dumps, loads

logger = logging.getLogger(__name__)

TTL = Union[int, float, str, None]


@runtime_checkable
class CacheStore(Protocol):
    """What QueryExecutor needs from a cache.

    fetch() returns None or False when it has nothing usable for the key.
    """

    enabled: bool

    def exists(self, key: str) -> bool: ...

    def fetch(self, key: str) -> Any: ...

    def store(self, key: str, value: Any, ttl: TTL) -> None: ...


class MemoryCache:
    """Thread-safe in-process cache keyed by exact query text.

    Values are stored serialized, so callers never share mutable rows with
    the cache. A ttl of "" or None uses the default ttl; a ttl <= 0 never
    expires. A ttl that is not a number of seconds falls back to the
    default with a warning.
    """

    def __init__(self, enabled: bool = True, default_ttl: float = 300):
        self.enabled = enabled
        self.default_ttl = default_ttl
        self._entries: dict[str, tuple[Optional[float], bytes]] = {}
        self._lock = threading.Lock()

    def _expiry(self, ttl: TTL) -> Optional[float]:
        seconds = float(self.default_ttl)
        if ttl is not None and ttl != "":
            try:
                seconds = float(ttl)
            except (TypeError, ValueError):
                logger.warning(
                    f"Unusable cache ttl {ttl!r}, using default of {self.default_ttl}s"
                )

        if seconds <= 0:
            return None
        return time.monotonic() + seconds

    def _get(self, key: str) -> Optional[bytes]:
        entry = self._entries.get(key)
        if entry is None:
            return None

        expires_at, payload = entry
        if expires_at is not None and expires_at <= time.monotonic():
            del self._entries[key]
            return None
        return payload

    def exists(self, key: str) -> bool:
        with self._lock:
            return self._get(key) is not None

    def fetch(self, key: str) -> Any:
        with self._lock:
            payload = self._get(key)
        if payload is None:
            return None
        return loads(payload)

    def store(self, key: str, value: Any, ttl: TTL = None) -> None:
        payload = dumps(value)
        with self._lock:
            self._entries[key] = (self._expiry(ttl), payload)
        logger.debug(f"Cached {len(payload)} bytes for query ({len(key)} chars)")

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
