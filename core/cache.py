# core/cache.py
import logging
import time
from typing import Any, Callable, List, Optional

from django.conf import settings
from django.core.cache import caches

logger = logging.getLogger(__name__)

DEFAULT_TTL = 60


class ResponseCache:
    """
    TTL cache for GET response payloads, keyed by request path.

    Entries are kept in a Django cache backend so the backend's own bound
    (``MAX_ENTRIES`` on LocMemCache) limits memory. A key index is held
    alongside the backend to support invalidation by substring, which the
    Django cache API has no primitive for.
    """

    def __init__(
        self,
        backend=None,
        ttl: Optional[int] = None,
        clock: Callable[[], float] = time.time,
        key_prefix: str = "response",
    ):
        config = getattr(settings, "RESPONSE_CACHE", {})
        self.backend = backend if backend is not None else caches[
            config.get("ALIAS", "default")
        ]
        self.ttl = ttl if ttl is not None else config.get("TTL", DEFAULT_TTL)
        self.clock = clock
        self.key_prefix = key_prefix
        # Same bound the backend culls at; None for unbounded backends
        self.max_entries = getattr(self.backend, "_max_entries", None)
        self._keys = set()

    def _backend_key(self, key: str) -> str:
        return f"{self.key_prefix}:{key}"

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None on a miss."""
        entry = self.backend.get(self._backend_key(key))
        if entry is None:
            self._keys.discard(key)
            return None

        age = self.clock() - entry["stored_at"]
        if age >= entry.get("ttl", self.ttl):
            self.delete(key)
            logger.debug("Cache EXPIRED for %s (age: %.3fs)", key, age)
            return None

        logger.debug("Cache HIT for %s (age: %.3fs)", key, age)
        return entry["value"]

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        ttl = ttl if ttl is not None else self.ttl
        entry = {"value": value, "stored_at": self.clock(), "ttl": ttl}
        self.backend.set(self._backend_key(key), entry, timeout=ttl)
        self._keys.add(key)
        if self.max_entries is not None and len(self._keys) > self.max_entries:
            self._prune()
        logger.info("Cache SET for %s (ttl: %ss)", key, ttl)

    def delete(self, key: str) -> None:
        self.backend.delete(self._backend_key(key))
        self._keys.discard(key)

    def _is_live(self, key: str) -> bool:
        return self.backend.has_key(self._backend_key(key))

    def _prune(self) -> None:
        """Drop index entries for keys the backend has culled or expired."""
        self._keys = {key for key in self._keys if self._is_live(key)}

    def keys(self) -> List[str]:
        """Keys that are still present in the backend."""
        self._prune()
        return sorted(self._keys)

    def invalidate(self, pattern: str) -> List[str]:
        """Remove every entry whose key contains ``pattern``."""
        candidates = [key for key in self._keys if pattern in key]
        self._keys.difference_update(candidates)
        matched = sorted(key for key in candidates if self._is_live(key))
        if matched:
            self.backend.delete_many([self._backend_key(key) for key in matched])
            for key in matched:
                logger.info("Cache CLEARED for %s", key)
        return matched

    def clear(self) -> List[str]:
        cleared = self.keys()
        if cleared:
            self.backend.delete_many([self._backend_key(key) for key in cleared])
        self._keys.clear()
        logger.info("All cache CLEARED (%d entries)", len(cleared))
        return cleared

    def __len__(self):
        return len(self.keys())


_response_cache = None


def get_response_cache() -> ResponseCache:
    """Return the process-wide cache built from settings.RESPONSE_CACHE."""
    global _response_cache
    if _response_cache is None:
        _response_cache = ResponseCache()
    return _response_cache


def clear_cache(pattern: str) -> List[str]:
    return get_response_cache().invalidate(pattern)


def clear_all_cache() -> List[str]:
    return get_response_cache().clear()
