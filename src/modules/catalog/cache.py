"""Cache invalidation collaborators.

The creation pipeline only signals that cached listings are stale; it
never reads from the cache.
"""

from __future__ import annotations

from typing import List, Protocol

import structlog
from django.core.cache import cache

logger = structlog.get_logger(__name__)


class ICacheInvalidator(Protocol):
    def invalidate(self, key: str) -> None: ...


class DjangoCacheInvalidator:
    """Deletes keys from Django's default cache (Redis in production)."""

    def invalidate(self, key: str) -> None:
        cache.delete(key)
        logger.debug("cache.key_deleted", cache_key=key)


class InMemoryCacheInvalidator:
    """Records invalidated keys; used in tests and local wiring."""

    def __init__(self) -> None:
        self.invalidated: List[str] = []

    def invalidate(self, key: str) -> None:
        self.invalidated.append(key)
