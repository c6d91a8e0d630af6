# newsdesk/core/cache.py
"""
Process-local read cache with per-entry TTL.

Entries are evicted lazily on read. Invalidation is by exact key only, so
derived keys that a write does not name explicitly stay stale until their TTL
runs out.
"""
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, Optional

logger = logging.getLogger(__name__)

# TTLs (seconds) per resource class
ARTICLE_LIST_TTL = 5 * 60
ARTICLE_TTL = 10 * 60
SEARCH_TTL = 3 * 60
CATEGORIES_TTL = 30 * 60

ARTICLES_LIST_KEY = "articles_list"
CATEGORIES_KEY = "categories_list"


@dataclass
class CacheEntry:
    key: Hashable
    value: Any
    timestamp: float
    ttl: float


class TTLCache:
    """Simple cache manager with TTL support"""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: Dict[Hashable, CacheEntry] = {}

    def get(self, key: Hashable) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.timestamp < entry.ttl:
            return entry.value
        # expired
        del self._entries[key]
        return None

    def set(self, key: Hashable, value: Any, ttl: float = ARTICLE_LIST_TTL) -> None:
        self._entries[key] = CacheEntry(key, value, self._clock(), ttl)

    def delete(self, key: Hashable) -> bool:
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        self._entries.clear()
        logger.info("Cache cleared")

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return self.get(key) is not None


# ---------------------------------------------------------------------
# Key builders
# ---------------------------------------------------------------------
def article_key(article_id: str) -> str:
    return f"article_{article_id}"


def list_key(category: Optional[str], limit: int, offset: int = 0) -> str:
    if not category and offset == 0 and limit == 20:
        return ARTICLES_LIST_KEY
    return f"{ARTICLES_LIST_KEY}:{category or ''}:{limit}:{offset}"


def search_key(q: str, category: Optional[str], limit: int, offset: int) -> str:
    return f"search:{q}:{category or ''}:{limit}:{offset}"


def invalidate_article(cache: TTLCache, article_id: str, category: Optional[str] = None) -> None:
    """Drop the keys a write to one article is known to touch."""
    cache.delete(article_key(article_id))
    cache.delete(ARTICLES_LIST_KEY)
    if category:
        cache.delete(list_key(category, 20))
    cache.delete(CATEGORIES_KEY)
