"""
In-memory cache for provider articles, keyed by normalised preference sets.

Entries are replaced wholesale on every successful refresh and are kept
after they go stale so the news service can fall back to them when the
provider is unavailable.
"""

import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

import structlog

logger = structlog.get_logger(__name__)

DEFAULT_PREFERENCE_KEY = "default"
PREFERENCE_KEY_DELIMITER = ","
DEFAULT_TTL_SECONDS = 5 * 60


def preference_key(preferences: Optional[Sequence[str]]) -> str:
    """Order-independent cache key for a set of preference tags."""
    key = PREFERENCE_KEY_DELIMITER.join(sorted(preferences or []))
    return key or DEFAULT_PREFERENCE_KEY


@dataclass
class CacheEntry:
    articles: List[Dict[str, Any]]
    fetched_at: float


class NewsCache:
    """
    Per-preference-key article cache with a freshness window.

    Args:
        ttl_seconds: Age below which an entry counts as fresh
        max_entries: Optional bound on stored keys; the least recently used
            key is evicted when exceeded. ``None`` keeps every key for the
            lifetime of the process.
        clock: Monotonic time source, injectable for tests
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_entries: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_entries is not None and max_entries <= 0:
            raise ValueError("max_entries must be a positive integer")

        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self.stats = {
            "hits": 0,
            "misses": 0,
            "evictions": 0,
        }

    def get(self, key: str) -> Optional[CacheEntry]:
        entry = self._entries.get(key)
        if entry is None:
            self.stats["misses"] += 1
            return None

        self.stats["hits"] += 1
        self._entries.move_to_end(key)
        return entry

    def put(self, key: str, articles: Sequence[Dict[str, Any]]) -> CacheEntry:
        entry = CacheEntry(articles=list(articles), fetched_at=self._clock())
        self._entries[key] = entry
        self._entries.move_to_end(key)

        if self.max_entries is not None:
            while len(self._entries) > self.max_entries:
                evicted_key, _ = self._entries.popitem(last=False)
                self.stats["evictions"] += 1
                logger.debug("news_cache_evicted", key=evicted_key)

        return entry

    def is_fresh(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.fetched_at < self.ttl_seconds

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def get_stats(self) -> Dict[str, Any]:
        return {
            **self.stats,
            "entries": len(self._entries),
            "max_entries": self.max_entries,
            "ttl_seconds": self.ttl_seconds,
        }
