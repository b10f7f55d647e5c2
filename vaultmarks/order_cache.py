from __future__ import annotations

import time
from typing import Callable, List, Optional, Sequence

from .log import get_logger
from .model import BookmarkedItem, OrderedBookmarkedItem, OrderIndex
from .order_index import build_order_index

log = get_logger(__name__)

CACHE_EXPIRATION_MS = 1000


def _wall_clock_ms() -> float:
    return time.time() * 1000.0


class BookmarkOrderCache:
    """Holds the latest order index for at most `ttl_ms` milliseconds.

    The host can change its bookmarks without telling us, so the index is
    rebuilt from the live tree once it gets older than the freshness window.
    The group scope is only read when the index is built: callers must
    force-invalidate after switching scope.

    Not thread-safe; check-build-store assumes a single caller at a time.
    """

    def __init__(self, ttl_ms: int = CACHE_EXPIRATION_MS, clock: Optional[Callable[[], float]] = None):
        self.ttl_ms = ttl_ms
        self._clock = clock or _wall_clock_ms
        self._index: Optional[OrderIndex] = None
        self._built_at: Optional[float] = None

    @property
    def index(self) -> Optional[OrderIndex]:
        return self._index

    @property
    def built_at(self) -> Optional[float]:
        return self._built_at

    @property
    def is_cached(self) -> bool:
        return self._built_at is not None

    def invalidate(self, force: bool = False) -> None:
        if self._built_at is None:
            return
        if not force and self._clock() - self._built_at <= self.ttl_ms:
            return
        log.debug("Dropping bookmark order cache (forced=%s).", force)
        self._index = None
        self._built_at = None

    def _ensure(self, source: Optional[Sequence[BookmarkedItem]], group_scope: Optional[str]) -> Optional[OrderIndex]:
        # An absent index (no snapshot, unknown scope) is retried on every lookup.
        if self._index is None:
            self._index = build_order_index(source, group_scope)
            self._built_at = self._clock()
        return self._index

    def lookup_rank(
        self,
        path: str,
        source: Optional[Sequence[BookmarkedItem]],
        group_scope: Optional[str] = None,
    ) -> Optional[int]:
        """One-based position of `path`, or None when it is not bookmarked."""
        index = self._ensure(source, group_scope)
        if not index:
            return None
        entry = index.get(path)
        if entry is None or entry.order < 0:
            return None
        return entry.order + 1

    def ordered_items(
        self,
        source: Optional[Sequence[BookmarkedItem]],
        group_scope: Optional[str] = None,
    ) -> List[OrderedBookmarkedItem]:
        index = self._ensure(source, group_scope)
        if not index:
            return []
        return sorted(index.values(), key=lambda e: e.order)
