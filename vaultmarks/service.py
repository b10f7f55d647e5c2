from __future__ import annotations

from typing import Any, List, Optional, Sequence

from .config import Settings
from .host import PluginCapability, detect_bookmarks_plugin, save_and_refresh_views
from .log import get_logger
from .model import FsEntry, OrderedBookmarkedItem
from .order_cache import BookmarkOrderCache
from .sync import ensure_bookmarked

log = get_logger(__name__)


class BookmarkOrderService:
    """Read and write entry points over the host's bookmarks.

    Owns the order cache. Every entry point first drops a stale cache, since
    the host may have changed its bookmarks since the last call.
    """

    def __init__(self, host: Any, cache: Optional[BookmarkOrderCache] = None, settings: Optional[Settings] = None):
        self.host = host
        self.settings = settings or Settings()
        self.cache = cache or BookmarkOrderCache(ttl_ms=self.settings.cache_ttl_ms)

    def _scope(self, group_scope: Optional[str]) -> Optional[str]:
        if group_scope is None:
            return self.settings.group_scope or None
        return group_scope or None

    def _plugin(self) -> PluginCapability:
        self.cache.invalidate()
        return detect_bookmarks_plugin(self.host)

    def invalidate(self, force: bool = False) -> None:
        self.cache.invalidate(force)

    def rank(self, path: str, group_scope: Optional[str] = None) -> Optional[int]:
        cap = self._plugin()
        if not cap.available:
            return None
        return self.cache.lookup_rank(path, cap.plugin.get_bookmarks(), self._scope(group_scope))

    def ordered(self, group_scope: Optional[str] = None) -> List[OrderedBookmarkedItem]:
        cap = self._plugin()
        if not cap.available:
            return []
        return self.cache.ordered_items(cap.plugin.get_bookmarks(), self._scope(group_scope))

    def ensure_bookmarked(
        self,
        entries: Sequence[FsEntry],
        group_scope: Optional[str] = None,
        persist: bool = True,
    ) -> int:
        cap = self._plugin()
        if not cap.available:
            log.warning("Bookmarks are unavailable (%s); nothing bookmarked.", cap.reason)
            return 0
        added = ensure_bookmarked(entries, cap.plugin.items, self._scope(group_scope))
        if added:
            self.cache.invalidate(force=True)
            if persist:
                save_and_refresh_views(cap.plugin, self.host)
        return added

    def bookmark_item(self, entry: FsEntry, group_scope: Optional[str] = None, persist: bool = True) -> int:
        return self.ensure_bookmarked([entry], group_scope, persist=persist)
