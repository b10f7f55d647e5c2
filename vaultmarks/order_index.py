from __future__ import annotations

from typing import Optional, Sequence

from .log import get_logger
from .model import (
    BookmarkedFile,
    BookmarkedFolder,
    BookmarkedGroup,
    BookmarkedItem,
    OrderedBookmarkedItem,
    OrderIndex,
)
from .traverse import group_path, traverse

log = get_logger(__name__)


def find_top_level_group(items: Sequence[BookmarkedItem], title: str) -> Optional[BookmarkedGroup]:
    for item in items:
        if isinstance(item, BookmarkedGroup) and item.title == title:
            return item
    return None


def build_order_index(
    items: Optional[Sequence[BookmarkedItem]],
    group_scope: Optional[str] = None,
) -> Optional[OrderIndex]:
    """Flatten the bookmark tree into path -> first-seen rank.

    Returns None when there is no snapshot or when `group_scope` names no
    top-level group. Only the first occurrence of a path is ranked.
    """
    log.debug("Building bookmark order index (group scope=%r).", group_scope)
    if items is None:
        return None
    if group_scope:
        scope = find_top_level_group(items, group_scope)
        if scope is None:
            log.debug("Bookmark group %r not found.", group_scope)
            return None
        items = scope.items

    index: OrderIndex = {}

    def _consume(item: BookmarkedItem, parent_groups_path: str) -> None:
        if isinstance(item, BookmarkedFile):
            if item.is_anchor:
                return
            path = item.path
        elif isinstance(item, BookmarkedFolder):
            path = item.path
        elif isinstance(item, BookmarkedGroup):
            path = group_path(parent_groups_path, item.title)
        else:
            return
        if path in index:
            return
        index[path] = OrderedBookmarkedItem(
            path=path,
            order=len(index),
            file=isinstance(item, BookmarkedFile),
            # Reports real folder-ness; older builds mirrored the file flag here.
            folder=isinstance(item, BookmarkedFolder),
            group=isinstance(item, BookmarkedGroup),
        )

    traverse(items, _consume)
    log.debug("Bookmark order index holds %d entries.", len(index))
    return index
