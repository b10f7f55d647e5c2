from __future__ import annotations

import time
from typing import Callable, List, Optional, Sequence

from .log import get_logger
from .model import (
    BookmarkedFile,
    BookmarkedFolder,
    BookmarkedGroup,
    BookmarkedItem,
    FsEntry,
)

log = get_logger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


def _find_group(items: Sequence[BookmarkedItem], title: str) -> Optional[BookmarkedGroup]:
    for it in items:
        if isinstance(it, BookmarkedGroup) and it.title == title:
            return it
    return None


def _is_bookmarked(items: Sequence[BookmarkedItem], entry: FsEntry) -> bool:
    for it in items:
        if isinstance(it, (BookmarkedFile, BookmarkedFolder)) and it.path == entry.path:
            return True
        if isinstance(it, BookmarkedGroup) and it.title == entry.name:
            return True
    return False


def ensure_bookmarked(
    siblings: Sequence[FsEntry],
    root_items: List[BookmarkedItem],
    group_scope: Optional[str] = None,
    now_ms: Optional[Callable[[], int]] = None,
) -> int:
    """Bookmark `siblings` under groups mirroring their parent folder path.

    All siblings must live in the same folder; the parent path is taken from
    the first one. Existing groups and entries are reused, nothing is removed
    or reordered. Returns how many entries were appended.
    """
    if not siblings:
        return 0
    clock = now_ms or _now_ms

    segments = siblings[0].path.split("/")[:-1]
    if group_scope:
        segments.insert(0, group_scope)

    added = 0
    items = root_items
    for segment in segments:
        group = _find_group(items, segment)
        if group is None:
            group = BookmarkedGroup(items=[], title=segment, ctime=clock())
            items.append(group)
            added += 1
            log.debug("Created bookmark group %r.", segment)
        items = group.items

    for entry in siblings:
        if _is_bookmarked(items, entry):
            continue
        if entry.is_directory:
            new_item: BookmarkedItem = BookmarkedGroup(items=[], title=entry.name, ctime=clock())
        else:
            new_item = BookmarkedFile(path=entry.path, ctime=clock())
        items.append(new_item)
        added += 1
        log.debug("Bookmarked %s.", entry.path)
    return added


def bookmark_item(
    entry: FsEntry,
    root_items: List[BookmarkedItem],
    group_scope: Optional[str] = None,
) -> int:
    return ensure_bookmarked([entry], root_items, group_scope)
