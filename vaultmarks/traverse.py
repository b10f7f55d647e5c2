from __future__ import annotations

from typing import Callable, Optional, Sequence, Tuple

from .model import BookmarkedGroup, BookmarkedItem

# Return a truthy value to stop the whole traversal.
VisitCallback = Callable[[BookmarkedItem, str], Optional[bool]]


def group_path(parent_groups_path: str, title: Optional[str]) -> str:
    name = title or ""
    return f"{parent_groups_path}/{name}" if parent_groups_path else name


def traverse(items: Sequence[BookmarkedItem], visit: VisitCallback) -> bool:
    """Walk the bookmark tree depth-first, visiting each group before its children.

    `visit` gets the item and the `/`-joined titles of its enclosing groups
    ('' at the root). Returns True when the walk was stopped early.
    """
    return _walk(items, "", visit)


def _walk(items: Sequence[BookmarkedItem], groups_path: str, visit: VisitCallback) -> bool:
    for item in items:
        if visit(item, groups_path):
            return True
        if isinstance(item, BookmarkedGroup):
            if _walk(item.items, group_path(groups_path, item.title), visit):
                return True
    return False


def find_item(
    items: Sequence[BookmarkedItem],
    predicate: Callable[[BookmarkedItem, str], bool],
) -> Optional[Tuple[BookmarkedItem, str]]:
    found: list = []

    def _visit(item: BookmarkedItem, parent_groups_path: str) -> bool:
        if predicate(item, parent_groups_path):
            found.append((item, parent_groups_path))
            return True
        return False

    traverse(items, _visit)
    return found[0] if found else None
