from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass
class BookmarkedFile:
    path: str
    subpath: Optional[str] = None  # heading and/or block anchor inside the file
    title: Optional[str] = None
    ctime: int = 0
    type: str = field(default="file", init=False)

    @property
    def is_anchor(self) -> bool:
        return bool(self.subpath)


@dataclass
class BookmarkedFolder:
    path: str
    title: Optional[str] = None
    ctime: int = 0
    type: str = field(default="folder", init=False)


@dataclass
class BookmarkedGroup:
    items: List["BookmarkedItem"] = field(default_factory=list)
    title: Optional[str] = None
    ctime: int = 0
    type: str = field(default="group", init=False)


@dataclass
class UnknownItem:
    """Host bookmark kinds this package does not interpret (search, graph, url, ...)."""

    type: str
    raw: Any = field(default_factory=dict)


BookmarkedItem = Union[BookmarkedFile, BookmarkedFolder, BookmarkedGroup, UnknownItem]


@dataclass
class OrderedBookmarkedItem:
    path: str
    order: int
    file: bool
    folder: bool
    group: bool


OrderIndex = Dict[str, OrderedBookmarkedItem]


@dataclass(frozen=True)
class FsEntry:
    path: str
    is_directory: bool = False

    @property
    def name(self) -> str:
        return last_path_component(self.path)


def last_path_component(path: str) -> str:
    return path.rsplit("/", 1)[-1]
