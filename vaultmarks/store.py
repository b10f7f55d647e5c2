from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .host import BOOKMARKS_PLUGIN_ID, Host, InstalledPlugin, PluginRegistry, Workspace
from .log import get_logger
from .model import (
    BookmarkedFile,
    BookmarkedFolder,
    BookmarkedGroup,
    BookmarkedItem,
    UnknownItem,
)

log = get_logger(__name__)


class BookmarkFileError(ValueError):
    """The bookmark document could not be read or parsed."""


class _FileEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")
    type: Literal["file"]
    path: str
    subpath: Optional[str] = None
    title: Optional[str] = None
    ctime: int = 0


class _FolderEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")
    type: Literal["folder"]
    path: str
    title: Optional[str] = None
    ctime: int = 0


class _GroupEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")
    type: Literal["group"]
    items: List[Any] = Field(default_factory=list)
    title: Optional[str] = None
    ctime: int = 0


def items_from_json(raw_items: List[Any]) -> List[BookmarkedItem]:
    out: List[BookmarkedItem] = []
    for raw in raw_items:
        if not isinstance(raw, dict):
            log.warning("Keeping malformed bookmark entry as-is: %r", raw)
            out.append(UnknownItem(type="", raw=raw))
            continue
        out.append(_item_from_json(raw))
    return out


def _item_from_json(raw: Dict[str, Any]) -> BookmarkedItem:
    kind = raw.get("type")
    try:
        if kind == "file":
            f = _FileEntry.model_validate(raw)
            return BookmarkedFile(path=f.path, subpath=f.subpath, title=f.title, ctime=f.ctime)
        if kind == "folder":
            d = _FolderEntry.model_validate(raw)
            return BookmarkedFolder(path=d.path, title=d.title, ctime=d.ctime)
        if kind == "group":
            g = _GroupEntry.model_validate(raw)
            return BookmarkedGroup(items=items_from_json(g.items), title=g.title, ctime=g.ctime)
    except ValidationError as e:
        log.warning("Keeping invalid %s bookmark as-is: %s", kind, e.errors()[0].get("msg", e))
    return UnknownItem(type=str(kind or ""), raw=raw)


def items_to_json(items: List[BookmarkedItem]) -> List[Any]:
    return [_item_to_json(it) for it in items]


def _item_to_json(item: BookmarkedItem) -> Any:
    if isinstance(item, UnknownItem):
        return item.raw
    out: Dict[str, Any] = {"type": item.type, "ctime": item.ctime}
    if isinstance(item, BookmarkedGroup):
        out["items"] = items_to_json(item.items)
    else:
        out["path"] = item.path
        if isinstance(item, BookmarkedFile) and item.subpath:
            out["subpath"] = item.subpath
    if item.title is not None:
        out["title"] = item.title
    return out


class JsonBookmarksStore:
    """Bookmarks kept in a host-style `bookmarks.json` ({"items": [...]})."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self.items: List[BookmarkedItem] = []
        self._extra: Dict[str, Any] = {}

    def load(self) -> "JsonBookmarksStore":
        if not self.path.exists():
            log.info("No bookmarks file at %s, starting empty.", self.path)
            self.items = []
            self._extra = {}
            return self
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise BookmarkFileError(f"Cannot read bookmarks file {self.path}: {e}") from e
        if not isinstance(data, dict) or not isinstance(data.get("items", []), list):
            raise BookmarkFileError(f"Unexpected bookmarks document layout in {self.path}")
        self._extra = {k: v for k, v in data.items() if k != "items"}
        self.items = items_from_json(data.get("items", []))
        log.debug("Loaded %d top-level bookmarks from %s", len(self.items), self.path)
        return self

    def get_bookmarks(self) -> Optional[List[BookmarkedItem]]:
        return self.items

    def save_data(self) -> None:
        doc = dict(self._extra)
        doc["items"] = items_to_json(self.items)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(doc, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
        log.info("Saved bookmarks: %s", self.path)


def open_vault_host(vault_dir: Path, bookmarks_file: str) -> Host:
    store = JsonBookmarksStore(Path(vault_dir) / bookmarks_file).load()
    registry = PluginRegistry()
    registry.register(InstalledPlugin(id=BOOKMARKS_PLUGIN_ID, instance=store, enabled=True))
    return Host(internal_plugins=registry, workspace=Workspace())
