from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .log import get_logger

log = get_logger(__name__)

BOOKMARKS_PLUGIN_ID = "bookmarks"
BOOKMARKS_VIEW_TYPE = "bookmarks"


@dataclass
class InstalledPlugin:
    id: str
    instance: Any = None
    enabled: bool = True


@dataclass
class PluginRegistry:
    plugins: Dict[str, InstalledPlugin] = field(default_factory=dict)

    def get_plugin_by_id(self, plugin_id: str) -> Optional[InstalledPlugin]:
        return self.plugins.get(plugin_id)

    def register(self, plugin: InstalledPlugin) -> None:
        self.plugins[plugin.id] = plugin


@dataclass
class WorkspaceLeaf:
    view_type: str
    view: Any = None


@dataclass
class Workspace:
    leaves: List[WorkspaceLeaf] = field(default_factory=list)

    def get_leaves_of_type(self, view_type: str) -> List[WorkspaceLeaf]:
        return [leaf for leaf in self.leaves if leaf.view_type == view_type]


@dataclass
class Host:
    internal_plugins: PluginRegistry = field(default_factory=PluginRegistry)
    workspace: Workspace = field(default_factory=Workspace)


@dataclass(frozen=True)
class PluginCapability:
    available: bool
    plugin: Any = None
    reason: str = ""


def detect_bookmarks_plugin(host: Any) -> PluginCapability:
    """Check that the host still exposes a bookmarks store we know how to drive.

    The host API is not ours, so every shape mismatch is reported as
    "unavailable" rather than raised.
    """
    registry = getattr(host, "internal_plugins", None) if host is not None else None
    get_plugin = getattr(registry, "get_plugin_by_id", None)
    if not callable(get_plugin):
        return _unavailable("host has no plugin registry")
    installed = get_plugin(BOOKMARKS_PLUGIN_ID)
    if installed is None:
        return _unavailable("bookmarks plugin not installed")
    if not getattr(installed, "enabled", False):
        return _unavailable("bookmarks plugin disabled")
    instance = getattr(installed, "instance", None)
    if instance is None:
        return _unavailable("bookmarks plugin has no instance")
    if not callable(getattr(instance, "get_bookmarks", None)):
        return _unavailable("bookmarks plugin lacks get_bookmarks()")
    if not isinstance(getattr(instance, "items", None), list):
        return _unavailable("bookmarks plugin lacks an items list")
    return PluginCapability(available=True, plugin=instance)


def _unavailable(reason: str) -> PluginCapability:
    log.debug("Bookmarks integration unavailable: %s.", reason)
    return PluginCapability(available=False, reason=reason)


def save_and_refresh_views(plugin: Any, host: Any) -> int:
    """Persist the bookmarks and ask open bookmark views to re-render.

    Returns the number of views refreshed.
    """
    plugin.save_data()
    workspace = getattr(host, "workspace", None)
    if workspace is None:
        return 0
    refreshed = 0
    for leaf in workspace.get_leaves_of_type(BOOKMARKS_VIEW_TYPE) or []:
        update = getattr(leaf.view, "update", None)
        if callable(update):
            update()
            refreshed += 1
    return refreshed
