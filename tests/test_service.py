from vaultmarks.config import Settings
from vaultmarks.host import Host, InstalledPlugin, PluginRegistry, Workspace, WorkspaceLeaf
from vaultmarks.model import BookmarkedFile, BookmarkedGroup, FsEntry
from vaultmarks.order_cache import BookmarkOrderCache
from vaultmarks.service import BookmarkOrderService


class FakeBookmarksPlugin:
    def __init__(self, items=None):
        self.items = items if items is not None else []
        self.saves = 0

    def get_bookmarks(self):
        return self.items

    def save_data(self):
        self.saves += 1


class FakeView:
    def __init__(self):
        self.updates = 0

    def update(self):
        self.updates += 1


def _service(clock, items=None, settings=None, view=None):
    plugin = FakeBookmarksPlugin(items)
    registry = PluginRegistry()
    registry.register(InstalledPlugin(id="bookmarks", instance=plugin))
    leaves = [WorkspaceLeaf(view_type="bookmarks", view=view)] if view else []
    host = Host(internal_plugins=registry, workspace=Workspace(leaves=leaves))
    svc = BookmarkOrderService(host, cache=BookmarkOrderCache(clock=clock), settings=settings)
    return svc, plugin


def test_rank_scoped_and_unscoped(clock):
    items = [BookmarkedGroup(title="G", items=[BookmarkedFile(path="x")]), BookmarkedFile(path="y")]

    svc, _ = _service(clock, items)
    assert svc.rank("x", "G") == 1
    assert svc.rank("y", "G") is None

    svc.invalidate(force=True)
    assert svc.rank("y") == 3


def test_rank_sees_external_changes_after_window(clock):
    svc, plugin = _service(clock, [BookmarkedFile(path="a")])
    assert svc.rank("a") == 1

    plugin.items.insert(0, BookmarkedFile(path="b"))
    clock.advance(200)
    assert svc.rank("b") is None

    clock.advance(1000)
    assert svc.rank("b") == 1
    assert svc.rank("a") == 2


def test_default_scope_comes_from_settings(clock):
    items = [BookmarkedGroup(title="Sorted", items=[BookmarkedFile(path="x")]), BookmarkedFile(path="y")]
    svc, _ = _service(clock, items, settings=Settings(group_scope="Sorted"))
    assert svc.rank("x") == 1
    assert svc.rank("y") is None


def test_unavailable_host_is_a_noop(clock):
    svc = BookmarkOrderService(Host(), cache=BookmarkOrderCache(clock=clock))
    assert svc.rank("a") is None
    assert svc.ordered() == []
    assert svc.ensure_bookmarked([FsEntry("a.md")]) == 0


def test_ensure_bookmarked_saves_refreshes_and_resets_cache(clock):
    view = FakeView()
    svc, plugin = _service(clock, view=view)
    assert svc.rank("notes/a.md") is None

    added = svc.ensure_bookmarked([FsEntry("notes/a.md"), FsEntry("notes/b.md")])

    assert added == 3
    assert plugin.saves == 1
    assert view.updates == 1
    assert svc.rank("notes") == 1
    assert svc.rank("notes/a.md") == 2
    assert svc.rank("notes/b.md") == 3


def test_ensure_bookmarked_without_changes_does_not_save(clock):
    svc, plugin = _service(clock, [BookmarkedFile(path="a.md")])
    assert svc.bookmark_item(FsEntry("a.md")) == 0
    assert plugin.saves == 0


def test_ensure_bookmarked_without_persist(clock):
    svc, plugin = _service(clock)
    assert svc.ensure_bookmarked([FsEntry("a.md")], persist=False) == 1
    assert plugin.saves == 0
    assert svc.rank("a.md") == 1


def test_ordered_listing(clock, sample_tree):
    svc, _ = _service(clock, sample_tree)
    assert [e.order for e in svc.ordered()] == [0, 1, 2, 3, 4, 5]
