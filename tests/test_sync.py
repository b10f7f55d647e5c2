import copy

from vaultmarks.model import BookmarkedFile, BookmarkedFolder, BookmarkedGroup, FsEntry
from vaultmarks.sync import bookmark_item, ensure_bookmarked


def _tick():
    state = {"t": 100}

    def now():
        state["t"] += 1
        return state["t"]

    return now


def test_builds_group_chain_for_parent_path():
    root = []
    added = ensure_bookmarked([FsEntry("dir1/dir2/file.md")], root, now_ms=_tick())

    assert added == 3
    assert len(root) == 1
    dir1 = root[0]
    assert isinstance(dir1, BookmarkedGroup) and dir1.title == "dir1"
    dir2 = dir1.items[0]
    assert isinstance(dir2, BookmarkedGroup) and dir2.title == "dir2"
    assert dir2.items == [BookmarkedFile(path="dir1/dir2/file.md", ctime=103)]


def test_second_call_is_idempotent():
    root = []
    siblings = [FsEntry("notes/a.md"), FsEntry("notes/sub", is_directory=True)]
    ensure_bookmarked(siblings, root)
    snapshot = copy.deepcopy(root)

    assert ensure_bookmarked(siblings, root) == 0
    assert root == snapshot


def test_directories_become_groups_named_after_them():
    root = []
    ensure_bookmarked([FsEntry("a/b", is_directory=True)], root)
    group_a = root[0]
    assert [type(i) for i in group_a.items] == [BookmarkedGroup]
    assert group_a.items[0].title == "b"
    assert group_a.items[0].items == []


def test_reuses_existing_groups_and_entries():
    existing_file = BookmarkedFile(path="a/x.md", ctime=1)
    existing_folder = BookmarkedFolder(path="a/y", ctime=2)
    group_a = BookmarkedGroup(title="a", ctime=3, items=[existing_file, existing_folder])
    root = [BookmarkedFile(path="top.md"), group_a]

    added = ensure_bookmarked(
        [FsEntry("a/x.md"), FsEntry("a/y", is_directory=True), FsEntry("a/z.md")],
        root,
    )

    assert added == 1
    assert len(root) == 2
    assert group_a.items[:2] == [existing_file, existing_folder]
    assert group_a.items[2].path == "a/z.md"


def test_group_titled_like_sibling_counts_as_bookmarked():
    root = [BookmarkedGroup(title="notes", items=[])]
    assert ensure_bookmarked([FsEntry("notes", is_directory=True)], root) == 0
    assert ensure_bookmarked([FsEntry("notes")], root) == 0
    assert len(root) == 1


def test_only_direct_children_are_searched():
    nested = BookmarkedGroup(title="outer", items=[BookmarkedGroup(title="dir", items=[])])
    root = [nested]
    ensure_bookmarked([FsEntry("dir/f.md")], root)
    assert [g.title for g in root] == ["outer", "dir"]


def test_group_scope_becomes_leading_group():
    root = [BookmarkedFile(path="keep.md")]
    ensure_bookmarked([FsEntry("d/f.md")], root, group_scope="Sorting")

    assert root[0] == BookmarkedFile(path="keep.md")
    scope = root[1]
    assert scope.title == "Sorting"
    assert scope.items[0].title == "d"
    assert scope.items[0].items[0].path == "d/f.md"


def test_root_level_entries_need_no_groups():
    root = []
    assert ensure_bookmarked([FsEntry("top.md")], root) == 1
    assert root[0].path == "top.md"


def test_empty_siblings_is_noop():
    root = [BookmarkedFile(path="a")]
    assert ensure_bookmarked([], root) == 0
    assert root == [BookmarkedFile(path="a")]


def test_bookmark_item_single_entry():
    root = []
    assert bookmark_item(FsEntry("x/y.md"), root) == 2
    assert bookmark_item(FsEntry("x/y.md"), root) == 0
