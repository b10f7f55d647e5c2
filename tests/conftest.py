import sys
from pathlib import Path

import pytest

# Allow `import vaultmarks` without installing the package.
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from vaultmarks.model import BookmarkedFile, BookmarkedFolder, BookmarkedGroup, UnknownItem  # noqa: E402


class FakeClock:
    """Millisecond clock the tests move by hand."""

    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sample_tree():
    return [
        BookmarkedFile(path="inbox.md", ctime=1),
        BookmarkedGroup(
            title="Projects",
            ctime=2,
            items=[
                BookmarkedFile(path="projects/alpha.md", ctime=3),
                BookmarkedFile(path="projects/alpha.md", subpath="#Goals", ctime=4),
                BookmarkedGroup(title="Archive", ctime=5, items=[BookmarkedFolder(path="projects/old", ctime=6)]),
            ],
        ),
        UnknownItem(type="search", raw={"type": "search", "ctime": 7, "query": "tag:#todo"}),
        BookmarkedFile(path="inbox.md", ctime=8),
        BookmarkedFolder(path="daily", ctime=9),
    ]
