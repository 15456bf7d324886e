"""In-memory bookmark storage guarded by a reader/writer lock."""
import logging
from collections.abc import Iterable
from dataclasses import replace
from datetime import UTC, datetime
from typing import Protocol

from core.rwlock import ReadWriteLock
from models.bookmark import Bookmark

logger = logging.getLogger(__name__)


# (title, url) pairs loaded into a seeded store, assigned ids "1".."3"
SAMPLE_BOOKMARKS: tuple[tuple[str, str], ...] = (
    ("Google", "https://google.com"),
    ("GitHub", "https://github.com"),
    ("Go 官方文档", "https://go.dev/doc/"),
)


class BookmarkRepository(Protocol):
    """Storage contract used by the HTTP layer."""

    def create(self, title: str, url: str) -> Bookmark: ...

    def get_all(self) -> list[Bookmark]: ...

    def get_by_id(self, bookmark_id: str) -> Bookmark | None: ...

    def update(
        self, bookmark_id: str, title: str | None, url: str | None,
    ) -> Bookmark | None: ...

    def delete(self, bookmark_id: str) -> bool: ...


class BookmarkStore:
    """
    Ordered in-memory collection of bookmarks.

    Reads hold the shared lock and writes hold the exclusive lock, each for
    exactly one operation. Ids are sequential decimal strings and are never
    reused, even after the record holding one is deleted.
    """

    def __init__(self, initial: Iterable[tuple[str, str]] = ()) -> None:
        self._lock = ReadWriteLock()
        self._bookmarks: list[Bookmark] = []
        self._next_id = 1
        for title, url in initial:
            self._append(title, url)

    @classmethod
    def with_sample_data(cls) -> "BookmarkStore":
        """Create a store holding the sample bookmarks."""
        return cls(SAMPLE_BOOKMARKS)

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._bookmarks)

    def _append(self, title: str, url: str) -> Bookmark:
        # Caller holds the write lock (or owns the store exclusively in __init__)
        bookmark = Bookmark(
            id=str(self._next_id),
            title=title,
            url=url,
            created_at=datetime.now(UTC),
        )
        self._next_id += 1
        self._bookmarks.append(bookmark)
        return bookmark

    def _index_of(self, bookmark_id: str) -> int | None:
        for index, bookmark in enumerate(self._bookmarks):
            if bookmark.id == bookmark_id:
                return index
        return None

    def create(self, title: str, url: str) -> Bookmark:
        """Append a new bookmark with the next id and the current time."""
        with self._lock.write_locked():
            bookmark = self._append(title, url)
        logger.info("bookmark_created", extra={"bookmark_id": bookmark.id})
        return bookmark

    def get_all(self) -> list[Bookmark]:
        """Return a snapshot of all bookmarks in insertion order."""
        with self._lock.read_locked():
            return list(self._bookmarks)

    def get_by_id(self, bookmark_id: str) -> Bookmark | None:
        """Return the bookmark with the given id, or None."""
        with self._lock.read_locked():
            index = self._index_of(bookmark_id)
            return None if index is None else self._bookmarks[index]

    def update(
        self, bookmark_id: str, title: str | None, url: str | None,
    ) -> Bookmark | None:
        """
        Replace the title and/or url of a bookmark.

        Empty or missing values leave the field unchanged, so a field cannot be
        cleared through this method. Returns None if no bookmark has the id.
        """
        with self._lock.write_locked():
            index = self._index_of(bookmark_id)
            if index is None:
                return None
            changes = {}
            if title:
                changes["title"] = title
            if url:
                changes["url"] = url
            bookmark = replace(self._bookmarks[index], **changes)
            self._bookmarks[index] = bookmark
        logger.info(
            "bookmark_updated",
            extra={"bookmark_id": bookmark_id, "fields": sorted(changes)},
        )
        return bookmark

    def delete(self, bookmark_id: str) -> bool:
        """Remove a bookmark, keeping the order of the rest. False if absent."""
        with self._lock.write_locked():
            index = self._index_of(bookmark_id)
            if index is None:
                return False
            del self._bookmarks[index]
        logger.info("bookmark_deleted", extra={"bookmark_id": bookmark_id})
        return True
