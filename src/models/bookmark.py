"""Bookmark record held by the store."""
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Bookmark:
    """
    A saved bookmark.

    Records are immutable: the store swaps in a new record on update, so a
    bookmark handed to a caller never changes underneath it.
    """

    id: str
    title: str
    url: str
    created_at: datetime
