"""Client for the bookmarks REST API."""
from client.bookmarks import ApiError, BookmarkClient

__all__ = ["ApiError", "BookmarkClient"]
