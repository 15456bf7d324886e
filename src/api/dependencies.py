"""FastAPI dependencies for injection."""
from fastapi import Request

from services.bookmark_store import BookmarkRepository


def get_bookmark_store(request: Request) -> BookmarkRepository:
    """Return the store owned by the application handling this request."""
    return request.app.state.store
