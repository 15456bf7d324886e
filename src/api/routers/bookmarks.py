"""
Bookmark CRUD endpoints.

Handlers are plain functions: FastAPI runs each request on a threadpool worker,
and the store's reader/writer lock serializes access between them.
"""
from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_bookmark_store
from schemas.bookmark import (
    BookmarkCreate,
    BookmarkEnvelope,
    BookmarkListEnvelope,
    BookmarkResponse,
    BookmarkUpdate,
)
from schemas.envelope import MessageEnvelope
from services.bookmark_store import BookmarkRepository

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])

NOT_FOUND = "Bookmark not found"


@router.get("", response_model=BookmarkListEnvelope)
def list_bookmarks(
    store: BookmarkRepository = Depends(get_bookmark_store),
) -> BookmarkListEnvelope:
    """List all bookmarks in insertion order."""
    return BookmarkListEnvelope(
        data=[BookmarkResponse.model_validate(b) for b in store.get_all()],
    )


@router.post("", response_model=BookmarkEnvelope, status_code=201)
def create_bookmark(
    data: BookmarkCreate,
    store: BookmarkRepository = Depends(get_bookmark_store),
) -> BookmarkEnvelope:
    """Create a new bookmark."""
    bookmark = store.create(data.title, data.url)
    return BookmarkEnvelope(data=BookmarkResponse.model_validate(bookmark))


@router.get("/{bookmark_id}", response_model=BookmarkEnvelope)
def get_bookmark(
    bookmark_id: str,
    store: BookmarkRepository = Depends(get_bookmark_store),
) -> BookmarkEnvelope:
    """Get a single bookmark by ID."""
    bookmark = store.get_by_id(bookmark_id)
    if bookmark is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return BookmarkEnvelope(data=BookmarkResponse.model_validate(bookmark))


@router.put("/{bookmark_id}", response_model=BookmarkEnvelope)
def update_bookmark(
    bookmark_id: str,
    data: BookmarkUpdate,
    store: BookmarkRepository = Depends(get_bookmark_store),
) -> BookmarkEnvelope:
    """Update the title and/or url of a bookmark. Empty fields are left unchanged."""
    bookmark = store.update(bookmark_id, data.title, data.url)
    if bookmark is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return BookmarkEnvelope(data=BookmarkResponse.model_validate(bookmark))


@router.delete("/{bookmark_id}", response_model=MessageEnvelope)
def delete_bookmark(
    bookmark_id: str,
    store: BookmarkRepository = Depends(get_bookmark_store),
) -> MessageEnvelope:
    """Delete a bookmark."""
    if not store.delete(bookmark_id):
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return MessageEnvelope(message="Bookmark deleted")
