"""Pydantic schemas for bookmark endpoints."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class BookmarkCreate(BaseModel):
    """Schema for creating a new bookmark. Both fields are required and non-empty."""

    title: str = Field(min_length=1)
    url: str = Field(min_length=1)


class BookmarkUpdate(BaseModel):
    """
    Schema for updating an existing bookmark.

    Omitted, null and empty-string fields all mean "leave unchanged".
    """

    title: str | None = None
    url: str | None = None


class BookmarkResponse(BaseModel):
    """Schema for a bookmark in API responses."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    url: str
    created_at: datetime


class BookmarkEnvelope(BaseModel):
    """Envelope wrapping a single bookmark."""

    success: bool = True
    data: BookmarkResponse


class BookmarkListEnvelope(BaseModel):
    """Envelope wrapping all bookmarks in insertion order."""

    success: bool = True
    data: list[BookmarkResponse]
