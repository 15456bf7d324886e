"""Envelope schemas shared by all API responses."""
from pydantic import BaseModel


class MessageEnvelope(BaseModel):
    """Successful response carrying only a message."""

    success: bool = True
    message: str


class ErrorEnvelope(BaseModel):
    """
    Failed response.

    `error` is the short client-facing reason; `message` optionally adds detail.
    Serialize with `exclude_none=True` so an absent message is omitted.
    """

    success: bool = False
    error: str
    message: str | None = None
