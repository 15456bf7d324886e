"""Async HTTP client for the bookmarks API."""
import logging
from typing import Any

import httpx

from schemas.bookmark import BookmarkResponse

logger = logging.getLogger(__name__)

BASE_PATH = "/api/v1"


class ApiError(Exception):
    """Raised when the API answers with a non-2xx status."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")

    @property
    def is_not_found(self) -> bool:
        """True when the requested bookmark does not exist."""
        return self.status_code == 404


def _error_message(response: httpx.Response) -> str:
    """Pull the client-facing reason out of an error envelope."""
    fallback = f"HTTP {response.status_code}: {response.reason_phrase}"
    try:
        body = response.json()
    except ValueError:
        return fallback
    if not isinstance(body, dict):
        return fallback
    return body.get("error") or body.get("message") or fallback


class BookmarkClient:
    """
    Thin wrapper over the REST API that unwraps response envelopes.

    The caller owns `http` (base URL, transport, lifetime), so the same client
    works against a deployed server or an in-process ASGI app.
    """

    def __init__(self, http: httpx.AsyncClient, base_path: str = BASE_PATH) -> None:
        self._http = http
        self._base_path = base_path.rstrip("/")

    async def _request(
        self, method: str, path: str, json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        response = await self._http.request(
            method, f"{self._base_path}{path}", json=json,
        )
        if not response.is_success:
            error = ApiError(response.status_code, _error_message(response))
            logger.error("API error: %s %s -> %s", method, path, error)
            raise error
        return response.json()

    async def ping(self) -> str:
        """Call the liveness probe and return its message."""
        body = await self._request("GET", "/ping")
        return body["message"]

    async def list_bookmarks(self) -> list[BookmarkResponse]:
        """Fetch all bookmarks in insertion order."""
        body = await self._request("GET", "/bookmarks")
        return [BookmarkResponse.model_validate(item) for item in body["data"]]

    async def get_bookmark(self, bookmark_id: str) -> BookmarkResponse:
        """Fetch one bookmark. Raises ApiError (404) if it does not exist."""
        body = await self._request("GET", f"/bookmarks/{bookmark_id}")
        return BookmarkResponse.model_validate(body["data"])

    async def create_bookmark(self, title: str, url: str) -> BookmarkResponse:
        """Create a bookmark and return it with its assigned id."""
        body = await self._request(
            "POST", "/bookmarks", json={"title": title, "url": url},
        )
        return BookmarkResponse.model_validate(body["data"])

    async def update_bookmark(
        self,
        bookmark_id: str,
        title: str | None = None,
        url: str | None = None,
    ) -> BookmarkResponse:
        """Change the title and/or url; fields left as None are not sent."""
        payload = {
            key: value
            for key, value in (("title", title), ("url", url))
            if value is not None
        }
        body = await self._request("PUT", f"/bookmarks/{bookmark_id}", json=payload)
        return BookmarkResponse.model_validate(body["data"])

    async def delete_bookmark(self, bookmark_id: str) -> str:
        """Delete a bookmark and return the server's confirmation message."""
        body = await self._request("DELETE", f"/bookmarks/{bookmark_id}")
        return body["message"]
