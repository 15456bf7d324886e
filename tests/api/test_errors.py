"""Tests for error envelopes: validation, routing and unhandled failures."""
import logging
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from api.main import create_app
from core.config import Settings
from models.bookmark import Bookmark
from services.bookmark_store import SAMPLE_BOOKMARKS, BookmarkStore

BOOKMARKS = "/api/v1/bookmarks"


class ExplodingStore(BookmarkStore):
    """Store whose reads fail with an internal error."""

    def get_all(self) -> list[Bookmark]:
        raise RuntimeError("connection string postgres://secret")


@pytest.fixture
async def exploding_client(settings: Settings) -> AsyncGenerator[AsyncClient]:
    """Client for an app whose seeded store raises on list."""
    app = create_app(settings=settings, store=ExplodingStore(SAMPLE_BOOKMARKS))
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as client:
        yield client


class TestValidationErrors:
    """Malformed or incomplete bodies are rejected with 400."""

    async def test__create__missing_url(self, client: AsyncClient) -> None:
        """A missing required field is a 400 naming the field."""
        response = await client.post(BOOKMARKS, json={"title": "No URL"})
        assert response.status_code == 400

        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Invalid request body"
        assert "url" in body["message"]

    async def test__create__missing_title(self, client: AsyncClient) -> None:
        """The title is required too."""
        response = await client.post(BOOKMARKS, json={"url": "https://x.com"})
        assert response.status_code == 400
        assert "title" in response.json()["message"]

    async def test__create__empty_strings(self, client: AsyncClient) -> None:
        """Empty title or url does not satisfy the required check."""
        response = await client.post(BOOKMARKS, json={"title": "", "url": ""})
        assert response.status_code == 400

    async def test__create__wrong_type(self, client: AsyncClient) -> None:
        """Non-string values are not coerced."""
        response = await client.post(BOOKMARKS, json={"title": 123, "url": "https://x.com"})
        assert response.status_code == 400

    async def test__create__malformed_json(self, client: AsyncClient) -> None:
        """A body that is not valid JSON is a 400."""
        response = await client.post(
            BOOKMARKS,
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400

        body = response.json()
        assert body["error"] == "Invalid request body"
        # Reported against the body, not a character offset
        assert body["message"].startswith("body: ")

    async def test__create__no_body(self, client: AsyncClient) -> None:
        """A request without a body is a 400."""
        response = await client.post(BOOKMARKS)
        assert response.status_code == 400
        assert response.json()["message"].startswith("body: ")

    async def test__create__rejected_body_does_not_create(
        self, client: AsyncClient, store: BookmarkStore,
    ) -> None:
        """Nothing is stored when validation fails."""
        await client.post(BOOKMARKS, json={"title": "No URL"})
        assert len(store) == 3

    async def test__update__malformed_json(self, client: AsyncClient) -> None:
        """PUT with an invalid body is a 400."""
        response = await client.put(
            f"{BOOKMARKS}/1",
            content=b"[1, 2",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400

    async def test__update__wrong_type(self, client: AsyncClient) -> None:
        """PUT with a non-string field is a 400."""
        response = await client.put(f"{BOOKMARKS}/1", json={"url": ["https://x.com"]})
        assert response.status_code == 400

    async def test__update__invalid_body_checked_before_lookup(
        self, client: AsyncClient,
    ) -> None:
        """An invalid body is a 400 even for an unknown id."""
        response = await client.put(f"{BOOKMARKS}/999", json={"title": 1})
        assert response.status_code == 400


class TestRoutingErrors:
    """Framework-level errors use the same envelope."""

    async def test__unknown_route__404_envelope(self, client: AsyncClient) -> None:
        """Unknown paths return a 404 error envelope."""
        response = await client.get("/api/v1/nope")
        assert response.status_code == 404

        body = response.json()
        assert body["success"] is False
        assert isinstance(body["error"], str)

    async def test__method_not_allowed__405_envelope(self, client: AsyncClient) -> None:
        """Unsupported methods on a known path return a 405 error envelope."""
        response = await client.delete(BOOKMARKS)
        assert response.status_code == 405
        assert response.json()["success"] is False


class TestUnhandledErrors:
    """Unexpected failures become a generic 500."""

    async def test__unhandled_error__generic_500(
        self, exploding_client: AsyncClient,
    ) -> None:
        """Internal details are not sent to the client."""
        response = await exploding_client.get(BOOKMARKS)
        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "error": "Internal server error",
            "message": "Something went wrong",
        }
        assert "secret" not in response.text

    async def test__unhandled_error__logged_server_side(
        self, exploding_client: AsyncClient, caplog: pytest.LogCaptureFixture,
    ) -> None:
        """The failure and its traceback are logged."""
        with caplog.at_level(logging.ERROR, logger="api.middleware"):
            await exploding_client.get(BOOKMARKS)

        records = [r for r in caplog.records if r.name == "api.middleware"]
        assert records
        assert records[0].exc_info is not None

    async def test__unhandled_error__other_routes_still_work(
        self, exploding_client: AsyncClient,
    ) -> None:
        """A failing request does not break the app."""
        await exploding_client.get(BOOKMARKS)
        response = await exploding_client.get(f"{BOOKMARKS}/1")
        assert response.status_code == 200
