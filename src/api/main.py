"""FastAPI application entry point."""
from fastapi import FastAPI

from api.exception_handlers import register_exception_handlers
from api.middleware import (
    PreflightCORSMiddleware,
    RecoveryMiddleware,
    RequestLoggingMiddleware,
)
from api.routers import bookmarks, health
from core.config import Settings, get_settings
from services.bookmark_store import BookmarkRepository, BookmarkStore

API_PREFIX = "/api/v1"

CORS_ALLOW_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
CORS_ALLOW_HEADERS = [
    "Content-Type",
    "Content-Length",
    "Accept-Encoding",
    "X-CSRF-Token",
    "Authorization",
    "Accept",
    "Origin",
    "Cache-Control",
    "X-Requested-With",
]


def create_app(
    settings: Settings | None = None,
    store: BookmarkRepository | None = None,
) -> FastAPI:
    """
    Build the application around its own bookmark store.

    Without an explicit store, a new one is created (seeded with the sample
    bookmarks unless disabled in settings).
    """
    settings = settings or get_settings()
    if store is None:
        store = (
            BookmarkStore.with_sample_data()
            if settings.seed_sample_data
            else BookmarkStore()
        )

    app = FastAPI(
        title="Web Collector API",
        description="A minimal bookmark manager backed by an in-memory store.",
        version="0.1.0",
    )
    app.state.store = store

    # Added innermost first: CORS wraps logging, which wraps recovery
    app.add_middleware(RecoveryMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        PreflightCORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=CORS_ALLOW_METHODS,
        allow_headers=CORS_ALLOW_HEADERS,
    )

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(health.ping_router, prefix=API_PREFIX)
    app.include_router(bookmarks.router, prefix=API_PREFIX)
    return app


app = create_app()
