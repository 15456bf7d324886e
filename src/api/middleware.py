"""HTTP middleware: CORS preflight, request logging and failure recovery."""
import logging
import time

from fastapi import Request, Response
from starlette.datastructures import Headers
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.middleware.cors import CORSMiddleware
from starlette.types import Receive, Scope, Send

from api.exception_handlers import error_response

logger = logging.getLogger(__name__)


class PreflightCORSMiddleware(CORSMiddleware):
    """
    CORS middleware that answers every OPTIONS request with 204 and no body.

    The allow-origin header is only attached for allowed origins; rejecting a
    disallowed preflight is left to the browser.
    """

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["method"] == "OPTIONS":
            response = self.preflight_response(request_headers=Headers(scope=scope))
            await response(scope, receive, send)
            return
        await super().__call__(scope, receive, send)

    def preflight_response(self, request_headers: Headers) -> Response:
        """Build the empty 204 preflight reply."""
        headers = dict(self.preflight_headers)
        origin = request_headers.get("origin")
        if origin and self.is_allowed_origin(origin=origin):
            if self.preflight_explicit_allow_origin:
                headers["Access-Control-Allow-Origin"] = origin
        else:
            headers.pop("Access-Control-Allow-Origin", None)

        requested_headers = request_headers.get("access-control-request-headers")
        if self.allow_all_headers and requested_headers is not None:
            headers["Access-Control-Allow-Headers"] = requested_headers
        return Response(status_code=204, headers=headers)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log client IP, method, path, status and latency of every request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        latency_ms = (time.perf_counter() - start) * 1000

        path = request.url.path
        if request.url.query:
            path = f"{path}?{request.url.query}"
        client_ip = request.client.host if request.client else "-"
        logger.info(
            "[%s] %s %s %d %.2fms",
            client_ip,
            request.method,
            path,
            response.status_code,
            latency_ms,
        )
        return response


class RecoveryMiddleware(BaseHTTPMiddleware):
    """
    Turn unhandled exceptions into a generic 500 envelope.

    The traceback is logged server-side; nothing about the failure is sent to
    the client.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await call_next(request)
        except Exception:
            logger.exception(
                "Unhandled error during %s %s", request.method, request.url.path,
            )
            return error_response(500, "Internal server error", "Something went wrong")
