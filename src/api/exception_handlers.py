"""Exception handlers that shape error responses into the API envelope."""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from schemas.envelope import ErrorEnvelope

logger = logging.getLogger(__name__)

INVALID_BODY = "Invalid request body"


def format_validation_errors(exc: RequestValidationError) -> str:
    """Summarize validation errors as `field: reason` pairs."""
    parts = []
    for error in exc.errors():
        # loc starts with the source ("body", "path", ...) followed by the field path;
        # for undecodable JSON the second entry is a character offset, not a field
        source, *path = error["loc"]
        if error["type"] == "json_invalid" or not path:
            field = str(source)
        else:
            field = ".".join(str(part) for part in path)
        parts.append(f"{field}: {error['msg']}")
    return "; ".join(parts)


def error_response(
    status_code: int,
    error: str,
    message: str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build an error envelope response, omitting an absent message."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorEnvelope(error=error, message=message).model_dump(exclude_none=True),
        headers=headers,
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Malformed or incomplete request bodies are client errors (400)."""
    message = format_validation_errors(exc)
    logger.info(
        "request_validation_failed",
        extra={"path": request.url.path, "errors": message},
    )
    return error_response(400, INVALID_BODY, message)


async def http_exception_handler(
    request: Request,  # noqa: ARG001
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Wrap HTTP errors (404, 405, ...) in the error envelope."""
    return error_response(exc.status_code, str(exc.detail), headers=exc.headers)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the envelope-shaping handlers on an application."""
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
