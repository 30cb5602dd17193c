"""Translation of application errors into JSON responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from food_diary.domain.errors import (
    InvalidPayloadError,
    NotFoundError,
    StoreError,
    UpstreamAuthError,
    UpstreamError,
    UpstreamUnavailableError,
)

_logger = logging.getLogger(__name__)


def _invalid_payload(field: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "invalid_payload", "field": field, "message": message},
    )


async def _handle_invalid_payload(
    _request: Request, exc: InvalidPayloadError
) -> JSONResponse:
    return _invalid_payload(exc.field, exc.message)


async def _handle_validation_error(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = [str(part) for part in first.get("loc", ())][1:]
    return _invalid_payload(
        ".".join(location) or "body", str(first.get("msg", "Invalid request"))
    )


async def _handle_not_found(_request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"code": exc.code, "message": exc.message},
    )


async def _handle_upstream_auth(
    _request: Request, exc: UpstreamAuthError
) -> JSONResponse:
    _logger.error("Upstream authentication failed: %s", exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "upstream_auth_failed", "message": str(exc)},
    )


async def _handle_upstream(_request: Request, exc: UpstreamError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"code": exc.code, "message": exc.message, "raw": exc.raw},
    )


async def _handle_upstream_unavailable(
    _request: Request, exc: UpstreamUnavailableError
) -> JSONResponse:
    _logger.warning("Upstream unavailable: %s", exc)
    return JSONResponse(
        status_code=status.HTTP_504_GATEWAY_TIMEOUT,
        content={"error": "upstream_unavailable", "message": str(exc)},
    )


async def _handle_store(_request: Request, exc: StoreError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "store_failed", "message": str(exc)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach handlers for every application error type."""
    app.add_exception_handler(InvalidPayloadError, _handle_invalid_payload)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(NotFoundError, _handle_not_found)
    app.add_exception_handler(UpstreamAuthError, _handle_upstream_auth)
    app.add_exception_handler(UpstreamError, _handle_upstream)
    app.add_exception_handler(UpstreamUnavailableError, _handle_upstream_unavailable)
    app.add_exception_handler(StoreError, _handle_store)
