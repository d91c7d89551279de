"""Mapping of core errors onto HTTP responses.

Every error body is ``{"error": <message>}``.
"""
from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from core.logging.logger import get_logger
from domain.exceptions import InvalidArgumentError, NotFoundError, RepositoryUnavailableError

logger = get_logger(__name__, service="api")

# Generic failure text per endpoint prefix, as the pages expect it.
_FAILURE_MESSAGES = (
    ("/api/matches", "Failed to fetch matches"),
    ("/api/player/", "Failed to fetch player profile"),
)
_DEFAULT_FAILURE = "Internal server error"


def _failure_message(request: Request) -> str:
    path = request.url.path
    return next((msg for prefix, msg in _FAILURE_MESSAGES if path.startswith(prefix)), _DEFAULT_FAILURE)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def _not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    return error_response(404, str(exc))


async def _invalid_argument(request: Request, exc: InvalidArgumentError) -> JSONResponse:
    logger.info(lambda: f"bad-request {exc}", extra={"path": request.url.path})
    return error_response(400, str(exc))


async def _unavailable(request: Request, exc: RepositoryUnavailableError) -> JSONResponse:
    logger.error(lambda: f"repository-unavailable {exc}", extra={"path": request.url.path})
    return error_response(503, _failure_message(request))


async def _unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(lambda: f"unhandled {type(exc).__name__}", extra={"path": request.url.path})
    return error_response(500, _failure_message(request))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(NotFoundError, _not_found)
    app.add_exception_handler(InvalidArgumentError, _invalid_argument)
    app.add_exception_handler(RepositoryUnavailableError, _unavailable)
    app.add_exception_handler(Exception, _unexpected)
