"""Error Handlers - global exception handlers for the Sortboard API.

Invariants:
    - SortboardError -> its own to_response() envelope and http_status
    - RequestValidationError -> 400 with field-level details
    - Exception (catch-all) -> 500 that never leaks internal details
    - Log level follows the error's severity: a 409 on a loading board is not an outage

Design Decisions:
    - Kept out of main.py so the app module only wires things together
    - Every envelope carries the board from the path when there is one, so clients
      of the SSE/board views can route errors without parsing messages
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from app.core.errors import ErrorCategory, ErrorSeverity, SortboardError

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(SortboardError, sortboard_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)


def _board_of(request: Request) -> str | None:
    return request.path_params.get("name")


def _envelope(
    code: str,
    message: str,
    category: ErrorCategory,
    severity: ErrorSeverity,
    **extra,
) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category.value,
            "severity": severity.value,
            **extra,
        },
    }


async def sortboard_error_handler(request: Request, exc: SortboardError):
    """Domain and data-source errors: status and body come from the error itself."""
    board = exc.context.board or _board_of(request)
    logger.log(
        _LOG_LEVELS[exc.severity],
        "%s on %s: %s", exc.code, request.url.path, exc.message,
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "board": board,
            "item_id": exc.context.item_id,
        },
    )
    body = exc.to_response()
    body["error"]["context"]["board"] = board
    return JSONResponse(status_code=exc.http_status, content=body)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed move bodies or query params (e.g. a negative home_index)."""
    errors = exc.errors()
    logger.warning(
        "Validation error on %s: %s", request.url.path, errors,
        extra={"path": request.url.path, "board": _board_of(request)},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR", "Invalid request data",
            ErrorCategory.VALIDATION, ErrorSeverity.ERROR,
            context={"board": _board_of(request)},
            details=[
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in errors
            ],
        ),
    )


async def generic_error_handler(request: Request, exc: Exception):
    """Catch-all - never leaks internal details."""
    logger.error(
        "Unhandled exception on %s: %s", request.url.path, exc,
        exc_info=True,
        extra={"path": request.url.path, "board": _board_of(request)},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        ),
    )
