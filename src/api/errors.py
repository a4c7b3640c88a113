"""Exception handlers that give every error the same response shape."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.errors import AppError, Fatal, ValidationFailed

logger = logging.getLogger(__name__)

VALUE_ERROR_PREFIX = "Value error, "


def _error_response(exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers)


async def app_error_handler(request: Request, exc: AppError):
    """Map a domain error to its HTTP status."""
    if exc.status_code >= 500:
        logger.error(f"{exc.title}: {exc.message} - {request.url.path}")
    else:
        logger.warning(f"HTTP {exc.status_code}: {exc.message} - {request.url.path}")
    return _error_response(exc)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report request validation failures field by field."""
    details = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        message = error.get("msg", "Invalid value")
        if message.startswith(VALUE_ERROR_PREFIX):
            message = message[len(VALUE_ERROR_PREFIX) :]
        details.append({"field": ".".join(loc), "message": message})

    logger.warning(f"Validation error on {request.url.path}: {details}")
    return _error_response(ValidationFailed(details=details))


async def database_error_handler(request: Request, exc: SQLAlchemyError):
    """Storage failures abort the request; nothing is retried."""
    logger.error(f"Database error on {request.url.path}: {exc}", exc_info=exc)
    return _error_response(Fatal())


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Give framework errors (unknown routes, bad methods) the common body shape."""
    if exc.status_code == 404:
        error = AppError(f"Route {request.url.path} not found", title="Not found")
    else:
        error = AppError(str(exc.detail), title="Request failed")
    error.status_code = exc.status_code
    return JSONResponse(
        status_code=exc.status_code, content=error.to_dict(), headers=getattr(exc, "headers", None)
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
