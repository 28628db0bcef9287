"""Erreurs applicatives et enveloppe JSON commune"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"


# Code renvoyé pour une HTTPException brute (routes inconnues, 405, ...)
STATUS_CODES = {
    400: ErrorCode.VALIDATION_ERROR,
    401: ErrorCode.UNAUTHORIZED,
    403: ErrorCode.FORBIDDEN,
    404: ErrorCode.NOT_FOUND,
    422: ErrorCode.VALIDATION_ERROR,
}


class AppError(Exception):
    """Erreur métier portant son code et son statut HTTP."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        status_code: int = 500,
        details: Optional[Any] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def to_dict(self, path: Optional[str] = None) -> dict:
        body = {
            "code": self.code.value,
            "message": self.message,
            "statusCode": self.status_code,
            "timestamp": self.timestamp,
        }
        if path is not None:
            body["path"] = path
        if self.details is not None:
            body["details"] = jsonable_encoder(self.details)
        return body


def validation_error(message: str, details: Optional[Any] = None) -> AppError:
    return AppError(ErrorCode.VALIDATION_ERROR, message, 400, details)


def unauthorized(message: str = "Unauthorized") -> AppError:
    return AppError(ErrorCode.UNAUTHORIZED, message, 401)


def forbidden(message: str = "Forbidden") -> AppError:
    return AppError(ErrorCode.FORBIDDEN, message, 403)


def not_found(message: str = "Resource not found") -> AppError:
    return AppError(ErrorCode.NOT_FOUND, message, 404)


def internal_error(message: str = "Internal server error") -> AppError:
    return AppError(ErrorCode.INTERNAL_ERROR, message, 500)


def database_error(message: str = "Database error") -> AppError:
    return AppError(ErrorCode.DATABASE_ERROR, message, 500)


def authentication_error(message: str = "Authentication failed") -> AppError:
    return AppError(ErrorCode.AUTHENTICATION_ERROR, message, 401)


def to_app_error(exc: BaseException) -> AppError:
    """Convertit n'importe quelle exception en AppError."""
    if isinstance(exc, AppError):
        return exc
    if isinstance(exc, SQLAlchemyError):
        return database_error()
    if isinstance(exc, ValueError):
        return validation_error(str(exc))
    return internal_error()


def _respond(request: Request, error: AppError) -> JSONResponse:
    path = request.url.path
    if error.status_code >= 500:
        logger.error("%s %s -> %s %s", request.method, path, error.code.value, error.message)
    else:
        logger.warning("%s %s -> %s %s", request.method, path, error.code.value, error.message)
    return JSONResponse(status_code=error.status_code, content=error.to_dict(path))


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return _respond(request, exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _respond(request, validation_error("Invalid request", details=exc.errors()))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    fallback = ErrorCode.VALIDATION_ERROR if exc.status_code < 500 else ErrorCode.INTERNAL_ERROR
    code = STATUS_CODES.get(exc.status_code, fallback)
    message = exc.detail if isinstance(exc.detail, str) else "HTTP error"
    return _respond(request, AppError(code, message, exc.status_code))


async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database failure on %s %s", request.method, request.url.path, exc_info=exc)
    return _respond(request, to_app_error(exc))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return _respond(request, to_app_error(exc))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
