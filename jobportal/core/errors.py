"""
Error kinds and the FastAPI handlers that render them.

Every failure leaves the API as {"success": false, "message": "..."} with
the HTTP status of its kind:

- BadRequest (400): missing fields, caps exceeded, bad file type, bad ids
- Unauthorized (401): no credentials supplied
- Forbidden (403): wrong role, or a record the actor does not own
- NotFound (404): referenced job / application / user does not exist
- InternalError (500): upload, mail, OCR or AI failures
"""

import logging

from bson.errors import InvalidId
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from jose import ExpiredSignatureError, JWTError
from pymongo.errors import DuplicateKeyError

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base error carrying a user-facing message and an HTTP status."""

    status_code = 500

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class BadRequest(AppError):
    status_code = 400


class Unauthorized(AppError):
    status_code = 401


class Forbidden(AppError):
    status_code = 403


class NotFound(AppError):
    status_code = 404


class InternalError(AppError):
    status_code = 500


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


# ============================================================
# HANDLERS
# ============================================================

async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return error_response(exc.status_code, exc.message)


async def invalid_id_handler(request: Request, exc: InvalidId) -> JSONResponse:
    return error_response(400, "Resource not found. Invalid id")


async def duplicate_key_handler(request: Request, exc: DuplicateKeyError) -> JSONResponse:
    key_value = (exc.details or {}).get("keyValue") or {}
    fields = ", ".join(key_value.keys()) or "unknown"
    return error_response(400, f"Duplicate field entered: {fields}")


async def jwt_error_handler(request: Request, exc: JWTError) -> JSONResponse:
    if isinstance(exc, ExpiredSignatureError):
        return error_response(400, "JWT expired, please login again!")
    return error_response(400, "JWT is invalid, try again!")


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if not errors:
        return error_response(400, "Invalid request")
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
    message = first.get("msg", "Invalid request")
    return error_response(400, f"{field}: {message}" if field else message)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(500, "Internal Server Error")


def register_error_handlers(app: FastAPI) -> None:
    """Attach all handlers to the app."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(InvalidId, invalid_id_handler)
    app.add_exception_handler(DuplicateKeyError, duplicate_key_handler)
    app.add_exception_handler(JWTError, jwt_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
