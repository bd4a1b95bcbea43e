from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from lockersys.core.errors import LockerSysError, StorageError, status_code_for

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


async def lockersys_error_handler(request: Request, exc: LockerSysError) -> JSONResponse:
    status_code = status_code_for(exc)
    if isinstance(exc, StorageError):
        logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return error_response(status_code, str(exc))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(
            str(part) for part in first.get("loc", ())
            if not isinstance(part, int) and part not in ("body", "query", "path")
        )
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "Invalid request"
    return error_response(400, message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    if exc.status_code == 404 and message == "Not Found":
        message = "Route not found"
    return error_response(exc.status_code, message)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LockerSysError, lockersys_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
