import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.utils.base import AppError
from app.utils.response import send_response


logger = logging.getLogger(__name__)

GENERIC_ERROR = "O Ooo! Something Went Wrong!"


async def app_error_handler(request: Request, exc: AppError):
    return send_response({}, exc.message, False, exc.status_code)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return send_response({}, str(exc.detail), False, exc.status_code)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return send_response({}, message, False, 200)


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled error on %s %s: %s", request.method, request.url.path, exc,
        exc_info=exc,
    )
    status_code = getattr(exc, "status_code", None)
    if not isinstance(status_code, int) or status_code < 400:
        status_code = 500
    return send_response({}, GENERIC_ERROR, False, status_code)


def register_exception_handlers(app: FastAPI) -> None:
    """Route every failure through the response envelope."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
