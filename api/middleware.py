"""
Consolidated middleware for the DailyMenu API
"""

import time
import logging
from uuid import uuid4

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from api.responses import error_response
from app.exceptions import ServiceValidationError, StoreError

logger = logging.getLogger("dailymenu.middleware")

REQUEST_ID_HEADER = "X-Request-ID"


# ============================================================================
# Request Logging Middleware
# ============================================================================


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every request with an id and its duration.

    An id forwarded by a proxy in X-Request-ID is kept so log lines can be
    matched across hops; otherwise a new one is generated.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        request.state.request_id = request_id
        role = request.headers.get("X-User-Role", "-")

        logger.info("[%s] %s %s role=%s", request_id, request.method, request.url.path, role)
        started = time.perf_counter()

        try:
            response: Response = await call_next(request)
        except Exception:
            logger.error(
                "[%s] %s %s failed after %.4fs",
                request_id,
                request.method,
                request.url.path,
                time.perf_counter() - started,
                exc_info=True,
            )
            raise

        elapsed = time.perf_counter() - started
        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            "[%s] %s %s -> %d in %.4fs",
            request_id,
            request.method,
            request.url.path,
            response.status_code,
            elapsed,
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        return response


# ============================================================================
# Error Handlers
# ============================================================================


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle Pydantic validation errors"""
    logger.warning(f"Validation error on {request.url}: {exc.errors()}")

    return JSONResponse(
        status_code=422,
        content=error_response(
            "VALIDATION_ERROR",
            "Request validation failed",
            details=jsonable_encoder(exc.errors(), custom_encoder={Exception: str}),
        ),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions"""
    logger.warning(f"HTTP {exc.status_code} on {request.url}: {exc.detail}")

    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(f"HTTP_{exc.status_code}", str(exc.detail)),
    )


async def service_exception_handler(request: Request, exc: ServiceValidationError):
    """Handle service errors (validation, not found, role checks) by their http_status"""
    logger.warning(f"{type(exc).__name__} on {request.url}: {exc}")

    default_codes = {404: "NOT_FOUND", 403: "FORBIDDEN"}
    code = exc.code or default_codes.get(exc.http_status, "SERVICE_VALIDATION_ERROR")
    return JSONResponse(
        status_code=exc.http_status,
        content=error_response(code, exc.message, details=exc.details),
    )


async def store_exception_handler(request: Request, exc: StoreError):
    """Handle a document store that is down or not connected"""
    logger.error(f"Document store error on {request.url}: {exc}")

    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=error_response("STORE_UNAVAILABLE", "Meal storage is unavailable"),
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors"""
    logger.exception(f"Unexpected error on {request.url}: {str(exc)}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response("INTERNAL_SERVER_ERROR", "An unexpected error occurred"),
    )
