# storefront/core/error_handlers.py

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import traceback
import uuid

from .exceptions import StorefrontError, AuthError, ErrorCode

logger = logging.getLogger(__name__)

STATUS_CODE_MAP = {
    ErrorCode.UNAUTHENTICATED: 401,
    ErrorCode.INVALID_TOKEN: 401,
    ErrorCode.USER_GONE: 401,
    ErrorCode.DUPLICATE_EMAIL: 400,
    ErrorCode.NOT_FOUND: 400,
    ErrorCode.INVALID_CREDENTIALS: 400,
    ErrorCode.ITEM_NOT_FOUND: 404,
    ErrorCode.ALREADY_EXISTS: 400,
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.CONCURRENT_MODIFICATION: 409,
    ErrorCode.INTERNAL_ERROR: 500,
}

def setup_error_handlers(app: FastAPI):
    """Set up global error handlers for the FastAPI application."""

    @app.exception_handler(StorefrontError)
    async def storefront_error_handler(request: Request, exc: StorefrontError):
        """Handle application errors raised by services and the auth gate."""

        status_code = STATUS_CODE_MAP.get(exc.code, 400)

        logger.warning(
            f"Request rejected: {exc.code.value}",
            extra={
                "error_code": exc.code.value,
                "user_message": exc.message,
                "context": exc.context,
                "request_url": str(request.url),
                "request_method": request.method,
            }
        )

        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
        return JSONResponse(
            status_code=status_code,
            content=exc.to_response(),
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Reject malformed bodies before they reach business logic."""

        errors = []
        for error in exc.errors():
            field_path = " -> ".join(str(loc) for loc in error["loc"])
            errors.append({
                "field": field_path,
                "message": error["msg"],
                "type": error["type"],
            })

        logger.warning(
            "Validation error",
            extra={
                "validation_errors": errors,
                "request_url": str(request.url),
                "request_method": request.method
            }
        )

        return JSONResponse(
            status_code=400,
            content={
                "message": "Request validation failed",
                "code": ErrorCode.VALIDATION_ERROR.value,
                "details": errors,
            }
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle standard HTTP exceptions with consistent format."""

        if exc.status_code >= 500:
            code = ErrorCode.INTERNAL_ERROR.value
        else:
            code = f"HTTP_{exc.status_code}"

        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail, "code": code},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle all other exceptions with proper logging."""

        logger.error(
            f"Unhandled exception: {type(exc).__name__}: {str(exc)}",
            extra={
                "exception_type": type(exc).__name__,
                "request_url": str(request.url),
                "request_method": request.method,
                "traceback": "".join(traceback.format_exception(exc)),
            }
        )

        # Don't expose internal details
        return JSONResponse(
            status_code=500,
            content={
                "message": "Server error",
                "code": ErrorCode.INTERNAL_ERROR.value,
            }
        )

# Middleware for request ID tracking
async def add_request_id_middleware(request: Request, call_next):
    """Add request ID for better error tracking."""
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response
