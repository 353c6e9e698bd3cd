"""Error handling for the Mindify API.

Application errors are mapped to status codes by exception handlers;
anything else escaping a route is caught by ``ErrorHandlerMiddleware`` and
turned into a generic 500. Every error body has the shape
``{"error": <message>, "request_id": <id>}``.
"""

from typing import Any, Callable, Dict, Optional

from fastapi import Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from mindify.utils.context import get_request_id
from mindify.utils.exceptions import (
    ConfigurationError,
    DatabaseError,
    ExternalServiceError,
    MindifyError,
    ResourceNotFoundError,
    ServiceUnavailableError,
    ValidationError,
)
from mindify.utils.logger import get_logger

logger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def status_code_for(error: MindifyError) -> int:
    """Map an application error onto an HTTP status code."""
    if isinstance(error, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(error, ResourceNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(error, ServiceUnavailableError):
        return status.HTTP_503_SERVICE_UNAVAILABLE
    if isinstance(error, (ExternalServiceError, DatabaseError, ConfigurationError)):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _request_id(request: Request) -> Optional[str]:
    return get_request_id() or getattr(request.state, "request_id", None)


def create_error_response(
    status_code: int,
    message: str,
    request_id: Optional[str] = None,
    details: Optional[Any] = None
) -> JSONResponse:
    """Create a standardized error response.

    Args:
        status_code: HTTP status code
        message: Error message shown to the caller
        request_id: Request ID for tracking
        details: Additional error details

    Returns:
        JSONResponse: Formatted error response
    """
    content: Dict[str, Any] = {"error": message}

    if request_id:
        content["request_id"] = request_id

    if details:
        content["details"] = jsonable_encoder(details)

    return JSONResponse(status_code=status_code, content=content)


async def mindify_error_handler(request: Request, exc: MindifyError) -> JSONResponse:
    """Handle application exceptions."""
    status_code = status_code_for(exc)
    request_id = _request_id(request)

    log_extra = {
        "request_id": request_id,
        "error_code": exc.error_code,
        "error_type": exc.__class__.__name__,
        "status_code": status_code,
        "path": request.url.path,
        "method": request.method,
        "details": exc.details,
    }

    if status_code >= 500:
        logger.error(
            f"Application error: {exc.message}",
            extra={**log_extra, "cause": str(exc.cause) if exc.cause else None},
        )
    else:
        logger.warning(f"Application error: {exc.message}", extra=log_extra)

    return create_error_response(status_code, exc.message, request_id)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions such as unknown routes."""
    request_id = _request_id(request)

    logger.warning(
        f"HTTP exception: {exc.detail}",
        extra={
            "request_id": request_id,
            "status_code": exc.status_code,
            "path": request.url.path,
        }
    )

    response = create_error_response(exc.status_code, str(exc.detail), request_id)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request body and parameter type errors."""
    request_id = _request_id(request)

    logger.warning(
        "Validation error",
        extra={
            "request_id": request_id,
            "errors": jsonable_encoder(exc.errors()),
            "path": request.url.path,
        }
    )

    return create_error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "Validation error",
        request_id,
        details=exc.errors(),
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Middleware that turns unexpected exceptions into a generic 500."""

    def __init__(self, app: ASGIApp, debug: bool = False):
        """Initialize error handler middleware.

        Args:
            app: The ASGI application
            debug: Whether to expose the exception text in the response
        """
        super().__init__(app)
        self.debug = debug

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            request_id = _request_id(request)

            logger.error(
                f"Unexpected error: {str(e)}",
                extra={
                    "request_id": request_id,
                    "path": request.url.path,
                    "method": request.method,
                    "error_type": type(e).__name__,
                },
                exc_info=True
            )

            message = str(e) if self.debug and str(e) else INTERNAL_ERROR_MESSAGE
            return create_error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, message, request_id)


__all__ = [
    "ErrorHandlerMiddleware",
    "INTERNAL_ERROR_MESSAGE",
    "create_error_response",
    "http_exception_handler",
    "mindify_error_handler",
    "status_code_for",
    "validation_exception_handler",
]
