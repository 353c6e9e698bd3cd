"""Logging middleware for the Mindify API.

This middleware logs incoming requests and outgoing responses. Request
bodies are never logged; forum and chat content is user-written.
"""

import time
from typing import Callable, Dict, List, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from mindify.utils.logger import get_api_logger, log_api_response

logger = get_api_logger()


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log HTTP requests and responses."""

    def __init__(
        self,
        app: ASGIApp,
        exclude_paths: Optional[List[str]] = None,
        mask_fields: Optional[List[str]] = None
    ):
        """Initialize logging middleware.

        Args:
            app: The ASGI application
            exclude_paths: List of paths to exclude from logging
            mask_fields: List of header names to mask in logs
        """
        super().__init__(app)
        self.exclude_paths = exclude_paths or ["/health", "/metrics", "/docs", "/openapi.json"]
        self.mask_fields = mask_fields or ["token", "secret", "api_key", "authorization", "cookie"]

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if any(request.url.path.startswith(path) for path in self.exclude_paths):
            return await call_next(request)

        start_time = time.time()

        logger.info(
            f"Request: {request.method} {request.url.path}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "query_params": dict(request.query_params),
                "client_host": request.client.host if request.client else None,
                "headers": self._mask_sensitive_headers(dict(request.headers)),
            }
        )

        response = await call_next(request)

        duration_ms = round((time.time() - start_time) * 1000, 2)
        log_api_response(request.method, request.url.path, response.status_code, duration_ms, logger)

        return response

    def _mask_sensitive_headers(self, headers: Dict[str, str]) -> Dict[str, str]:
        """Mask sensitive header values.

        Args:
            headers: Request headers

        Returns:
            Dict[str, str]: Headers with sensitive values masked
        """
        masked_headers = {}

        for key, value in headers.items():
            key_lower = key.lower()
            if any(field in key_lower for field in self.mask_fields):
                masked_headers[key] = "***MASKED***"
            else:
                masked_headers[key] = value

        return masked_headers


__all__ = ["LoggingMiddleware"]
