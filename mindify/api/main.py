"""Main FastAPI application module for Mindify.

This module creates and configures the FastAPI application instance with all
necessary middleware, routers, and event handlers.
"""

import time
from contextlib import asynccontextmanager
from typing import Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator
from starlette.exceptions import HTTPException as StarletteHTTPException

from mindify.api.middleware.error_handler import (
    ErrorHandlerMiddleware,
    http_exception_handler,
    mindify_error_handler,
    validation_exception_handler,
)
from mindify.api.middleware.logging_middleware import LoggingMiddleware
from mindify.api.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware
from mindify.core.config import Settings, get_settings
from mindify.core.events import create_start_app_handler, create_stop_app_handler
from mindify.utils.exceptions import MindifyError
from mindify.utils.logger import get_logger

logger = get_logger(__name__)


def create_lifespan(settings: Settings):
    """Build the lifespan context bound to the given settings."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Starting Mindify API",
            extra={
                "app_name": settings.APP_NAME,
                "version": settings.APP_VERSION,
                "environment": settings.APP_ENV,
            }
        )

        await create_start_app_handler(app, settings)()

        logger.info(
            "Mindify API started successfully",
            extra={
                "cors_origins": settings.CORS_ORIGINS,
                "api_docs": settings.ENABLE_API_DOCS,
                "metrics": settings.ENABLE_METRICS,
            }
        )

        yield

        logger.info("Shutting down Mindify API")
        await create_stop_app_handler(app)()
        logger.info("Mindify API shut down successfully")

    return lifespan


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use, defaults to the cached environment settings

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Anonymous forum, self-assessment tests and AI chat for mental health support",
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.ENABLE_API_DOCS else None,
        redoc_url="/redoc" if settings.ENABLE_API_DOCS else None,
        openapi_url="/openapi.json" if settings.ENABLE_API_DOCS else None,
        lifespan=create_lifespan(settings),
        swagger_ui_parameters={
            "displayRequestDuration": True,
        },
    )
    app.state.settings = settings

    app = register_exception_handlers(app)
    app = register_middleware(app, settings)
    app = register_routers(app)

    if settings.ENABLE_METRICS:
        setup_metrics(app)

    return app


def register_exception_handlers(app: FastAPI) -> FastAPI:
    """Register custom exception handlers.

    Args:
        app: FastAPI application instance

    Returns:
        FastAPI: Application with exception handlers registered
    """
    app.add_exception_handler(MindifyError, mindify_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    return app


def register_middleware(app: FastAPI, settings: Settings) -> FastAPI:
    """Register application middleware.

    The last middleware added runs first.

    Args:
        app: FastAPI application instance
        settings: Application settings

    Returns:
        FastAPI: Application with middleware registered
    """
    app.add_middleware(ErrorHandlerMiddleware, debug=settings.APP_DEBUG and not settings.is_production())
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials="*" not in settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER, "X-Process-Time"],
    )

    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        """Add processing time to response headers."""
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = f"{process_time:.3f}"
        return response

    return app


def register_routers(app: FastAPI) -> FastAPI:
    """Register API routers.

    Args:
        app: FastAPI application instance

    Returns:
        FastAPI: Application with routers registered
    """
    from mindify.routers import chat_router, health_router, posts_router, tests_router

    app.include_router(health_router)
    app.include_router(posts_router)
    app.include_router(tests_router)
    app.include_router(chat_router)

    @app.get("/", tags=["Root"], summary="Root endpoint", include_in_schema=False)
    async def root() -> Dict[str, str]:
        settings: Settings = app.state.settings
        return {
            "message": f"Welcome to {settings.APP_NAME}",
            "version": settings.APP_VERSION,
            "health": "/health",
        }

    return app


def setup_metrics(app: FastAPI) -> None:
    """Setup Prometheus metrics.

    Args:
        app: FastAPI application instance
    """
    instrumentator = Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        should_instrument_requests_inprogress=True,
        excluded_handlers=[".*health.*", "/metrics"],
        inprogress_name="mindify_inprogress",
        inprogress_labels=True,
    )

    instrumentator.instrument(app).expose(
        app,
        endpoint="/metrics",
        tags=["Metrics"],
        include_in_schema=False,
    )

    logger.info("Prometheus metrics enabled at /metrics")


# Create the application instance
app = create_application()


__all__ = ["app", "create_application"]
