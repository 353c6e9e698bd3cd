"""Main entry point for the Mindify application.

This module provides the main entry point for running the FastAPI application
directly with uvicorn.
"""

import uvicorn

from mindify.core.config import get_settings

settings = get_settings()

if __name__ == "__main__":
    uvicorn.run(
        "mindify.api.main:app",
        host=settings.APP_HOST,
        port=settings.PORT,
        reload=settings.APP_ENV == "development",
        log_config=None,  # Use our custom logging
        access_log=False,  # Handled by middleware
    )
