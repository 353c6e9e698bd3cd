"""API routers for the Mindify application.

This module provides all FastAPI routers that define the API endpoints
for the forum, assessments, chat relay and health checks.
"""

from mindify.routers.chat import router as chat_router
from mindify.routers.health import router as health_router
from mindify.routers.posts import router as posts_router
from mindify.routers.tests import router as tests_router

__all__ = [
    "chat_router",
    "health_router",
    "posts_router",
    "tests_router",
]
