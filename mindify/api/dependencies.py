"""Common dependencies for FastAPI routes.

This module wires the long-lived clients held on ``app.state`` into
repositories and services for each request. Tests replace these with
``app.dependency_overrides``.
"""

from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from mindify.core.config import Settings, get_settings
from mindify.database.mongodb import MongoDB
from mindify.database.repositories import (
    PostRepository,
    TestRepository,
    TestResultRepository,
)
from mindify.llm.openrouter_llm import OpenRouterLLM
from mindify.services.chat_service import ChatService
from mindify.services.forum_service import ForumService
from mindify.services.result_service import ResultRecorder
from mindify.services.scoring_service import ScoringService
from mindify.services.test_service import TestService
from mindify.utils.logger import get_logger

logger = get_logger(__name__)


# Database dependencies
def get_mongodb(request: Request) -> Optional[MongoDB]:
    """Get the MongoDB manager created at startup, if any."""
    return getattr(request.app.state, "mongodb", None)


def get_db(mongodb: Optional[MongoDB] = Depends(get_mongodb)) -> MongoDB:
    """Get the connected MongoDB manager.

    Raises:
        HTTPException: 503 if the database is not connected
    """
    if mongodb is None or not mongodb.is_connected:
        logger.error("Failed to get database connection")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database connection unavailable"
        )
    return mongodb


def get_post_repository(db: MongoDB = Depends(get_db)) -> PostRepository:
    return PostRepository(db)


def get_test_repository(db: MongoDB = Depends(get_db)) -> TestRepository:
    return TestRepository(db)


def get_test_result_repository(db: MongoDB = Depends(get_db)) -> TestResultRepository:
    return TestResultRepository(db)


# Service dependencies
def get_forum_service(posts: PostRepository = Depends(get_post_repository)) -> ForumService:
    return ForumService(posts)


def get_test_service(
    tests: TestRepository = Depends(get_test_repository),
    results: TestResultRepository = Depends(get_test_result_repository),
) -> TestService:
    return TestService(tests, ResultRecorder(results), ScoringService())


def get_llm(request: Request) -> Optional[OpenRouterLLM]:
    """Get the chat completion client created at startup, if any.

    A missing client is reported by the chat service once the message
    has been checked.
    """
    return getattr(request.app.state, "llm", None)


def get_chat_service(
    llm: Optional[OpenRouterLLM] = Depends(get_llm),
    settings: Settings = Depends(get_settings),
) -> ChatService:
    return ChatService(llm, system_prompt=settings.CHAT_SYSTEM_PROMPT)


__all__ = [
    "get_chat_service",
    "get_db",
    "get_forum_service",
    "get_llm",
    "get_mongodb",
    "get_post_repository",
    "get_test_repository",
    "get_test_result_repository",
    "get_test_service",
]
