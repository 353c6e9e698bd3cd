"""Fixtures for API tests.

Requests go through the real application and middleware via
``httpx.ASGITransport``; repositories and the chat client are swapped in
with FastAPI dependency overrides, so no MongoDB is needed.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from mindify.api.dependencies import (
    get_llm,
    get_mongodb,
    get_post_repository,
    get_test_repository,
    get_test_result_repository,
)
from mindify.api.main import app


@pytest.fixture
def mock_post_repository():
    repository = MagicMock()
    repository.insert = AsyncMock(side_effect=lambda record: record)
    repository.find_by_id = AsyncMock(return_value=None)
    repository.list_newest_first = AsyncMock(return_value=[])
    repository.push_reply = AsyncMock(return_value=None)
    return repository


@pytest.fixture
def mock_test_repository():
    repository = MagicMock()
    repository.find_by_id = AsyncMock(return_value=None)
    repository.list_summaries = AsyncMock(return_value=[])
    return repository


@pytest.fixture
def mock_result_repository():
    repository = MagicMock()
    repository.insert = AsyncMock(side_effect=lambda record: record)
    return repository


@pytest.fixture
def mock_mongodb():
    mongodb = MagicMock()
    mongodb.ping = AsyncMock(return_value=True)
    return mongodb


@pytest.fixture
async def client(mock_post_repository, mock_test_repository, mock_result_repository, mock_mongodb):
    """API client with store dependencies overridden."""
    app.dependency_overrides[get_post_repository] = lambda: mock_post_repository
    app.dependency_overrides[get_test_repository] = lambda: mock_test_repository
    app.dependency_overrides[get_test_result_repository] = lambda: mock_result_repository
    app.dependency_overrides[get_mongodb] = lambda: mock_mongodb

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def override_llm():
    """Install a chat completion client for the duration of a test."""
    def install(llm):
        app.dependency_overrides[get_llm] = lambda: llm
        return llm

    yield install
    app.dependency_overrides.pop(get_llm, None)
