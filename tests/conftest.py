"""Shared fixtures for the Mindify test suite.

The environment is switched to test mode before any application module is
imported, which disables Prometheus instrumentation of the app.
"""

import os

os.environ["APP_ENV"] = "test"
os.environ.setdefault("OPENROUTER_API_KEY", "test-key")

from datetime import datetime, timezone
from typing import Any, Dict, List

import pytest
from bson import ObjectId

from mindify.core.config import get_settings
from mindify.models.post import Post, Reply
from mindify.models.test import Test

# Configure logging once, before any caplog handler is installed
get_settings()


def make_test(option_scores: List[List[int]], title: str = "Anxiety Self-Check") -> Test:
    """Build a Test whose question i has options scored option_scores[i]."""
    return Test(
        id=ObjectId(),
        title=title,
        description="How often have these problems bothered you?",
        questions=[
            {
                "question": f"Question {index + 1}",
                "options": [{"text": f"Option {score}", "score": score} for score in scores],
            }
            for index, scores in enumerate(option_scores)
        ],
    )


@pytest.fixture
def build_test():
    """Factory building tests from per-question option scores."""
    return make_test


@pytest.fixture
def sample_test() -> Test:
    """Two questions, each with options scored [0, 5, 10, 20]."""
    return make_test([[0, 5, 10, 20], [0, 5, 10, 20]])


@pytest.fixture
def sample_test_document(sample_test: Test) -> Dict[str, Any]:
    """Stored form of sample_test, with a mongoose version key."""
    document = sample_test.to_document()
    document["__v"] = 0
    return document


@pytest.fixture
def sample_post() -> Post:
    return Post(
        id=ObjectId(),
        title="Feeling overwhelmed lately",
        content="Work has been a lot.",
        anonymous_id="anon-4821",
        timestamp=datetime(2024, 6, 1, 10, 0, tzinfo=timezone.utc),
        replies=[
            Reply(
                id=ObjectId(),
                message="You're not alone.",
                timestamp=datetime(2024, 6, 1, 11, 30, tzinfo=timezone.utc),
            )
        ],
    )
