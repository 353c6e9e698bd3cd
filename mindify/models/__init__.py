"""Stored record models for Mindify.

Each model maps to one MongoDB collection (or an embedded subdocument) and
converts to and from the stored representation.
"""

from mindify.models.base import BaseDocument, EmbeddedDocument, PyObjectId, TimestampedDocument
from mindify.models.post import Post, Reply
from mindify.models.test import Option, Question, Test, TestSummary
from mindify.models.test_result import TestResult

__all__ = [
    "BaseDocument",
    "EmbeddedDocument",
    "PyObjectId",
    "TimestampedDocument",
    "Post",
    "Reply",
    "Option",
    "Question",
    "Test",
    "TestSummary",
    "TestResult",
]
