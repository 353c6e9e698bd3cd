"""Pydantic schemas for the Mindify API.

This module provides the request/response schemas used for validation,
serialization, and API documentation.
"""

from mindify.schemas.base import BaseSchema, ErrorResponse
from mindify.schemas.chat_schemas import ChatRequest, ChatResponse
from mindify.schemas.forum_schemas import PostCreateRequest, ReplyCreateRequest
from mindify.schemas.test_schemas import TestSubmissionRequest, TestSubmissionResponse

__all__ = [
    "BaseSchema",
    "ErrorResponse",
    "ChatRequest",
    "ChatResponse",
    "PostCreateRequest",
    "ReplyCreateRequest",
    "TestSubmissionRequest",
    "TestSubmissionResponse",
]
