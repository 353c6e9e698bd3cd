"""Base LLM types for Mindify.

This module defines the message, request and response models shared by
chat completion providers, and the errors they raise.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from mindify.utils.datetime_utils import utc_now


class LLMRole(str, Enum):
    """Message roles in LLM conversations."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class LLMMessage(BaseModel):
    """A message in an LLM conversation."""

    role: LLMRole = Field(..., description="Role of the message sender")
    content: str = Field(..., description="Message content")

    model_config = {
        "json_schema_extra": {
            "example": {
                "role": "user",
                "content": "I feel anxious before exams, what can I do?"
            }
        }
    }


class LLMRequest(BaseModel):
    """Request to a chat completion provider."""

    messages: List[LLMMessage] = Field(..., min_length=1, description="Conversation messages")
    model: str = Field(..., description="Model to use")
    purpose: Optional[str] = Field(None, description="Purpose of the request")

    def to_payload(self) -> Dict[str, Any]:
        """Build the chat/completions request body."""
        return {
            "model": self.model,
            "messages": [
                {"role": message.role.value, "content": message.content}
                for message in self.messages
            ],
        }


class LLMResponse(BaseModel):
    """Response from a chat completion provider."""

    content: str = Field(..., description="Generated content")
    model: str = Field(..., description="Model that generated the response")
    finish_reason: Optional[str] = Field(None, description="Reason the generation stopped")
    response_id: Optional[str] = Field(None, description="Provider response identifier")
    status_code: int = Field(..., description="HTTP status returned by the provider")
    used_fallback: bool = Field(default=False, description="Whether the fallback reply was substituted")
    created_at: datetime = Field(default_factory=utc_now, description="Response timestamp")
    latency_ms: Optional[float] = Field(None, ge=0, description="Response latency in milliseconds")


class LLMError(Exception):
    """Base exception for LLM-related errors."""

    def __init__(
        self,
        message: str,
        model: Optional[str] = None,
        error_code: Optional[str] = None,
        original_error: Optional[Exception] = None
    ):
        """Initialize LLM error.

        Args:
            message: Error message
            model: Model being used when error occurred
            error_code: Provider-specific error code
            original_error: Original exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.model = model
        self.error_code = error_code
        self.original_error = original_error


class LLMTimeoutError(LLMError):
    """Exception raised when requests timeout."""
    pass


class LLMResponseError(LLMError):
    """Exception raised when the provider body cannot be decoded."""
    pass


__all__ = [
    "LLMRole",
    "LLMMessage",
    "LLMRequest",
    "LLMResponse",
    "LLMError",
    "LLMTimeoutError",
    "LLMResponseError",
]
