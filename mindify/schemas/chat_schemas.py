"""Pydantic schemas for the chat relay endpoint."""

from typing import Optional

from pydantic import Field

from mindify.schemas.base import BaseSchema


class ChatRequest(BaseSchema):
    """Body of POST /chat. A missing or blank message is rejected with 400."""

    message: Optional[str] = Field(None, description="User message for the assistant")

    model_config = {
        **BaseSchema.model_config,
        "json_schema_extra": {
            "example": {
                "message": "I have trouble sleeping before exams."
            }
        }
    }


class ChatResponse(BaseSchema):
    """Assistant reply."""

    reply: str = Field(..., description="Assistant reply text")


__all__ = ["ChatRequest", "ChatResponse"]
