"""Request schemas for the forum endpoints.

Only presence is checked; every field is optional and stored as given.
"""

from typing import Optional

from pydantic import Field

from mindify.schemas.base import BaseSchema


class PostCreateRequest(BaseSchema):
    """Body of POST /posts."""

    title: Optional[str] = Field(None, description="Post title")
    content: Optional[str] = Field(None, description="Post body")
    anonymous_id: Optional[str] = Field(None, alias="anonymousId", description="Client-chosen anonymous identifier")

    model_config = {
        **BaseSchema.model_config,
        "json_schema_extra": {
            "example": {
                "title": "Feeling overwhelmed lately",
                "content": "Work has been a lot and I can't switch off.",
                "anonymousId": "anon-4821"
            }
        }
    }


class ReplyCreateRequest(BaseSchema):
    """Body of POST /posts/{post_id}/reply."""

    message: Optional[str] = Field(None, description="Reply text")

    model_config = {
        **BaseSchema.model_config,
        "json_schema_extra": {
            "example": {
                "message": "You're not alone, it helped me to take short walks."
            }
        }
    }


__all__ = ["PostCreateRequest", "ReplyCreateRequest"]
