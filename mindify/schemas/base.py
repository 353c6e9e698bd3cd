"""Base Pydantic schemas for the Mindify API.

This module provides the base schema configuration and the error body
shared by all endpoints.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = {
        "use_enum_values": True,
        "populate_by_name": True,
        "arbitrary_types_allowed": False,
        "json_schema_extra": {
            "example": {}
        }
    }


class ErrorResponse(BaseSchema):
    """Error body returned by every failing endpoint."""

    error: str = Field(..., description="Human-readable error message")
    request_id: Optional[str] = Field(None, description="Request identifier for support")
    details: Optional[List[Dict[str, Any]]] = Field(None, description="Field-level validation errors")

    model_config = {
        **BaseSchema.model_config,
        "json_schema_extra": {
            "example": {
                "error": "Post not found",
                "request_id": "3f2b8c1e-6a0d-4c1f-9a51-1d2e3f4a5b6c"
            }
        }
    }


__all__ = ["BaseSchema", "ErrorResponse"]
