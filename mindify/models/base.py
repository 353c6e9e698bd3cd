"""Base model classes and utilities for MongoDB documents.

This module provides base classes and utilities for all MongoDB models in the
Mindify application: ObjectId handling, timestamps and the mapping to and
from the stored document representation.
"""

from datetime import datetime
from typing import Annotated, Any, ClassVar, Dict, Type, TypeVar

from bson import ObjectId
from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

from mindify.utils.datetime_utils import ensure_utc, utc_now


class PyObjectId(ObjectId):
    """Custom ObjectId type for Pydantic models.

    Accepts ObjectId instances or their 24-character hex form. Dumping in
    python mode keeps the ObjectId for the store; JSON mode emits the string.
    """

    @classmethod
    def __get_pydantic_core_schema__(
        cls, _source_type: Any, _handler: Any
    ) -> core_schema.CoreSchema:
        """Get the Pydantic core schema for PyObjectId."""
        return core_schema.union_schema(
            [
                core_schema.is_instance_schema(ObjectId),
                core_schema.chain_schema(
                    [
                        core_schema.str_schema(),
                        core_schema.no_info_plain_validator_function(cls.validate),
                    ]
                ),
            ],
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda x: str(x),
                return_schema=core_schema.str_schema(),
                when_used="json",
            ),
        )

    @classmethod
    def validate(cls, value: Any) -> ObjectId:
        """Validate and convert a value to ObjectId.

        Args:
            value: The value to validate

        Returns:
            ObjectId: A valid ObjectId instance

        Raises:
            ValueError: If the value is not a valid ObjectId
        """
        if isinstance(value, ObjectId):
            return value
        if isinstance(value, str) and ObjectId.is_valid(value):
            return ObjectId(value)
        raise ValueError("Invalid ObjectId")

    @classmethod
    def __get_pydantic_json_schema__(
        cls, _core_schema: core_schema.CoreSchema, handler: Any
    ) -> JsonSchemaValue:
        """Get JSON schema for PyObjectId."""
        return handler(core_schema.str_schema())


def parse_object_id(value: Any) -> ObjectId:
    """Parse a client-supplied identifier.

    Raises:
        ValueError: If the value is not a valid ObjectId
    """
    return PyObjectId.validate(value)


# Datetimes read back from the store are normalized to aware UTC
UTCDateTime = Annotated[datetime, AfterValidator(ensure_utc)]

T = TypeVar("T", bound="BaseDocument")


class EmbeddedDocument(BaseModel):
    """Base model for embedded documents (subdocuments).

    Used for documents that are embedded within other documents rather than
    stored in their own collection.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        arbitrary_types_allowed=True,
        extra="ignore",
    )


class BaseDocument(BaseModel):
    """Base model for all top-level MongoDB documents."""

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        arbitrary_types_allowed=True,
        extra="ignore",
        json_schema_extra={
            "example": {
                "_id": "507f1f77bcf86cd799439011",
            }
        },
    )

    # Name of the collection the document lives in; set by subclasses
    collection_name: ClassVar[str] = ""

    id: PyObjectId = Field(default_factory=ObjectId, alias="_id")

    def to_document(self) -> Dict[str, Any]:
        """Convert the model to its stored representation.

        Returns:
            Dict[str, Any]: BSON-ready dictionary keyed by stored field names
        """
        return self.model_dump(by_alias=True)

    @classmethod
    def from_document(cls: Type[T], document: Dict[str, Any]) -> T:
        """Create model instance from a stored document.

        Unknown stored fields are ignored.

        Args:
            document: Document as returned by the driver

        Returns:
            Model instance
        """
        return cls.model_validate(document)


class TimestampedDocument(BaseDocument):
    """Document carrying the creation timestamp assigned at persistence."""

    timestamp: UTCDateTime = Field(default_factory=utc_now)


__all__ = [
    "PyObjectId",
    "parse_object_id",
    "UTCDateTime",
    "EmbeddedDocument",
    "BaseDocument",
    "TimestampedDocument",
]
