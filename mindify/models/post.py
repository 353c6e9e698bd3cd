"""Forum post model.

Posts are anonymous discussion threads. Replies are embedded in the post
document and are only ever appended.
"""

from typing import List, Optional

from bson import ObjectId
from pydantic import Field

from mindify.models.base import EmbeddedDocument, PyObjectId, TimestampedDocument, UTCDateTime
from mindify.utils.constants import Collections
from mindify.utils.datetime_utils import utc_now


class Reply(EmbeddedDocument):
    """A reply embedded in a post."""

    id: PyObjectId = Field(default_factory=ObjectId, alias="_id")
    message: Optional[str] = None
    timestamp: UTCDateTime = Field(default_factory=utc_now)


class Post(TimestampedDocument):
    """Anonymous forum post."""

    collection_name = Collections.POSTS.value

    title: Optional[str] = None
    content: Optional[str] = None
    anonymous_id: Optional[str] = Field(default=None, alias="anonymousId")
    replies: List[Reply] = Field(default_factory=list)

    model_config = {
        **TimestampedDocument.model_config,
        "json_schema_extra": {
            "example": {
                "_id": "665f1f77bcf86cd799439011",
                "title": "Feeling overwhelmed lately",
                "content": "Work has been a lot and I can't switch off.",
                "anonymousId": "anon-4821",
                "timestamp": "2024-06-01T10:00:00+00:00",
                "replies": [
                    {
                        "_id": "665f1f77bcf86cd799439012",
                        "message": "You're not alone, it helped me to take short walks.",
                        "timestamp": "2024-06-01T11:30:00+00:00",
                    }
                ],
            }
        },
    }
