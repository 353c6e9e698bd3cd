"""Collection repositories for Mindify.

Each repository maps one record kind to its MongoDB collection. Driver
errors are not caught here; they propagate to the request handler.
"""

from typing import Any, Dict, Generic, List, Optional, Tuple, Type, TypeVar

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import DESCENDING, ReturnDocument

from mindify.database.mongodb import MongoDB
from mindify.models.base import BaseDocument, parse_object_id
from mindify.models.post import Post, Reply
from mindify.models.test import Test, TestSummary
from mindify.models.test_result import TestResult
from mindify.utils.logger import PerformanceLogger, get_database_logger

logger = get_database_logger()

T = TypeVar("T", bound=BaseDocument)


class BaseRepository(Generic[T]):
    """Common find/insert operations for a single collection."""

    model: Type[T]

    def __init__(self, db: MongoDB):
        self.db = db

    @property
    def collection_name(self) -> str:
        return self.model.collection_name

    @property
    def collection(self) -> AsyncIOMotorCollection:
        return self.db.get_collection(self.collection_name)

    @staticmethod
    def to_object_id(document_id: Any) -> Optional[ObjectId]:
        """Parse an identifier, returning None when it is malformed."""
        try:
            return parse_object_id(document_id)
        except ValueError:
            return None

    def _timed(self, operation: str) -> PerformanceLogger:
        return PerformanceLogger(
            f"{operation} on {self.collection_name}",
            logger,
            {"database_operation": operation, "collection": self.collection_name},
        )

    async def find_by_id(self, document_id: Any) -> Optional[T]:
        """Find a document by its ID.

        A malformed ID is treated the same as a missing document.

        Args:
            document_id: Document ID (string or ObjectId)

        Returns:
            Model instance or None
        """
        object_id = self.to_object_id(document_id)
        if object_id is None:
            logger.debug(
                f"Malformed id for {self.collection_name}",
                extra={"document_id": str(document_id)},
            )
            return None

        with self._timed("find_one"):
            document = await self.collection.find_one({"_id": object_id})

        if document is None:
            return None
        return self.model.from_document(document)

    async def find_many(
        self,
        filter_dict: Optional[Dict[str, Any]] = None,
        sort: Optional[List[Tuple[str, int]]] = None,
        projection: Optional[Dict[str, int]] = None,
    ) -> List[Dict[str, Any]]:
        """Find raw documents matching a filter.

        Args:
            filter_dict: Query filter
            sort: Sort specification
            projection: Fields to include

        Returns:
            List of stored documents
        """
        with self._timed("find"):
            cursor = self.collection.find(filter_dict or {}, projection=projection)
            if sort:
                cursor = cursor.sort(sort)
            return await cursor.to_list(length=None)

    async def insert(self, record: T) -> T:
        """Insert a single record.

        Args:
            record: Record to insert; its id is generated client-side

        Returns:
            The same record, now persisted
        """
        with self._timed("insert_one"):
            await self.collection.insert_one(record.to_document())
        return record


class PostRepository(BaseRepository[Post]):
    """Repository for forum posts."""

    model = Post

    async def list_newest_first(self) -> List[Post]:
        documents = await self.find_many(sort=[("timestamp", DESCENDING)])
        return [Post.from_document(document) for document in documents]

    async def push_reply(self, post_id: Any, reply: Reply) -> Optional[Post]:
        """Append a reply to a post in one atomic update.

        Args:
            post_id: Post ID
            reply: Reply to append

        Returns:
            The updated post, or None if no such post exists
        """
        object_id = self.to_object_id(post_id)
        if object_id is None:
            return None

        with self._timed("find_one_and_update"):
            document = await self.collection.find_one_and_update(
                {"_id": object_id},
                {"$push": {"replies": reply.model_dump(by_alias=True)}},
                return_document=ReturnDocument.AFTER,
            )

        if document is None:
            return None
        return Post.from_document(document)


class TestRepository(BaseRepository[Test]):
    """Repository for assessment test definitions (read-only)."""

    __test__ = False

    model = Test

    async def list_summaries(self) -> List[TestSummary]:
        documents = await self.find_many(projection=TestSummary.PROJECTION)
        return [TestSummary.model_validate(document) for document in documents]


class TestResultRepository(BaseRepository[TestResult]):
    """Append-only repository for test results."""

    __test__ = False

    model = TestResult


__all__ = [
    "BaseRepository",
    "PostRepository",
    "TestRepository",
    "TestResultRepository",
]
