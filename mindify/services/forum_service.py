"""Forum service for Mindify.

This service handles anonymous posts: creation, listing, lookup and replies.
Posts and replies are never edited or deleted.
"""

from typing import List

from mindify.database.repositories import PostRepository
from mindify.models.post import Post, Reply
from mindify.schemas.forum_schemas import PostCreateRequest, ReplyCreateRequest
from mindify.utils.constants import POST_NOT_FOUND
from mindify.utils.datetime_utils import utc_now
from mindify.utils.exceptions import ResourceNotFoundError
from mindify.utils.logger import get_logger

logger = get_logger(__name__)


class ForumService:
    """Service for forum posts."""

    def __init__(self, posts: PostRepository):
        """Initialize forum service.

        Args:
            posts: Post repository
        """
        self.posts = posts

    async def create_post(self, request: PostCreateRequest) -> Post:
        """Create a new post with no replies.

        Args:
            request: Post creation request

        Returns:
            Post: The persisted post
        """
        post = Post(
            title=request.title,
            content=request.content,
            anonymous_id=request.anonymous_id,
            timestamp=utc_now(),
        )
        await self.posts.insert(post)

        logger.info(f"Post created: {post.id}", extra={"post_id": str(post.id)})
        return post

    async def list_posts(self) -> List[Post]:
        """List every post, newest first."""
        return await self.posts.list_newest_first()

    async def get_post(self, post_id: str) -> Post:
        """Get a post by ID.

        Args:
            post_id: ID of the post

        Returns:
            Post: Post instance

        Raises:
            ResourceNotFoundError: If the post does not exist or the ID is malformed
        """
        post = await self.posts.find_by_id(post_id)
        if post is None:
            raise ResourceNotFoundError(POST_NOT_FOUND, resource_type="post", resource_id=post_id)
        return post

    async def add_reply(self, post_id: str, request: ReplyCreateRequest) -> Post:
        """Append a reply to a post.

        Args:
            post_id: ID of the post
            request: Reply request

        Returns:
            Post: The post including the new reply

        Raises:
            ResourceNotFoundError: If the post does not exist or the ID is malformed
        """
        reply = Reply(message=request.message, timestamp=utc_now())
        post = await self.posts.push_reply(post_id, reply)
        if post is None:
            raise ResourceNotFoundError(POST_NOT_FOUND, resource_type="post", resource_id=post_id)

        logger.info(
            f"Reply added to post {post_id}",
            extra={"post_id": post_id, "reply_count": len(post.replies)},
        )
        return post
