"""Forum API endpoints for Mindify.

Anonymous posts and their replies. Posts are listed newest first.
"""

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, status

from mindify.api.dependencies import get_forum_service
from mindify.models.post import Post
from mindify.schemas.base import ErrorResponse
from mindify.schemas.forum_schemas import PostCreateRequest, ReplyCreateRequest
from mindify.services.forum_service import ForumService

router = APIRouter(
    prefix="/posts",
    tags=["Forum"],
    responses={
        404: {"model": ErrorResponse, "description": "Post not found"},
        500: {"model": ErrorResponse, "description": "Internal server error"}
    }
)


@router.post(
    "",
    response_model=Post,
    status_code=status.HTTP_201_CREATED,
    summary="Create post",
)
async def create_post(
    post_request: Optional[PostCreateRequest] = Body(None),
    forum_service: ForumService = Depends(get_forum_service),
) -> Post:
    """Create an anonymous post with no replies."""
    return await forum_service.create_post(post_request or PostCreateRequest())


@router.get(
    "",
    response_model=List[Post],
    summary="List posts",
    description="All posts, newest first"
)
async def list_posts(
    forum_service: ForumService = Depends(get_forum_service),
) -> List[Post]:
    return await forum_service.list_posts()


@router.get(
    "/{post_id}",
    response_model=Post,
    summary="Get post",
)
async def get_post(
    post_id: str,
    forum_service: ForumService = Depends(get_forum_service),
) -> Post:
    return await forum_service.get_post(post_id)


@router.post(
    "/{post_id}/reply",
    response_model=Post,
    status_code=status.HTTP_201_CREATED,
    summary="Reply to post",
    description="Append a reply and return the updated post"
)
async def add_reply(
    post_id: str,
    reply_request: Optional[ReplyCreateRequest] = Body(None),
    forum_service: ForumService = Depends(get_forum_service),
) -> Post:
    return await forum_service.add_reply(post_id, reply_request or ReplyCreateRequest())
