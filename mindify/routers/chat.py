"""Chat relay endpoint for Mindify."""

from typing import Optional

from fastapi import APIRouter, Body, Depends

from mindify.api.dependencies import get_chat_service
from mindify.schemas.base import ErrorResponse
from mindify.schemas.chat_schemas import ChatRequest, ChatResponse
from mindify.services.chat_service import ChatService

router = APIRouter(
    prefix="/chat",
    tags=["Chat"],
    responses={
        400: {"model": ErrorResponse, "description": "No message provided"},
        500: {"model": ErrorResponse, "description": "Failed to fetch AI response"},
        503: {"model": ErrorResponse, "description": "Chat service unavailable"}
    }
)


@router.post(
    "",
    response_model=ChatResponse,
    summary="Ask the assistant",
    description="Forward one message to the AI assistant and return its reply"
)
async def chat(
    chat_request: Optional[ChatRequest] = Body(None),
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    message = chat_request.message if chat_request else None
    reply = await chat_service.relay(message)
    return ChatResponse(reply=reply)
