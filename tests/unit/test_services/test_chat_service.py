"""Unit tests for ChatService."""

from unittest.mock import AsyncMock, Mock

import pytest

from mindify.llm.base_llm import LLMError, LLMResponse, LLMRole, LLMTimeoutError
from mindify.services.chat_service import ChatService
from mindify.utils.constants import (
    CHAT_FAILURE_MESSAGE,
    CHAT_MISSING_MESSAGE,
    DEFAULT_CHAT_SYSTEM_PROMPT,
)
from mindify.utils.exceptions import ExternalServiceError, ServiceUnavailableError, ValidationError


def _response(content: str, used_fallback: bool = False) -> LLMResponse:
    return LLMResponse(
        content=content,
        model="mistralai/mistral-7b-instruct",
        status_code=200,
        used_fallback=used_fallback,
    )


class TestChatService:
    """Test suite for ChatService class."""

    @pytest.fixture
    def mock_llm(self):
        llm = Mock()
        llm.model = "mistralai/mistral-7b-instruct"
        llm.generate = AsyncMock(return_value=_response("Try a short breathing exercise."))
        return llm

    @pytest.fixture
    def chat_service(self, mock_llm):
        return ChatService(mock_llm)

    @pytest.mark.asyncio
    async def test_relay_returns_reply(self, chat_service, mock_llm):
        reply = await chat_service.relay("I can't sleep")

        assert reply == "Try a short breathing exercise."
        request = mock_llm.generate.await_args.args[0]
        assert request.model == "mistralai/mistral-7b-instruct"
        assert [m.role for m in request.messages] == [LLMRole.SYSTEM, LLMRole.USER]
        assert request.messages[0].content == DEFAULT_CHAT_SYSTEM_PROMPT
        assert request.messages[1].content == "I can't sleep"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("message", [None, ""])
    async def test_relay_rejects_missing_message(self, chat_service, mock_llm, message):
        with pytest.raises(ValidationError) as exc_info:
            await chat_service.relay(message)

        assert exc_info.value.message == CHAT_MISSING_MESSAGE
        mock_llm.generate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_relay_returns_fallback_content(self, chat_service, mock_llm):
        mock_llm.generate.return_value = _response("Sorry, I couldn't respond.", used_fallback=True)

        assert await chat_service.relay("hello") == "Sorry, I couldn't respond."

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [LLMError("connection refused"), LLMTimeoutError("timed out")])
    async def test_relay_wraps_llm_errors(self, chat_service, mock_llm, error):
        mock_llm.generate.side_effect = error

        with pytest.raises(ExternalServiceError) as exc_info:
            await chat_service.relay("hello")

        assert exc_info.value.message == CHAT_FAILURE_MESSAGE
        assert exc_info.value.cause is error

    @pytest.mark.asyncio
    async def test_custom_system_prompt(self, mock_llm):
        service = ChatService(mock_llm, system_prompt="Be brief.")

        await service.relay("hi")

        request = mock_llm.generate.await_args.args[0]
        assert request.messages[0].content == "Be brief."


class TestChatServiceWithoutClient:
    """The chat client is created at startup and may be missing."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("message", [None, ""])
    async def test_missing_message_checked_first(self, message):
        with pytest.raises(ValidationError):
            await ChatService(None).relay(message)

    @pytest.mark.asyncio
    async def test_message_without_client_is_unavailable(self):
        with pytest.raises(ServiceUnavailableError) as exc_info:
            await ChatService(None).relay("hello")

        assert exc_info.value.message == "Chat service unavailable"
