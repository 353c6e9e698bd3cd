"""Chat relay service for Mindify.

Forwards a single user message, prefixed with a fixed system prompt, to the
chat completion provider and returns the reply text. The relay keeps no
conversation history.
"""

from typing import Optional

from mindify.llm.base_llm import LLMError, LLMMessage, LLMRequest, LLMRole
from mindify.llm.openrouter_llm import OpenRouterLLM
from mindify.utils.constants import (
    CHAT_FAILURE_MESSAGE,
    CHAT_MISSING_MESSAGE,
    CHAT_UNAVAILABLE_MESSAGE,
    DEFAULT_CHAT_SYSTEM_PROMPT,
)
from mindify.utils.exceptions import ExternalServiceError, ServiceUnavailableError, ValidationError
from mindify.utils.logger import get_logger

logger = get_logger(__name__)


class ChatService:
    """Relay between the client and the chat completion provider."""

    def __init__(
        self,
        llm: Optional[OpenRouterLLM],
        system_prompt: str = DEFAULT_CHAT_SYSTEM_PROMPT,
        model: Optional[str] = None,
    ):
        """Initialize chat service.

        Args:
            llm: Chat completion client, None if it was never created
            system_prompt: System prompt sent ahead of every message
            model: Model override, defaults to the client's model
        """
        self.llm = llm
        self.system_prompt = system_prompt
        self.model = model or (llm.model if llm is not None else None)

    def build_request(self, message: str) -> LLMRequest:
        return LLMRequest(
            messages=[
                LLMMessage(role=LLMRole.SYSTEM, content=self.system_prompt),
                LLMMessage(role=LLMRole.USER, content=message),
            ],
            model=self.model,
            purpose="chat",
        )

    async def relay(self, message: Optional[str]) -> str:
        """Send a message to the provider and return its reply.

        Args:
            message: User message

        Returns:
            str: Reply text, or the fallback reply when the provider sent none

        Raises:
            ValidationError: If the message is missing or empty
            ServiceUnavailableError: If there is no chat completion client
            ExternalServiceError: If the provider cannot be reached or answers with a non-JSON body
        """
        if not message:
            raise ValidationError(CHAT_MISSING_MESSAGE, field="message")

        if self.llm is None:
            raise ServiceUnavailableError(CHAT_UNAVAILABLE_MESSAGE, service_name="openrouter")

        try:
            response = await self.llm.generate(self.build_request(message))
        except LLMError as e:
            logger.error(
                f"Chat API error: {e.message}",
                extra={"model": self.model, "error_code": e.error_code},
                exc_info=True,
            )
            raise ExternalServiceError(
                CHAT_FAILURE_MESSAGE,
                service_name="openrouter",
                cause=e,
            ) from e

        if response.used_fallback:
            logger.warning(
                "Chat provider returned no reply, using fallback",
                extra={"model": self.model, "status_code": response.status_code},
            )

        return response.content


__all__ = ["ChatService"]
