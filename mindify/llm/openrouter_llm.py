"""OpenRouter chat completion client for Mindify.

The client posts to the OpenAI-compatible ``/chat/completions`` endpoint.
Requests are sent once; there are no retries.
"""

import time
from typing import Any, Dict, Optional

import httpx

from mindify.llm.base_llm import (
    LLMError,
    LLMRequest,
    LLMResponse,
    LLMResponseError,
    LLMTimeoutError,
)
from mindify.utils.constants import CHAT_FALLBACK_REPLY
from mindify.utils.logger import get_llm_logger, log_llm_request

logger = get_llm_logger()

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "mistralai/mistral-7b-instruct"


class OpenRouterLLM:
    """OpenRouter chat completion client."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize OpenRouter client.

        Args:
            api_key: OpenRouter API key
            model: Default model to use
            base_url: Base URL for the OpenRouter API
            timeout: Request timeout in seconds, None for no timeout
            transport: Optional httpx transport, used by tests
        """
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self.timeout = timeout

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=self.timeout,
            transport=transport,
        )

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "OpenRouterLLM":
        """Build a client from ``Settings.get_llm_config()``."""
        return cls(
            api_key=config.get("api_key"),
            model=config.get("model") or DEFAULT_MODEL,
            base_url=config.get("base_url") or DEFAULT_BASE_URL,
            timeout=config.get("timeout"),
        )

    async def generate(self, request: LLMRequest) -> LLMResponse:
        """Send a chat completion request.

        Any JSON body is accepted regardless of status code; when it carries
        no reply text the fallback reply is returned instead.

        Args:
            request: LLM request

        Returns:
            LLMResponse: Parsed response

        Raises:
            LLMTimeoutError: If a configured timeout elapses
            LLMError: If the request cannot be sent
            LLMResponseError: If the body is not JSON
        """
        start_time = time.time()

        try:
            response = await self.client.post("/chat/completions", json=request.to_payload())
        except httpx.TimeoutException as e:
            raise LLMTimeoutError(
                f"Request timed out after {self.timeout}s",
                model=request.model,
                original_error=e,
            ) from e
        except httpx.HTTPError as e:
            raise LLMError(
                f"Request failed: {str(e)}",
                model=request.model,
                original_error=e,
            ) from e

        try:
            response_data = response.json()
        except ValueError as e:
            raise LLMResponseError(
                "Provider returned a non-JSON body",
                model=request.model,
                error_code=str(response.status_code),
                original_error=e,
            ) from e

        latency_ms = (time.time() - start_time) * 1000

        if response.status_code >= 400:
            logger.warning(
                f"Chat provider returned {response.status_code}",
                extra={"status_code": response.status_code, "model": request.model},
            )

        log_llm_request(request.model, request.purpose or "chat", latency_ms, logger)

        return self._parse_response(response_data, request, response.status_code, latency_ms)

    def _parse_response(
        self,
        response_data: Any,
        request: LLMRequest,
        status_code: int,
        latency_ms: float
    ) -> LLMResponse:
        """Extract ``choices[0].message.content`` from a provider body."""
        choice: Dict[str, Any] = {}
        if isinstance(response_data, dict):
            choices = response_data.get("choices")
            if isinstance(choices, list) and choices and isinstance(choices[0], dict):
                choice = choices[0]

        message = choice.get("message")
        content = message.get("content") if isinstance(message, dict) else None

        used_fallback = not isinstance(content, str) or not content
        body = response_data if isinstance(response_data, dict) else {}
        model = body.get("model")
        finish_reason = choice.get("finish_reason")
        response_id = body.get("id")

        return LLMResponse(
            content=CHAT_FALLBACK_REPLY if used_fallback else content,
            model=model if isinstance(model, str) and model else request.model,
            finish_reason=finish_reason if isinstance(finish_reason, str) else None,
            response_id=response_id if isinstance(response_id, str) else None,
            status_code=status_code,
            used_fallback=used_fallback,
            latency_ms=latency_ms,
        )

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()


__all__ = ["OpenRouterLLM", "DEFAULT_BASE_URL", "DEFAULT_MODEL"]
