"""LLM integration module for Mindify.

This module provides the chat completion client used by the chat relay and
the request/response types it exchanges.
"""

from mindify.llm.base_llm import LLMError, LLMMessage, LLMRequest, LLMResponse, LLMRole
from mindify.llm.openrouter_llm import OpenRouterLLM

__all__ = [
    "LLMError",
    "LLMMessage",
    "LLMRequest",
    "LLMResponse",
    "LLMRole",
    "OpenRouterLLM",
]
