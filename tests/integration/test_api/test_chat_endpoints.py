"""Integration tests for the chat relay endpoint.

The OpenRouter client is real; its HTTP transport is an
``httpx.MockTransport`` so no request leaves the process.
"""

import json

import httpx
import pytest

from mindify.llm.openrouter_llm import OpenRouterLLM


def _llm(handler) -> OpenRouterLLM:
    return OpenRouterLLM(api_key="sk-test", transport=httpx.MockTransport(handler))


class TestChatEndpoints:
    """Integration tests for /chat."""

    @pytest.mark.asyncio
    async def test_chat_success(self, client, override_llm):
        sent = []

        def handler(request):
            sent.append(json.loads(request.content))
            return httpx.Response(200, json={"choices": [{"message": {"content": "You are not alone."}}]})

        override_llm(_llm(handler))

        response = await client.post("/chat", json={"message": "I feel low"})

        assert response.status_code == 200
        assert response.json() == {"reply": "You are not alone."}
        assert sent[0]["model"] == "mistralai/mistral-7b-instruct"
        assert sent[0]["messages"][0] == {
            "role": "system",
            "content": "You are a kind and helpful mental health assistant.",
        }
        assert sent[0]["messages"][1] == {"role": "user", "content": "I feel low"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [{}, {"message": ""}, {"message": None}, None])
    async def test_chat_missing_message(self, client, override_llm, body):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json={})

        override_llm(_llm(handler))

        if body is None:
            response = await client.post("/chat")
        else:
            response = await client.post("/chat", json=body)

        assert response.status_code == 400
        assert response.json()["error"] == "No message provided."
        assert calls == []

    @pytest.mark.asyncio
    async def test_chat_fallback_reply(self, client, override_llm):
        override_llm(_llm(lambda request: httpx.Response(200, json={"error": "overloaded"})))

        response = await client.post("/chat", json={"message": "hello"})

        assert response.status_code == 200
        assert response.json() == {"reply": "Sorry, I couldn't respond."}

    @pytest.mark.asyncio
    async def test_chat_transport_failure(self, client, override_llm):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        override_llm(_llm(handler))

        response = await client.post("/chat", json={"message": "hello"})

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to fetch AI response."

    @pytest.mark.asyncio
    async def test_chat_non_json_body(self, client, override_llm):
        override_llm(_llm(lambda request: httpx.Response(200, text="not json")))

        response = await client.post("/chat", json={"message": "hello"})

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to fetch AI response."


class TestChatWithoutClient:
    @pytest.mark.asyncio
    async def test_missing_body_is_400(self, client, override_llm):
        override_llm(None)

        response = await client.post("/chat")

        assert response.status_code == 400
        assert response.json()["error"] == "No message provided."

    @pytest.mark.asyncio
    async def test_message_is_503(self, client, override_llm):
        override_llm(None)

        response = await client.post("/chat", json={"message": "hello"})

        assert response.status_code == 503
        assert response.json()["error"] == "Chat service unavailable"
