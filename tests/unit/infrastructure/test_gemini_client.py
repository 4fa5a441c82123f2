from __future__ import annotations

import json

import httpx

from rpos.infrastructure.ai.gemini_client import (
    NOT_CONFIGURED_MESSAGE,
    UNAVAILABLE_MESSAGE,
    GeminiInsightsClient,
)


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_missing_api_key_returns_fallback_without_calling_out() -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={})

    client = GeminiInsightsClient(api_key="", http_client=_client(handler))

    assert client.generate("Restaurant Report (today):") == NOT_CONFIGURED_MESSAGE
    assert calls == []


def test_generate_posts_prompt_and_joins_text_parts() -> None:
    seen: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        parts = [{"text": "## Trends"}, {"text": "\nUp."}]
        return httpx.Response(200, json={"candidates": [{"content": {"parts": parts}}]})

    client = GeminiInsightsClient(api_key="k-123", model="test-model", http_client=_client(handler))

    text = client.generate("- Revenue: 1280 RUB")

    assert text == "## Trends\nUp."
    assert "models/test-model:generateContent" in seen["url"]
    assert "key=k-123" in seen["url"]
    prompt = seen["body"]["contents"][0]["parts"][0]["text"]
    assert "- Revenue: 1280 RUB" in prompt


def test_upstream_error_returns_fallback() -> None:
    client = GeminiInsightsClient(
        api_key="k-123",
        http_client=_client(lambda request: httpx.Response(503, json={"error": "busy"})),
    )

    assert client.generate("report") == UNAVAILABLE_MESSAGE


def test_empty_candidates_return_fallback() -> None:
    client = GeminiInsightsClient(
        api_key="k-123",
        http_client=_client(lambda request: httpx.Response(200, json={"candidates": []})),
    )

    assert client.generate("report") == UNAVAILABLE_MESSAGE
