"""
Tests for the Anthropic provider over a mocked HTTP transport.
"""

import json

import httpx
import pytest
from conftest import make_settings

from oked_assistant.entities import ChatMessage
from oked_assistant.errors import ProviderBadRequestError, ProviderError, RateLimitError
from oked_assistant.repositories import AnthropicProvider

MESSAGES = [ChatMessage(role="user", content="Что такое ОКЭД?")]


def make_provider(handler) -> AnthropicProvider:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return AnthropicProvider(
        api_key="sk-test-key",
        base_url="https://api.anthropic.test",
        api_version="2023-06-01",
        client=client,
    )


@pytest.mark.asyncio
async def test_complete_success():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["headers"] = request.headers
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "model": "claude-3-haiku-20240307",
                "content": [{"type": "text", "text": "ОКЭД - классификатор"}],
                "usage": {"input_tokens": 10, "output_tokens": 5},
            },
        )

    provider = make_provider(handler)
    result = await provider.complete(
        MESSAGES,
        model="claude-3-haiku-20240307",
        max_tokens=4000,
        temperature=0.3,
    )
    await provider.close()

    assert result.text == "ОКЭД - классификатор"
    assert result.usage == {"input_tokens": 10, "output_tokens": 5}
    assert result.model == "claude-3-haiku-20240307"

    assert seen["url"] == "https://api.anthropic.test/v1/messages"
    assert seen["headers"]["x-api-key"] == "sk-test-key"
    assert seen["headers"]["anthropic-version"] == "2023-06-01"
    assert seen["body"] == {
        "model": "claude-3-haiku-20240307",
        "max_tokens": 4000,
        "temperature": 0.3,
        "messages": [{"role": "user", "content": "Что такое ОКЭД?"}],
    }


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status_code, error_type",
    [
        (429, RateLimitError),
        (400, ProviderBadRequestError),
        (401, ProviderError),
        (529, ProviderError),
    ],
)
async def test_complete_maps_http_errors(status_code, error_type):
    provider = make_provider(lambda request: httpx.Response(status_code, json={"error": {}}))

    with pytest.raises(error_type) as exc_info:
        await provider.complete(MESSAGES, model="m", max_tokens=10, temperature=0.3)

    assert exc_info.value.http_status == status_code


@pytest.mark.asyncio
async def test_complete_wraps_transport_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    provider = make_provider(handler)
    with pytest.raises(ProviderError, match="connection refused"):
        await provider.complete(MESSAGES, model="m", max_tokens=10, temperature=0.3)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"content": []},
        [{"type": "text", "text": "hi"}],
        {"content": ["hi"]},
        {"content": {"text": "hi"}},
        {"content": [{"type": "text", "text": None}]},
        "just a string",
    ],
)
async def test_complete_rejects_unexpected_body(body):
    provider = make_provider(lambda request: httpx.Response(200, json=body))
    with pytest.raises(ProviderError, match="Unexpected response format"):
        await provider.complete(MESSAGES, model="m", max_tokens=10, temperature=0.3)


def test_create_requires_api_key():
    with pytest.raises(ValueError):
        AnthropicProvider.create(make_settings(anthropic_api_key=None))


def test_create_from_settings():
    provider = AnthropicProvider.create(make_settings(anthropic_api_key="sk-test-key"))
    assert provider.name == "anthropic"
