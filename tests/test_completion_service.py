"""
Tests for the completion service.
"""

import pytest
from conftest import FakeProvider, completion

from oked_assistant.errors import ProviderError, RateLimitError
from oked_assistant.repositories import InMemoryResponseCache
from oked_assistant.services import CompletionService, validate_chat_request


def make_request(text: str = "Код для кафе"):
    return validate_chat_request({"messages": [{"role": "user", "content": text}]})


@pytest.mark.asyncio
async def test_offline_answer_is_cached():
    cache = InMemoryResponseCache(ttl=3600)
    service = CompletionService.create(cache=cache)
    request = make_request()

    payload = await service.complete(request)

    assert payload["fallback"] is True
    assert cache.get(request.cache_key) == payload
    assert service.is_provider_configured is False


@pytest.mark.asyncio
async def test_cache_hit_skips_provider():
    cache = InMemoryResponseCache(ttl=3600)
    provider = FakeProvider()
    service = CompletionService.create(cache=cache, provider=provider)
    request = make_request()
    cache.set(request.cache_key, {"content": "cached"})

    assert await service.complete(request) == {"content": "cached"}
    assert provider.calls == []


@pytest.mark.asyncio
async def test_enhanced_result_is_cached():
    cache = InMemoryResponseCache(ttl=3600)
    provider = FakeProvider([completion("answer")])
    service = CompletionService.create(cache=cache, provider=provider)
    request = make_request()

    payload = await service.complete(request)

    assert payload["enhanced"] is True
    assert payload["originalQuery"] == "Код для кафе"
    assert cache.get(request.cache_key) == payload


@pytest.mark.asyncio
async def test_exactly_two_attempts():
    cache = InMemoryResponseCache(ttl=3600)
    provider = FakeProvider([ProviderError("first"), RateLimitError("second"), completion("never")])
    service = CompletionService.create(cache=cache, provider=provider)

    with pytest.raises(RateLimitError):
        await service.complete(make_request())

    assert len(provider.calls) == 2
    assert cache.count_all() == 0
