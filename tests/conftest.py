"""Shared fixtures for the OKED assistant tests."""

from collections.abc import Sequence

import pytest
from fastapi.testclient import TestClient

from oked_assistant.api.app import create_app
from oked_assistant.config import Settings
from oked_assistant.entities import ChatMessage, ProviderCompletion


class FakeProvider:
    """Scripted CompletionProvider.

    Each call pops the next outcome: a ProviderCompletion is returned,
    an exception is raised. With no outcomes left a default completion
    is returned.
    """

    name = "fake"

    def __init__(self, outcomes: list | None = None) -> None:
        self.outcomes = list(outcomes or [])
        self.calls: list[dict] = []
        self.closed = False

    async def complete(
        self,
        messages: Sequence[ChatMessage],
        model: str,
        max_tokens: int,
        temperature: float,
    ) -> ProviderCompletion:
        self.calls.append(
            {
                "messages": list(messages),
                "model": model,
                "max_tokens": max_tokens,
                "temperature": temperature,
            }
        )
        outcome = self.outcomes.pop(0) if self.outcomes else completion("default answer")
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    async def close(self) -> None:
        self.closed = True


def completion(text: str, model: str = "claude-3-5-sonnet-20241022") -> ProviderCompletion:
    return ProviderCompletion(
        text=text,
        model=model,
        usage={"input_tokens": 12, "output_tokens": 34},
    )


def make_settings(**overrides) -> Settings:
    values = {
        "anthropic_api_key": None,
        "cache_backend": "memory",
        "cache_ttl": 3600,
        "environment": "test",
        "frontend_url": None,
        "rate_limit_window": 900,
        "rate_limit_max": 1000,
        "max_body_bytes": 10 * 1024 * 1024,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def provider():
    """A fake provider with no scripted outcomes."""
    return FakeProvider()


@pytest.fixture
def client(provider):
    """Test client wired to the fake provider."""
    app = create_app(settings=make_settings(), provider=provider)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def offline_client():
    """Test client with no provider configured."""
    app = create_app(settings=make_settings())
    with TestClient(app) as test_client:
        yield test_client


def user_messages(*texts: str) -> list[dict[str, str]]:
    return [{"role": "user", "content": text} for text in texts]
