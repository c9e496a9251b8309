"""
Tests for chat request validation and cache key derivation.
"""

import pytest

from oked_assistant.errors import ValidationError
from oked_assistant.services.validation import (
    DEFAULT_MODEL,
    build_cache_key,
    validate_chat_request,
)


def test_valid_request_defaults_model():
    request = validate_chat_request({"messages": [{"role": "user", "content": "Кафе"}]})
    assert request.model == DEFAULT_MODEL
    assert request.messages[0].role == "user"
    assert request.messages[0].content == "Кафе"


def test_user_message_is_first_user_entry():
    request = validate_chat_request(
        {
            "messages": [
                {"role": "system", "content": "context"},
                {"role": "user", "content": "first"},
                {"role": "user", "content": "second"},
            ]
        }
    )
    assert request.user_message.content == "first"


def test_first_failure_wins():
    """A bad role is reported before an over-long content in a later message."""
    body = {
        "messages": [
            {"role": "moderator", "content": "hi"},
            {"role": "user", "content": "x" * 10_001},
        ]
    }
    with pytest.raises(ValidationError, match="Invalid message role"):
        validate_chat_request(body)


def test_model_checked_after_messages():
    body = {"messages": [{"role": "user", "content": "x" * 10_001}], "model": "unknown"}
    with pytest.raises(ValidationError, match="Message content too long"):
        validate_chat_request(body)


def test_cache_key_is_compact_and_keeps_unicode():
    key = build_cache_key([{"role": "user", "content": "ресторан"}])
    assert key == 'enhanced_claude_[{"role":"user","content":"ресторан"}]'


def test_cache_key_excludes_model():
    messages = [{"role": "user", "content": "hi"}]
    a = validate_chat_request({"messages": messages, "model": "claude-3-haiku-20240307"})
    b = validate_chat_request({"messages": messages, "model": "claude-3-opus-20240229"})
    assert a.cache_key == b.cache_key


def test_cache_key_depends_on_order():
    first = [{"role": "user", "content": "a"}, {"role": "user", "content": "b"}]
    assert build_cache_key(first) != build_cache_key(list(reversed(first)))


@pytest.mark.parametrize(
    "content, message",
    [
        ([], "Message content must be a string"),
        ({}, "Message content must be a string"),
        (["hi"], "Message content must be a string"),
        (0, "Invalid message format: role and content required"),
        (False, "Invalid message format: role and content required"),
        (float("nan"), "Invalid message format: role and content required"),
    ],
)
def test_empty_containers_are_present_but_not_strings(content, message):
    with pytest.raises(ValidationError, match=message):
        validate_chat_request({"messages": [{"role": "user", "content": content}]})
