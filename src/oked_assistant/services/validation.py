"""Chat request validation.

Checks run in a fixed order and the first failure raises ValidationError
with a message naming the violated constraint. Nothing here touches the
cache or the provider.
"""

import json
from typing import Any

from oked_assistant.entities import ChatMessage, ChatRequest
from oked_assistant.errors import ValidationError

ALLOWED_ROLES = ("user", "assistant", "system")
ALLOWED_MODELS = (
    "claude-3-5-sonnet-20241022",
    "claude-3-haiku-20240307",
    "claude-3-opus-20240229",
)
DEFAULT_MODEL = ALLOWED_MODELS[0]
MAX_MESSAGES = 50
MAX_CONTENT_LENGTH = 10_000
CACHE_KEY_PREFIX = "enhanced_claude_"


def _is_missing(value: Any) -> bool:
    """Absent, null, empty string, zero, false or NaN. Empty lists and objects are present."""
    return value in (None, "", 0) or value != value


def build_cache_key(raw_messages: list[Any]) -> str:
    """Derive the cache key from the message list exactly as received.

    The model is not part of the key.
    """
    serialized = json.dumps(raw_messages, ensure_ascii=False, separators=(",", ":"))
    return f"{CACHE_KEY_PREFIX}{serialized}"


def validate_chat_request(body: Any) -> ChatRequest:
    """Validate a decoded request body and build a ChatRequest.

    Args:
        body: Decoded JSON body of POST /api/claude

    Returns:
        The validated ChatRequest

    Raises:
        ValidationError: On the first failing check
    """
    if not isinstance(body, dict):
        raise ValidationError("Invalid request body")

    raw_messages = body.get("messages")
    if not isinstance(raw_messages, list):
        raise ValidationError("Messages array is required")

    if len(raw_messages) == 0:
        raise ValidationError("Messages array cannot be empty")

    if len(raw_messages) > MAX_MESSAGES:
        raise ValidationError("Too many messages in conversation")

    messages = []
    for raw in raw_messages:
        if not isinstance(raw, dict) or _is_missing(raw.get("role")) or _is_missing(raw.get("content")):
            raise ValidationError("Invalid message format: role and content required")

        role, content = raw["role"], raw["content"]
        if not isinstance(role, str) or role not in ALLOWED_ROLES:
            raise ValidationError("Invalid message role")

        if not isinstance(content, str):
            raise ValidationError("Message content must be a string")

        if len(content) > MAX_CONTENT_LENGTH:
            raise ValidationError("Message content too long")

        messages.append(ChatMessage(role=role, content=content))

    model = body.get("model", DEFAULT_MODEL)
    if not isinstance(model, str) or model not in ALLOWED_MODELS:
        raise ValidationError("Invalid model specified")

    if not any(m.role == "user" for m in messages):
        raise ValidationError("No user message found")

    return ChatRequest(
        messages=tuple(messages),
        model=model,
        cache_key=build_cache_key(raw_messages),
    )
