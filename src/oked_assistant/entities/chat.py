"""Chat request domain entities."""

from dataclasses import dataclass
from typing import Literal

Role = Literal["user", "assistant", "system"]


@dataclass(frozen=True)
class ChatMessage:
    """A single conversation message.

    Attributes:
        role: Author of the message (user, assistant or system)
        content: Message text, at most 10,000 characters
    """

    role: Role
    content: str

    def to_payload(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class ChatRequest:
    """A validated chat request.

    Attributes:
        messages: Ordered conversation (1..50 messages)
        model: Provider model identifier from the allow-list
        cache_key: Deterministic key derived from the raw message list
    """

    messages: tuple[ChatMessage, ...]
    model: str
    cache_key: str

    @property
    def user_message(self) -> ChatMessage:
        """First message authored by the user."""
        return next(m for m in self.messages if m.role == "user")
