"""Typed chat messages and the append-only conversation history.

The history is what gets sent on every chat request, so its order is the
model's context order:

    [system?] user assistant user assistant ...
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    """Author of a chat message."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ChatMessage:
    """A single chat message.

    Attributes:
        role: Who wrote the message.
        content: Message text.
    """

    role: Role
    content: str

    def to_dict(self) -> dict[str, str]:
        """Serialize to OpenAI-format dict."""
        return {"role": self.role.value, "content": self.content}


class ConversationHistory:
    """Ordered, append-only list of messages for one session.

    The system message, when there is one, is inserted at construction and
    can never be added afterwards, so it is always the first element.
    """

    def __init__(self, system_prompt: str | None = None) -> None:
        self._messages: list[ChatMessage] = []
        if system_prompt:
            self._messages.append(ChatMessage(Role.SYSTEM, system_prompt))

    def append(self, message: ChatMessage) -> None:
        if message.role == Role.SYSTEM:
            raise ValueError("system message can only be set when the history is created")
        self._messages.append(message)

    def add_user(self, content: str) -> ChatMessage:
        message = ChatMessage(Role.USER, content)
        self.append(message)
        return message

    def add_assistant(self, content: str) -> ChatMessage:
        message = ChatMessage(Role.ASSISTANT, content)
        self.append(message)
        return message

    @property
    def system_prompt(self) -> str | None:
        if self._messages and self._messages[0].role == Role.SYSTEM:
            return self._messages[0].content
        return None

    def to_payload(self) -> list[dict[str, str]]:
        """Serialize the whole history for a chat completion request."""
        return [m.to_dict() for m in self._messages]

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[ChatMessage]:
        return iter(self._messages)

    def __getitem__(self, index: int) -> ChatMessage:
        return self._messages[index]
