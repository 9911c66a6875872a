"""Client for an OpenAI-compatible chat completion endpoint."""

from __future__ import annotations

from typing import Any

import httpx

from grouchy.clients.base import ServiceClient
from grouchy.config.logging import get_logger
from grouchy.errors import MalformedResponse
from grouchy.messages import ConversationHistory

logger = get_logger("clients.chat")


def extract_reply(data: dict[str, Any]) -> str | None:
    """Return ``choices[0].message.content`` or None when any level is missing."""
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    return content if isinstance(content, str) else None


class ChatClient(ServiceClient):
    """Sends the full history and returns the first choice's text.

    Exactly one request per call: there is no retry.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        model: str,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(base_url, api_key, timeout=timeout, transport=transport)
        self.model = model

    def build_request(self, history: ConversationHistory) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": history.to_payload(),
            "stream": False,
        }

    async def complete(self, history: ConversationHistory) -> str | None:
        """Request a completion for ``history``.

        Returns:
            The assistant text, or None if the response had no usable content.

        Raises:
            TransportError: the request failed or returned non-2xx.
        """
        logger.info(f"Sending {len(history)} messages to {self.model}")
        response = await self.request("POST", "/chat/completions", json=self.build_request(history))

        try:
            data = self.json(response)
        except MalformedResponse:
            logger.warning("Chat completion body was not a JSON object")
            return None

        reply = extract_reply(data)
        if reply is None:
            logger.warning("Chat completion had no choices[0].message.content")
        return reply
