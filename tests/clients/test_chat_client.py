"""Tests for the chat completion client."""

from __future__ import annotations

import httpx
import pytest
from conftest import CHAT_BASE

from grouchy.clients.chat import ChatClient, extract_reply
from grouchy.errors import TransportError
from grouchy.messages import ConversationHistory


def make_client(services) -> ChatClient:
    return ChatClient(CHAT_BASE, "chat-key", "test-model", transport=services.transport)


class TestExtractReply:
    """Tests for extract_reply."""

    def test_first_choice(self):
        """Reads choices[0].message.content."""
        data = {"choices": [{"message": {"content": "A"}}, {"message": {"content": "B"}}]}
        assert extract_reply(data) == "A"

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"choices": []},
            {"choices": None},
            {"choices": ["nope"]},
            {"choices": [{}]},
            {"choices": [{"message": {}}]},
            {"choices": [{"message": {"content": None}}]},
        ],
    )
    def test_malformed(self, data):
        """Missing levels yield None."""
        assert extract_reply(data) is None


class TestChatClient:
    """Tests for ChatClient.complete."""

    @pytest.mark.asyncio
    async def test_request_shape(self, services):
        """Sends model, full history and stream=false with a bearer token."""
        client = make_client(services)
        history = ConversationHistory("sys")
        history.add_user("Hello")

        reply = await client.complete(history)
        await client.close()

        assert reply == "Hi there"
        request = services.chat_calls[0]
        assert request.headers["Authorization"] == "Bearer chat-key"
        assert services.last_json(services.chat_calls) == {
            "model": "test-model",
            "messages": [
                {"role": "system", "content": "sys"},
                {"role": "user", "content": "Hello"},
            ],
            "stream": False,
        }

    @pytest.mark.asyncio
    async def test_round_trip_history(self, services):
        """N messages go out in order and the reply text comes back exactly."""
        services.chat_replies = [(200, {"choices": [{"message": {"content": "X"}}]})]
        history = ConversationHistory("sys")
        for i in range(3):
            history.add_user(f"u{i}")
            history.add_assistant(f"a{i}")
        history.add_user("last")

        client = make_client(services)
        reply = await client.complete(history)
        await client.close()

        sent = services.last_json(services.chat_calls)["messages"]
        assert sent == history.to_payload()
        assert len(sent) == 8
        assert reply == "X"

    @pytest.mark.asyncio
    async def test_unparseable_body_returns_none(self, services):
        """A non-JSON body is treated as no reply."""
        services.chat_replies = [(200, "<html>oops</html>")]
        client = make_client(services)
        assert await client.complete(ConversationHistory()) is None
        await client.close()

    @pytest.mark.asyncio
    async def test_missing_content_returns_none(self, services):
        """An empty choices list is treated as no reply."""
        services.chat_replies = [(200, {"choices": []})]
        client = make_client(services)
        assert await client.complete(ConversationHistory()) is None
        await client.close()

    @pytest.mark.asyncio
    async def test_http_error_raises(self, services):
        """Non-2xx is a transport error carrying the status."""
        services.chat_replies = [(401, {"error": "bad key"})]
        client = make_client(services)
        with pytest.raises(TransportError) as exc_info:
            await client.complete(ConversationHistory())
        await client.close()
        assert exc_info.value.status_code == 401
        assert len(services.chat_calls) == 1

    @pytest.mark.asyncio
    async def test_network_error_raises(self):
        """Connection failures are transport errors."""

        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        client = ChatClient(CHAT_BASE, "k", "m", transport=httpx.MockTransport(handler))
        with pytest.raises(TransportError):
            await client.complete(ConversationHistory())
        await client.close()
