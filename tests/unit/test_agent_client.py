"""Unit tests for the conversational agent client."""
import json

import httpx
import pytest

from food_ordering.services.agent.client import AgentClient, AgentServiceError
from food_ordering.services.agent.constants import FALLBACK_REPLY

ENDPOINT = "https://agent.example.test"


def make_client(handler, api_key="agent-key"):
    return AgentClient(ENDPOINT, api_key=api_key, transport=httpx.MockTransport(handler))


class TestAgentClient:
    """Test agent session lifecycle and turns."""

    @pytest.mark.asyncio
    async def test_create_session(self):
        """Test a session id is returned and the api key is sent."""
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["request"] = request
            return httpx.Response(201, json={"sessionId": "sess-1"})

        session_id = await make_client(handler).create_session()

        assert session_id == "sess-1"
        assert captured["request"].method == "POST"
        assert captured["request"].url.path == "/sessions"
        assert captured["request"].headers["api-key"] == "agent-key"

    @pytest.mark.asyncio
    async def test_create_session_without_id(self):
        """Test a response without sessionId is an error."""
        client = make_client(lambda request: httpx.Response(200, json={}))

        with pytest.raises(AgentServiceError):
            await client.create_session()

    @pytest.mark.asyncio
    async def test_create_session_http_error(self):
        """Test HTTP failures raise AgentServiceError."""
        client = make_client(lambda request: httpx.Response(503))

        with pytest.raises(AgentServiceError):
            await client.create_session()

    @pytest.mark.asyncio
    async def test_send(self):
        """Test a user turn is posted and the reply returned."""
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["request"] = request
            return httpx.Response(200, json={"reply": "Which size would you like?"})

        reply = await make_client(handler).send("sess-1", "A margherita please")

        assert reply == "Which size would you like?"
        assert captured["request"].url.path == "/sessions/sess-1/messages"
        assert json.loads(captured["request"].content) == {"message": "A margherita please"}

    @pytest.mark.asyncio
    async def test_send_without_reply(self):
        """Test a response without reply yields the fallback apology."""
        client = make_client(lambda request: httpx.Response(200, json={"reply": ""}))

        assert await client.send("sess-1", "Hello") == FALLBACK_REPLY

    @pytest.mark.asyncio
    async def test_send_error(self):
        """Test HTTP failures raise AgentServiceError."""
        client = make_client(lambda request: httpx.Response(500))

        with pytest.raises(AgentServiceError):
            await client.send("sess-1", "Hello")

    @pytest.mark.asyncio
    async def test_delete_session(self):
        """Test session deletion."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append((request.method, request.url.path))
            return httpx.Response(204)

        await make_client(handler).delete_session("sess-1")

        assert calls == [("DELETE", "/sessions/sess-1")]

    @pytest.mark.asyncio
    async def test_delete_session_best_effort(self):
        """Test deletion failures and missing sessions do not raise."""
        await make_client(lambda request: httpx.Response(404)).delete_session("sess-1")
        await make_client(lambda request: httpx.Response(500)).delete_session("sess-1")

    @pytest.mark.asyncio
    async def test_no_api_key_header(self):
        """Test the api-key header is omitted when no key is configured."""
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["request"] = request
            return httpx.Response(200, json={"sessionId": "sess-2"})

        await make_client(handler, api_key=None).create_session()

        assert "api-key" not in captured["request"].headers
