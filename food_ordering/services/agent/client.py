"""Conversational agent client."""
import logging
from typing import Optional

import httpx

from food_ordering.services.agent.constants import FALLBACK_REPLY

logger = logging.getLogger(__name__)


class AgentServiceError(Exception):
    """Raised when the agent service cannot create a session or answer a turn."""


class AgentClient:
    """
    REST client for the conversational agent service.

    Each call owns one agent session; the service keeps the conversation
    history for that session.
    """

    def __init__(
        self,
        endpoint: str,
        api_key: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.endpoint = endpoint.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        headers = {"api-key": self.api_key} if self.api_key else {}
        return httpx.AsyncClient(
            base_url=self.endpoint,
            headers=headers,
            timeout=self.timeout,
            transport=self.transport,
        )

    async def create_session(self) -> str:
        """Create an agent session and return its id."""
        try:
            async with self._client() as client:
                response = await client.post("/sessions")
                response.raise_for_status()
                session_id = response.json().get("sessionId")
        except (httpx.HTTPError, ValueError, AttributeError) as e:
            raise AgentServiceError(f"Agent session creation failed: {str(e)}") from e

        if not session_id:
            raise AgentServiceError("Agent session creation returned no sessionId")
        logger.info(f"[AGENT] Created agent session {session_id}")
        return session_id

    async def send(self, session_id: str, text: str) -> str:
        """
        Send a user turn and return the agent's reply.

        A response without a reply yields the fallback apology.
        """
        try:
            async with self._client() as client:
                response = await client.post(
                    f"/sessions/{session_id}/messages",
                    json={"message": text},
                )
                response.raise_for_status()
                body = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise AgentServiceError(f"Agent turn failed: {str(e)}") from e

        reply = body.get("reply") if isinstance(body, dict) else None
        if not reply:
            logger.warning(f"[AGENT] No reply in agent response - Session: {session_id}")
            return FALLBACK_REPLY
        return reply

    async def delete_session(self, session_id: str) -> None:
        """Delete an agent session. Best-effort: failures are logged."""
        try:
            async with self._client() as client:
                response = await client.delete(f"/sessions/{session_id}")
                if response.status_code != 404:
                    response.raise_for_status()
            logger.info(f"[AGENT] Deleted agent session {session_id}")
        except httpx.HTTPError as e:
            logger.warning(f"[AGENT] Failed to delete agent session {session_id}: {str(e)}")
