"""Call session models."""
from typing import Optional


class CallSession:
    """Mutable state of one active call."""

    def __init__(self, call_connection_id: str):
        self.call_connection_id = call_connection_id
        self.language: Optional[str] = None  # Set once, on first detected utterance
        self.silence_count = 0
        self.agent_session_id: Optional[str] = None
        self.caller_id: Optional[str] = None  # Raw ACS identifier of the caller

    def __repr__(self) -> str:
        return (
            f"CallSession(call_connection_id={self.call_connection_id!r}, "
            f"language={self.language!r}, silence_count={self.silence_count}, "
            f"agent_session_id={self.agent_session_id!r})"
        )
