"""Call session storage."""
import asyncio
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Optional

from food_ordering.services.call_session.models import CallSession


class SessionStore(ABC):
    """
    Maps call connection ids to call sessions.

    Callers must hold ``lock(call_connection_id)`` around any
    read-modify-write of a session.
    """

    @abstractmethod
    async def get(self, call_connection_id: str) -> Optional[CallSession]:
        """Get a session, or None if the call has none."""
        pass

    @abstractmethod
    async def get_or_create(self, call_connection_id: str) -> CallSession:
        """Get a session, creating an empty one if absent."""
        pass

    @abstractmethod
    async def remove(self, call_connection_id: str) -> Optional[CallSession]:
        """Remove and return a session; None if it was already absent."""
        pass

    @abstractmethod
    def lock(self, call_connection_id: str):
        """Async context manager serializing access to one call's session."""
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass


class InMemorySessionStore(SessionStore):
    """Process-local session store. Sessions do not survive a restart."""

    def __init__(self):
        self._sessions: Dict[str, CallSession] = {}
        self._locks: Dict[str, asyncio.Lock] = {}
        self._lock_users: Dict[str, int] = {}

    async def get(self, call_connection_id: str) -> Optional[CallSession]:
        return self._sessions.get(call_connection_id)

    async def get_or_create(self, call_connection_id: str) -> CallSession:
        session = self._sessions.get(call_connection_id)
        if session is None:
            session = CallSession(call_connection_id)
            self._sessions[call_connection_id] = session
        return session

    async def remove(self, call_connection_id: str) -> Optional[CallSession]:
        return self._sessions.pop(call_connection_id, None)

    @asynccontextmanager
    async def lock(self, call_connection_id: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(call_connection_id, asyncio.Lock())
        self._lock_users[call_connection_id] = self._lock_users.get(call_connection_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            # Drop the lock once nobody holds or waits on it
            self._lock_users[call_connection_id] -= 1
            if self._lock_users[call_connection_id] == 0:
                del self._lock_users[call_connection_id]
                del self._locks[call_connection_id]

    def __len__(self) -> int:
        return len(self._sessions)

    def clear(self) -> None:
        self._sessions.clear()
