"""In-memory session repository stub.

Implements SessionRepositoryProtocol for development and testing. Not
suitable for production: sessions live only as long as the process.
"""

from __future__ import annotations

import asyncio

from futuregraph.application.ports.session_repository import (
    SessionRepositoryProtocol,
)
from futuregraph.domain.errors.concurrent_modification import (
    ConcurrentModificationError,
)
from futuregraph.domain.errors.session import SessionNotFoundError
from futuregraph.domain.models.session import Session


class SessionRepositoryStub(SessionRepositoryProtocol):
    """In-memory stub implementation of SessionRepositoryProtocol.

    Attributes:
        _sessions: Dictionary mapping session_id to the stored Session.
        save_count: Number of successful versioned saves (test aid).
    """

    def __init__(self) -> None:
        """Initialize the stub with empty storage."""
        self._sessions: dict[str, Session] = {}
        # Lock for simulating atomic compare-and-swap writes
        self._cas_lock = asyncio.Lock()
        self.save_count = 0

    async def create(self, session: Session) -> Session:
        """Store a new session.

        Raises:
            ValueError: If the session ID already exists.
        """
        async with self._cas_lock:
            if session.session_id in self._sessions:
                raise ValueError(f"Session already exists: {session.session_id}")
            self._sessions[session.session_id] = session
        return session

    async def get(self, session_id: str) -> Session | None:
        """Retrieve a session by ID."""
        return self._sessions.get(session_id)

    async def save(self, session: Session, expected_version: int) -> Session:
        """Replace a session if the stored version matches.

        Raises:
            SessionNotFoundError: If the session does not exist.
            ConcurrentModificationError: If the stored version differs.
        """
        async with self._cas_lock:
            stored = self._sessions.get(session.session_id)
            if stored is None:
                raise SessionNotFoundError(session.session_id)
            if stored.version != expected_version:
                raise ConcurrentModificationError(
                    session_id=session.session_id,
                    expected_version=expected_version,
                    actual_version=stored.version,
                )
            updated = session.with_version(expected_version + 1)
            self._sessions[session.session_id] = updated
            self.save_count += 1
        return updated

    async def list_by_client(self, client_id: str, user_id: str) -> list[Session]:
        """List one user's sessions for a client, newest first."""
        matching = [
            s
            for s in self._sessions.values()
            if s.client_id == client_id and s.user_id == user_id
        ]
        matching.sort(key=lambda s: s.start_time, reverse=True)
        return matching

    # Test helpers

    def put(self, session: Session) -> None:
        """Store a session as-is, bypassing version checks."""
        self._sessions[session.session_id] = session

    def clear(self) -> None:
        """Remove every stored session."""
        self._sessions.clear()
        self.save_count = 0
