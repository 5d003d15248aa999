"""Session repository port.

Defines the abstract interface for FutureGraph session storage. How
sessions are physically stored is an adapter concern; the workflow only
relies on versioned compare-and-swap writes.

Developer Golden Rules:
1. FAIL LOUD - Repository raises on errors, never returns partial data
2. CAS FOR EVERY WRITE - save() compares the stored version first
3. NO LOGIC - Validation lives in the domain, not in the repository
"""

from __future__ import annotations

from typing import Protocol

from futuregraph.domain.models.session import Session


class SessionRepositoryProtocol(Protocol):
    """Protocol for session storage operations.

    Implementations may use a document store, a relational database, or
    in-memory storage.

    Methods:
        create: Store a brand-new session
        get: Retrieve a session by ID
        save: Versioned write of an updated session
        list_by_client: Sessions of one client owned by one user
    """

    async def create(self, session: Session) -> Session:
        """Store a new session.

        Args:
            session: Session at version 0.

        Returns:
            The stored session.

        Raises:
            ValueError: If a session with the same ID already exists.
        """
        ...

    async def get(self, session_id: str) -> Session | None:
        """Retrieve a session by ID.

        Args:
            session_id: The session identifier.

        Returns:
            The session if found, None otherwise.
        """
        ...

    async def save(self, session: Session, expected_version: int) -> Session:
        """Atomically replace a session if its stored version matches.

        Args:
            session: The updated session.
            expected_version: The version the caller read before mutating.

        Returns:
            The stored session, carrying version expected_version + 1.

        Raises:
            SessionNotFoundError: If the session does not exist.
            ConcurrentModificationError: If the stored version differs
                from expected_version.
        """
        ...

    async def list_by_client(self, client_id: str, user_id: str) -> list[Session]:
        """List one user's sessions for a client, newest first.

        Args:
            client_id: The client whose sessions to list.
            user_id: The owning therapist.

        Returns:
            Sessions ordered by start_time descending.
        """
        ...
