"""Concurrent modification error for optimistic session writes.

Every session write carries the version it was read at. When the stored
version has moved on, another writer got there first and the write is
refused with this error.
"""

from __future__ import annotations

from futuregraph.domain.exceptions import FuturegraphError


class ConcurrentModificationError(FuturegraphError):
    """Raised when a versioned session save loses a compare-and-swap.

    Recoverable: the workflow service re-reads the session, re-validates
    and re-applies its mutation a bounded number of times before
    surfacing this error.

    Attributes:
        session_id: The session being written.
        expected_version: Version the writer read.
        actual_version: Version currently stored.
        operation: The operation that attempted the write.
    """

    def __init__(
        self,
        session_id: str,
        expected_version: int,
        actual_version: int,
        operation: str = "save",
    ) -> None:
        self.session_id = session_id
        self.expected_version = expected_version
        self.actual_version = actual_version
        self.operation = operation
        super().__init__(
            f"Concurrent modification detected for session {session_id} "
            f"during {operation}. Expected version {expected_version}, "
            f"found {actual_version}."
        )
