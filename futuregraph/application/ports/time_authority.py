"""Time authority port.

Services that stamp sessions or rounds inject this protocol instead of
calling datetime.now() directly, so tests can freeze and advance time.
"""

from abc import ABC, abstractmethod
from datetime import datetime


class TimeAuthorityProtocol(ABC):
    """Abstract interface for time authority.

    For production:
        Use SystemTimeAuthority from futuregraph/application/services/

    For testing:
        Use FakeTimeAuthority from tests/helpers/fake_time_authority.py
    """

    @abstractmethod
    def now(self) -> datetime:
        """Return current time as a timezone-aware datetime (UTC)."""
        ...

    @abstractmethod
    def monotonic(self) -> float:
        """Return monotonic clock value for measuring elapsed time.

        Only differences between values are meaningful.
        """
        ...
