"""Time source abstraction."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol


class Clock(Protocol):
    """Source of the current instant."""

    def now(self) -> datetime:
        """Return the current time as an aware UTC datetime."""


@dataclass
class SystemClock(Clock):
    """Clock backed by the system time."""

    def now(self) -> datetime:
        return datetime.now(tz=UTC)


def today_utc(clock: Clock) -> date:
    """Return the current calendar date in UTC."""
    return clock.now().astimezone(UTC).date()
