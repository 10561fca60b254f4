"""Leaderboard rank computation."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol

from footyguess.domain.models import DailySubmission
from footyguess.domain.ranking import RankPosition
from footyguess.services.clock import Clock


class RankRepository(Protocol):
    """Counting query over stored submissions."""

    def count_ranked_above(self, date_utc: date, position: RankPosition) -> int:
        """Count submissions on the date placed strictly before ``position``."""


@dataclass
class RankCalculator:
    """Computes 1-based ranks under the leaderboard order.

    Ranks are always recomputed from storage rather than cached, so a rank read
    during concurrent inserts is at worst momentarily stale.
    """

    repository: RankRepository
    clock: Clock

    def rank(
        self, date_utc: date, score: int, time_ms: int, instant: datetime
    ) -> int:
        """Return the rank a result would hold on ``date_utc`` at ``instant``."""
        position = RankPosition(
            total_score=score,
            total_time_ms=time_ms,
            submission_timestamp=instant,
        )
        return 1 + self.repository.count_ranked_above(date_utc, position)

    def persisted_rank(self, submission: DailySubmission) -> int:
        """Rank of a stored submission, using its own timestamp."""
        return self.rank(
            submission.date_utc,
            submission.total_score,
            submission.total_time_ms,
            submission.submission_timestamp,
        )

    def potential_rank(self, date_utc: date, score: int, time_ms: int) -> int:
        """Rank a result would get if it were stored right now."""
        return self.rank(date_utc, score, time_ms, self.clock.now())
