"""Leaderboard ordering.

The order is defined once in ``RANK_ORDER``: higher score first, then lower
time, then earlier submission. The Python comparator and the storage queries
are both derived from it, so persisted ranks, potential ranks and the
leaderboard listing can never disagree.
"""

from dataclasses import dataclass
from datetime import datetime
from functools import cmp_to_key
from typing import Protocol


@dataclass(frozen=True)
class RankColumn:
    """One level of the leaderboard order."""

    name: str
    descending: bool


RANK_ORDER: tuple[RankColumn, ...] = (
    RankColumn("total_score", descending=True),
    RankColumn("total_time_ms", descending=False),
    RankColumn("submission_timestamp", descending=False),
)


class Rankable(Protocol):
    """Anything carrying the three ranking attributes."""

    total_score: int
    total_time_ms: int
    submission_timestamp: datetime


@dataclass(frozen=True)
class RankPosition:
    """A point in the leaderboard order."""

    total_score: int
    total_time_ms: int
    submission_timestamp: datetime


def ranks_above(a: Rankable, b: Rankable) -> bool:
    """Return true when ``a`` is placed strictly before ``b``."""
    for column in RANK_ORDER:
        left = getattr(a, column.name)
        right = getattr(b, column.name)
        if left == right:
            continue
        return left > right if column.descending else left < right
    return False


def compare(a: Rankable, b: Rankable) -> int:
    """Three-way comparison following ``RANK_ORDER``."""
    if ranks_above(a, b):
        return -1
    if ranks_above(b, a):
        return 1
    return 0


rank_key = cmp_to_key(compare)


def rank_among(position: Rankable, others: list[Rankable]) -> int:
    """Return the 1-based rank of ``position`` among ``others``."""
    return 1 + sum(1 for other in others if ranks_above(other, position))
