"""Shared helpers for Supabase queries."""

from datetime import date, datetime
from typing import Any

import httpx
from postgrest.exceptions import APIError

from footyguess.domain.errors import StoreError, TransientStoreError
from footyguess.domain.ranking import RANK_ORDER, Rankable

UNIQUE_VIOLATION = "23505"

# PostgREST connection and schema-cache failures, sent with HTTP 503/504.
_TRANSIENT_CODES = frozenset({"PGRST000", "PGRST001", "PGRST002", "PGRST003"})
# SQLSTATE connection, resource and operator-intervention classes, plus
# serialization failure and deadlock.
_TRANSIENT_SQLSTATE_PREFIXES = ("08", "53", "57P", "40001", "40P01")


def execute(query: Any) -> Any:
    """Execute a PostgREST query, translating failures into domain errors.

    Unique violations are re-raised unchanged so callers can map them to
    their own conflict error.
    """
    try:
        return query.execute()
    except httpx.HTTPError as exc:
        raise TransientStoreError(f"Supabase request failed: {exc}") from exc
    except APIError as exc:
        if exc.code == UNIQUE_VIOLATION:
            raise
        if is_transient_api_error(exc):
            raise TransientStoreError(
                f"Supabase is unavailable: {exc.message}"
            ) from exc
        raise StoreError(f"Supabase rejected the request: {exc.message}") from exc


def is_transient_api_error(exc: APIError) -> bool:
    """Return True when a PostgREST error is worth retrying."""
    code = exc.code or ""
    return code in _TRANSIENT_CODES or code.startswith(_TRANSIENT_SQLSTATE_PREFIXES)


def order_by_rank(query: Any) -> Any:
    """Apply the leaderboard order to a query."""
    for column in RANK_ORDER:
        query = query.order(column.name, desc=column.descending)
    return query


def ranked_above_filter(position: Rankable) -> str:
    """Build a PostgREST ``or`` filter matching rows placed before ``position``.

    For columns c1..cn the filter is ``c1 beats`` OR ``c1 ties and c2 beats``
    and so on, mirroring ``ranks_above``.
    """
    clauses = []
    for index, column in enumerate(RANK_ORDER):
        conditions = [
            f"{prior.name}.eq.{_literal(getattr(position, prior.name))}"
            for prior in RANK_ORDER[:index]
        ]
        operator = "gt" if column.descending else "lt"
        conditions.append(
            f"{column.name}.{operator}.{_literal(getattr(position, column.name))}"
        )
        if len(conditions) == 1:
            clauses.append(conditions[0])
        else:
            clauses.append(f"and({','.join(conditions)})")
    return ",".join(clauses)


def parse_timestamp(raw: object) -> datetime:
    """Parse a timestamptz value returned by PostgREST."""
    if isinstance(raw, datetime):
        return raw
    text = str(raw)
    if text.endswith("Z"):
        text = f"{text[:-1]}+00:00"
    return datetime.fromisoformat(text)


def parse_date(raw: object) -> date:
    """Parse a date column returned by PostgREST."""
    if isinstance(raw, date):
        return raw
    return date.fromisoformat(str(raw))


def _literal(value: object) -> str:
    if isinstance(value, datetime):
        return f'"{value.isoformat()}"'
    return str(value)
