"""Leaderboard endpoints."""

from __future__ import annotations

import re
from datetime import date
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Query, Request, Response, status

from footyguess.api.models import LeaderboardEntryResponse, LeaderboardResponse
from footyguess.services.clock import today_utc
from footyguess.services.leaderboard import MAX_LIMIT, MIN_LIMIT

if TYPE_CHECKING:
    from footyguess.containers import AppContainer
    from footyguess.domain.leaderboard import LeaderboardPage

router = APIRouter(prefix="/api/leaderboard", tags=["leaderboard"])

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@router.get("", response_model=LeaderboardResponse)
def todays_leaderboard(
    request: Request,
    response: Response,
    limit: int | None = Query(default=None, ge=MIN_LIMIT, le=MAX_LIMIT),
) -> LeaderboardResponse:
    """Return today's leaderboard."""
    container: AppContainer = request.app.state.container
    page = container.leaderboard_service.get_leaderboard(limit=limit)
    response.headers["Cache-Control"] = "public, max-age=60, s-maxage=60"
    return _to_response(page)


@router.get("/dates")
def leaderboard_dates(
    request: Request, limit: int = Query(default=30, ge=1, le=365)
) -> dict[str, list[str]]:
    """Return dates that have leaderboard data, newest first."""
    container: AppContainer = request.app.state.container
    dates = container.leaderboard_service.available_dates(limit)
    return {"dates": [day.isoformat() for day in dates]}


@router.get("/{date_utc}", response_model=LeaderboardResponse)
def leaderboard_for_date(
    date_utc: str,
    request: Request,
    response: Response,
    limit: int | None = Query(default=None, ge=MIN_LIMIT, le=MAX_LIMIT),
) -> LeaderboardResponse:
    """Return the leaderboard for a past or current date."""
    container: AppContainer = request.app.state.container
    requested = _parse_date(date_utc)
    if requested > today_utc(container.clock):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot retrieve leaderboard for future dates",
        )
    page = container.leaderboard_service.get_leaderboard(requested, limit)
    response.headers["Cache-Control"] = "public, max-age=300, s-maxage=300"
    return _to_response(page)


def _parse_date(raw: str) -> date:
    if not _DATE_PATTERN.match(raw):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Date must be in YYYY-MM-DD format",
        )
    try:
        return date.fromisoformat(raw)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Date must be in YYYY-MM-DD format",
        ) from exc


def _to_response(page: LeaderboardPage) -> LeaderboardResponse:
    return LeaderboardResponse(
        date_utc=page.date_utc,
        leaderboard=[
            LeaderboardEntryResponse.model_validate(entry) for entry in page.entries
        ],
        total_submissions=page.total_submissions,
    )
