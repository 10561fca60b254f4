"""Daily challenge and single-photo scoring endpoints."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from footyguess.api.identity import RequestIdentity, resolve_request_identity
from footyguess.api.models import (
    DailySetResponse,
    DailySubmissionRequest,
    DailySubmissionResponse,
    PhotoGuessRequest,
    PhotoScoreResultResponse,
    SubmissionCheckResponse,
)
from footyguess.domain.models import Guess
from footyguess.services.clock import today_utc
from footyguess.services.dedup import DedupGuard

if TYPE_CHECKING:
    from footyguess.containers import AppContainer

router = APIRouter(prefix="/api", tags=["daily"])


@router.get("/daily/sets/today", response_model=DailySetResponse)
def todays_daily_set(request: Request, response: Response) -> DailySetResponse:
    """Return today's published daily set without answers."""
    container: AppContainer = request.app.state.container
    daily_set = container.daily_set_service.get_today()
    if daily_set is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No daily set published for today",
        )
    response.headers["Cache-Control"] = "public, max-age=300, s-maxage=300"
    return DailySetResponse.model_validate(daily_set)


@router.post("/daily/submissions", response_model=DailySubmissionResponse)
def submit_daily_challenge(
    body: DailySubmissionRequest,
    request: Request,
    identity: RequestIdentity = Depends(resolve_request_identity),
) -> DailySubmissionResponse:
    """Score a daily attempt and store it when the caller has an identity."""
    container: AppContainer = request.app.state.container
    result = container.submission_service.submit(
        body.to_command(),
        user_id=identity.user_id,
        device_token=identity.device_token,
    )
    return DailySubmissionResponse.model_validate(result)


@router.get("/daily/submissions/check", response_model=SubmissionCheckResponse)
def check_daily_submission(
    request: Request,
    date_utc: date | None = None,
    identity: RequestIdentity = Depends(resolve_request_identity),
) -> SubmissionCheckResponse:
    """Report whether the caller already submitted for the date (today by default)."""
    container: AppContainer = request.app.state.container
    lookup = DedupGuard.lookup_identity(identity.user_id, identity.device_token)
    if lookup is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Device token or sign-in is required",
        )
    resolved_date = date_utc or today_utc(container.clock)
    check = container.submission_service.check(resolved_date, lookup)
    return SubmissionCheckResponse.model_validate(check)


@router.post("/photos/{photo_id}/score", response_model=PhotoScoreResultResponse)
def score_photo(
    photo_id: UUID, body: PhotoGuessRequest, request: Request
) -> PhotoScoreResultResponse:
    """Score a single guess and reveal the answer."""
    container: AppContainer = request.app.state.container
    result = container.photo_scoring_service.score_photo(
        Guess(
            photo_id=photo_id,
            guessed_lat=body.guessed_lat,
            guessed_lon=body.guessed_lon,
            guessed_year=body.guessed_year,
        )
    )
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Photo not found"
        )
    return PhotoScoreResultResponse.model_validate(result)
