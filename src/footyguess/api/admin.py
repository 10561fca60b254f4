"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, status

from footyguess.services.clock import today_utc

if TYPE_CHECKING:
    from footyguess.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/submissions", dependencies=[Depends(require_admin)])
async def list_submissions(
    request: Request,
    date_utc: date | None = None,
    limit: int = Query(default=50, ge=1, le=1000),
) -> dict[str, object]:
    """Return stored submissions for a date with the identity behind each."""
    container: AppContainer = request.app.state.container
    resolved_date = date_utc or today_utc(container.clock)
    return {
        "date_utc": resolved_date.isoformat(),
        "submissions": container.admin_service.list_submissions(
            resolved_date, limit
        ),
    }
