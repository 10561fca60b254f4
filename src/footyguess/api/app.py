"""FastAPI application factory."""

import logging
from datetime import UTC, datetime

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from footyguess.api.admin import router as admin_router
from footyguess.api.daily import router as daily_router
from footyguess.api.leaderboard import router as leaderboard_router
from footyguess.api.models import ErrorResponse
from footyguess.app_logging import configure_logging
from footyguess.containers import AppContainer
from footyguess.domain.errors import (
    ConsistencyError,
    DailyChallengeError,
    DuplicateSubmissionError,
    NotFoundError,
    StoreError,
    TransientStoreError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: tuple[tuple[type[DailyChallengeError], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ConsistencyError, status.HTTP_400_BAD_REQUEST),
    (DuplicateSubmissionError, status.HTTP_409_CONFLICT),
    (NotFoundError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (StoreError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (TransientStoreError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)

    app = FastAPI(title="FootyGuess Daily")
    app.state.container = container

    app.include_router(daily_router)
    app.include_router(leaderboard_router)
    app.include_router(admin_router)

    @app.exception_handler(DailyChallengeError)
    async def handle_daily_challenge_error(
        request: Request, exc: DailyChallengeError
    ) -> JSONResponse:
        status_code = status_for_error(exc)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(
                "Daily challenge request failed",
                exc_info=exc,
                extra={"path": request.url.path, "code": exc.code},
            )
        else:
            logger.warning(
                "Daily challenge request rejected: %s",
                exc.message,
                extra={"path": request.url.path, "code": exc.code},
            )
        body = ErrorResponse(
            error=exc.message,
            code=exc.code,
            details=[exc.message],
            timestamp=datetime.now(tz=UTC),
        )
        return JSONResponse(
            status_code=status_code, content=body.model_dump(mode="json")
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def status_for_error(exc: DailyChallengeError) -> int:
    """Return the HTTP status for a daily challenge error."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR
