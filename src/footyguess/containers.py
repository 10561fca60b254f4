"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from footyguess.adapters.supabase_auth_client import AuthClient, SupabaseAuthClient
from footyguess.adapters.supabase_daily_set_repository import (
    SupabaseDailySetRepository,
)
from footyguess.adapters.supabase_nickname_repository import (
    SupabaseDeviceNicknameRepository,
)
from footyguess.adapters.supabase_photo_repository import SupabasePhotoRepository
from footyguess.adapters.supabase_submission_repository import (
    SupabaseSubmissionRepository,
)
from footyguess.config import Settings, parse_scoring_mode
from footyguess.services.admin import AdminService
from footyguess.services.clock import Clock, SystemClock
from footyguess.services.daily_sets import DailySetService
from footyguess.services.dedup import DedupGuard
from footyguess.services.leaderboard import LeaderboardService
from footyguess.services.photos import PhotoScoringService
from footyguess.services.ranking import RankCalculator
from footyguess.services.submissions import SubmissionPersister, SubmissionService
from footyguess.services.validation import SubmissionValidator


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    clock: Clock
    auth_client: AuthClient
    submission_service: SubmissionService
    leaderboard_service: LeaderboardService
    daily_set_service: DailySetService
    photo_scoring_service: PhotoScoringService
    admin_service: AdminService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    clock = SystemClock()
    submission_repository = SupabaseSubmissionRepository(supabase_client)
    photo_repository = SupabasePhotoRepository(supabase_client)
    daily_set_repository = SupabaseDailySetRepository(supabase_client)
    nickname_repository = SupabaseDeviceNicknameRepository(supabase_client)

    rank_calculator = RankCalculator(submission_repository, clock)
    submission_service = SubmissionService(
        validator=SubmissionValidator(daily_set_repository),
        photo_repository=photo_repository,
        dedup_guard=DedupGuard(submission_repository),
        persister=SubmissionPersister(submission_repository),
        rank_calculator=rank_calculator,
        nickname_repository=nickname_repository,
        clock=clock,
        scoring_mode=parse_scoring_mode(resolved_settings.daily_scoring_mode),
    )
    leaderboard_service = LeaderboardService(
        repository=submission_repository,
        clock=clock,
        default_limit=resolved_settings.leaderboard_default_limit,
    )
    daily_set_service = DailySetService(daily_set_repository, clock)
    photo_scoring_service = PhotoScoringService(
        repository=photo_repository,
        scoring_mode=parse_scoring_mode(resolved_settings.normal_scoring_mode),
    )
    admin_service = AdminService(submission_repository)

    return AppContainer(
        settings=resolved_settings,
        clock=clock,
        auth_client=SupabaseAuthClient(supabase_client),
        submission_service=submission_service,
        leaderboard_service=leaderboard_service,
        daily_set_service=daily_set_service,
        photo_scoring_service=photo_scoring_service,
        admin_service=admin_service,
    )
