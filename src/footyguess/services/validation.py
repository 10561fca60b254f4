"""Structural validation of daily submissions."""

import re
from dataclasses import dataclass

from footyguess.domain import errors
from footyguess.domain.errors import ConsistencyError, ValidationError
from footyguess.domain.models import DailySet, DailySubmissionCommand
from footyguess.services.daily_sets import DAILY_SET_PHOTO_COUNT, DailySetRepository

NICKNAME_MIN_LENGTH = 3
NICKNAME_MAX_LENGTH = 20
NICKNAME_PATTERN = re.compile(r"[a-zA-Z0-9 _-]+")


def validate_nickname(nickname: str | None) -> str:
    """Return the nickname if it satisfies the shared format, else raise."""
    if nickname is None or not (
        NICKNAME_MIN_LENGTH <= len(nickname) <= NICKNAME_MAX_LENGTH
    ):
        raise ValidationError(
            f"Nickname must be between {NICKNAME_MIN_LENGTH} and "
            f"{NICKNAME_MAX_LENGTH} characters",
            code=errors.INVALID_NICKNAME,
        )
    if not NICKNAME_PATTERN.fullmatch(nickname):
        raise ValidationError(
            "Nickname must contain only letters, numbers, spaces, hyphens, "
            "and underscores",
            code=errors.INVALID_NICKNAME,
        )
    return nickname


@dataclass
class SubmissionValidator:
    """Checks a command against its daily set before any scoring."""

    daily_set_repository: DailySetRepository
    photo_count: int = DAILY_SET_PHOTO_COUNT

    def validate(
        self, command: DailySubmissionCommand, will_persist: bool
    ) -> DailySet:
        """Validate the command and return the daily set it targets."""
        if len(command.guesses) != self.photo_count:
            raise ValidationError(
                f"Must provide exactly {self.photo_count} guesses",
                code=errors.INVALID_GUESS_COUNT,
            )

        daily_set = self.daily_set_repository.get_daily_set(command.daily_set_id)
        if daily_set is None or daily_set.date_utc != command.date_utc:
            raise ConsistencyError(
                "The daily set does not exist for this date",
                code=errors.DAILY_SET_MISMATCH,
            )

        guessed_ids = {guess.photo_id for guess in command.guesses}
        if guessed_ids != daily_set.photo_ids:
            raise ConsistencyError(
                "The submitted photo IDs do not match the daily set",
                code=errors.PHOTO_ID_MISMATCH,
            )

        if will_persist:
            validate_nickname(command.nickname)
        return daily_set
