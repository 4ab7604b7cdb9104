from typing import TYPE_CHECKING, Iterable

from datematch.core.validators import ValidationResult
from datematch.models.match import MatchStatusEnum
from datematch.schemas.match import MatchRecord

if TYPE_CHECKING:
    from datematch.core.session import MatchSession


def unrated_matches(matches: Iterable[MatchRecord]) -> list[MatchRecord]:

    return [
        m for m in matches
        if m.status == MatchStatusEnum.DATE_PASSED and m.my_rating is None
    ]


def has_blocking_unrated_match(matches: Iterable[MatchRecord]) -> bool:
    """
    Starting a new activity is blocked while any past date is still unrated.

    Expired matches never block: only ``date_passed`` asks for a rating.
    """
    return any(
        m.status == MatchStatusEnum.DATE_PASSED and m.my_rating is None
        for m in matches
    )


class RatingGate:

    def __init__(self, session: "MatchSession"):
        self.session = session

    def is_blocked(self) -> bool:
        return has_blocking_unrated_match(self.session.matches.all())

    def pending(self) -> list[MatchRecord]:
        return unrated_matches(self.session.matches.all())

    def check_can_start_activity(self) -> ValidationResult:
        pending = self.pending()
        if pending:
            return ValidationResult(
                is_valid=False,
                error_message=f"Rate your {len(pending)} past date(s) before starting a new activity",
            )
        return ValidationResult(is_valid=True)
