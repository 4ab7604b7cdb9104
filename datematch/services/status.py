from datetime import date, timezone
from typing import TYPE_CHECKING, Optional, Sequence

from datematch.models.match import (
    ELAPSED_STATUSES,
    ConfirmationStatusEnum,
    MatchStatusEnum,
)
from datematch.schemas.match import MatchRecord
from datematch.schemas.message import MessageRecord
from datematch.services.conversation import has_two_confirmations

if TYPE_CHECKING:
    from datematch.core.session import MatchSession

FINALIZE_PROMPT_STATUSES = frozenset({
    ConfirmationStatusEnum.WAITING_FOR_ME,
    ConfirmationStatusEnum.NOT_CONFIRMED,
})


def project_status(match: Optional[MatchRecord]) -> ConfirmationStatusEnum:
    """
    Collapse a match record into the label that drives the chat controls.

    Server-side status always wins over the local confirmation flags. The
    waiting_for_me / waiting_for_them names are kept exactly as the flag
    conditions below produce them, even though they read inverted.

    Args:
        match: The match, or None when it is not (or no longer) known

    Returns:
        ConfirmationStatusEnum
    """
    if match is None:
        return ConfirmationStatusEnum.NOT_CONFIRMED

    if match.status == MatchStatusEnum.CONFIRMED:
        return ConfirmationStatusEnum.FINALIZED

    if match.status in ELAPSED_STATUSES:
        return ConfirmationStatusEnum.DATE_PASSED

    if match.their_confirmed and not match.my_confirmed:
        return ConfirmationStatusEnum.WAITING_FOR_ME

    if not match.their_confirmed and match.my_confirmed:
        return ConfirmationStatusEnum.WAITING_FOR_THEM

    return ConfirmationStatusEnum.NOT_CONFIRMED


def show_finalize_prompt(
    match: Optional[MatchRecord],
    messages: Sequence[MessageRecord],
) -> bool:

    return (
        has_two_confirmations(messages)
        and project_status(match) in FINALIZE_PROMPT_STATUSES
    )


def is_date_today(match: Optional[MatchRecord], today: Optional[date] = None) -> bool:
    """
    Whether the match's first scheduled date falls on ``today``.

    The stored date is compared by its UTC calendar day, ``today`` is taken
    as given (local), matching how dates are entered.
    """
    if match is None or not match.dates:
        return False

    if today is None:
        today = date.today()

    scheduled = match.dates[0]
    if scheduled.tzinfo is not None:
        scheduled = scheduled.astimezone(timezone.utc)

    return scheduled.date() == today


class MatchStatusProjector:

    def __init__(self, session: "MatchSession"):
        self.session = session

    def status_of(self, match_id: str) -> ConfirmationStatusEnum:
        return project_status(self.session.matches.get(match_id))

    def show_finalize_prompt(self, match_id: str) -> bool:
        return show_finalize_prompt(
            self.session.matches.get(match_id),
            self.session.messages.messages_for(match_id),
        )

    def is_date_today(self, match_id: str, today: Optional[date] = None) -> bool:
        return is_date_today(self.session.matches.get(match_id), today)

    def statuses(self) -> dict[str, ConfirmationStatusEnum]:
        return {m.id: project_status(m) for m in self.session.matches.all()}
