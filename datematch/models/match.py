import enum

class MatchStatusEnum(str, enum.Enum):

    ACTIVE = "active"
    CONFIRMED = "confirmed"
    DATE_PASSED = "date_passed"
    EXPIRED = "expired"

class ConfirmationStatusEnum(str, enum.Enum):
    """Display status derived from a match record, see services.status."""

    FINALIZED = "finalized"
    DATE_PASSED = "date_passed"
    WAITING_FOR_ME = "waiting_for_me"
    WAITING_FOR_THEM = "waiting_for_them"
    NOT_CONFIRMED = "not_confirmed"

ELAPSED_STATUSES = frozenset({MatchStatusEnum.DATE_PASSED, MatchStatusEnum.EXPIRED})
