from datematch.models.match import (
    ELAPSED_STATUSES,
    ConfirmationStatusEnum,
    MatchStatusEnum,
)
from datematch.models.message import (
    NEGOTIATION_TYPES,
    SYSTEM_SENDER_ID,
    TRUSTED_CONTACT_MARKER,
    MessageTypeEnum,
    trusted_contact_message_id,
)

__all__ = [
    "MatchStatusEnum",
    "ConfirmationStatusEnum",
    "ELAPSED_STATUSES",
    "MessageTypeEnum",
    "NEGOTIATION_TYPES",
    "SYSTEM_SENDER_ID",
    "TRUSTED_CONTACT_MARKER",
    "trusted_contact_message_id",
]
