import enum

SYSTEM_SENDER_ID = "system"

TRUSTED_CONTACT_MESSAGE_PREFIX = "trusted-contact-notification-"
TRUSTED_CONTACT_MARKER = "trusted contact has been notified"

class MessageTypeEnum(str, enum.Enum):

    PLANS = "plans"
    CONFIRMATION = "confirmation"
    CANCELLATION = "cancellation"
    CONTACT_INFO = "contact_info"
    SYSTEM = "system"
    TEXT = "text"

NEGOTIATION_TYPES = frozenset({
    MessageTypeEnum.PLANS,
    MessageTypeEnum.CONFIRMATION,
    MessageTypeEnum.CANCELLATION,
})

def trusted_contact_message_id(match_id: str) -> str:

    return f"{TRUSTED_CONTACT_MESSAGE_PREFIX}{match_id}"
