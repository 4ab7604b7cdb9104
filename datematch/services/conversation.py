"""
Negotiation rules for a single match's message log.

Everything here is a pure function of the ordered log, so any client that
holds the same messages reaches the same decision no matter whether they
arrived via a REST page or a push event.
"""
from typing import TYPE_CHECKING, Optional, Sequence

from datematch.core.validators import ValidationResult
from datematch.models.message import NEGOTIATION_TYPES, MessageTypeEnum
from datematch.schemas.message import MessageRecord

if TYPE_CHECKING:
    from datematch.core.session import MatchSession

DEFAULT_CONTENT = {
    MessageTypeEnum.CONFIRMATION: "Sounds good!",
    MessageTypeEnum.CANCELLATION: "Sorry, I can't make it.",
}

PREVIEW_LOADING = "Loading..."
PREVIEW_EMPTY = "Start a conversation"
PREVIEW_RESPONSE_NEEDED = "Response needed"
PREVIEW_WAITING_FOR_RESPONSE = "Waiting for response"
PREVIEW_CONFIRMATION_NEEDED = "Confirmation needed"
PREVIEW_WAITING_FOR_CONFIRMATION = "Waiting for confirmation"
PREVIEW_CANCELLED = "Cancelled"


def _confirmations(messages: Sequence[MessageRecord]) -> list[MessageRecord]:
    return [m for m in messages if m.message_type == MessageTypeEnum.CONFIRMATION]


def _both_confirmed(messages: Sequence[MessageRecord]) -> bool:
    return len({m.sender_id for m in _confirmations(messages)}) == 2


def allowed_next_actions(messages: Sequence[MessageRecord]) -> frozenset[MessageTypeEnum]:
    """
    Negotiation message types either participant may send next.

    Args:
        messages: The match's log, oldest first

    Returns:
        {plans} for an empty log; nothing after a cancellation or once two
        different senders have confirmed; {confirmation, cancellation} while
        exactly one confirmation is outstanding; otherwise all three.
    """
    if not messages:
        return frozenset({MessageTypeEnum.PLANS})

    if messages[-1].message_type == MessageTypeEnum.CANCELLATION:
        return frozenset()

    if _both_confirmed(messages):
        return frozenset()

    if len(_confirmations(messages)) == 1:
        return frozenset({MessageTypeEnum.CONFIRMATION, MessageTypeEnum.CANCELLATION})

    return frozenset(NEGOTIATION_TYPES)


def is_conversation_done(messages: Sequence[MessageRecord]) -> bool:

    if not messages:
        return False

    if messages[-1].message_type == MessageTypeEnum.CANCELLATION:
        return True

    return _both_confirmed(messages)


def user_just_sent(messages: Sequence[MessageRecord], user_id: str) -> bool:

    if not messages:
        return False
    return messages[-1].sender_id == user_id


def has_two_confirmations(messages: Sequence[MessageRecord]) -> bool:
    """
    True only when the two most recent messages are confirmations from
    different senders.

    Stricter than is_conversation_done: a confirmation buried under a newer
    plan no longer counts, so the finalize prompt always refers to the
    current plan.
    """
    if len(messages) < 2:
        return False

    last_two = messages[-2:]
    if not all(m.message_type == MessageTypeEnum.CONFIRMATION for m in last_two):
        return False

    return len({m.sender_id for m in last_two}) == 2


def latest_plan_message(messages: Sequence[MessageRecord]) -> Optional[MessageRecord]:

    for message in reversed(messages):
        if message.message_type == MessageTypeEnum.PLANS:
            return message
    return None


def has_sent_contact_info(messages: Sequence[MessageRecord], user_id: str) -> bool:

    return any(
        m.message_type == MessageTypeEnum.CONTACT_INFO and m.sender_id == user_id
        for m in messages
    )


def conversation_preview(
    messages: Optional[Sequence[MessageRecord]],
    other_user_id: Optional[str],
) -> Optional[str]:
    """
    Short status line shown next to a match in the conversation list.

    Args:
        messages: The log, or None if it has not been fetched yet
        other_user_id: The counterpart's id

    Returns:
        A label describing who has to act next, or None when the last
        message is not part of the negotiation
    """
    if messages is None:
        return PREVIEW_LOADING

    if len(messages) == 0:
        return PREVIEW_EMPTY

    last = messages[-1]
    from_other = other_user_id is not None and last.sender_id == other_user_id

    if last.message_type == MessageTypeEnum.PLANS:
        return PREVIEW_RESPONSE_NEEDED if from_other else PREVIEW_WAITING_FOR_RESPONSE

    if last.message_type == MessageTypeEnum.CONFIRMATION:
        return PREVIEW_CONFIRMATION_NEEDED if from_other else PREVIEW_WAITING_FOR_CONFIRMATION

    if last.message_type == MessageTypeEnum.CANCELLATION:
        return PREVIEW_CANCELLED

    return None


def default_content(message_type: MessageTypeEnum) -> Optional[str]:

    return DEFAULT_CONTENT.get(message_type)


def check_can_send(
    messages: Sequence[MessageRecord],
    user_id: str,
    message_type: MessageTypeEnum,
) -> ValidationResult:
    """
    Decide whether user_id may send a message of the given type right now.

    Negotiation types follow allowed_next_actions. Contact details may be
    shared once per sender; this only looks at local history, so two open
    sessions of the same user can still both send.

    Returns:
        ValidationResult with is_valid=False and a reason when refused
    """
    if message_type == MessageTypeEnum.SYSTEM:
        return ValidationResult(
            is_valid=False,
            error_message="System messages cannot be sent by users",
        )

    if message_type in NEGOTIATION_TYPES:
        if message_type not in allowed_next_actions(messages):
            return ValidationResult(
                is_valid=False,
                error_message=f"Cannot send {message_type.value} at this stage of the conversation",
            )
        return ValidationResult(is_valid=True, sanitized_value=message_type.value)

    if message_type == MessageTypeEnum.CONTACT_INFO and has_sent_contact_info(messages, user_id):
        return ValidationResult(
            is_valid=False,
            error_message="Contact information has already been shared",
        )

    return ValidationResult(is_valid=True, sanitized_value=message_type.value)


class ConversationPolicy:
    """Binds the log functions to a session's current user and stores."""

    def __init__(self, session: "MatchSession"):
        self.session = session

    @property
    def user_id(self) -> str:
        return self.session.current_user_id

    def messages(self, match_id: str) -> list[MessageRecord]:
        return self.session.messages.messages_for(match_id)

    def allowed_next_actions(self, match_id: str) -> frozenset[MessageTypeEnum]:
        return allowed_next_actions(self.messages(match_id))

    def is_conversation_done(self, match_id: str) -> bool:
        return is_conversation_done(self.messages(match_id))

    def user_just_sent(self, match_id: str) -> bool:
        return user_just_sent(self.messages(match_id), self.user_id)

    def has_two_confirmations(self, match_id: str) -> bool:
        return has_two_confirmations(self.messages(match_id))

    def latest_plan_message(self, match_id: str) -> Optional[MessageRecord]:
        return latest_plan_message(self.messages(match_id))

    def has_sent_contact_info(self, match_id: str) -> bool:
        return has_sent_contact_info(self.messages(match_id), self.user_id)

    def check_can_send(
        self,
        match_id: str,
        message_type: MessageTypeEnum,
    ) -> ValidationResult:
        return check_can_send(self.messages(match_id), self.user_id, message_type)

    def preview(self, match_id: str) -> Optional[str]:
        match = self.session.matches.get(match_id)
        other_user_id = match.other_user_id if match else None
        return conversation_preview(self.session.messages.get(match_id), other_user_id)
