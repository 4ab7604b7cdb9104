import logging
from datetime import datetime, timezone
from typing import Optional, Sequence

from datematch.core.config import get_settings
from datematch.models.message import (
    SYSTEM_SENDER_ID,
    TRUSTED_CONTACT_MARKER,
    MessageTypeEnum,
    trusted_contact_message_id,
)
from datematch.schemas.match import MatchRecord
from datematch.schemas.message import MessageRecord

logger = logging.getLogger(__name__)


def is_trusted_contact_notice(message: MessageRecord) -> bool:
    return (
        message.message_type == MessageTypeEnum.SYSTEM
        and TRUSTED_CONTACT_MARKER in message.content.lower()
    )


def build_trusted_contact_message(
    match_id: str,
    content: Optional[str] = None,
    created_at: Optional[datetime] = None,
) -> MessageRecord:
    return MessageRecord(
        id=trusted_contact_message_id(match_id),
        match_id=match_id,
        sender_id=SYSTEM_SENDER_ID,
        message_type=MessageTypeEnum.SYSTEM,
        content=content or get_settings().trusted_contact_message,
        created_at=created_at or datetime.now(timezone.utc),
    )


class MessageStore:
    """
    Per-match message logs in delivery order.

    Message ids are the only deduplication key. REST pages and push events
    overlap freely and both end up here.
    """

    def __init__(self):
        self._by_match_id: dict[str, list[MessageRecord]] = {}

    def __contains__(self, match_id: object) -> bool:
        return match_id in self._by_match_id

    def has(self, match_id: str) -> bool:
        return match_id in self._by_match_id

    def get(self, match_id: str) -> Optional[list[MessageRecord]]:
        """Return the log, or None while it has never been loaded."""
        messages = self._by_match_id.get(match_id)
        return list(messages) if messages is not None else None

    def messages_for(self, match_id: str) -> list[MessageRecord]:
        return list(self._by_match_id.get(match_id, []))

    def append_if_absent(self, match_id: str, message: MessageRecord) -> bool:
        messages = self._by_match_id.get(match_id, [])

        persistent_id = trusted_contact_message_id(match_id)
        if message.id == persistent_id or is_trusted_contact_notice(message):
            remaining = [m for m in messages if m.id != persistent_id]
            persistent = message.model_copy(
                update={"id": persistent_id, "match_id": match_id}
            )
            self._by_match_id[match_id] = [*remaining, persistent]
            return True

        if any(m.id == message.id for m in messages):
            logger.debug(f"Duplicate message {message.id} for match {match_id} dropped")
            return False

        self._by_match_id[match_id] = [*messages, message]
        return True

    def prepend_if_absent(
        self,
        match_id: str,
        older: Sequence[MessageRecord],
    ) -> list[MessageRecord]:
        """Put an older page in front of the log; returns the messages added."""
        messages = self._by_match_id.get(match_id, [])
        known = {m.id for m in messages}

        added = []
        for message in older:
            if message.id in known:
                continue
            known.add(message.id)
            added.append(message)

        self._by_match_id[match_id] = [*added, *messages]
        return added

    def replace_all(
        self,
        match_id: str,
        messages: Sequence[MessageRecord],
        match: Optional[MatchRecord] = None,
        trusted_contact_text: Optional[str] = None,
    ) -> list[MessageRecord]:
        all_messages = list(messages)

        if match is not None and match.trusted_contact_notified:
            persistent_id = trusted_contact_message_id(match_id)
            if not any(m.id == persistent_id for m in all_messages):
                all_messages.append(
                    build_trusted_contact_message(match_id, trusted_contact_text)
                )

        self._by_match_id[match_id] = all_messages
        return list(all_messages)

    def discard(self, match_id: str) -> None:
        self._by_match_id.pop(match_id, None)
