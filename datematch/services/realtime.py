import logging
from typing import TYPE_CHECKING, Any, Callable, Optional, Protocol

from pydantic import ValidationError

from datematch.repositories.message import build_trusted_contact_message
from datematch.schemas.events import (
    MatchesBlockedEvent,
    PushEventEnum,
    RoomEventEnum,
    TrustedContactNotifiedEvent,
)
from datematch.schemas.match import MatchConfirmationUpdate
from datematch.schemas.message import MessageRecord

if TYPE_CHECKING:
    from datematch.core.session import MatchSession

logger = logging.getLogger(__name__)

EventHandler = Callable[[Any], None]


class PushChannel(Protocol):
    """Minimal surface of the session's push client (socket.io style)."""

    def on(self, event: str, handler: EventHandler) -> None: ...

    def off(self, event: str, handler: EventHandler) -> None: ...

    def emit(self, event: str, payload: Any) -> None: ...


class RealtimeSync:
    """
    Applies push events to the session stores.

    Handlers never raise back into the channel: stale ids are ignored and
    malformed payloads are logged and dropped. Nothing here orders events;
    the stores' idempotent operations absorb duplicates and races with REST
    responses.
    """

    def __init__(self, session: "MatchSession", channel: PushChannel):
        self.session = session
        self.channel = channel
        self._started = False
        self._handlers: dict[PushEventEnum, EventHandler] = {
            PushEventEnum.MATCHES_BLOCKED: self.handle_matches_blocked,
            PushEventEnum.DATE_FINALIZED: self.handle_date_finalized,
            PushEventEnum.ME_CONFIRMED: self.handle_me_confirmed,
            PushEventEnum.TRUSTED_CONTACT_NOTIFIED: self.handle_trusted_contact_notified,
            PushEventEnum.CHAT_MESSAGE: self.handle_chat_message,
        }

    @property
    def is_started(self) -> bool:
        return self._started

    @property
    def active_match_id(self) -> Optional[str]:
        return self.session.active_match_id

    def start(self) -> None:
        if self._started:
            return

        for event, handler in self._handlers.items():
            self.channel.on(event.value, handler)

        self.channel.emit(RoomEventEnum.JOIN_USER_ROOM.value, self.session.current_user_id)
        self._started = True
        logger.info(f"Realtime sync started for user {self.session.current_user_id}")

    def stop(self) -> None:
        if not self._started:
            return

        self.select_match(None)

        for event, handler in self._handlers.items():
            self.channel.off(event.value, handler)

        self._started = False
        logger.info(f"Realtime sync stopped for user {self.session.current_user_id}")

    def __enter__(self) -> "RealtimeSync":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def select_match(self, match_id: Optional[str]) -> None:
        """
        Switch the actively viewed match, moving the room subscription.

        Leaving a room only stops new deliveries; messages already in the
        store stay there.
        """
        previous = self.session.active_match_id
        if previous == match_id:
            return

        if previous is not None:
            self.channel.emit(RoomEventEnum.LEAVE_MATCH.value, previous)

        self.session.active_match_id = match_id

        if match_id is not None:
            self.channel.emit(RoomEventEnum.JOIN_MATCH.value, match_id)

    def handle_matches_blocked(self, payload: Any) -> None:
        event = self._parse(MatchesBlockedEvent, payload, PushEventEnum.MATCHES_BLOCKED)
        if event is None:
            return

        removed = self.session.matches.remove_by_ids(event.match_ids)

        if self.session.active_match_id in removed:
            self.select_match(None)

    def handle_date_finalized(self, payload: Any) -> None:
        self._apply_confirmation(payload, PushEventEnum.DATE_FINALIZED)

    def handle_me_confirmed(self, payload: Any) -> None:
        self._apply_confirmation(payload, PushEventEnum.ME_CONFIRMED)

    def _apply_confirmation(self, payload: Any, event: PushEventEnum) -> None:
        update = self._parse(MatchConfirmationUpdate, payload, event)
        if update is None:
            return

        self.session.matches.patch_confirmation(update)

    def handle_trusted_contact_notified(self, payload: Any) -> None:
        event = self._parse(
            TrustedContactNotifiedEvent, payload, PushEventEnum.TRUSTED_CONTACT_NOTIFIED
        )
        if event is None:
            return

        if event.match_id not in self.session.matches:
            logger.debug(f"Trusted contact notice for unknown match {event.match_id} ignored")
            return

        message = build_trusted_contact_message(event.match_id, event.message)
        self.session.messages.append_if_absent(event.match_id, message)
        self.session.matches.mark_trusted_contact_notified(event.match_id)

    def handle_chat_message(self, payload: Any) -> None:
        message = self._parse(MessageRecord, payload, PushEventEnum.CHAT_MESSAGE)
        if message is None:
            return

        if message.match_id is None:
            logger.warning(f"Chat message {message.id} without matchId dropped")
            return

        if message.match_id not in self.session.matches:
            logger.debug(f"Chat message for unknown match {message.match_id} ignored")
            return

        self.session.messages.append_if_absent(message.match_id, message)

    def _parse(self, schema, payload: Any, event: PushEventEnum):
        try:
            return schema.model_validate(payload)
        except ValidationError as e:
            logger.warning(f"Malformed {event.value} payload ignored: {e}")
            return None
