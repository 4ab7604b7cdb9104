from collections import defaultdict
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Iterator

import pytest

from datematch.core.session import MatchSession
from datematch.models import MatchStatusEnum, MessageTypeEnum
from datematch.schemas.match import MatchRecord
from datematch.schemas.message import MessageRecord
from datematch.services.realtime import RealtimeSync


ME = "64b000000000000000000001"
THEM = "64b000000000000000000002"
MATCH_ID = "64c000000000000000000001"

BASE_TIME = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


class FakePushChannel:
    """Records subscriptions and emits; ``deliver`` plays a server event."""

    def __init__(self):
        self.handlers: dict[str, list[Callable[[Any], None]]] = defaultdict(list)
        self.emitted: list[tuple[str, Any]] = []

    def on(self, event: str, handler: Callable[[Any], None]) -> None:
        self.handlers[event].append(handler)

    def off(self, event: str, handler: Callable[[Any], None]) -> None:
        if handler in self.handlers[event]:
            self.handlers[event].remove(handler)

    def emit(self, event: str, payload: Any) -> None:
        self.emitted.append((event, payload))

    def deliver(self, event: str, payload: Any) -> None:
        for handler in list(self.handlers[event]):
            handler(payload)


@pytest.fixture
def me() -> str:
    return ME


@pytest.fixture
def them() -> str:
    return THEM


@pytest.fixture
def match_id() -> str:
    return MATCH_ID


@pytest.fixture
def match_factory() -> Callable[..., MatchRecord]:
    counter = {"n": 0}

    def _make(match_id: str | None = None, **overrides: Any) -> MatchRecord:
        counter["n"] += 1
        data = {
            "_id": match_id or f"64c0000000000000000{counter['n']:05d}",
            "otherUser": {"_id": THEM, "firstName": "Alex"},
            "activityType": "climbing",
            "location": "Boulder Gym",
            "dates": [BASE_TIME.isoformat()],
            "status": MatchStatusEnum.ACTIVE.value,
            "myConfirmed": False,
            "theirConfirmed": False,
            "myRating": None,
            "theirRating": None,
        }
        data.update(overrides)
        return MatchRecord.model_validate(data)

    return _make


@pytest.fixture
def message_factory() -> Callable[..., MessageRecord]:
    counter = {"n": 0}

    def _make(
        message_type: MessageTypeEnum,
        sender_id: str,
        *,
        match_id: str = MATCH_ID,
        message_id: str | None = None,
        content: str = "",
    ) -> MessageRecord:
        counter["n"] += 1
        return MessageRecord(
            id=message_id or f"msg-{counter['n']}",
            match_id=match_id,
            sender_id=sender_id,
            message_type=message_type,
            content=content or message_type.value,
            created_at=BASE_TIME + timedelta(minutes=counter["n"]),
        )

    return _make


@pytest.fixture
def session() -> MatchSession:
    return MatchSession(current_user_id=ME)


@pytest.fixture
def channel() -> FakePushChannel:
    return FakePushChannel()


@pytest.fixture
def sync(session: MatchSession, channel: FakePushChannel) -> Iterator[RealtimeSync]:
    realtime = RealtimeSync(session, channel)
    realtime.start()
    yield realtime
    realtime.stop()
