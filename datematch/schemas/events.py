import enum

from pydantic import Field, field_validator

from datematch.schemas.common import BaseSchema, coerce_object_id

class PushEventEnum(str, enum.Enum):
    """Events received from the push channel."""

    MATCHES_BLOCKED = "matchesBlocked"
    DATE_FINALIZED = "dateFinalized"
    ME_CONFIRMED = "meConfirmed"
    TRUSTED_CONTACT_NOTIFIED = "trustedContactNotified"
    CHAT_MESSAGE = "chatMessage"

class RoomEventEnum(str, enum.Enum):
    """Events emitted to the push channel."""

    JOIN_MATCH = "joinMatch"
    LEAVE_MATCH = "leaveMatch"
    JOIN_USER_ROOM = "joinUserRoom"

class MatchesBlockedEvent(BaseSchema):


    match_ids: list[str] = Field(default_factory=list, alias="matchIds")

    @field_validator("match_ids", mode="before")
    @classmethod
    def normalize_ids(cls, v):

        if v is None:
            return []
        if not isinstance(v, (list, tuple)):
            return v
        return [coerce_object_id(item) for item in v]

class TrustedContactNotifiedEvent(BaseSchema):


    match_id: str = Field(..., alias="matchId")
    message: str | None = None

    @field_validator("match_id", mode="before")
    @classmethod
    def normalize_id(cls, v):

        return coerce_object_id(v)
