from datetime import datetime

from pydantic import Field, field_validator

from datematch.models.match import MatchStatusEnum
from datematch.schemas.common import BaseSchema, coerce_object_id

class OtherUser(BaseSchema):


    id: str = Field(..., alias="_id")
    first_name: str | None = Field(None, alias="firstName")
    last_name: str | None = Field(None, alias="lastName")

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, v):

        return coerce_object_id(v)

class MatchRecord(BaseSchema):
    """A match as seen by the signed-in user ("my"/"their" relative fields)."""

    id: str = Field(..., alias="_id")
    other_user: OtherUser | None = Field(None, alias="otherUser")
    activity_type: str = Field("", alias="activityType")
    location: str = ""
    dates: list[datetime] = Field(default_factory=list)
    times: list[str] = Field(default_factory=list)
    status: MatchStatusEnum = MatchStatusEnum.ACTIVE
    my_confirmed: bool = Field(False, alias="myConfirmed")
    their_confirmed: bool = Field(False, alias="theirConfirmed")
    my_rating: int | None = Field(None, ge=1, le=5, alias="myRating")
    their_rating: int | None = Field(None, ge=1, le=5, alias="theirRating")
    trusted_contact_notified: bool = Field(False, alias="myTrustedContactNotified")
    matched_at: datetime | None = Field(None, alias="matchedAt")
    updated_at: datetime | None = Field(None, alias="updatedAt")
    last_message_at: datetime | None = Field(None, alias="lastMessageAt")

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, v):

        return coerce_object_id(v)

    @property
    def other_user_id(self) -> str | None:

        return self.other_user.id if self.other_user else None

class MatchConfirmationUpdate(BaseSchema):
    """
    Absolute server-side match record pushed with dateFinalized/meConfirmed.

    Fields are keyed by participant slot (user1/user2), not by viewer, so the
    receiving client has to work out which slot is its own.
    """

    id: str = Field(..., alias="_id")
    user1_id: str = Field(..., alias="user1Id")
    user2_id: str = Field(..., alias="user2Id")
    user1_confirmed: bool = Field(False, alias="user1Confirmed")
    user2_confirmed: bool = Field(False, alias="user2Confirmed")
    user1_rating: int | None = Field(None, ge=1, le=5, alias="user1Rating")
    user2_rating: int | None = Field(None, ge=1, le=5, alias="user2Rating")
    status: MatchStatusEnum
    updated_at: datetime | None = Field(None, alias="updatedAt")
    last_message_at: datetime | None = Field(None, alias="lastMessageAt")

    @field_validator("id", "user1_id", "user2_id", mode="before")
    @classmethod
    def normalize_ids(cls, v):

        return coerce_object_id(v)

class ConfirmPlansResponse(BaseSchema):


    match_id: str = Field(..., alias="matchId")
    user_confirmed: bool = Field(False, alias="userConfirmed")
    other_user_confirmed: bool = Field(False, alias="otherUserConfirmed")
    both_users_confirmed: bool = Field(False, alias="bothUsersConfirmed")
    status: MatchStatusEnum | None = None

    @field_validator("match_id", mode="before")
    @classmethod
    def normalize_id(cls, v):

        return coerce_object_id(v)
