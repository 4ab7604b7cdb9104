import json
from datetime import datetime

from pydantic import Field, ValidationInfo, field_validator

from datematch.models.message import SYSTEM_SENDER_ID, MessageTypeEnum
from datematch.schemas.common import BaseSchema, coerce_object_id

MESSAGE_MAX_LENGTH = 1000

class MessageRecord(BaseSchema):


    id: str = Field(..., alias="_id")
    match_id: str | None = Field(None, alias="matchId")
    sender_id: str = Field(SYSTEM_SENDER_ID, alias="senderId")
    message_type: MessageTypeEnum = Field(MessageTypeEnum.TEXT, alias="messageType")
    content: str = ""
    created_at: datetime | None = Field(None, alias="createdAt")

    @field_validator("id", "match_id", mode="before")
    @classmethod
    def normalize_ids(cls, v):

        return coerce_object_id(v)

    @field_validator("sender_id", mode="before")
    @classmethod
    def normalize_sender(cls, v):

        sender = coerce_object_id(v)
        return sender if sender else SYSTEM_SENDER_ID

    @field_validator("content", mode="before")
    @classmethod
    def serialize_content(cls, v):

        if v is None:
            return ""
        if isinstance(v, dict):
            return json.dumps(v)
        return v

    @property
    def is_system(self) -> bool:

        return (
            self.message_type == MessageTypeEnum.SYSTEM
            or self.sender_id == SYSTEM_SENDER_ID
        )

class MessageCreate(BaseSchema):


    match_id: str = Field(..., alias="matchId")
    message_type: MessageTypeEnum = Field(MessageTypeEnum.TEXT, alias="messageType")
    content: str = Field(..., max_length=MESSAGE_MAX_LENGTH)

    @field_validator("content")
    @classmethod
    def sanitize_content(cls, v: str, info: ValidationInfo) -> str:

        # plans are assembled from sanitized parts and keep their line breaks
        if info.data.get("message_type") != MessageTypeEnum.TEXT:
            return v
        from datematch.core.validators import sanitize_text
        result = sanitize_text(v)
        return result.sanitized_value if result.is_valid else v

class ContactInfo(BaseSchema):


    email: str | None = None
    phone: str | None = None

    @property
    def is_empty(self) -> bool:

        return not self.email and not self.phone
