from datematch.services.chat import ActionResult, ChatService
from datematch.services.conversation import (
    ConversationPolicy,
    allowed_next_actions,
    has_two_confirmations,
    is_conversation_done,
    user_just_sent,
)
from datematch.services.rating import RatingGate, has_blocking_unrated_match
from datematch.services.realtime import PushChannel, RealtimeSync
from datematch.services.status import MatchStatusProjector, project_status

__all__ = [
    "ActionResult",
    "ChatService",
    "ConversationPolicy",
    "allowed_next_actions",
    "has_two_confirmations",
    "is_conversation_done",
    "user_just_sent",
    "RatingGate",
    "has_blocking_unrated_match",
    "PushChannel",
    "RealtimeSync",
    "MatchStatusProjector",
    "project_status",
]
