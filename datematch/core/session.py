from dataclasses import dataclass, field
from typing import Optional

from datematch.repositories.match import MatchStore
from datematch.repositories.message import MessageStore


@dataclass
class MatchSession:
    """
    Everything one signed-in user's client owns for the session's lifetime.

    Passed explicitly to the policy, projector, sync and service objects so
    that no module keeps process-wide state.
    """

    current_user_id: str
    matches: MatchStore = field(default_factory=MatchStore)
    messages: MessageStore = field(default_factory=MessageStore)
    active_match_id: Optional[str] = None
