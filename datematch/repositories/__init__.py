from datematch.repositories.match import MatchStore
from datematch.repositories.message import (
    MessageStore,
    build_trusted_contact_message,
    is_trusted_contact_notice,
)

__all__ = [
    "MatchStore",
    "MessageStore",
    "build_trusted_contact_message",
    "is_trusted_contact_notice",
]
