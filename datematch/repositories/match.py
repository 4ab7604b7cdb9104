import logging
from typing import Iterable, Optional, Sequence

from datematch.models.match import MatchStatusEnum
from datematch.schemas.match import MatchConfirmationUpdate, MatchRecord

logger = logging.getLogger(__name__)

STATUS_RANK = {
    MatchStatusEnum.ACTIVE: 0,
    MatchStatusEnum.CONFIRMED: 1,
    MatchStatusEnum.DATE_PASSED: 2,
    MatchStatusEnum.EXPIRED: 2,
}


class MatchStore:
    """
    The signed-in user's matches, in server order.

    Every mutation swaps in a new record object instead of editing the stored
    one, so a caller holding the previous reference can tell that derived
    state needs recomputing. Unknown ids are ignored everywhere: network
    patches routinely race with local removal.
    """

    def __init__(self, matches: Optional[Iterable[MatchRecord]] = None):
        self._matches: list[MatchRecord] = list(matches or [])

    def __len__(self) -> int:
        return len(self._matches)

    def __contains__(self, match_id: object) -> bool:
        return self._index_of(match_id) is not None

    def __iter__(self):
        return iter(list(self._matches))

    def _index_of(self, match_id: object) -> Optional[int]:
        for idx, match in enumerate(self._matches):
            if match.id == match_id:
                return idx
        return None

    def get(self, match_id: str) -> Optional[MatchRecord]:
        idx = self._index_of(match_id)
        return self._matches[idx] if idx is not None else None

    def all(self) -> list[MatchRecord]:
        return list(self._matches)

    def filter_by_status(self, *statuses: MatchStatusEnum) -> list[MatchRecord]:
        wanted = set(statuses)
        return [m for m in self._matches if m.status in wanted]

    def load_snapshot(self, matches: Sequence[MatchRecord]) -> None:
        self._matches = list(matches)
        logger.debug(f"Match snapshot loaded: {len(self._matches)} matches")

    def upsert(self, match: MatchRecord) -> bool:
        if match.id in self:
            return False
        self._matches.append(match)
        return True

    def remove_by_id(self, match_id: str) -> bool:
        idx = self._index_of(match_id)
        if idx is None:
            return False
        del self._matches[idx]
        return True

    def remove_by_ids(self, match_ids: Iterable[str]) -> list[str]:
        removed = [mid for mid in match_ids if self.remove_by_id(mid)]
        if removed:
            logger.info(f"Removed {len(removed)} blocked matches")
        return removed

    def patch_confirmation(
        self,
        update: MatchConfirmationUpdate,
    ) -> Optional[MatchRecord]:
        idx = self._index_of(update.id)
        if idx is None:
            logger.debug(f"Ignoring confirmation patch for unknown match {update.id}")
            return None

        current = self._matches[idx]

        if STATUS_RANK[update.status] < STATUS_RANK[current.status]:
            logger.debug(
                f"Ignoring stale patch for match {update.id}: "
                f"{update.status.value} after {current.status.value}"
            )
            return None

        if (
            update.updated_at is not None
            and current.updated_at is not None
            and update.updated_at < current.updated_at
        ):
            logger.debug(f"Ignoring out-of-order patch for match {update.id}")
            return None

        other_user_id = current.other_user_id

        if other_user_id is not None and update.user2_id == other_user_id:
            is_user1 = True
        elif other_user_id is not None and update.user1_id == other_user_id:
            is_user1 = False
        else:
            logger.warning(
                f"Confirmation patch for match {update.id} does not involve its counterpart"
            )
            return None

        if is_user1:
            fields = {
                "my_confirmed": update.user1_confirmed,
                "their_confirmed": update.user2_confirmed,
                "my_rating": update.user1_rating,
                "their_rating": update.user2_rating,
            }
        else:
            fields = {
                "my_confirmed": update.user2_confirmed,
                "their_confirmed": update.user1_confirmed,
                "my_rating": update.user2_rating,
                "their_rating": update.user1_rating,
            }

        # confirmation flags are frozen once the date is confirmed
        if current.status != MatchStatusEnum.ACTIVE:
            fields["my_confirmed"] = current.my_confirmed
            fields["their_confirmed"] = current.their_confirmed

        fields["status"] = update.status
        fields["updated_at"] = update.updated_at
        fields["last_message_at"] = update.last_message_at

        patched = current.model_copy(update=fields)
        self._matches[idx] = patched
        return patched

    def mark_trusted_contact_notified(self, match_id: str) -> Optional[MatchRecord]:
        idx = self._index_of(match_id)
        if idx is None:
            return None
        patched = self._matches[idx].model_copy(
            update={"trusted_contact_notified": True}
        )
        self._matches[idx] = patched
        return patched
