import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Union

from datematch.clients.api import ApiError, MatchApiClient
from datematch.core.session import MatchSession
from datematch.models.match import MatchStatusEnum
from datematch.models.message import MessageTypeEnum
from datematch.schemas.match import MatchRecord
from datematch.services.contact_info import encode_contact_info
from datematch.services.conversation import ConversationPolicy, default_content
from datematch.services.status import show_finalize_prompt

logger = logging.getLogger(__name__)


@dataclass
class ActionResult:
    success: bool
    data: Any = None
    error: Optional[str] = None


class ChatService:
    """
    User actions on matches and their chats.

    Results of REST calls are written into the session stores here; failures
    come back as ActionResult(success=False) and are never retried.
    """

    def __init__(self, session: MatchSession, client: MatchApiClient):
        self.session = session
        self.client = client
        self.policy = ConversationPolicy(session)

    async def load_matches(
        self,
        statuses: Optional[Iterable[str]] = None,
    ) -> ActionResult:
        try:
            matches = await self.client.fetch_matches(statuses)
        except ApiError as e:
            return ActionResult(success=False, error=str(e))

        self.session.matches.load_snapshot(matches)
        return ActionResult(success=True, data=matches)

    async def load_messages(
        self,
        match_id: str,
        *,
        page: int = 1,
        limit: Optional[int] = None,
        before: Optional[str] = None,
    ) -> ActionResult:
        """
        Fetch a page of a match's messages into the store.

        The first page replaces the log. Older pages (page > 1 or a
        ``before`` cursor) are put in front of what is already loaded.
        """
        try:
            messages = await self.client.fetch_messages(
                match_id, page=page, limit=limit, before=before
            )
        except ApiError as e:
            return ActionResult(success=False, error=str(e))

        if page > 1 or before:
            added = self.session.messages.prepend_if_absent(match_id, messages)
            return ActionResult(success=True, data=added)

        stored = self.session.messages.replace_all(
            match_id,
            messages,
            match=self.session.matches.get(match_id),
        )
        return ActionResult(success=True, data=stored)

    def register_new_match(self, match: MatchRecord) -> bool:
        return self.session.matches.upsert(match)

    async def send_message(
        self,
        match_id: str,
        message_type: MessageTypeEnum = MessageTypeEnum.TEXT,
        content: Union[str, dict, None] = None,
    ) -> ActionResult:
        check = self.policy.check_can_send(match_id, message_type)
        if not check.is_valid:
            return ActionResult(success=False, error=check.error_message)

        if message_type in (MessageTypeEnum.CONFIRMATION, MessageTypeEnum.CANCELLATION):
            content = default_content(message_type)
        elif message_type == MessageTypeEnum.CONTACT_INFO and isinstance(content, dict):
            try:
                content = encode_contact_info(content.get("email"), content.get("phone"))
            except ValueError as e:
                return ActionResult(success=False, error=str(e))

        if not content:
            return ActionResult(success=False, error="Message content is required")

        try:
            message = await self.client.send_message(match_id, content, message_type)
        except ApiError as e:
            return ActionResult(success=False, error=str(e))

        self.session.messages.append_if_absent(message.match_id or match_id, message)
        return ActionResult(success=True, data=message)

    async def send_contact_info(
        self,
        match_id: str,
        email: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> ActionResult:
        return await self.send_message(
            match_id,
            MessageTypeEnum.CONTACT_INFO,
            {"email": email, "phone": phone},
        )

    async def confirm_plans(self, match_id: str) -> ActionResult:
        if not show_finalize_prompt(
            self.session.matches.get(match_id),
            self.session.messages.messages_for(match_id),
        ):
            return ActionResult(
                success=False,
                error="Plans can only be confirmed after both of you have agreed",
            )

        try:
            result = await self.client.confirm_plans(match_id)
        except ApiError as e:
            return ActionResult(success=False, error=str(e))

        match = self.session.matches.get(match_id)
        confirmed = result.status == MatchStatusEnum.CONFIRMED or (
            match is not None and match.status == MatchStatusEnum.CONFIRMED
        )
        if confirmed:
            try:
                await self.client.send_safety_notification(match_id)
            except ApiError as e:
                # success=false with HTTP 200 means nobody has a trusted contact set up
                if e.status_code is not None and e.status_code < 400:
                    logger.info(f"Safety notification skipped for match {match_id}: {e.message}")
                else:
                    logger.error(f"Failed to send safety notification for match {match_id}: {e}")

        return ActionResult(success=True, data=result)

    async def finalize_date(self, match_id: str) -> ActionResult:
        try:
            data = await self.client.finalize_date(match_id)
        except ApiError as e:
            return ActionResult(success=False, error=str(e))

        return ActionResult(success=True, data=data)
