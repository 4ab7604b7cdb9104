"""
REST client for the match and message endpoints.

Every endpoint answers with ``{"success": bool, "data": ..., "message": ...}``;
anything else is turned into an ApiError so callers only deal with one
failure type.
"""
import logging
from typing import Any, Iterable, Optional, Sequence

import httpx
from pydantic import ValidationError

from datematch.core.config import Settings, get_settings
from datematch.models.message import MessageTypeEnum
from datematch.schemas.common import APIResponse
from datematch.schemas.match import ConfirmPlansResponse, MatchRecord
from datematch.schemas.message import MessageCreate, MessageRecord

logger = logging.getLogger(__name__)


class ApiError(Exception):

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.message} (HTTP {self.status_code})"
        return self.message


class MatchApiClient:

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        access_token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        headers = {"Content-Type": "application/json"}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"

        self.client = httpx.AsyncClient(
            base_url=self.settings.api_base_url,
            timeout=self.settings.api_timeout_seconds,
            headers=headers,
            transport=transport,
        )

    async def __aenter__(self) -> "MatchApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self.client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, Any]] = None,
        json: Optional[dict[str, Any]] = None,
    ) -> Any:
        try:
            response = await self.client.request(method, path, params=params, json=json)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise ApiError(f"Network error: {e}") from e

        try:
            body = APIResponse[Any].model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(f"{method} {path} returned an unreadable body: {response.status_code}")
            raise ApiError("Invalid response from server", response.status_code) from e

        if response.status_code >= 400 or not body.success:
            message = body.message or f"Request failed: {response.status_code}"
            if response.status_code >= 400:
                logger.error(f"{method} {path} error: {response.status_code} - {message}")
            else:
                logger.warning(f"{method} {path} declined: {message}")
            raise ApiError(message, response.status_code)

        return body.data

    async def fetch_matches(
        self,
        statuses: Optional[Iterable[str]] = None,
    ) -> list[MatchRecord]:
        statuses = list(statuses) if statuses else self.settings.get_match_statuses()
        data = await self._request(
            "GET", "/api/matches", params={"status": ",".join(statuses)}
        )
        return _parse_list(MatchRecord, data)

    async def fetch_messages(
        self,
        match_id: str,
        page: int = 1,
        limit: Optional[int] = None,
        before: Optional[str] = None,
    ) -> list[MessageRecord]:
        params: dict[str, Any] = {
            "page": page,
            "limit": limit or self.settings.messages_page_size,
        }
        if before:
            params["before"] = before

        data = await self._request("GET", f"/api/messages/match/{match_id}", params=params)
        return _parse_list(MessageRecord, data)

    async def send_message(
        self,
        match_id: str,
        content: str,
        message_type: MessageTypeEnum = MessageTypeEnum.TEXT,
    ) -> MessageRecord:
        try:
            body = MessageCreate(
                match_id=match_id,
                message_type=message_type,
                content=content,
            )
        except ValidationError as e:
            raise ApiError(f"Invalid message: {e.errors()[0]['msg']}") from e

        data = await self._request(
            "POST",
            "/api/messages",
            json=body.model_dump(mode="json", by_alias=True),
        )
        return _parse_one(MessageRecord, data)

    async def confirm_plans(self, match_id: str) -> ConfirmPlansResponse:
        data = await self._request("POST", f"/api/matches/{match_id}/confirm-plans")
        return _parse_one(ConfirmPlansResponse, data)

    async def finalize_date(self, match_id: str) -> Any:
        return await self._request("POST", f"/api/matches/{match_id}/finalize-date")

    async def send_safety_notification(self, match_id: str) -> Any:
        return await self._request(
            "POST", f"/api/matches/{match_id}/send-safety-notification"
        )


def _parse_one(schema, data: Any):
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        raise ApiError(f"Unexpected {schema.__name__} payload") from e


def _parse_list(schema, data: Any) -> list:
    if data is None:
        return []
    if not isinstance(data, Sequence) or isinstance(data, (str, bytes)):
        raise ApiError(f"Expected a list of {schema.__name__}")
    return [_parse_one(schema, item) for item in data]
