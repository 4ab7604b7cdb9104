import json
import logging
from typing import Optional

from pydantic import ValidationError

from datematch.core.validators import validate_email, validate_phone
from datematch.schemas.message import ContactInfo

logger = logging.getLogger(__name__)

CONTACT_INFO_HEADER = "Here are my contact details:"


def encode_contact_info(
    email: Optional[str] = None,
    phone: Optional[str] = None,
) -> str:
    """
    Build the wire content of a contact_info message.

    Only fields that were provided end up in the JSON object.

    Raises:
        ValueError: If neither field is given or a given field is invalid
    """
    payload: dict[str, str] = {}

    if email:
        result = validate_email(email)
        if not result.is_valid:
            raise ValueError(result.error_message)
        payload["email"] = result.sanitized_value

    if phone:
        result = validate_phone(phone)
        if not result.is_valid:
            raise ValueError(result.error_message)
        payload["phone"] = result.sanitized_value

    if not payload:
        raise ValueError("Provide an email or a phone number")

    return json.dumps(payload)


def parse_contact_info(content: Optional[str]) -> Optional[ContactInfo]:

    if not content:
        return None

    try:
        data = json.loads(content)
    except (TypeError, ValueError):
        logger.debug("contact_info content is not JSON, showing it verbatim")
        return None

    if not isinstance(data, dict):
        return None

    try:
        info = ContactInfo.model_validate(data)
    except ValidationError:
        return None

    return None if info.is_empty else info


def render_contact_info(content: Optional[str]) -> str:

    info = parse_contact_info(content)
    lines = [CONTACT_INFO_HEADER]

    if info is None:
        lines.append(content or "")
        return "\n".join(lines)

    if info.email:
        lines.append(f"Email: {info.email}")
    if info.phone:
        lines.append(f"Phone: {info.phone}")

    return "\n".join(lines)
