import re
from dataclasses import dataclass
from typing import Union

@dataclass
class ValidationResult:


    is_valid: bool
    error_message: str | None = None
    sanitized_value: Union[str, int, None] = None

EMAIL_MAX_LENGTH = 254
PHONE_MIN_DIGITS = 7
PHONE_MAX_DIGITS = 15

EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')
PHONE_ALLOWED_PATTERN = re.compile(r'^\+?[\d\s\-().]+$')

HTML_TAG_PATTERN = re.compile(r'<[^>]+>', re.IGNORECASE)
SCRIPT_PATTERN = re.compile(
    r'<script[^>]*>.*?</script>|'
    r'javascript:|'
    r'on\w+\s*=|'
    r'<iframe[^>]*>.*?</iframe>|'
    r'<object[^>]*>.*?</object>|'
    r'<embed[^>]*>|'
    r'<link[^>]*>|'
    r'<style[^>]*>.*?</style>',
    re.IGNORECASE | re.DOTALL
)

def sanitize_text(text: str) -> ValidationResult:

    if not isinstance(text, str):
        return ValidationResult(
            is_valid=False,
            error_message="Text must be a string"
        )

    sanitized = SCRIPT_PATTERN.sub('', text)

    sanitized = HTML_TAG_PATTERN.sub('', sanitized)

    sanitized = ' '.join(sanitized.split())

    return ValidationResult(is_valid=True, sanitized_value=sanitized)

def validate_email(email: str) -> ValidationResult:
    """
    Validate an email address shared through a contact_info message.

    Only the shape is checked (one "@", a dot in the domain, no spaces);
    deliverability is the counterpart's problem.

    Args:
        email: Raw email input

    Returns:
        ValidationResult with the stripped, lower-cased address on success
    """
    if not isinstance(email, str):
        return ValidationResult(
            is_valid=False,
            error_message="Email must be a string"
        )

    value = email.strip()
    if not value:
        return ValidationResult(
            is_valid=False,
            error_message="Email must not be empty"
        )

    if len(value) > EMAIL_MAX_LENGTH:
        return ValidationResult(
            is_valid=False,
            error_message=f"Email must not exceed {EMAIL_MAX_LENGTH} characters"
        )

    if not EMAIL_PATTERN.match(value):
        return ValidationResult(
            is_valid=False,
            error_message="Email address is not valid"
        )

    return ValidationResult(is_valid=True, sanitized_value=value.lower())

def validate_phone(phone: str) -> ValidationResult:
    """
    Validate a phone number shared through a contact_info message.

    Accepts digits with common separators and an optional leading "+".
    The sanitized value keeps the user's formatting, trimmed.

    Args:
        phone: Raw phone input

    Returns:
        ValidationResult with is_valid=True if the number has 7 to 15 digits
    """
    if not isinstance(phone, str):
        return ValidationResult(
            is_valid=False,
            error_message="Phone must be a string"
        )

    value = phone.strip()
    if not value or not PHONE_ALLOWED_PATTERN.match(value):
        return ValidationResult(
            is_valid=False,
            error_message="Phone number may only contain digits, spaces and - ( ) ."
        )

    digits = sum(1 for ch in value if ch.isdigit())
    if digits < PHONE_MIN_DIGITS or digits > PHONE_MAX_DIGITS:
        return ValidationResult(
            is_valid=False,
            error_message=f"Phone number must have {PHONE_MIN_DIGITS} to {PHONE_MAX_DIGITS} digits"
        )

    return ValidationResult(is_valid=True, sanitized_value=value)

