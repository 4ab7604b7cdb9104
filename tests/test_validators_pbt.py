"""
Property-based tests for validation functions.

Covers the contact details shared through contact_info messages and the
sanitizer applied to free-text messages.
"""

from hypothesis import given, settings, strategies as st

from datematch.core.validators import (
    EMAIL_MAX_LENGTH,
    PHONE_MAX_DIGITS,
    PHONE_MIN_DIGITS,
    sanitize_text,
    validate_email,
    validate_phone,
)


local_part = st.text(alphabet="abcdefghijklmnopqrstuvwxyz0123456789._+", min_size=1, max_size=30)
domain_label = st.text(alphabet="abcdefghijklmnopqrstuvwxyz0123456789-", min_size=1, max_size=20)


class TestEmailValidationProperty:
    """
    Property-based tests for email validation.

    **Feature: contact sharing, Property 6: Email Shape**
    """

    @settings(max_examples=100)
    @given(local=local_part, domain=domain_label, tld=st.sampled_from(["com", "org", "az", "io"]))
    def test_accepts_well_formed_addresses(self, local: str, domain: str, tld: str) -> None:
        """
        *For any* local@domain.tld address, the validator accepts it and
        returns it lower-cased.
        """
        email = f"{local}@{domain}.{tld}"
        result = validate_email(f"  {email.upper()} ")

        assert result.is_valid is True
        assert result.error_message is None
        assert result.sanitized_value == email.lower()

    @settings(max_examples=100)
    @given(text=st.text(alphabet=st.characters(blacklist_characters="@"), max_size=60))
    def test_rejects_text_without_at_sign(self, text: str) -> None:
        """
        *For any* text without "@", the validator rejects it.
        """
        result = validate_email(text)

        assert result.is_valid is False
        assert result.error_message is not None

    def test_rejects_overlong_address(self) -> None:
        email = "a" * EMAIL_MAX_LENGTH + "@example.com"

        result = validate_email(email)

        assert result.is_valid is False
        assert str(EMAIL_MAX_LENGTH) in result.error_message

    def test_rejects_non_string(self) -> None:
        assert validate_email(None).is_valid is False


class TestPhoneValidationProperty:
    """
    Property-based tests for phone validation.

    **Feature: contact sharing, Property 7: Phone Digit Count**
    """

    @settings(max_examples=100)
    @given(digits=st.text(alphabet="0123456789", min_size=PHONE_MIN_DIGITS, max_size=PHONE_MAX_DIGITS))
    def test_accepts_digit_counts_in_range(self, digits: str) -> None:
        """
        *For any* number with 7 to 15 digits, optionally prefixed with "+",
        the validator accepts it and keeps its formatting.
        """
        phone = f"+{digits}"
        result = validate_phone(f" {phone} ")

        assert result.is_valid is True
        assert result.sanitized_value == phone

    @settings(max_examples=100)
    @given(digits=st.text(alphabet="0123456789", min_size=1, max_size=PHONE_MIN_DIGITS - 1))
    def test_rejects_too_few_digits(self, digits: str) -> None:
        """
        *For any* number shorter than 7 digits, the validator rejects it.
        """
        result = validate_phone(digits)

        assert result.is_valid is False
        assert "digits" in result.error_message

    @settings(max_examples=100)
    @given(digits=st.text(alphabet="0123456789", min_size=PHONE_MAX_DIGITS + 1, max_size=25))
    def test_rejects_too_many_digits(self, digits: str) -> None:
        result = validate_phone(digits)

        assert result.is_valid is False

    def test_accepts_common_separators(self) -> None:
        assert validate_phone("(555) 010-2030").is_valid is True
        assert validate_phone("555.010.2030").is_valid is True

    def test_rejects_letters(self) -> None:
        assert validate_phone("555-CALL-NOW").is_valid is False


class TestXSSPreventionProperty:
    """
    Property-based tests for XSS prevention in text messages.

    **Feature: contact sharing, Property 8: XSS Prevention in Text Fields**
    """

    @settings(max_examples=100)
    @given(
        prefix=st.text(min_size=0, max_size=100, alphabet=st.characters(blacklist_characters="<>")),
        tag_content=st.text(min_size=0, max_size=50, alphabet=st.characters(blacklist_characters="<>")),
        suffix=st.text(min_size=0, max_size=100, alphabet=st.characters(blacklist_characters="<>")),
    )
    def test_removes_script_tags(self, prefix: str, tag_content: str, suffix: str) -> None:
        """
        *For any* text containing script tags, the sanitized output
        should have those tags removed.
        """
        result = sanitize_text(f"{prefix}<script>{tag_content}</script>{suffix}")

        assert result.is_valid is True
        assert "<script>" not in result.sanitized_value.lower()
        assert "</script>" not in result.sanitized_value.lower()

    @settings(max_examples=100)
    @given(words=st.lists(st.text(alphabet="abcdefghijklmnopqrstuvwxyz0123456789!?.,'", min_size=1, max_size=12), max_size=20))
    def test_plain_words_survive(self, words: list[str]) -> None:
        """
        *For any* plain words, sanitizing only normalizes whitespace.
        """
        result = sanitize_text("  \n".join(words))

        assert result.sanitized_value == " ".join(words)

    def test_removes_event_handlers(self) -> None:
        result = sanitize_text('<img src="x" onerror="alert(1)">')

        assert result.is_valid is True
        assert "onerror" not in result.sanitized_value.lower()

    def test_rejects_non_string(self) -> None:
        assert sanitize_text(42).is_valid is False
