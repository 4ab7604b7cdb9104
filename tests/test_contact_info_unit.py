import json

import pytest

from datematch.services.contact_info import (
    CONTACT_INFO_HEADER,
    encode_contact_info,
    parse_contact_info,
    render_contact_info,
)
from datematch.services.plans import (
    LOCATION_PLACEHOLDER,
    TIME_PLACEHOLDER,
    generate_plan_message,
)


class TestEncodeContactInfo:

    def test_only_provided_fields_are_encoded(self) -> None:
        assert json.loads(encode_contact_info(email="Sam@Example.com ")) == {"email": "sam@example.com"}
        assert json.loads(encode_contact_info(phone=" +1 (555) 010-2030")) == {"phone": "+1 (555) 010-2030"}

    def test_both_fields(self) -> None:
        data = json.loads(encode_contact_info("sam@example.com", "5550102030"))

        assert data == {"email": "sam@example.com", "phone": "5550102030"}

    def test_nothing_provided(self) -> None:
        with pytest.raises(ValueError, match="email or a phone"):
            encode_contact_info()

    @pytest.mark.parametrize(
        "email,phone",
        [
            ("not-an-email", None),
            (None, "12345"),
            (None, "call me maybe"),
        ],
    )
    def test_invalid_field_is_rejected(self, email, phone) -> None:
        with pytest.raises(ValueError):
            encode_contact_info(email, phone)


class TestParseContactInfo:

    def test_valid_object(self) -> None:
        info = parse_contact_info('{"email": "sam@example.com"}')

        assert info.email == "sam@example.com"
        assert info.phone is None

    @pytest.mark.parametrize("content", [None, "", "plain text", "[1, 2]", "{}", '{"email": 5}'])
    def test_unreadable_content(self, content) -> None:
        assert parse_contact_info(content) is None

    def test_render_parsed(self) -> None:
        text = render_contact_info('{"email": "sam@example.com", "phone": "5550102030"}')

        assert text.splitlines() == [
            CONTACT_INFO_HEADER,
            "Email: sam@example.com",
            "Phone: 5550102030",
        ]

    def test_render_falls_back_to_raw(self) -> None:
        assert render_contact_info("ring me") == f"{CONTACT_INFO_HEADER}\nring me"


class TestGeneratePlanMessage:

    def test_full_message(self) -> None:
        text = generate_plan_message("10am", "Boulder Gym", "Alex", "go climbing", "on Saturday")

        assert text == (
            "Hi Alex!\n"
            "Our planned activity is to go climbing on Saturday.\n"
            "My suggestion is that we meet at 10am at Boulder Gym.\n"
            "Does that work for you?"
        )

    def test_placeholders_for_missing_parts(self) -> None:
        text = generate_plan_message(None, "  ", "Alex", "run", "tomorrow")

        assert f"meet at {TIME_PLACEHOLDER} at {LOCATION_PLACEHOLDER}." in text

    def test_markup_is_stripped(self) -> None:
        text = generate_plan_message("10am", "<b>Park</b><script>alert(1)</script>", "Alex", "run", "today")

        assert "<" not in text
        assert "at Park." in text
