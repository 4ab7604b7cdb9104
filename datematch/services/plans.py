from datematch.core.validators import sanitize_text

TIME_PLACEHOLDER = "[TIME]"
LOCATION_PLACEHOLDER = "[LOCATION]"


def _clean(value: str | None) -> str:

    if value is None:
        return ""
    result = sanitize_text(value)
    return result.sanitized_value if result.is_valid else ""


def generate_plan_message(
    time: str | None,
    location: str | None,
    first_name: str | None,
    activity: str | None,
    scheduled_time: str | None,
) -> str:
    """
    Compose the text of a plans message proposing where and when to meet.

    Every input is sanitized first; a missing time or place is replaced by a
    visible placeholder so the counterpart can see what still needs agreeing.
    """
    safe_time = _clean(time) or TIME_PLACEHOLDER
    safe_location = _clean(location) or LOCATION_PLACEHOLDER

    return (
        f"Hi {_clean(first_name)}!\n"
        f"Our planned activity is to {_clean(activity)} {_clean(scheduled_time)}.\n"
        f"My suggestion is that we meet at {safe_time} at {safe_location}.\n"
        f"Does that work for you?"
    )
