# Standard library imports
import re

# Third-party imports
import phonenumbers

PHONE_PATTERN = re.compile(r"^\d{8}$")
DEFAULT_REGION = "HN"


def normalize_phone_number(value: str | None) -> str | None:
    """
    Normalize a Honduran phone number to its 8-digit national form.

    Accepts spaces, hyphens and the +504 country prefix. Values that can not
    be parsed are returned cleaned but otherwise untouched so the caller can
    report them.
    """
    if value is None:
        return None

    cleaned = re.sub(r"[\s\-()]", "", str(value))
    if not cleaned:
        return None
    if PHONE_PATTERN.match(cleaned):
        return cleaned

    try:
        parsed = phonenumbers.parse(cleaned, DEFAULT_REGION)
    except phonenumbers.NumberParseException:
        return cleaned

    if parsed.country_code != phonenumbers.country_code_for_region(DEFAULT_REGION):
        return cleaned
    if not phonenumbers.is_possible_number(parsed):
        return cleaned
    return str(parsed.national_number).zfill(8)


def is_valid_phone_number(value: str | None) -> bool:
    return bool(value) and PHONE_PATTERN.match(value) is not None
