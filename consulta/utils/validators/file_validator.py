# Standard library imports
import re

STORED_IMAGE_PATTERN = re.compile(r"^consultation-\d+-[a-z0-9]+\.jpg$")


def normalize_file_name(value: str | None) -> str | None:
    """
    Normalize a client supplied file name for logging
    """
    if value is None:
        return None

    return value.replace(" ", "_").lower()


def is_stored_image_name(value: str) -> bool:
    """Whether `value` is a name generated by the image storage service."""
    return STORED_IMAGE_PATTERN.match(value) is not None
