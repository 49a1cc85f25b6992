# Standard library imports
import math
from typing import Any


def normalize_coordinate(value: Any) -> str | None:
    """
    Normalize a latitude/longitude value to a canonical decimal string.

    Numbers and numeric strings are accepted, including a comma as decimal
    separator. Returns None for empty or non-numeric input.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            number = float(text.replace(",", "."))
        except ValueError:
            return None

    if not math.isfinite(number):
        return None

    result = repr(number)
    if result.endswith(".0"):
        result = result[:-2]
    return result
