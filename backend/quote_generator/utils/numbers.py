"""Numeric input coercion."""

import math
from typing import Any, Optional


# Upper bound for quantities and unit prices; keeps every product and sum finite
MAX_AMOUNT = 1e12


def to_number(value: Any) -> float:
    """
    Coerce a form value to a float.

    Absent, empty, non-numeric and non-finite values become 0.

    Args:
        value: Raw value (number, numeric string, None, ...)

    Returns:
        Float value
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def to_non_negative(value: Any, maximum: Optional[float] = None) -> float:
    """
    Coerce a form value to a float, clamping negatives to 0.

    Args:
        value: Raw value
        maximum: Upper bound, no bound when None

    Returns:
        Float value in [0, maximum]
    """
    number = max(0.0, to_number(value))
    if maximum is not None:
        number = min(number, maximum)
    return number
