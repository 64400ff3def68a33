from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from ..core.exceptions import ValidationError


def require_non_empty(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_length_between(value: Any, field_name: str, min_len: int, max_len: int) -> str:
    if not isinstance(value, str) or not (min_len <= len(value) <= max_len):
        raise ValidationError(f"{field_name} must be {min_len}-{max_len} characters")
    return value


def require_decimal(value: Any, field_name: str) -> Decimal:
    """Accept a JSON number or numeric string; bools and non-finite values are rejected."""
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        # str() first so floats like 15.5 do not carry binary noise
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not number.is_finite():
        raise ValidationError(f"{field_name} must be a number")
    return number


def require_bounded_decimal(value: Any, field_name: str, *, places: Decimal, maximum: Decimal) -> Decimal:
    """Positive decimal rounded to `places`, no larger than `maximum`."""
    number = require_decimal(value, field_name)
    if number > maximum:
        raise ValidationError(f"{field_name} must be at most {maximum}")
    try:
        number = number.quantize(places, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValidationError(f"{field_name} must be a number")
    if number <= 0:
        raise ValidationError(f"{field_name} must be greater than 0")
    return number


def optional_int_in_range(value: Any, field_name: str, low: int, high: int) -> int | None:
    if value is None or value == "":
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
    if not (low <= number <= high):
        raise ValidationError(f"{field_name} must be between {low} and {high}")
    return number
