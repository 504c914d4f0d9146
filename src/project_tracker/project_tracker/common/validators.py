from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_choice(value: Any, choices, field_name: str):
    """Return the enum member matching ``value`` or raise."""
    try:
        return choices(value)
    except ValueError:
        allowed = ", ".join(c.value for c in choices)
        raise ValidationError(f"{field_name} must be one of: {allowed}")


def require_non_negative_int(value: Any, field_name: str) -> int:
    # bool is an int subclass; a checkbox value is not a page count
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a non-negative integer")
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"{field_name} must be a non-negative integer")
    if number < 0 or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(f"{field_name} must be a non-negative integer")
    return number


def optional_iso_date(value: Any, field_name: str) -> Optional[date]:
    """Parse YYYY-MM-DD; empty values are allowed."""
    if value in (None, ""):
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date")
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date")


def require_string_list(value: Any, field_name: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise ValidationError(f"{field_name} must be a list of strings")
    return list(value)
