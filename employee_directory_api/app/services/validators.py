from __future__ import annotations

import math
from datetime import date, datetime
from typing import Any, Iterable, Optional

from ..core.exceptions import ValidationError


def require_min_length(value: Any, min_len: int, message: str) -> str:
    if not isinstance(value, str) or len(value) < min_len:
        raise ValidationError(message)
    return value


def require_email(value: Any) -> str:
    if not isinstance(value, str) or "@" not in value:
        raise ValidationError("Invalid email format!")
    return value


def require_min_value(value: Any, minimum: float, message: str) -> float:
    # bool is an int subclass; "true" is not a salary
    if not isinstance(value, (int, float, str)) or isinstance(value, bool):
        raise ValidationError(message)
    try:
        number = float(value)
    except ValueError:
        raise ValidationError(message)
    # inf and nan would pass the comparison below
    if not math.isfinite(number) or number < minimum:
        raise ValidationError(message)
    return number


def require_choice(value: Any, choices: Iterable[str], message: str) -> str:
    if not isinstance(value, str) or value not in tuple(choices):
        raise ValidationError(message)
    return value


def optional_text(value: Any, field_name: str) -> Optional[str]:
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text!")
    return value


def parse_date(value: Any, field_name: str) -> date:
    """Accept ``YYYY-MM-DD`` or a full ISO timestamp and return the date part."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValidationError(f"Invalid {field_name}: {value}")
    text = value.strip()
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise ValidationError(f"Invalid {field_name}: {value}")
