from __future__ import annotations

from typing import Any, Iterable, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_coordinate(value: Any, field_name: str, *, limit: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not -limit <= number <= limit:
        raise ValidationError(f"{field_name} must be between {-limit:g} and {limit:g}")
    return number


def require_latitude(value: Any) -> float:
    return require_coordinate(value, "latitude", limit=90)


def require_longitude(value: Any) -> float:
    return require_coordinate(value, "longitude", limit=180)


def require_score(value: Any, field_name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not 0 <= number <= 100:
        raise ValidationError(f"{field_name} must be 0-100")
    return number


def require_choice(value: Any, choices: Iterable[Any], field_name: str) -> Any:
    """Coerce ``value`` into one of the enum ``choices`` (matched by value)."""
    for choice in choices:
        if value == choice or value == getattr(choice, "value", None):
            return choice
    raise ValidationError(f"Invalid {field_name}: {value!r}")


def optional_text(value: Optional[str]) -> Optional[str]:
    return (value or "").strip() or None
