"""Payload validation helpers for the admin back-office."""
from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from .errors import ValidationError
from .utils import to_db_datetime


def require_fields(data: Mapping[str, Any], fields: Iterable[str]) -> None:
    for name in fields:
        value = data.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(f"{name} is required", field=name)


def validate_choice(value: Any, choices: Iterable[str], field: str) -> str:
    allowed = tuple(choices)
    if value not in allowed:
        raise ValidationError(f"{field} must be one of: {', '.join(allowed)}", field=field)
    return value


def validate_datetime(value: Any, field: str):
    try:
        return to_db_datetime(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{field} must be an ISO-8601 timestamp", field=field) from exc


def validate_number(value: Any, field: str, minimum: Optional[float] = 0) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{field} must be a number", field=field) from exc
    if minimum is not None and number < minimum:
        raise ValidationError(f"{field} must be >= {minimum}", field=field)
    return number
