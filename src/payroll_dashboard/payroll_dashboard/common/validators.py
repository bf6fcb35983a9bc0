from __future__ import annotations

from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, TypeVar

from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_choice(value: Any, enum_cls: type[E], field_name: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(str(m.value) for m in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}")


def require_non_negative(value: Decimal, field_name: str) -> Decimal:
    if value < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return value


def require_decimal(value: Any, field_name: str) -> Decimal:
    """Strict counterpart of ``numbers.to_amount`` for configuration values."""
    try:
        parsed = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} is not a number: {value!r}")
    if not parsed.is_finite():
        raise ValidationError(f"{field_name} is not a number: {value!r}")
    return parsed
