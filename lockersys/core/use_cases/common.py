from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable
from uuid import uuid4

from lockersys.core.errors import ValidationError


def new_id() -> str:
    return str(uuid4())


def require_text(value: Any, field: str) -> str:
    """Raises ValidationError if value is not a non-empty string"""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required")
    return value.strip()


def optional_text(value: Any) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def require_positive(value: Any, field: str) -> Decimal:
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field} is required")
    amount = Decimal(str(value))
    if amount <= 0:
        raise ValidationError(f"{field} must be greater than zero")
    return amount


def require_non_negative(value: Any, field: str) -> Decimal:
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field} is required")
    amount = Decimal(str(value))
    if amount < 0:
        raise ValidationError(f"{field} must not be negative")
    return amount


def reject_unknown_fields(changes: dict[str, Any], allowed: Iterable[str]) -> None:
    unknown = sorted(set(changes) - set(allowed))
    if unknown:
        raise ValidationError(f"Unknown fields: {', '.join(unknown)}")
