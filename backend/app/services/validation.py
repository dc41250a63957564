from __future__ import annotations

from app.core.exceptions import ValidationFailure


def require_identifier(value: str | None, label: str) -> str:
    if value is None or not value.strip():
        raise ValidationFailure(f"{label} is required")
    return value.strip()


def reject_null_fields(data: dict, fields: set[str]) -> None:
    nulls = sorted(key for key in fields if key in data and data[key] is None)
    if nulls:
        raise ValidationFailure(f"Fields cannot be null: {', '.join(nulls)}")
