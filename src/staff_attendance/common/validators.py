from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str, message: str | None = None) -> str:
    if not value or not str(value).strip():
        raise ValidationError(message or f"{field_name} is required")
    return str(value).strip()


def optional_coordinate(value: Any, field_name: str, *, limit: float) -> Optional[float]:
    """Parse a latitude/longitude value; None and "" mean not available."""
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not -limit <= number <= limit:
        raise ValidationError(f"{field_name} must be between {-limit:g} and {limit:g}")
    return number
