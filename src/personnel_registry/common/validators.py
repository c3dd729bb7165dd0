from __future__ import annotations

from typing import Any, Optional

from werkzeug.utils import secure_filename

from ..core.exceptions import ValidationError


def as_text(value: Any, field_name: str) -> Optional[str]:
    """Accept strings and JSON numbers; reject anything else."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise ValidationError(f"{field_name} must be text")


def require_non_empty(value: Any, field_name: str) -> str:
    value = as_text(value, field_name)
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_password(value: Any) -> str:
    # Not stripped: whitespace is part of the secret.
    value = as_text(value, "Password")
    if not value:
        raise ValidationError("Password is required")
    return value


def require_service_number(value: Any) -> str:
    """Service numbers double as photo file names, so they must already be file-name safe."""
    value = require_non_empty(value, "Service Number")
    if secure_filename(value) != value:
        raise ValidationError("Service Number may only contain letters, digits, '-', '_' and '.'")
    return value


def optional_text(value: Any, field_name: str = "Value") -> Optional[str]:
    value = as_text(value, field_name)
    if value is None:
        return None
    value = value.strip()
    return value or None
