from __future__ import annotations

import re
from typing import Any, Optional

from ..core.exceptions import PayloadTooLargeError, ValidationError

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def require_non_empty(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required and must be a non-empty string")
    return value.strip()


def require_max_length(value: str, field_name: str, max_len: int) -> str:
    if len(value) > max_len:
        raise ValidationError(f"{field_name} must not exceed {max_len} characters")
    return value


def require_email(value: Any, field_name: str = "Email") -> str:
    email = require_non_empty(value, field_name)
    if not _EMAIL_RE.match(email):
        raise ValidationError(f"Invalid {field_name.lower()} format")
    return email


def require_int(value: Any, field_name: str, *, min_value: Optional[int] = None, max_value: Optional[int] = None) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a valid number")
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a valid number")

    if min_value is not None and number < min_value:
        raise ValidationError(f"{field_name} must be at least {min_value}")
    if max_value is not None and number > max_value:
        raise ValidationError(f"{field_name} must be at most {max_value}")
    return number


def optional_int(value: Any, field_name: str) -> Optional[int]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return require_int(value, field_name)


def require_bool(value: Any, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in {"true", "false"}:
        return value.strip().lower() == "true"
    raise ValidationError(f"{field_name} must be true or false")


def require_size(data: bytes, field_name: str, max_bytes: int) -> bytes:
    if len(data) > max_bytes:
        raise PayloadTooLargeError(f"{field_name} exceeds the {max_bytes // (1024 * 1024)}MB limit")
    return data
