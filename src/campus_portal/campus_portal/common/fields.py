"""Coercion of camelCase profile updates into typed column values."""

from __future__ import annotations

from typing import Any, Mapping

from ..core.enums import Gender
from ..core.exceptions import ValidationError
from .datetime_utils import parse_optional_date
from .validators import optional_int, require_bool, require_int, require_non_empty

_INT_FIELDS = {"contactNo", "parentContactNo"}
_REQUIRED_INT_FIELDS = {"semester", "year"}
_REQUIRED_TEXT_FIELDS = {"name", "course", "branch", "department"}
_DATE_FIELDS = {"dob"}
_BOOL_FIELDS = {"enrollmentCompleted"}


def coerce_field(name: str, value: Any) -> Any:
    if name in _REQUIRED_TEXT_FIELDS:
        return require_non_empty(value, name)
    if name in _REQUIRED_INT_FIELDS:
        return require_int(value, name, min_value=1)
    if name in _INT_FIELDS:
        return optional_int(value, name)
    if name in _DATE_FIELDS:
        return parse_optional_date(value)
    if name in _BOOL_FIELDS:
        return None if value is None else require_bool(value, name)
    if name == "gender":
        if value in (None, ""):
            return None
        try:
            return Gender(value).value
        except ValueError:
            raise ValidationError("Gender must be one of: Male, Female, Other")
    if value is None:
        return None
    return str(value).strip() or None


def to_columns(changes: Mapping[str, Any], allowed: Mapping[str, str]) -> dict:
    """Map API field names to column names, keeping only fields in `allowed`.

    Unknown keys (including the immutable email) are ignored."""

    columns = {allowed[k]: coerce_field(k, v) for k, v in changes.items() if k in allowed}
    if not columns:
        raise ValidationError("No updatable fields provided")
    return columns
