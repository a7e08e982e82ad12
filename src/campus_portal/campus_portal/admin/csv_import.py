"""Bulk student CSV parsing (pandas)."""

from __future__ import annotations

import io

import pandas as pd

from ..core.exceptions import ValidationError
from ..students.model import NewStudent
from .inputs import parse_new_student

REQUIRED_COLUMNS = ("name", "course", "emailId")


def read_student_rows(data: bytes) -> list[dict]:
    """CSV bytes -> list of row dicts (all values as strings, blanks as "")."""

    try:
        df = pd.read_csv(io.BytesIO(data), dtype=str, keep_default_na=False)
    except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError) as e:
        raise ValidationError(f"Invalid CSV file: {e}")

    df.columns = [str(c).strip() for c in df.columns]
    if "emailId" not in df.columns and "email" in df.columns:
        df = df.rename(columns={"email": "emailId"})

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValidationError(f"CSV is missing required columns: {', '.join(missing)}")

    if df.empty:
        raise ValidationError("CSV file contains no student rows")

    return df.to_dict(orient="records")


def parse_student_csv(data: bytes) -> list[NewStudent]:
    """Validate every row before anything is provisioned.

    Row numbers in messages are 1-based and exclude the header.
    """

    students: list[NewStudent] = []
    seen: set[str] = set()
    for i, row in enumerate(read_student_rows(data), start=1):
        fields = {k: (v.strip() if isinstance(v, str) else v) for k, v in row.items()}
        fields["email"] = fields.pop("emailId", None)
        try:
            student = parse_new_student(fields)
        except ValidationError as e:
            raise ValidationError(f"Row {i}: {e}")

        key = student.email.lower()
        if key in seen:
            raise ValidationError(f"Row {i}: duplicate email {student.email}")
        seen.add(key)
        students.append(student)
    return students
