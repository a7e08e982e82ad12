"""Attendance arithmetic.

Two independent metrics:

- per student and subject: present records / distinct class dates;
- per subject: present records / (distinct class dates x roster size).

The overall figure for a student is the unweighted mean of the per-subject
percentages, not a ratio of summed counts.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Sequence

from .model import AttendanceRecord

_HUNDRED = Decimal(100)
_CENTS = Decimal("0.01")


def round2(value: Decimal) -> float:
    return float(value.quantize(_CENTS, rounding=ROUND_HALF_UP))


def percentage(numerator: int, denominator: int) -> float:
    """numerator/denominator as a 0-100 value rounded to 2 places; 0 when denominator is 0."""

    if denominator <= 0:
        return 0.0
    value = Decimal(int(numerator)) * _HUNDRED / Decimal(int(denominator))
    return round2(min(max(value, Decimal(0)), _HUNDRED))


def distinct_dates(records: Iterable[AttendanceRecord]) -> int:
    return len({r.date for r in records})


def present_count(records: Iterable[AttendanceRecord]) -> int:
    return sum(1 for r in records if r.present)


def student_subject_totals(records: Sequence[AttendanceRecord]) -> tuple[int, int, float]:
    """(total classes, present count, percentage) for one student in one subject."""

    total = distinct_dates(records)
    present = present_count(records)
    return total, present, percentage(present, total)


def subject_totals(records: Sequence[AttendanceRecord], roster_size: int) -> tuple[int, int, int, float]:
    """(total classes, present count, total possible, percentage) for a whole subject."""

    total_classes = distinct_dates(records)
    present = present_count(records)
    total_possible = total_classes * int(roster_size)
    return total_classes, present, total_possible, percentage(present, total_possible)


def overall_percentage(percentages: Sequence[float]) -> float:
    if not percentages:
        return 0.0
    total = sum((Decimal(str(p)) for p in percentages), Decimal(0))
    return round2(total / Decimal(len(percentages)))
