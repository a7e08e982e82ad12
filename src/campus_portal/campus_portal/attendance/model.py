from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import iso


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's attendance in one subject on one date."""

    attendance_id: int
    student_email: str
    faculty_email: str
    subject_id: int
    date: date
    present: bool
    remarks: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "studentEmail": self.student_email,
            "facultyEmail": self.faculty_email,
            "subjectId": self.subject_id,
            "date": iso(self.date),
            "present": self.present,
            "remarks": self.remarks,
            "createdAt": iso(self.created_at),
            "updatedAt": iso(self.updated_at),
        }


@dataclass(frozen=True)
class AttendanceMark:
    """One entry of a bulk marking request."""

    student_email: str
    present: bool
    remarks: Optional[str] = None


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model: attendance record joined with student/subject/faculty names."""

    record: AttendanceRecord
    student_name: Optional[str]
    subject_name: Optional[str]
    subject_code: Optional[str]
    faculty_name: Optional[str]

    def to_dict(self) -> dict:
        out = self.record.to_dict()
        out.update(
            {
                "studentName": self.student_name,
                "subjectName": self.subject_name,
                "subjectCode": self.subject_code,
                "facultyName": self.faculty_name,
            }
        )
        return out


@dataclass(frozen=True)
class DailyAttendanceRow:
    """Roster member's mark for a date; unmarked members show as absent."""

    attendance_id: Optional[int]
    student_email: str
    student_name: str
    faculty_email: str
    faculty_name: Optional[str]
    subject_id: int
    subject_name: str
    subject_code: str
    date: date
    present: bool
    remarks: Optional[str]

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "studentEmail": self.student_email,
            "studentName": self.student_name,
            "facultyEmail": self.faculty_email,
            "facultyName": self.faculty_name,
            "subjectId": self.subject_id,
            "subjectName": self.subject_name,
            "subjectCode": self.subject_code,
            "date": iso(self.date),
            "present": self.present,
            "remarks": self.remarks,
        }


@dataclass(frozen=True)
class SubjectAttendanceStats:
    """Subject-level metric: present marks over (class dates x roster size)."""

    subject_id: int
    total_classes: int
    total_present: int
    total_students: int
    total_possible: int
    attendance_percentage: float
    subject_name: Optional[str] = None
    subject_code: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "subjectId": self.subject_id,
            "subjectName": self.subject_name,
            "subjectCode": self.subject_code,
            "totalStudents": self.total_students,
            "totalClasses": self.total_classes,
            "totalPresent": self.total_present,
            "totalPossible": self.total_possible,
            "attendancePercentage": self.attendance_percentage,
        }


@dataclass(frozen=True)
class SubjectSummary:
    """Student-level metric for one subject: present marks over class dates."""

    subject_id: int
    subject_name: str
    subject_code: str
    credits: int
    faculty_name: Optional[str]
    total_lectures: int
    total_present: int
    percentage: float

    def to_dict(self) -> dict:
        return {
            "subjectId": self.subject_id,
            "subjectName": self.subject_name,
            "subjectCode": self.subject_code,
            "credits": self.credits,
            "faculty": self.faculty_name,
            "totalLectures": self.total_lectures,
            "totalPresent": self.total_present,
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class AttendanceSummary:
    student_email: str
    start_date: date
    end_date: date
    overall_percentage: float
    subjects: list[SubjectSummary] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "studentEmail": self.student_email,
            "startDate": iso(self.start_date),
            "endDate": iso(self.end_date),
            "overallPercentage": self.overall_percentage,
            "subjects": [s.to_dict() for s in self.subjects],
        }
