from __future__ import annotations

import random
from datetime import date
from typing import Any, Mapping, Optional, Sequence

from werkzeug.security import gen_salt

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import parse_optional_date
from ..common.fields import to_columns
from ..common.validators import require_email, require_non_empty, require_size
from ..core.constants import (
    DEFAULT_CONTACT_NO,
    DEFAULT_ROLL_BRANCH,
    DEFAULT_ROLL_YEAR,
    FACULTY_ID_DOMAIN,
    FALLBACK_PASSWORD,
    MAX_BULK_CSV_BYTES,
    STUDENT_ID_DOMAIN,
)
from ..core.enums import Role
from ..core.exceptions import BusinessRuleError, NotFoundError
from ..enrollments.repository import EnrollmentRepository
from ..faculty.model import UPDATABLE_FIELDS as FACULTY_FIELDS
from ..faculty.model import Faculty, NewFaculty
from ..faculty.repository import FacultyRepository
from ..students.model import UPDATABLE_FIELDS as STUDENT_FIELDS
from ..students.model import NewStudent, Student
from ..students.repository import StudentRepository
from ..users.service import UserService
from .csv_import import parse_student_csv
from .inputs import parse_new_faculty, parse_new_student
from .model import AdminProfile, ProvisionResult
from .repository import AdminRepository

_RANDOM_PASSWORD_LENGTH = 16


def generate_roll_no(year: Optional[int], branch: Optional[str], record_id: int) -> str:
    return f"{year or DEFAULT_ROLL_YEAR}{branch or DEFAULT_ROLL_BRANCH}{record_id}"


def generate_university_id(
    name: str,
    contact_no: Optional[int],
    *,
    domain: str,
    rng: random.Random,
    use_second_name: bool = False,
) -> str:
    """Reversed name + last three contact digits + random two-digit suffix + domain.

    Not unique and not a secret: two people can end up with the same ID.
    """

    parts = name.split()
    chosen = parts[1] if use_second_name and len(parts) > 1 else parts[0]
    digits = f"{abs(int(contact_no if contact_no is not None else DEFAULT_CONTACT_NO)) % 1000:03d}"
    return f"{chosen[::-1]}{digits}{rng.randint(0, 99):02d}{domain}"


class AdminService:
    """Use cases: provisioning and administering students, faculty and admins.

    Every provisioned person gets a local row, a User row and an identity
    account. When the identity step fails the local row is removed again.
    """

    def __init__(
        self,
        *,
        students: StudentRepository,
        faculty: FacultyRepository,
        admins: AdminRepository,
        enrollments: EnrollmentRepository,
        attendance: AttendanceRepository,
        users: UserService,
        legacy_dob_passwords: bool = False,
        rng: Optional[random.Random] = None,
    ):
        self._students = students
        self._faculty = faculty
        self._admins = admins
        self._enrollments = enrollments
        self._attendance = attendance
        self._users = users
        self._legacy_dob_passwords = bool(legacy_dob_passwords)
        self._rng = rng or random.Random()

    # ---- credentials ----

    def initial_password(self, dob: Optional[date]) -> str:
        if self._legacy_dob_passwords:
            return dob.isoformat() if dob else FALLBACK_PASSWORD
        return gen_salt(_RANDOM_PASSWORD_LENGTH)

    def _setup_link(self, email: str) -> Optional[str]:
        if self._legacy_dob_passwords:
            return None
        return self._users.password_setup_link(email)

    # ---- students ----

    def upload_student_detail(self, data: Mapping[str, Any]) -> ProvisionResult[Student]:
        return self._provision_student(parse_new_student(data))

    def upload_students_bulk(self, csv_data: bytes) -> list[ProvisionResult[Student]]:
        """Provision every CSV row; the whole file is validated first."""

        require_size(csv_data, "CSV file", MAX_BULK_CSV_BYTES)
        rows = parse_student_csv(csv_data)

        emails = [r.email for r in rows]
        on_file = {s.email.lower() for s in self._students.list_by_emails(emails)}
        taken = [e for e in emails if e.lower() in on_file or self._users.is_registered(e)]
        if taken:
            raise BusinessRuleError(f"Email already exists: {', '.join(taken)}")

        return [self._provision_student(r) for r in rows]

    def _provision_student(self, new: NewStudent) -> ProvisionResult[Student]:
        if self._students.get_by_email(new.email) or self._users.is_registered(new.email):
            raise BusinessRuleError("Email already exists")

        student_id = self._students.create_student(new)
        roll_no = new.roll_no or generate_roll_no(new.year, new.branch, student_id)
        university_id = generate_university_id(
            new.name, new.contact_no, domain=STUDENT_ID_DOMAIN, rng=self._rng
        )

        try:
            self._students.set_identifiers(student_id=student_id, roll_no=roll_no, university_id=university_id)
            self._users.provision_account(
                email=new.email,
                password=self.initial_password(new.dob),
                name=new.name,
                role=Role.STUDENT,
                university_id=university_id,
            )
        except Exception:
            self._students.delete_by_email(new.email)
            raise

        return ProvisionResult(record=self._students.get_by_email(new.email), password_setup_link=self._setup_link(new.email))

    def get_student(self, roll_no: str) -> Student:
        student = self._students.get_by_roll_no(roll_no)
        if not student:
            raise NotFoundError("Student not found")
        return student

    def update_student(self, roll_no: str, changes: Mapping[str, Any]) -> Student:
        student = self.get_student(roll_no)
        self._students.update_fields(student.email, to_columns(changes, STUDENT_FIELDS))
        return self._students.get_by_email(student.email)

    def delete_student(self, roll_no: str) -> None:
        student = self.get_student(roll_no)
        if self._attendance.count_for_student(student.email) > 0:
            raise BusinessRuleError("Student has attendance records and cannot be deleted")

        self._students.delete_by_email(student.email)
        self._users.remove_account(student.email)

    def list_students(self) -> Sequence[Student]:
        return self._students.list_all()

    # ---- faculty ----

    def upload_faculty_detail(self, data: Mapping[str, Any]) -> ProvisionResult[Faculty]:
        return self._provision_faculty(parse_new_faculty(data))

    def _provision_faculty(self, new: NewFaculty) -> ProvisionResult[Faculty]:
        if self._faculty.get_by_email(new.email) or self._users.is_registered(new.email):
            raise BusinessRuleError("Email already exists")

        faculty_id = self._faculty.create_faculty(new)
        university_id = generate_university_id(
            new.name, new.contact_no, domain=FACULTY_ID_DOMAIN, rng=self._rng, use_second_name=True
        )

        try:
            self._faculty.set_university_id(faculty_id=faculty_id, university_id=university_id)
            self._users.provision_account(
                email=new.email,
                password=self.initial_password(new.dob),
                name=new.name,
                role=Role.FACULTY,
                university_id=university_id,
            )
        except Exception:
            self._faculty.delete_by_email(new.email)
            raise

        return ProvisionResult(record=self._faculty.get_by_email(new.email), password_setup_link=self._setup_link(new.email))

    def get_faculty(self, email: str) -> Faculty:
        faculty = self._faculty.get_by_email(email)
        if not faculty:
            raise NotFoundError("Faculty not found")
        return faculty

    def update_faculty(self, email: str, changes: Mapping[str, Any]) -> Faculty:
        self.get_faculty(email)
        self._faculty.update_fields(email, to_columns(changes, FACULTY_FIELDS))
        return self.get_faculty(email)

    def delete_faculty(self, email: str) -> None:
        faculty = self.get_faculty(email)
        if self._enrollments.count_by_faculty(faculty.email) > 0:
            raise BusinessRuleError("Faculty teaches subjects and cannot be deleted")
        if self._attendance.count_for_faculty(faculty.email) > 0:
            raise BusinessRuleError("Faculty has attendance records and cannot be deleted")

        self._faculty.delete_by_email(faculty.email)
        self._users.remove_account(faculty.email)

    def list_faculty(self) -> Sequence[Faculty]:
        return self._faculty.list_all()

    # ---- admins ----

    def provision_admin(self, *, name, email, password: Optional[str] = None, dob=None) -> ProvisionResult[AdminProfile]:
        """Used by the bootstrap script; there is no HTTP route for creating admins."""

        email = require_email(email)
        name = require_non_empty(name, "Name")
        dob = parse_optional_date(dob) if isinstance(dob, str) else dob

        if self._admins.get_by_email(email) or self._users.is_registered(email):
            raise BusinessRuleError("Email already exists")

        self._admins.create_admin(name=name, email=email, university_id=None, dob=dob)
        try:
            self._users.provision_account(
                email=email,
                password=password or self.initial_password(dob),
                name=name,
                role=Role.ADMIN,
                university_id=None,
            )
        except Exception:
            self._admins.delete_by_email(email)
            raise

        link = None if password else self._setup_link(email)
        return ProvisionResult(record=self._admins.get_by_email(email), password_setup_link=link)
