from __future__ import annotations

import random
from dataclasses import asdict, replace
from datetime import date, datetime, timedelta
from typing import Optional

import pytest

from src.campus_portal.campus_portal.admin.model import AdminProfile
from src.campus_portal.campus_portal.announcements.model import Announcement
from src.campus_portal.campus_portal.attendance.model import AttendanceRecord, AttendanceReportRow
from src.campus_portal.campus_portal.calendars.model import Calendar, CalendarFile
from src.campus_portal.campus_portal.container import wire_container
from src.campus_portal.campus_portal.core.enums import Role
from src.campus_portal.campus_portal.core.exceptions import AuthenticationError, IdentityProviderError
from src.campus_portal.campus_portal.enrollments.model import SubjectDescriptor, SubjectEnrollment
from src.campus_portal.campus_portal.faculty.model import Faculty, NewFaculty
from src.campus_portal.campus_portal.identity.verifier import VerifiedIdentity
from src.campus_portal.campus_portal.main import create_app
from src.campus_portal.campus_portal.students.model import NewStudent, Student
from src.campus_portal.campus_portal.users.model import User

FIXED_NOW = datetime(2024, 1, 15, 9, 0, 0)


class FakeIdentity:
    """Identity provider double: tokens map to uids, accounts live in a dict."""

    def __init__(self):
        self.accounts: dict[str, dict] = {}
        self.tokens: dict[str, str] = {}
        self.fail_create = False
        self._next = 1

    def issue_token(self, uid: str) -> str:
        token = f"token-{uid}"
        self.tokens[token] = uid
        return token

    def verify_token(self, token: str) -> VerifiedIdentity:
        uid = self.tokens.get(token)
        if uid is None:
            raise AuthenticationError("Invalid token")
        return VerifiedIdentity(uid=uid, email=self.accounts.get(uid, {}).get("email"))

    def create_account(self, *, email: str, password: str, display_name: str) -> str:
        if self.fail_create:
            raise IdentityProviderError("Identity provider unavailable")
        for uid, acc in list(self.accounts.items()):
            if acc["email"] == email:
                del self.accounts[uid]
        uid = f"uid-{self._next}"
        self._next += 1
        self.accounts[uid] = {"email": email, "password": password, "display_name": display_name}
        return uid

    def delete_account(self, uid: str) -> None:
        self.accounts.pop(uid, None)

    def password_setup_link(self, email: str) -> Optional[str]:
        return f"https://auth.example.test/setup?email={email}"

    def password_for(self, email: str) -> Optional[str]:
        for acc in self.accounts.values():
            if acc["email"] == email:
                return acc["password"]
        return None


class InMemoryUsers:
    def __init__(self):
        self.by_id: dict[int, User] = {}
        self._next = 1

    def get_by_identity_uid(self, identity_uid: str) -> Optional[User]:
        return next((u for u in self.by_id.values() if u.identity_uid == identity_uid), None)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.by_id.values() if u.email == email), None)

    def create_user(self, *, identity_uid, email, name, role, university_id) -> int:
        uid = self._next
        self._next += 1
        self.by_id[uid] = User(
            user_id=uid, identity_uid=identity_uid, email=email, name=name, role=role, university_id=university_id
        )
        return uid

    def delete_by_email(self, email: str) -> bool:
        user = self.get_by_email(email)
        if not user:
            return False
        del self.by_id[user.user_id]
        return True


class InMemoryStudents:
    def __init__(self):
        self.by_email: dict[str, Student] = {}
        self.images: dict[str, bytes] = {}
        self._next = 1

    def get_by_email(self, email):
        return self.by_email.get(email)

    def get_by_roll_no(self, roll_no):
        return next((s for s in self.by_email.values() if s.roll_no == roll_no), None)

    def list_all(self):
        return list(self.by_email.values())

    def list_by_emails(self, emails):
        return [self.by_email[e] for e in emails if e in self.by_email]

    def create_student(self, student: NewStudent) -> int:
        sid = self._next
        self._next += 1
        self.by_email[student.email] = Student(student_id=sid, **asdict(student))
        return sid

    def set_identifiers(self, *, student_id, roll_no, university_id) -> bool:
        for email, s in self.by_email.items():
            if s.student_id == student_id:
                self.by_email[email] = replace(s, roll_no=roll_no, university_id=university_id)
                return True
        return False

    def update_fields(self, email, fields) -> bool:
        if email not in self.by_email:
            return False
        self.by_email[email] = replace(self.by_email[email], **fields)
        return True

    def delete_by_email(self, email) -> bool:
        self.images.pop(email, None)
        return self.by_email.pop(email, None) is not None

    def set_image(self, email, data) -> bool:
        if email not in self.by_email:
            return False
        self.images[email] = data
        self.by_email[email] = replace(self.by_email[email], has_image=True)
        return True

    def get_image(self, email):
        return self.images.get(email)


class InMemoryFaculty:
    def __init__(self):
        self.by_email: dict[str, Faculty] = {}
        self._next = 1

    def get_by_email(self, email):
        return self.by_email.get(email)

    def list_all(self):
        return list(self.by_email.values())

    def create_faculty(self, faculty: NewFaculty) -> int:
        fid = self._next
        self._next += 1
        self.by_email[faculty.email] = Faculty(faculty_id=fid, **asdict(faculty))
        return fid

    def set_university_id(self, *, faculty_id, university_id) -> bool:
        for email, f in self.by_email.items():
            if f.faculty_id == faculty_id:
                self.by_email[email] = replace(f, university_id=university_id)
                return True
        return False

    def update_fields(self, email, fields) -> bool:
        if email not in self.by_email:
            return False
        self.by_email[email] = replace(self.by_email[email], **fields)
        return True

    def delete_by_email(self, email) -> bool:
        return self.by_email.pop(email, None) is not None


class InMemoryAdmins:
    def __init__(self):
        self.by_email: dict[str, AdminProfile] = {}
        self._next = 1

    def get_by_email(self, email):
        return self.by_email.get(email)

    def create_admin(self, *, name, email, university_id, dob) -> int:
        aid = self._next
        self._next += 1
        self.by_email[email] = AdminProfile(admin_id=aid, name=name, email=email, university_id=university_id, dob=dob)
        return aid

    def delete_by_email(self, email) -> bool:
        return self.by_email.pop(email, None) is not None


class InMemoryEnrollments:
    def __init__(self, students: InMemoryStudents):
        self._students = students
        self.attendance: Optional["InMemoryAttendance"] = None
        self.by_id: dict[int, SubjectEnrollment] = {}
        self.members: dict[int, list[str]] = {}
        self._next = 1

    def get_by_id(self, enrollment_id):
        return self.by_id.get(int(enrollment_id))

    def list_all(self):
        return list(self.by_id.values())

    def list_by_faculty(self, faculty_email):
        return [e for e in self.by_id.values() if e.faculty_email == faculty_email]

    def list_by_student(self, student_email):
        return [e for e in self.by_id.values() if student_email in self.members[e.enrollment_id]]

    def create_with_roster(self, *, descriptor, faculty_email, student_emails) -> int:
        eid = self._next
        self._next += 1
        self.by_id[eid] = SubjectEnrollment(
            enrollment_id=eid,
            subject_name=descriptor.subject_name,
            subject_code=descriptor.subject_code,
            credits=descriptor.credits,
            faculty_email=faculty_email,
        )
        self.members[eid] = list(dict.fromkeys(student_emails))
        return eid

    def roster(self, enrollment_id):
        students = self._students.list_by_emails(self.members.get(int(enrollment_id), []))
        return sorted(students, key=lambda s: s.name)

    def roster_size(self, enrollment_id):
        return len(self.members.get(int(enrollment_id), []))

    def is_member(self, enrollment_id, student_email):
        return student_email in self.members.get(int(enrollment_id), [])

    def add_member(self, enrollment_id, student_email):
        if student_email not in self.members[int(enrollment_id)]:
            self.members[int(enrollment_id)].append(student_email)

    def remove_member(self, enrollment_id, student_email):
        if student_email in self.members[int(enrollment_id)]:
            self.members[int(enrollment_id)].remove(student_email)

    def update(self, enrollment_id, *, descriptor) -> bool:
        e = self.by_id.get(int(enrollment_id))
        if not e:
            return False
        self.by_id[e.enrollment_id] = replace(
            e, subject_name=descriptor.subject_name, subject_code=descriptor.subject_code, credits=descriptor.credits
        )
        return True

    def delete(self, enrollment_id) -> bool:
        self.members.pop(int(enrollment_id), None)
        return self.by_id.pop(int(enrollment_id), None) is not None

    def count_by_faculty(self, faculty_email):
        return len(self.list_by_faculty(faculty_email))

    def attendance_count(self, enrollment_id):
        if self.attendance is None:
            return 0
        return len(self.attendance.list_for_subject(enrollment_id))


class InMemoryAttendance:
    def __init__(self, students: InMemoryStudents, faculty: InMemoryFaculty, enrollments: InMemoryEnrollments):
        self._students = students
        self._faculty = faculty
        self._enrollments = enrollments
        self.records: dict[tuple[str, int, date], AttendanceRecord] = {}
        self.upsert_calls = 0
        self._next = 1

    def upsert_marks(self, *, subject_id, faculty_email, day, marks):
        self.upsert_calls += 1
        out = []
        for m in marks:
            key = (m.student_email, int(subject_id), day)
            existing = self.records.get(key)
            if existing is None:
                rec = AttendanceRecord(
                    attendance_id=self._next,
                    student_email=m.student_email,
                    faculty_email=faculty_email,
                    subject_id=int(subject_id),
                    date=day,
                    present=m.present,
                    remarks=m.remarks,
                )
                self._next += 1
            else:
                rec = replace(existing, present=m.present, remarks=m.remarks)
            self.records[key] = rec
            out.append(rec)
        return out

    def add(self, student_email, subject_id, day, present, faculty_email="prof@example.edu"):
        key = (student_email, int(subject_id), day)
        self.records[key] = AttendanceRecord(
            attendance_id=self._next,
            student_email=student_email,
            faculty_email=faculty_email,
            subject_id=int(subject_id),
            date=day,
            present=present,
        )
        self._next += 1

    def list_for_subject_and_date(self, subject_id, day):
        return [r for r in self.records.values() if r.subject_id == int(subject_id) and r.date == day]

    def list_for_subject(self, subject_id):
        return [r for r in self.records.values() if r.subject_id == int(subject_id)]

    def list_for_student_subject(self, student_email, subject_id, *, start_date=None, end_date=None):
        out = []
        for r in self.records.values():
            if r.student_email != student_email or r.subject_id != int(subject_id):
                continue
            if start_date is not None and r.date < start_date:
                continue
            if end_date is not None and r.date > end_date:
                continue
            out.append(r)
        return sorted(out, key=lambda r: r.date, reverse=True)

    def _report(self, r: AttendanceRecord) -> AttendanceReportRow:
        student = self._students.get_by_email(r.student_email)
        subject = self._enrollments.get_by_id(r.subject_id)
        faculty = self._faculty.get_by_email(r.faculty_email)
        return AttendanceReportRow(
            record=r,
            student_name=student.name if student else None,
            subject_name=subject.subject_name if subject else None,
            subject_code=subject.subject_code if subject else None,
            faculty_name=faculty.name if faculty else None,
        )

    def history_for_student(self, student_email, subject_id=None):
        rows = [
            r
            for r in self.records.values()
            if r.student_email == student_email and (subject_id is None or r.subject_id == int(subject_id))
        ]
        return [self._report(r) for r in sorted(rows, key=lambda r: r.date, reverse=True)]

    def history_for_faculty(self, faculty_email):
        rows = [r for r in self.records.values() if r.faculty_email == faculty_email]
        return [self._report(r) for r in sorted(rows, key=lambda r: r.date, reverse=True)]

    def count_for_student(self, student_email):
        return sum(1 for r in self.records.values() if r.student_email == student_email)

    def count_for_faculty(self, faculty_email):
        return sum(1 for r in self.records.values() if r.faculty_email == faculty_email)


class InMemoryAnnouncements:
    def __init__(self):
        self.by_id: dict[int, Announcement] = {}
        self._next = 1

    def create(self, message) -> int:
        aid = self._next
        self._next += 1
        self.by_id[aid] = Announcement(announcement_id=aid, message=message, created_at=FIXED_NOW + timedelta(minutes=aid))
        return aid

    def get_by_id(self, announcement_id):
        return self.by_id.get(int(announcement_id))

    def list_recent(self, *, limit=None, offset=0):
        items = sorted(self.by_id.values(), key=lambda a: (a.created_at, a.announcement_id), reverse=True)
        items = items[offset:]
        return items[:limit] if limit is not None else items

    def count(self):
        return len(self.by_id)

    def update(self, announcement_id, message) -> bool:
        a = self.by_id.get(int(announcement_id))
        if not a:
            return False
        self.by_id[a.announcement_id] = replace(a, message=message)
        return True

    def delete(self, announcement_id) -> bool:
        return self.by_id.pop(int(announcement_id), None) is not None


class InMemoryCalendars:
    def __init__(self):
        self.files: dict[int, CalendarFile] = {}
        self._next = 1

    def create(self, *, title, file_name, data) -> int:
        cid = self._next
        self._next += 1
        cal = Calendar(calendar_id=cid, title=title, file_name=file_name, last_updated=FIXED_NOW + timedelta(minutes=cid))
        self.files[cid] = CalendarFile(calendar=cal, data=data)
        return cid

    def get_by_id(self, calendar_id):
        f = self.files.get(int(calendar_id))
        return f.calendar if f else None

    def get_file(self, calendar_id):
        return self.files.get(int(calendar_id))

    def list_all(self):
        return sorted((f.calendar for f in self.files.values()), key=lambda c: c.last_updated, reverse=True)

    def update_title(self, calendar_id, title) -> bool:
        f = self.files.get(int(calendar_id))
        if not f:
            return False
        self.files[int(calendar_id)] = CalendarFile(calendar=replace(f.calendar, title=title), data=f.data)
        return True

    def delete(self, calendar_id) -> bool:
        return self.files.pop(int(calendar_id), None) is not None


class Seeder:
    """Creates people, logins and subjects directly in the fakes."""

    def __init__(self, repos: dict, identity: FakeIdentity):
        self.repos = repos
        self.identity = identity
        self._tokens: dict[str, str] = {}

    def login(self, email: str, role: Role, name: str = "Someone") -> str:
        uid = self.identity.create_account(email=email, password="secret-pw", display_name=name)
        self.repos["users_repo"].create_user(identity_uid=uid, email=email, name=name, role=role, university_id=None)
        token = self.identity.issue_token(uid)
        self._tokens[email] = token
        return token

    def token(self, email: str) -> str:
        return self._tokens[email]

    def headers(self, email: str) -> dict:
        return {"Authorization": f"Bearer {self.token(email)}"}

    def student(self, email: str, name: Optional[str] = None, *, login: bool = True, **fields) -> Student:
        name = name or email.split("@")[0].title()
        new = NewStudent(email=email, name=name, course=fields.pop("course", "BTech"),
                         branch=fields.pop("branch", "CSE"), semester=fields.pop("semester", 3),
                         year=fields.pop("year", 2), **fields)
        self.repos["students_repo"].create_student(new)
        if login:
            self.login(email, Role.STUDENT, name)
        return self.repos["students_repo"].get_by_email(email)

    def faculty(self, email: str, name: Optional[str] = None, *, login: bool = True, department: str = "CSE") -> Faculty:
        name = name or email.split("@")[0].title()
        self.repos["faculty_repo"].create_faculty(NewFaculty(email=email, name=name, department=department))
        if login:
            self.login(email, Role.FACULTY, name)
        return self.repos["faculty_repo"].get_by_email(email)

    def admin(self, email: str = "admin@example.edu", name: str = "Admin") -> str:
        return self.login(email, Role.ADMIN, name)

    def subject(self, faculty_email: str, students, *, name="Algorithms", code="CS101", credits=4) -> int:
        return self.repos["enrollments_repo"].create_with_roster(
            descriptor=SubjectDescriptor(subject_name=name, subject_code=code, credits=credits),
            faculty_email=faculty_email,
            student_emails=list(students),
        )


def build_fake_repos() -> dict:
    students = InMemoryStudents()
    faculty = InMemoryFaculty()
    enrollments = InMemoryEnrollments(students)
    attendance = InMemoryAttendance(students, faculty, enrollments)
    enrollments.attendance = attendance
    return {
        "users_repo": InMemoryUsers(),
        "students_repo": students,
        "faculty_repo": faculty,
        "admins_repo": InMemoryAdmins(),
        "enrollments_repo": enrollments,
        "attendance_repo": attendance,
        "announcements_repo": InMemoryAnnouncements(),
        "calendars_repo": InMemoryCalendars(),
    }


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def repos() -> dict:
    return build_fake_repos()


@pytest.fixture
def identity() -> FakeIdentity:
    return FakeIdentity()


@pytest.fixture
def container(repos, identity):
    return wire_container(identity=identity, rng=random.Random(7), **repos)


@pytest.fixture
def seed(repos, identity) -> Seeder:
    return Seeder(repos, identity)


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()
