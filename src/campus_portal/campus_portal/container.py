from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

from .admin.mysql_admin_repository import MySQLAdminRepository
from .admin.repository import AdminRepository
from .admin.service import AdminService
from .announcements.mysql_announcement_repository import MySQLAnnouncementRepository
from .announcements.repository import AnnouncementRepository
from .announcements.service import AnnouncementService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .calendars.mysql_calendar_repository import MySQLCalendarRepository
from .calendars.repository import CalendarRepository
from .calendars.service import CalendarService
from .core.constants import DEFAULT_SUMMARY_WINDOW_DAYS
from .database.connection import DatabaseConnection
from .enrollments.mysql_enrollment_repository import MySQLEnrollmentRepository
from .enrollments.repository import EnrollmentRepository
from .enrollments.service import SubjectEnrollmentService
from .faculty.mysql_faculty_repository import MySQLFacultyRepository
from .faculty.repository import FacultyRepository
from .faculty.service import FacultyService
from .identity.verifier import IdentityVerifier
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    identity: IdentityVerifier

    users_repo: UserRepository
    students_repo: StudentRepository
    faculty_repo: FacultyRepository
    admins_repo: AdminRepository
    enrollments_repo: EnrollmentRepository
    attendance_repo: AttendanceRepository
    announcements_repo: AnnouncementRepository
    calendars_repo: CalendarRepository

    auth_service: AuthService
    user_service: UserService
    admin_service: AdminService
    student_service: StudentService
    faculty_service: FacultyService
    enrollment_service: SubjectEnrollmentService
    attendance_service: AttendanceService
    announcement_service: AnnouncementService
    calendar_service: CalendarService

    conn: Optional[DatabaseConnection] = None


def wire_container(
    *,
    identity: IdentityVerifier,
    users_repo: UserRepository,
    students_repo: StudentRepository,
    faculty_repo: FacultyRepository,
    admins_repo: AdminRepository,
    enrollments_repo: EnrollmentRepository,
    attendance_repo: AttendanceRepository,
    announcements_repo: AnnouncementRepository,
    calendars_repo: CalendarRepository,
    conn: Optional[DatabaseConnection] = None,
    legacy_dob_passwords: bool = False,
    summary_window_days: int = DEFAULT_SUMMARY_WINDOW_DAYS,
    rng: Optional[random.Random] = None,
) -> Container:
    """Build services on top of the given repositories."""

    auth_service = AuthService(users_repo, identity)
    user_service = UserService(users_repo, identity)
    enrollment_service = SubjectEnrollmentService(enrollments_repo, students_repo, faculty_repo)
    admin_service = AdminService(
        students=students_repo,
        faculty=faculty_repo,
        admins=admins_repo,
        enrollments=enrollments_repo,
        attendance=attendance_repo,
        users=user_service,
        legacy_dob_passwords=legacy_dob_passwords,
        rng=rng,
    )
    attendance_service = AttendanceService(
        attendance_repo,
        enrollments_repo,
        students_repo,
        faculty_repo,
        summary_window_days=summary_window_days,
    )

    return Container(
        identity=identity,
        users_repo=users_repo,
        students_repo=students_repo,
        faculty_repo=faculty_repo,
        admins_repo=admins_repo,
        enrollments_repo=enrollments_repo,
        attendance_repo=attendance_repo,
        announcements_repo=announcements_repo,
        calendars_repo=calendars_repo,
        auth_service=auth_service,
        user_service=user_service,
        admin_service=admin_service,
        student_service=StudentService(students_repo, enrollment_service),
        faculty_service=FacultyService(faculty_repo, enrollment_service),
        enrollment_service=enrollment_service,
        attendance_service=attendance_service,
        announcement_service=AnnouncementService(announcements_repo),
        calendar_service=CalendarService(calendars_repo),
        conn=conn,
    )


def build_container(
    *,
    conn: DatabaseConnection,
    identity: IdentityVerifier,
    legacy_dob_passwords: bool = False,
    summary_window_days: int = DEFAULT_SUMMARY_WINDOW_DAYS,
) -> Container:
    return wire_container(
        identity=identity,
        users_repo=MySQLUserRepository(conn),
        students_repo=MySQLStudentRepository(conn),
        faculty_repo=MySQLFacultyRepository(conn),
        admins_repo=MySQLAdminRepository(conn),
        enrollments_repo=MySQLEnrollmentRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        announcements_repo=MySQLAnnouncementRepository(conn),
        calendars_repo=MySQLCalendarRepository(conn),
        conn=conn,
        legacy_dob_passwords=legacy_dob_passwords,
        summary_window_days=summary_window_days,
    )
