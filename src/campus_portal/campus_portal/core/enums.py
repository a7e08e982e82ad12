from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    STUDENT = "student"
    FACULTY = "faculty"


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class Action(str, Enum):
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class Decision(str, Enum):
    ALLOW = "allow"
    DENY = "deny"


DASHBOARD_BY_ROLE = {
    Role.ADMIN: "/admin/dashboard",
    Role.STUDENT: "/student/dashboard",
    Role.FACULTY: "/teacher/dashboard",
}
