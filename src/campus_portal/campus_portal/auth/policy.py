"""Authorization policy.

`authorize(subject, resource, action)` is the single decision point used by
every controller. Access is granted when the subject's role is listed for the
resource kind and action, and, for non-admin subjects, when a resource that
names an owner is owned by the subject.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Action, Decision, Role
from ..users.model import User

ALL_ROLES = frozenset(Role)
STAFF = frozenset({Role.ADMIN, Role.FACULTY})
ADMIN_ONLY = frozenset({Role.ADMIN})


class ResourceKind:
    ADMIN_CONSOLE = "admin_console"
    STUDENT_RECORD = "student_record"
    FACULTY_RECORD = "faculty_record"
    ATTENDANCE = "attendance"
    ENROLLMENT = "enrollment"
    ANNOUNCEMENT = "announcement"
    CALENDAR = "calendar"
    ACCOUNT = "account"


PERMISSIONS: dict[str, dict[Action, frozenset]] = {
    ResourceKind.ADMIN_CONSOLE: {a: ADMIN_ONLY for a in Action},
    ResourceKind.STUDENT_RECORD: {
        Action.READ: frozenset({Role.STUDENT}),
        Action.UPDATE: frozenset({Role.STUDENT}),
    },
    ResourceKind.FACULTY_RECORD: {
        Action.READ: frozenset({Role.FACULTY}),
        Action.UPDATE: frozenset({Role.FACULTY}),
    },
    ResourceKind.ATTENDANCE: {
        Action.READ: STAFF,
        Action.CREATE: STAFF,
        Action.UPDATE: STAFF,
    },
    ResourceKind.ENROLLMENT: {
        Action.READ: ALL_ROLES,
        Action.CREATE: STAFF,
        Action.UPDATE: STAFF,
        Action.DELETE: STAFF,
    },
    ResourceKind.ANNOUNCEMENT: {
        Action.READ: ALL_ROLES,
        Action.CREATE: ADMIN_ONLY,
        Action.UPDATE: ADMIN_ONLY,
        Action.DELETE: ADMIN_ONLY,
    },
    ResourceKind.CALENDAR: {
        Action.READ: ALL_ROLES,
        Action.CREATE: ADMIN_ONLY,
        Action.UPDATE: ADMIN_ONLY,
        Action.DELETE: ADMIN_ONLY,
    },
    ResourceKind.ACCOUNT: {
        Action.READ: ALL_ROLES,
    },
}


@dataclass(frozen=True)
class Resource:
    kind: str
    owner_email: Optional[str] = None
    owner_uid: Optional[str] = None


def authorize(subject: Optional[User], resource: Resource, action: Action) -> Decision:
    if subject is None:
        return Decision.DENY

    allowed = PERMISSIONS.get(resource.kind, {}).get(action, frozenset())
    if subject.role not in allowed:
        return Decision.DENY

    if subject.role == Role.ADMIN:
        return Decision.ALLOW

    if resource.owner_email is not None and resource.owner_email.lower() != subject.email.lower():
        return Decision.DENY
    if resource.owner_uid is not None and resource.owner_uid != subject.identity_uid:
        return Decision.DENY

    return Decision.ALLOW
