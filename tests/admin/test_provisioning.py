from __future__ import annotations

import random
import re
from datetime import date

import pytest

from src.campus_portal.campus_portal.admin.service import generate_roll_no, generate_university_id
from src.campus_portal.campus_portal.container import wire_container
from src.campus_portal.campus_portal.core.enums import Role
from src.campus_portal.campus_portal.core.exceptions import (
    BusinessRuleError,
    IdentityProviderError,
    NotFoundError,
    ValidationError,
)

STUDENT = {
    "name": "Rahul Sharma",
    "email": "rahul@example.edu",
    "course": "BTech",
    "branch": "CSE",
    "semester": 3,
    "year": 2,
    "contactNo": "9876543210",
    "dob": "2003-05-17",
}


@pytest.fixture
def legacy_container(repos, identity):
    return wire_container(identity=identity, legacy_dob_passwords=True, rng=random.Random(7), **repos)


def test_roll_number_joins_year_branch_and_id():
    assert generate_roll_no(2, "CSE", 17) == "2CSE17"
    assert generate_roll_no(None, None, 5) == "1GEN5"


def test_university_id_shape():
    rng = random.Random(1)
    uid = generate_university_id("Rahul Sharma", 9876543210, domain="@stu.edu", rng=rng)
    assert re.fullmatch(r"luhaR210\d{2}@stu\.edu", uid)


def test_faculty_university_id_prefers_second_name():
    uid = generate_university_id("Grace Hopper", 5550001234, domain="@univ.edu", rng=random.Random(1), use_second_name=True)
    assert re.fullmatch(r"reppoH234\d{2}@univ\.edu", uid)

    single = generate_university_id("Plato", 7, domain="@univ.edu", rng=random.Random(1), use_second_name=True)
    assert re.fullmatch(r"otalP007\d{2}@univ\.edu", single)


def test_upload_student_provisions_row_user_and_identity(container, repos, identity):
    result = container.admin_service.upload_student_detail(STUDENT)

    student = result.record
    assert student.roll_no == f"2CSE{student.student_id}"
    assert student.university_id.endswith("@stu.edu")
    assert student.dob == date(2003, 5, 17)

    user = repos["users_repo"].get_by_email("rahul@example.edu")
    assert user.role == Role.STUDENT
    assert user.university_id == student.university_id
    assert user.identity_uid in identity.accounts


def test_default_credential_is_random_with_setup_link(container, identity):
    result = container.admin_service.upload_student_detail(STUDENT)

    password = identity.password_for("rahul@example.edu")
    assert password != "2003-05-17"
    assert len(password) == 16
    assert result.password_setup_link == "https://auth.example.test/setup?email=rahul@example.edu"


def test_legacy_credential_is_date_of_birth(legacy_container, identity):
    result = legacy_container.admin_service.upload_student_detail(STUDENT)
    assert identity.password_for("rahul@example.edu") == "2003-05-17"
    assert result.password_setup_link is None

    no_dob = dict(STUDENT, email="nodob@example.edu", dob=None)
    legacy_container.admin_service.upload_student_detail(no_dob)
    assert identity.password_for("nodob@example.edu") == "password123"


def test_identity_failure_rolls_back_student_row(container, repos, identity):
    identity.fail_create = True

    with pytest.raises(IdentityProviderError):
        container.admin_service.upload_student_detail(STUDENT)

    assert repos["students_repo"].get_by_email("rahul@example.edu") is None
    assert repos["users_repo"].get_by_email("rahul@example.edu") is None


def test_duplicate_email_is_rejected(container):
    container.admin_service.upload_student_detail(STUDENT)
    with pytest.raises(BusinessRuleError, match="Email already exists"):
        container.admin_service.upload_student_detail(STUDENT)


def test_missing_required_fields(container):
    with pytest.raises(ValidationError):
        container.admin_service.upload_student_detail({"name": "No Email"})
    with pytest.raises(ValidationError):
        container.admin_service.upload_student_detail(dict(STUDENT, gender="Unknown"))


def test_upload_faculty(container, repos, identity):
    result = container.admin_service.upload_faculty_detail(
        {"name": "Grace Hopper", "email": "grace@example.edu", "department": "CS", "contactNo": 5550001234}
    )
    assert re.fullmatch(r"reppoH234\d{2}@univ\.edu", result.record.university_id)
    assert repos["users_repo"].get_by_email("grace@example.edu").role == Role.FACULTY


def test_update_student_by_roll_number_ignores_email(container):
    roll_no = container.admin_service.upload_student_detail(STUDENT).record.roll_no
    updated = container.admin_service.update_student(roll_no, {"semester": "4", "email": "new@example.edu"})

    assert updated.semester == 4
    assert updated.email == "rahul@example.edu"


def test_delete_student_removes_user_and_identity(container, repos, identity):
    roll_no = container.admin_service.upload_student_detail(STUDENT).record.roll_no
    container.admin_service.delete_student(roll_no)

    assert repos["students_repo"].get_by_email("rahul@example.edu") is None
    assert repos["users_repo"].get_by_email("rahul@example.edu") is None
    assert identity.password_for("rahul@example.edu") is None

    with pytest.raises(NotFoundError):
        container.admin_service.delete_student(roll_no)


def test_delete_student_blocked_by_attendance(container, repos):
    student = container.admin_service.upload_student_detail(STUDENT).record
    repos["attendance_repo"].add(student.email, 1, date(2024, 1, 10), True)

    with pytest.raises(BusinessRuleError):
        container.admin_service.delete_student(student.roll_no)
    assert repos["students_repo"].get_by_email(student.email) is not None


def test_delete_faculty_blocked_while_teaching(container, seed):
    seed.faculty("prof@example.edu", login=False)
    seed.student("alice@example.edu", login=False)
    seed.subject("prof@example.edu", ["alice@example.edu"])

    with pytest.raises(BusinessRuleError):
        container.admin_service.delete_faculty("prof@example.edu")


def test_provision_admin_with_explicit_password(container, repos, identity):
    result = container.admin_service.provision_admin(name="Ada Admin", email="ada@example.edu", password="s3cret-pass")

    assert result.record.email == "ada@example.edu"
    assert result.password_setup_link is None
    assert identity.password_for("ada@example.edu") == "s3cret-pass"
    assert repos["users_repo"].get_by_email("ada@example.edu").role == Role.ADMIN


def test_email_of_another_role_is_not_taken_over(container, repos, identity, seed):
    seed.faculty("prof@example.edu", "Prof Ada")

    with pytest.raises(BusinessRuleError, match="Email already exists"):
        container.admin_service.upload_student_detail(
            {"name": "Eve Mallory", "email": "prof@example.edu", "course": "BTech"}
        )

    assert repos["users_repo"].get_by_email("prof@example.edu").role is Role.FACULTY
    assert identity.password_for("prof@example.edu") == "secret-pw"
    assert repos["students_repo"].get_by_email("prof@example.edu") is None


def test_provision_account_refuses_registered_email(container, identity, seed):
    seed.admin("root@example.edu")

    with pytest.raises(BusinessRuleError, match="Email already exists"):
        container.user_service.provision_account(
            email="root@example.edu", password="other-pw", name="Impostor", role=Role.STUDENT, university_id=None
        )
    assert identity.password_for("root@example.edu") == "secret-pw"


def test_orphan_identity_account_is_replaced(container, repos, identity):
    identity.create_account(email="rahul@example.edu", password="stale-pw", display_name="Old")

    container.admin_service.upload_student_detail(STUDENT)

    user = repos["users_repo"].get_by_email("rahul@example.edu")
    assert user.role is Role.STUDENT
    assert identity.password_for("rahul@example.edu") != "stale-pw"
    assert len([a for a in identity.accounts.values() if a["email"] == "rahul@example.edu"]) == 1


def test_failed_row_delete_keeps_login(container, repos, identity, monkeypatch):
    roll_no = container.admin_service.upload_student_detail(STUDENT).record.roll_no

    def broken_delete(email):
        raise RuntimeError("database unavailable")

    monkeypatch.setattr(repos["students_repo"], "delete_by_email", broken_delete)

    with pytest.raises(RuntimeError):
        container.admin_service.delete_student(roll_no)
    assert repos["users_repo"].get_by_email("rahul@example.edu") is not None
    assert identity.password_for("rahul@example.edu") is not None
