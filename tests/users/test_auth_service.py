from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from src.attendance_portal.attendance_portal.core.enums import Role
from src.attendance_portal.attendance_portal.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ValidationError,
)
from src.attendance_portal.attendance_portal.users.tokens import TokenService


def _register(container, **overrides):
    payload = dict(
        email="staff@example.com",
        password="secret1",
        confirm_password="secret1",
        first_name="Asha",
        last_name="Rao",
        phone="9876543210",
        institute_code="A",
    )
    payload.update(overrides)
    return container.auth_service.register(**payload)


def test_register_returns_token_and_public_user(container):
    result = _register(container)

    assert result.user.role == Role.USER
    assert result.user.name == "Asha Rao"
    body = result.to_dict()
    assert body["user"] == {
        "id": result.user.user_id,
        "name": "Asha Rao",
        "email": "staff@example.com",
        "role": "user",
        "instituteCode": "A",
    }
    assert "password_hash" not in body["user"]

    claims = container.tokens.verify(result.token)
    assert claims.user_id == result.user.user_id
    assert claims.institute_code == "A"


def test_register_password_mismatch_inserts_nothing(container, memory_db):
    with pytest.raises(ValidationError, match="Passwords do not match"):
        _register(container, confirm_password="different")

    assert memory_db.users == {}


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"email": ""}, "Email and password are required"),
        ({"password": None}, "Email and password are required"),
        ({"password": "abc", "confirm_password": "abc"}, "Password must be at least 6 characters"),
    ],
)
def test_register_rejects_bad_input(container, overrides, message):
    with pytest.raises(ValidationError, match=message):
        _register(container, **overrides)


def test_register_same_email_twice_conflicts(container):
    _register(container)

    with pytest.raises(ConflictError):
        _register(container)


def test_login_unknown_email_and_wrong_password_look_the_same(container):
    _register(container)

    with pytest.raises(AuthenticationError) as unknown:
        container.auth_service.login("nobody@example.com", "secret1")
    with pytest.raises(AuthenticationError) as wrong:
        container.auth_service.login("staff@example.com", "wrong-pass")

    assert str(unknown.value) == str(wrong.value) == "Invalid credentials"


def test_login_succeeds_with_right_password(container):
    registered = _register(container)

    result = container.auth_service.login("staff@example.com", "secret1")

    assert result.user.user_id == registered.user.user_id


def test_expired_token_is_rejected(container, make_user):
    user = make_user("old@example.com")
    issued_long_ago = TokenService("test-secret", clock=lambda: datetime.now(timezone.utc) - timedelta(days=8))
    token = issued_long_ago.issue(user)

    with pytest.raises(AuthenticationError, match="Invalid token"):
        container.tokens.verify(token)


def test_token_signed_with_other_secret_is_rejected(container, make_user):
    token = TokenService("someone-else").issue(make_user("x@example.com"))

    with pytest.raises(AuthenticationError):
        container.tokens.verify(token)


def test_default_admin_seeded_once(container, memory_db):
    first = container.user_service.ensure_default_admin(email="admin@example.com", password="adminpass")
    second = container.user_service.ensure_default_admin(email="admin@example.com", password="adminpass")

    assert first is not None
    assert second is None
    assert [u.role for u in memory_db.users.values()] == [Role.ADMIN]
    assert container.auth_service.login("admin@example.com", "adminpass").user.role == Role.ADMIN


def test_list_users_is_admin_only(container, staff_a, admin):
    _register(container)

    with pytest.raises(AuthorizationError):
        container.user_service.list_users(caller=staff_a)
    assert len(container.user_service.list_users(caller=admin)) == 1


def test_delete_user_helper(container, admin, make_user):
    user = make_user("gone@example.com")

    container.user_service.delete_user(caller=admin, user_id=user.user_id)

    assert container.users_repo.get_by_id(user.user_id) is None


@pytest.mark.parametrize(
    "overrides",
    [
        {"password": 1234567, "confirm_password": 1234567},
        {"email": ["staff@example.com"]},
    ],
)
def test_register_requires_text_credentials(container, overrides):
    with pytest.raises(ValidationError, match="Email and password are required"):
        _register(container, **overrides)


def test_login_requires_text_credentials(container):
    with pytest.raises(ValidationError, match="Email and password are required"):
        container.auth_service.login("staff@example.com", 1234567)


def test_register_rejects_values_longer_than_their_columns(container, memory_db):
    with pytest.raises(ValidationError, match="Institute code must be less than 100 characters"):
        _register(container, institute_code="I" * 101)
    with pytest.raises(ValidationError, match="Email must be less than 255 characters"):
        _register(container, email="a" * 250 + "@example.com")

    assert memory_db.users == {}


def test_register_losing_an_email_race_is_a_conflict(container, monkeypatch):
    _register(container)
    # A concurrent request that looked the email up before the first insert landed.
    monkeypatch.setattr(container.users_repo, "get_by_email", lambda email: None)

    with pytest.raises(ConflictError, match="User with this email already exists"):
        _register(container)


def test_default_admin_seed_skips_email_owned_by_staff(container, memory_db, make_user):
    staff = make_user("admin@example.com")

    assert container.user_service.ensure_default_admin(email="admin@example.com", password="adminpass") is None
    assert [u.role for u in memory_db.users.values()] == [Role.USER]
    assert container.users_repo.get_by_id(staff.user_id).role == Role.USER
