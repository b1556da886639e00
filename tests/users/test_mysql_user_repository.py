from __future__ import annotations

from unittest import mock

import mysql.connector
import pytest
from mysql.connector import errorcode

from src.attendance_portal.attendance_portal.core.enums import Role
from src.attendance_portal.attendance_portal.core.exceptions import ConflictError
from src.attendance_portal.attendance_portal.users.mysql_user_repository import MySQLUserRepository


def _repo_whose_insert_fails(error: Exception):
    conn = mock.Mock()
    conn.cursor.return_value.execute.side_effect = error
    factory = mock.Mock()
    factory.connect.return_value = conn
    return MySQLUserRepository(factory), conn


def _insert(repo):
    return repo.create_user(
        name="Asha Rao",
        email="asha@example.com",
        password_hash="hash",
        phone="",
        institute_code="A",
        role=Role.USER,
    )


def test_duplicate_email_from_database_is_a_conflict():
    repo, conn = _repo_whose_insert_fails(
        mysql.connector.IntegrityError(msg="Duplicate entry 'asha@example.com'", errno=errorcode.ER_DUP_ENTRY)
    )

    with pytest.raises(ConflictError, match="User with this email already exists"):
        _insert(repo)
    conn.rollback.assert_called_once()
    conn.close.assert_called_once()


def test_other_integrity_errors_propagate():
    error = mysql.connector.IntegrityError(msg="Column cannot be null", errno=errorcode.ER_BAD_NULL_ERROR)
    repo, _ = _repo_whose_insert_fails(error)

    with pytest.raises(mysql.connector.IntegrityError):
        _insert(repo)
