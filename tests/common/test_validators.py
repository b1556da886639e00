from __future__ import annotations

import pytest

from src.attendance_portal.attendance_portal.common.datetime_utils import normalize_day
from src.attendance_portal.attendance_portal.common.validators import (
    collect_student_errors,
    is_valid_batch,
    is_valid_email,
    is_valid_phone,
    to_row_id,
)
from src.attendance_portal.attendance_portal.core.exceptions import ValidationError


@pytest.mark.parametrize("phone", ["", None, "9876543210", "98765 43210", "987-654-3210", "123456789012345"])
def test_valid_phones(phone):
    assert is_valid_phone(phone)


@pytest.mark.parametrize("phone", ["123456789", "1234567890123456", "+919876543210", "98765abcde"])
def test_invalid_phones(phone):
    assert not is_valid_phone(phone)


def test_email_and_batch_shapes():
    assert is_valid_email("a.b@school.edu")
    assert not is_valid_email("a b@school.edu")
    assert not is_valid_email("nobody@localhost")
    assert is_valid_batch("2025")
    assert not is_valid_batch("25")


def test_update_payload_does_not_require_names():
    assert collect_student_errors({"batch": "2026"}, is_update=True) == []
    assert collect_student_errors({}, is_update=False) == ["First name is required", "Last name is required"]


def test_whitespace_only_name_is_missing():
    assert "First name is required" in collect_student_errors({"firstName": "   ", "lastName": "K"})


@pytest.mark.parametrize(
    "value, expected",
    [("2025-06-01", "2025-06-01"), (" 2025-06-01 ", "2025-06-01"), ("2025-02-30", None), ("06/01/2025", None), ("", None), (None, None)],
)
def test_normalize_day(value, expected):
    assert normalize_day(value) == expected


def test_institute_code_length_is_checked_after_trimming():
    assert collect_student_errors({"instituteCode": " " + "A" * 100 + " "}, is_update=True) == []
    assert collect_student_errors({"instituteCode": "A" * 101}, is_update=True) == [
        "Institute code must be less than 100 characters"
    ]


@pytest.mark.parametrize("value, expected", [("42", 42), (" 7 ", 7), (0, 0), (2**31 - 1, 2**31 - 1)])
def test_to_row_id_accepts_int_column_values(value, expected):
    assert to_row_id(value, "bad id") == expected


@pytest.mark.parametrize("value", ["abc", "", None, -5, 2**31, float("inf"), False, {"id": 1}])
def test_to_row_id_rejects_everything_else(value):
    with pytest.raises(ValidationError, match="bad id"):
        to_row_id(value, "bad id")
