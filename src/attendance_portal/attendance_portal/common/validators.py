from __future__ import annotations

import re
from typing import Optional

from ..core.constants import (
    INSTITUTE_CODE_MAX_LENGTH,
    MAX_ROW_ID,
    NAME_MAX_LENGTH,
    PHONE_MAX_DIGITS,
    PHONE_MIN_DIGITS,
)
from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PHONE_RE = re.compile(rf"^[0-9]{{{PHONE_MIN_DIGITS},{PHONE_MAX_DIGITS}}}$")
_BATCH_RE = re.compile(r"^\d{4}$")


def require_non_empty(value: Optional[str], message: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(message)
    return str(value).strip()


def require_min_length(value: Optional[str], message: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(message)
    return value


def is_valid_email(value: str) -> bool:
    return bool(_EMAIL_RE.match(value))


def is_valid_phone(value: Optional[str]) -> bool:
    """Phone is optional; separators (spaces, hyphens) are ignored."""
    if not value:
        return True
    return bool(_PHONE_RE.match(re.sub(r"[\s-]", "", value)))


def is_valid_batch(value: str) -> bool:
    return bool(_BATCH_RE.match(value))


def collect_student_errors(data: dict, *, is_update: bool = False) -> list[str]:
    """Validate a student payload and return every problem found."""

    errors: list[str] = []
    first_name = data.get("firstName")
    last_name = data.get("lastName")

    if not is_update:
        if not first_name or not str(first_name).strip():
            errors.append("First name is required")
        if not last_name or not str(last_name).strip():
            errors.append("Last name is required")

    if first_name and len(str(first_name)) > NAME_MAX_LENGTH:
        errors.append(f"First name must be less than {NAME_MAX_LENGTH} characters")
    if last_name and len(str(last_name)) > NAME_MAX_LENGTH:
        errors.append(f"Last name must be less than {NAME_MAX_LENGTH} characters")
    if data.get("phone") and not is_valid_phone(str(data["phone"])):
        errors.append("Invalid phone number format")
    if data.get("email") and not is_valid_email(str(data["email"])):
        errors.append("Invalid email format")
    if data.get("batch") and not is_valid_batch(str(data["batch"])):
        errors.append("Batch must be a valid year (e.g., 2025)")
    if data.get("instituteCode") and len(str(data["instituteCode"]).strip()) > INSTITUTE_CODE_MAX_LENGTH:
        errors.append(f"Institute code must be less than {INSTITUTE_CODE_MAX_LENGTH} characters")

    return errors


def to_row_id(value, message: str) -> int:
    """Integer primary key from request input; anything a MySQL INT id cannot hold is rejected."""

    if isinstance(value, bool):
        raise ValidationError(message)
    try:
        row_id = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(message)
    if not 0 <= row_id <= MAX_ROW_ID:
        raise ValidationError(message)
    return row_id


def raise_if_errors(errors: list[str]) -> None:
    if errors:
        raise ValidationError(", ".join(errors))
