from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..common.datetime_utils import normalize_day
from ..common.validators import to_row_id
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..students.service import StudentService
from ..users.model import TokenClaims
from .model import AttendanceRow
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def parse_status(value: Any) -> Optional[AttendanceStatus]:
    if not isinstance(value, str):
        return None
    try:
        return AttendanceStatus(value.strip().lower())
    except ValueError:
        return None


def _missing_id(value: Any) -> bool:
    return value is None or value == "" or value == 0


def parse_student_id(value: Any) -> int:
    if _missing_id(value):
        raise ValidationError("Student ID is required")
    return to_row_id(value, "Invalid student ID")


def _optional_day(value: Optional[str], message: str) -> Optional[str]:
    if not value:
        return None
    day = normalize_day(value)
    if day is None:
        raise ValidationError(message)
    return day


class AttendanceService:
    """Use cases: record attendance one at a time or per day, and list it."""

    def __init__(self, attendance: AttendanceRepository, students: StudentService):
        self._attendance = attendance
        self._students = students

    def record(self, caller: TokenClaims, *, student_id: Any, date: Any, status: Any) -> int:
        sid = parse_student_id(student_id)
        day = normalize_day(date)
        if day is None:
            raise ValidationError("Valid date is required")
        parsed = parse_status(status)
        if parsed is None:
            raise ValidationError('Status must be "present" or "absent"')

        self._students.get_in_scope(caller, sid)
        return self._attendance.record(student_id=sid, date=day, status=parsed)

    def bulk_save(self, caller: TokenClaims, *, date: Any, records: Any) -> int:
        """Save one day's statuses, last write wins per (student, date).

        Every record is validated before the first write. The writes themselves
        run pair by pair, so a failure midway leaves the earlier pairs saved.
        """

        day = normalize_day(date)
        if day is None:
            raise ValidationError("Valid date is required")
        if not isinstance(records, list) or not records:
            raise ValidationError("Records array is required and must not be empty")

        pairs: list[tuple[int, AttendanceStatus]] = []
        for record in records:
            if not isinstance(record, dict) or _missing_id(record.get("studentId")):
                raise ValidationError("Each record must have a studentId")
            parsed = parse_status(record.get("status"))
            if parsed is None:
                raise ValidationError('Each record must have status "present" or "absent"')
            pairs.append((parse_student_id(record["studentId"]), parsed))

        for sid in {sid for sid, _ in pairs}:
            self._students.get_in_scope(caller, sid)

        count = 0
        for sid, parsed in pairs:
            self._attendance.replace_for_student_date(student_id=sid, date=day, status=parsed)
            count += 1

        logger.info("Bulk attendance for %s: %d records by user %s", day, count, caller.user_id)
        return count

    def list_attendance(
        self,
        caller: TokenClaims,
        *,
        date: Optional[str] = None,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
    ) -> Sequence[AttendanceRow]:
        if date:
            day = _optional_day(date, "Invalid date format")
            return self._attendance.list_rows(date=day, institute_code=caller.scope)

        start = _optional_day(date_from, 'Invalid "from" date format')
        end = _optional_day(date_to, 'Invalid "to" date format')
        return self._attendance.list_rows(date_from=start, date_to=end, institute_code=caller.scope)
