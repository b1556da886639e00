from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import format_timestamp
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRow:
    """Read-model for listings: the record joined with its student's name and institute."""

    attendance_id: int
    student_id: int
    date: str
    status: AttendanceStatus
    first_name: str
    last_name: str
    institute_code: str
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "studentId": self.student_id,
            "date": self.date,
            "status": self.status.value,
            "createdAt": format_timestamp(self.created_at),
            "firstName": self.first_name,
            "lastName": self.last_name,
            "instituteCode": self.institute_code,
        }


@dataclass(frozen=True)
class SummaryRow:
    """Read-model for the summary report (aggregated in SQL)."""

    student_id: int
    first_name: str
    last_name: str
    institute_code: str
    present_count: int
    total_records: int

    def to_dict(self) -> dict:
        return {
            "id": self.student_id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "instituteCode": self.institute_code,
            "present_count": self.present_count,
            "total_records": self.total_records,
        }
