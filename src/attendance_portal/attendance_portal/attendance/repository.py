from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRow, SummaryRow


class AttendanceRepository(Protocol):
    def record(self, *, student_id: int, date: str, status: AttendanceStatus) -> int:
        raise NotImplementedError

    def replace_for_student_date(self, *, student_id: int, date: str, status: AttendanceStatus) -> int:
        """Delete any rows for (student, date), then insert one fresh row."""

        raise NotImplementedError

    def list_rows(
        self,
        *,
        date: Optional[str] = None,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        institute_code: Optional[str] = None,
    ) -> Sequence[AttendanceRow]:
        raise NotImplementedError

    def summary(self, *, institute_code: Optional[str] = None) -> Sequence[SummaryRow]:
        raise NotImplementedError
