from __future__ import annotations

from typing import Sequence

from ..attendance.model import SummaryRow
from ..attendance.repository import AttendanceRepository
from ..users.model import TokenClaims


class ReportService:
    """Summary report: per-student present count over total rows, aggregated in SQL."""

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def summary(self, caller: TokenClaims) -> Sequence[SummaryRow]:
        return self._attendance.summary(institute_code=caller.scope)
