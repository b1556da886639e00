from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceRow, SummaryRow
from .repository import AttendanceRepository


def _to_row(r: dict) -> AttendanceRow:
    return AttendanceRow(
        attendance_id=int(r["id"]),
        student_id=int(r["student_id"]),
        date=r["date"],
        status=AttendanceStatus(r["status"]),
        first_name=r.get("first_name") or "",
        last_name=r.get("last_name") or "",
        institute_code=r.get("institute_code") or "",
        created_at=r.get("created_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def record(self, *, student_id: int, date: str, status: AttendanceStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO attendance(student_id, date, status) VALUES(%s,%s,%s)",
                (int(student_id), date, status.value),
            )
            return int(cur.lastrowid)

    def replace_for_student_date(self, *, student_id: int, date: str, status: AttendanceStatus) -> int:
        # One transaction per pair; callers looping over a batch get no batch-wide atomicity.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM attendance WHERE student_id=%s AND date=%s",
                (int(student_id), date),
            )
            cur.execute(
                "INSERT INTO attendance(student_id, date, status) VALUES(%s,%s,%s)",
                (int(student_id), date, status.value),
            )
            return int(cur.lastrowid)

    def list_rows(
        self,
        *,
        date: Optional[str] = None,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        institute_code: Optional[str] = None,
    ) -> Sequence[AttendanceRow]:
        clauses: list[str] = []
        params: list[object] = []

        if date is not None:
            clauses.append("a.date=%s")
            params.append(date)
        else:
            if date_from is not None:
                clauses.append("a.date >= %s")
                params.append(date_from)
            if date_to is not None:
                clauses.append("a.date <= %s")
                params.append(date_to)
        if institute_code is not None:
            clauses.append("s.institute_code=%s")
            params.append(institute_code)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        order = "s.first_name ASC, a.id ASC" if date is not None else "a.date DESC, a.id DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT a.id, a.student_id, a.date, a.status, a.created_at,
                       s.first_name, s.last_name, s.institute_code
                FROM attendance a
                JOIN students s ON s.id = a.student_id
                {where}
                ORDER BY {order}
                """,
                tuple(params),
            )
            return [_to_row(r) for r in fetchall(cur)]

    def summary(self, *, institute_code: Optional[str] = None) -> Sequence[SummaryRow]:
        where = "WHERE s.institute_code=%s" if institute_code is not None else ""
        params = (institute_code,) if institute_code is not None else ()

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT s.id, s.first_name, s.last_name, s.institute_code,
                       COALESCE(SUM(CASE WHEN a.status = 'present' THEN 1 ELSE 0 END), 0) AS present_count,
                       COUNT(a.id) AS total_records
                FROM students s
                LEFT JOIN attendance a ON a.student_id = s.id
                {where}
                GROUP BY s.id, s.first_name, s.last_name, s.institute_code
                ORDER BY s.id
                """,
                params,
            )
            return [
                SummaryRow(
                    student_id=int(r["id"]),
                    first_name=r.get("first_name") or "",
                    last_name=r.get("last_name") or "",
                    institute_code=r.get("institute_code") or "",
                    present_count=int(r["present_count"] or 0),
                    total_records=int(r["total_records"] or 0),
                )
                for r in fetchall(cur)
            ]
