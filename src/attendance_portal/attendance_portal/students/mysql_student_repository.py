from __future__ import annotations

from typing import Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import STUDENT_FIELDS, Student
from .repository import StudentRepository

_STUDENT_COLUMNS = "id, first_name, last_name, phone, institute_code, batch, photo, created_at"
_UPDATABLE_COLUMNS = frozenset(STUDENT_FIELDS.values()) | {"photo"}


def _to_student(row: dict) -> Student:
    return Student(
        student_id=int(row["id"]),
        first_name=row.get("first_name") or "",
        last_name=row.get("last_name") or "",
        phone=row.get("phone") or "",
        institute_code=row.get("institute_code") or "",
        batch=row.get("batch") or "",
        photo=row.get("photo"),
        created_at=row.get("created_at"),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self, *, institute_code: Optional[str] = None) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            if institute_code is None:
                cur.execute(f"SELECT {_STUDENT_COLUMNS} FROM students ORDER BY id DESC")
            else:
                cur.execute(
                    f"SELECT {_STUDENT_COLUMNS} FROM students WHERE institute_code=%s ORDER BY id DESC",
                    (institute_code,),
                )
            return [_to_student(r) for r in fetchall(cur)]

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_STUDENT_COLUMNS} FROM students WHERE id=%s", (int(student_id),))
            row = fetchone(cur)
            return _to_student(row) if row else None

    def create(
        self,
        *,
        first_name: str,
        last_name: str,
        phone: str,
        institute_code: str,
        batch: str,
        photo: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO students(first_name, last_name, phone, institute_code, batch, photo)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (first_name, last_name, phone, institute_code, batch, photo),
            )
            return int(cur.lastrowid)

    def update(self, student_id: int, changes: Mapping[str, object]) -> bool:
        unknown = set(changes) - _UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Not updatable: {sorted(unknown)}")
        if not changes:
            return False

        columns = list(changes)
        assignments = ", ".join(f"{col}=%s" for col in columns)
        params = [changes[col] for col in columns] + [int(student_id)]

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE students SET {assignments} WHERE id=%s", tuple(params))
            return cur.rowcount > 0

    def delete_by_id(self, student_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE id=%s", (int(student_id),))
            return cur.rowcount > 0
