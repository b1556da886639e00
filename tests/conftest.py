from __future__ import annotations

import dataclasses
import itertools
from typing import Mapping, Optional, Sequence

import pytest
from werkzeug.security import generate_password_hash

from config import testing as testing_settings
from src.attendance_portal.attendance_portal.attendance.model import AttendanceRow, SummaryRow
from src.attendance_portal.attendance_portal.container import Container, build_services
from src.attendance_portal.attendance_portal.core.enums import AttendanceStatus, Role
from src.attendance_portal.attendance_portal.core.exceptions import ConflictError
from src.attendance_portal.attendance_portal.main import create_app
from src.attendance_portal.attendance_portal.students.model import Student
from src.attendance_portal.attendance_portal.students.photos import PhotoStorage
from src.attendance_portal.attendance_portal.users.model import TokenClaims, User
from src.attendance_portal.attendance_portal.users.tokens import TokenService

TEST_SECRET = "test-secret"


class InMemoryDatabase:
    """Tables shared by the fake repositories, so deletes can cascade."""

    def __init__(self):
        self.users: dict[int, User] = {}
        self.students: dict[int, Student] = {}
        self.attendance: dict[int, dict] = {}
        self._ids = itertools.count(1)

    def next_id(self) -> int:
        return next(self._ids)


class InMemoryUsers:
    def __init__(self, db: InMemoryDatabase):
        self._db = db

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._db.users.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._db.users.values() if u.email == email), None)

    def create_user(self, *, name, email, password_hash, phone, institute_code, role) -> int:
        if any(u.email == email for u in self._db.users.values()):
            raise ConflictError("User with this email already exists")
        uid = self._db.next_id()
        self._db.users[uid] = User(
            user_id=uid,
            name=name,
            email=email,
            password_hash=password_hash,
            phone=phone,
            institute_code=institute_code,
            role=role,
        )
        return uid

    def delete_by_id(self, user_id: int) -> bool:
        return self._db.users.pop(int(user_id), None) is not None

    def count_by_role(self, role: Role) -> int:
        return sum(1 for u in self._db.users.values() if u.role == role)

    def list_all(self) -> Sequence[User]:
        return sorted(self._db.users.values(), key=lambda u: u.user_id)


class InMemoryStudents:
    def __init__(self, db: InMemoryDatabase):
        self._db = db

    def list_all(self, *, institute_code: Optional[str] = None) -> Sequence[Student]:
        items = [s for s in self._db.students.values() if institute_code is None or s.institute_code == institute_code]
        return sorted(items, key=lambda s: s.student_id, reverse=True)

    def get_by_id(self, student_id: int) -> Optional[Student]:
        return self._db.students.get(int(student_id))

    def create(self, *, first_name, last_name, phone, institute_code, batch, photo=None) -> int:
        sid = self._db.next_id()
        self._db.students[sid] = Student(
            student_id=sid,
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            institute_code=institute_code,
            batch=batch,
            photo=photo,
        )
        return sid

    def update(self, student_id: int, changes: Mapping[str, object]) -> bool:
        current = self._db.students.get(int(student_id))
        if not current:
            return False
        self._db.students[int(student_id)] = dataclasses.replace(current, **changes)
        return True

    def delete_by_id(self, student_id: int) -> bool:
        removed = self._db.students.pop(int(student_id), None)
        for aid in [aid for aid, r in self._db.attendance.items() if r["student_id"] == int(student_id)]:
            del self._db.attendance[aid]
        return removed is not None


class InMemoryAttendance:
    def __init__(self, db: InMemoryDatabase):
        self._db = db

    def record(self, *, student_id: int, date: str, status: AttendanceStatus) -> int:
        aid = self._db.next_id()
        self._db.attendance[aid] = {"student_id": int(student_id), "date": date, "status": status}
        return aid

    def replace_for_student_date(self, *, student_id: int, date: str, status: AttendanceStatus) -> int:
        for aid in [
            aid for aid, r in self._db.attendance.items() if r["student_id"] == int(student_id) and r["date"] == date
        ]:
            del self._db.attendance[aid]
        return self.record(student_id=student_id, date=date, status=status)

    def list_rows(self, *, date=None, date_from=None, date_to=None, institute_code=None) -> Sequence[AttendanceRow]:
        rows = []
        for aid, r in self._db.attendance.items():
            s = self._db.students[r["student_id"]]
            if date is not None and r["date"] != date:
                continue
            if date is None and date_from is not None and r["date"] < date_from:
                continue
            if date is None and date_to is not None and r["date"] > date_to:
                continue
            if institute_code is not None and s.institute_code != institute_code:
                continue
            rows.append(
                AttendanceRow(
                    attendance_id=aid,
                    student_id=s.student_id,
                    date=r["date"],
                    status=r["status"],
                    first_name=s.first_name,
                    last_name=s.last_name,
                    institute_code=s.institute_code,
                )
            )
        if date is not None:
            return sorted(rows, key=lambda x: (x.first_name, x.attendance_id))
        return sorted(rows, key=lambda x: (x.date, x.attendance_id), reverse=True)

    def summary(self, *, institute_code: Optional[str] = None) -> Sequence[SummaryRow]:
        out = []
        for s in sorted(self._db.students.values(), key=lambda s: s.student_id):
            if institute_code is not None and s.institute_code != institute_code:
                continue
            records = [r for r in self._db.attendance.values() if r["student_id"] == s.student_id]
            out.append(
                SummaryRow(
                    student_id=s.student_id,
                    first_name=s.first_name,
                    last_name=s.last_name,
                    institute_code=s.institute_code,
                    present_count=sum(1 for r in records if r["status"] == AttendanceStatus.PRESENT),
                    total_records=len(records),
                )
            )
        return out


def claims(role: Role = Role.USER, institute_code: str = "A", user_id: int = 1) -> TokenClaims:
    return TokenClaims(user_id=user_id, email=f"u{user_id}@example.com", role=role, institute_code=institute_code)


@pytest.fixture
def staff_a() -> TokenClaims:
    return claims(Role.USER, "A", user_id=101)


@pytest.fixture
def staff_b() -> TokenClaims:
    return claims(Role.USER, "B", user_id=102)


@pytest.fixture
def admin() -> TokenClaims:
    return claims(Role.ADMIN, "", user_id=100)


@pytest.fixture
def memory_db() -> InMemoryDatabase:
    return InMemoryDatabase()


@pytest.fixture
def container(memory_db, tmp_path) -> Container:
    return build_services(
        users_repo=InMemoryUsers(memory_db),
        students_repo=InMemoryStudents(memory_db),
        attendance_repo=InMemoryAttendance(memory_db),
        tokens=TokenService(TEST_SECRET),
        photos=PhotoStorage(tmp_path / "uploads"),
    )


@pytest.fixture
def app(container):
    return create_app(testing_settings, container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(container):
    def _make(email: str, *, role: Role = Role.USER, institute_code: str = "A", password: str = "secret1") -> User:
        uid = container.users_repo.create_user(
            name=email.split("@")[0],
            email=email,
            password_hash=generate_password_hash(password),
            phone="",
            institute_code=institute_code,
            role=role,
        )
        return container.users_repo.get_by_id(uid)

    return _make


@pytest.fixture
def headers_for(container, make_user):
    def _headers(email: str, **kwargs) -> dict:
        user = make_user(email, **kwargs)
        return {"Authorization": f"Bearer {container.tokens.issue(user)}"}

    return _headers
