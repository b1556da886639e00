from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Iterable, Optional

from .api.security import make_guards
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_ALLOWED_PHOTO_EXTENSIONS, DEFAULT_TOKEN_DAYS
from .database.connection import DBConfig, DatabaseConnection
from .reports.service import ReportService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.photos import PhotoStorage
from .students.repository import StudentRepository
from .students.service import StudentService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService
from .users.tokens import TokenService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    students_repo: StudentRepository
    attendance_repo: AttendanceRepository

    photos: PhotoStorage
    tokens: TokenService

    auth_service: AuthService
    user_service: UserService
    student_service: StudentService
    attendance_service: AttendanceService
    report_service: ReportService

    guards: tuple[Callable[[Any], Any], Callable[[Any], Any]]
    conn: Optional[DatabaseConnection] = None


def build_services(
    *,
    users_repo: UserRepository,
    students_repo: StudentRepository,
    attendance_repo: AttendanceRepository,
    tokens: TokenService,
    photos: PhotoStorage,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over any repository implementation (MySQL or in-memory)."""

    auth_service = AuthService(users_repo, tokens)
    student_service = StudentService(students_repo, photos)

    return Container(
        users_repo=users_repo,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        photos=photos,
        tokens=tokens,
        auth_service=auth_service,
        user_service=UserService(users_repo),
        student_service=student_service,
        attendance_service=AttendanceService(attendance_repo, student_service),
        report_service=ReportService(attendance_repo),
        guards=make_guards(auth_service),
        conn=conn,
    )


def build_container(
    *,
    db_config: dict,
    jwt_secret: str,
    upload_folder: str | Path,
    token_days: int = DEFAULT_TOKEN_DAYS,
    allowed_photo_extensions: Iterable[str] = DEFAULT_ALLOWED_PHOTO_EXTENSIONS,
) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        pool_size=int(db_config.get("pool_size", 5)),
    )
    conn = DatabaseConnection.get_instance(config)

    return build_services(
        users_repo=MySQLUserRepository(conn),
        students_repo=MySQLStudentRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        tokens=TokenService(jwt_secret, ttl_days=token_days),
        photos=PhotoStorage(upload_folder, allowed_extensions=allowed_photo_extensions),
        conn=conn,
    )
