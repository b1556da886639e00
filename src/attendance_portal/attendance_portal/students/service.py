from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from werkzeug.datastructures import FileStorage

from ..common.validators import collect_student_errors, raise_if_errors
from ..core.exceptions import AuthorizationError, NotFoundError
from ..users.model import TokenClaims
from .model import STUDENT_FIELDS, Student
from .photos import PhotoStorage
from .repository import StudentRepository

logger = logging.getLogger(__name__)


def _clean(value: Any) -> str:
    return "" if value is None else str(value).strip()


class StudentService:
    """Use cases: student CRUD, scoped to the caller's institute."""

    def __init__(self, students: StudentRepository, photos: PhotoStorage):
        self._students = students
        self._photos = photos

    def _require_in_scope(self, caller: TokenClaims, student: Student) -> None:
        if not caller.is_admin and student.institute_code != caller.institute_code:
            raise AuthorizationError("Access denied: Student belongs to a different institute")

    def get_in_scope(self, caller: TokenClaims, student_id: int) -> Student:
        """Fetch a student, 404 if missing and 403 if another institute owns it."""

        student = self._students.get_by_id(student_id)
        if not student:
            raise NotFoundError("Student not found")
        self._require_in_scope(caller, student)
        return student

    def list_students(self, caller: TokenClaims) -> Sequence[Student]:
        return self._students.list_all(institute_code=caller.scope)

    def create_student(
        self,
        caller: TokenClaims,
        data: Mapping[str, Any],
        photo: Optional[FileStorage] = None,
    ) -> int:
        data = dict(data)
        if not caller.is_admin:
            data["instituteCode"] = caller.institute_code

        raise_if_errors(collect_student_errors(data))
        photo_path = self._photos.save(photo) if photo is not None else None
        try:
            student_id = self._students.create(
                first_name=_clean(data.get("firstName")),
                last_name=_clean(data.get("lastName")),
                phone=_clean(data.get("phone")),
                institute_code=_clean(data.get("instituteCode")),
                batch=_clean(data.get("batch")),
                photo=photo_path,
            )
        except Exception:
            self._photos.discard(photo_path)
            raise
        logger.info("Student %s created by user %s", student_id, caller.user_id)
        return student_id

    def update_student(
        self,
        caller: TokenClaims,
        student_id: int,
        data: Mapping[str, Any],
        photo: Optional[FileStorage] = None,
    ) -> None:
        self.get_in_scope(caller, student_id)

        # Any supplied code, blank included, must stay the caller's own.
        if not caller.is_admin and "instituteCode" in data and _clean(data["instituteCode"]) != caller.institute_code:
            raise AuthorizationError("Access denied: Cannot transfer student to a different institute")

        raise_if_errors(collect_student_errors(data, is_update=True))
        changes: dict[str, object] = {
            column: _clean(data[field]) for field, column in STUDENT_FIELDS.items() if field in data
        }
        if photo is not None:
            changes["photo"] = self._photos.save(photo)

        if changes:
            try:
                self._students.update(student_id, changes)
            except Exception:
                self._photos.discard(changes.get("photo"))
                raise

    def delete_student(self, caller: TokenClaims, student_id: int) -> None:
        self.get_in_scope(caller, student_id)
        self._students.delete_by_id(student_id)
        logger.info("Student %s deleted by user %s", student_id, caller.user_id)
