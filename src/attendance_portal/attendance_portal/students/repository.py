from __future__ import annotations

from typing import Mapping, Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    def list_all(self, *, institute_code: Optional[str] = None) -> Sequence[Student]:
        """Newest first; institute_code=None means every institute."""

        raise NotImplementedError

    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

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
        raise NotImplementedError

    def update(self, student_id: int, changes: Mapping[str, object]) -> bool:
        """Apply a partial update keyed by column name."""

        raise NotImplementedError

    def delete_by_id(self, student_id: int) -> bool:
        """Physical delete; attendance rows go with it (FK cascade)."""

        raise NotImplementedError
