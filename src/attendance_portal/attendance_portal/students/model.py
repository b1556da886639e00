from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import format_timestamp

# Request field -> students column, for the fields a client may write.
STUDENT_FIELDS: dict[str, str] = {
    "firstName": "first_name",
    "lastName": "last_name",
    "phone": "phone",
    "instituteCode": "institute_code",
    "batch": "batch",
}


@dataclass(frozen=True)
class Student:
    """Domain entity: a student scoped to an institute."""

    student_id: int
    first_name: str
    last_name: str
    phone: str
    institute_code: str
    batch: str
    photo: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.student_id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "phone": self.phone,
            "instituteCode": self.institute_code,
            "batch": self.batch,
            "photo": self.photo,
            "createdAt": format_timestamp(self.created_at),
        }
