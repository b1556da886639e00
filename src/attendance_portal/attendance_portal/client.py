"""HTTP client for the Attendance Portal API.

Holds the session token after login/register, attaches it as a bearer header,
and turns non-2xx replies into :class:`ApiError` carrying the server's message.
"""

from __future__ import annotations

from typing import Any, BinaryIO, Iterable, Mapping, Optional

import requests

DEFAULT_ERROR_MESSAGE = "An error occurred"


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class PortalClient:
    def __init__(
        self,
        base_url: str,
        *,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._timeout = timeout
        self.token = token
        self.user: Optional[dict] = None

    def _headers(self) -> dict:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def _request(self, method: str, path: str, **kwargs) -> Any:
        response = self._session.request(
            method,
            f"{self._base_url}/api{path}",
            headers=self._headers(),
            timeout=self._timeout,
            **kwargs,
        )
        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.ok:
            message = data.get("error") if isinstance(data, dict) else None
            raise ApiError(response.status_code, message or DEFAULT_ERROR_MESSAGE)
        return data

    def _remember(self, data: dict) -> dict:
        self.token = data["token"]
        self.user = data.get("user")
        return data

    # auth
    def login(self, email: str, password: str) -> dict:
        return self._remember(self._request("POST", "/auth/login", json={"email": email, "password": password}))

    def register(
        self,
        *,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        confirm_password: str,
        phone: Optional[str] = None,
        institute_code: Optional[str] = None,
    ) -> dict:
        payload = {
            "firstName": first_name,
            "lastName": last_name,
            "email": email,
            "password": password,
            "confirmPassword": confirm_password,
            "phone": phone,
            "instituteCode": institute_code,
        }
        return self._remember(self._request("POST", "/auth/register", json=payload))

    def logout(self) -> None:
        self.token = None
        self.user = None

    def is_authenticated(self) -> bool:
        return bool(self.token)

    # students
    def list_students(self) -> list:
        return self._request("GET", "/students")

    def get_student(self, student_id: int) -> dict:
        return self._request("GET", f"/students/{student_id}")

    def _student_body(self, data: Mapping[str, Any], photo: Optional[tuple[str, BinaryIO]]) -> dict:
        if photo is None:
            return {"json": dict(data)}
        form = {k: "" if v is None else str(v) for k, v in data.items()}
        return {"data": form, "files": {"photo": photo}}

    def create_student(self, data: Mapping[str, Any], *, photo: Optional[tuple[str, BinaryIO]] = None) -> dict:
        """``photo`` is a ``(filename, fileobj)`` pair; it switches the body to multipart."""
        return self._request("POST", "/students", **self._student_body(data, photo))

    def update_student(
        self,
        student_id: int,
        data: Mapping[str, Any],
        *,
        photo: Optional[tuple[str, BinaryIO]] = None,
    ) -> dict:
        return self._request("PUT", f"/students/{student_id}", **self._student_body(data, photo))

    def delete_student(self, student_id: int) -> dict:
        return self._request("DELETE", f"/students/{student_id}")

    # attendance
    def record_attendance(self, student_id: int, date: str, status: str) -> dict:
        return self._request("POST", "/attendance", json={"studentId": student_id, "date": date, "status": status})

    def save_bulk_attendance(self, date: str, records: Iterable[tuple[int, str]]) -> dict:
        payload = {
            "date": date,
            "records": [{"studentId": sid, "status": status} for sid, status in records],
        }
        return self._request("POST", "/attendance/bulk", json=payload)

    def list_attendance(
        self,
        *,
        date: Optional[str] = None,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
    ) -> list:
        params = {k: v for k, v in (("date", date), ("from", date_from), ("to", date_to)) if v}
        return self._request("GET", "/attendance", params=params)

    # reports / users
    def get_summary(self) -> list:
        return self._request("GET", "/reports/summary")

    def list_users(self) -> list:
        return self._request("GET", "/users")
