from __future__ import annotations

from flask import Flask, jsonify, send_from_directory

from ..container import Container
from ..core.constants import API_VERSION, UPLOADS_URL_PREFIX

ENDPOINTS = {
    "auth": ["POST /api/auth/register", "POST /api/auth/login"],
    "students": [
        "GET /api/students",
        "POST /api/students",
        "GET /api/students/:id",
        "PUT /api/students/:id",
        "DELETE /api/students/:id",
    ],
    "attendance": ["GET /api/attendance", "POST /api/attendance", "POST /api/attendance/bulk"],
    "reports": ["GET /api/reports/summary"],
    "users": ["GET /api/users"],
}


def register(app: Flask, container: Container) -> None:
    @app.route("/", methods=["GET"], endpoint="index")
    def index():
        return jsonify(
            {
                "message": "Attendance Portal API",
                "status": "running",
                "version": API_VERSION,
                "endpoints": ENDPOINTS,
            }
        )

    @app.route(f"{UPLOADS_URL_PREFIX}/<path:filename>", methods=["GET"], endpoint="uploaded_photo")
    def uploaded_photo(filename: str):
        return send_from_directory(container.photos.folder.resolve(), filename)
