from __future__ import annotations

from flask import Flask, jsonify, request

from ..api.payload import json_object
from ..api.security import current_caller
from ..container import Container


def register(app: Flask, container: Container) -> None:
    token_required, _ = container.guards

    @app.route("/api/attendance", methods=["POST"], endpoint="record_attendance")
    @token_required
    def record_attendance():
        data = json_object()
        new_id = container.attendance_service.record(
            current_caller(),
            student_id=data.get("studentId"),
            date=data.get("date"),
            status=data.get("status"),
        )
        return jsonify({"id": new_id, "message": "Attendance recorded successfully"})

    @app.route("/api/attendance/bulk", methods=["POST"], endpoint="bulk_attendance")
    @token_required
    def bulk_attendance():
        data = json_object()
        count = container.attendance_service.bulk_save(
            current_caller(),
            date=data.get("date"),
            records=data.get("records"),
        )
        return jsonify({"ok": True, "count": count, "message": f"Attendance saved for {count} students"})

    @app.route("/api/attendance", methods=["GET"], endpoint="list_attendance")
    @token_required
    def list_attendance():
        rows = container.attendance_service.list_attendance(
            current_caller(),
            date=request.args.get("date"),
            date_from=request.args.get("from"),
            date_to=request.args.get("to"),
        )
        return jsonify([r.to_dict() for r in rows])
