from __future__ import annotations

from flask import Flask, jsonify, request

from ..api.payload import json_object
from ..api.security import current_caller
from ..common.validators import to_row_id
from ..container import Container


def _parse_student_id(value: str) -> int:
    return to_row_id(value, "Invalid student ID")


def _student_payload() -> dict:
    """JSON body, or the text fields of a multipart/form-data upload."""

    if request.is_json:
        return json_object()
    return request.form.to_dict()


def register(app: Flask, container: Container) -> None:
    token_required, _ = container.guards

    @app.route("/api/students", methods=["GET"], endpoint="list_students")
    @token_required
    def list_students():
        students = container.student_service.list_students(current_caller())
        return jsonify([s.to_dict() for s in students])

    @app.route("/api/students/<student_id>", methods=["GET"], endpoint="get_student")
    @token_required
    def get_student(student_id: str):
        student = container.student_service.get_in_scope(current_caller(), _parse_student_id(student_id))
        return jsonify(student.to_dict())

    @app.route("/api/students", methods=["POST"], endpoint="create_student")
    @token_required
    def create_student():
        new_id = container.student_service.create_student(
            current_caller(),
            _student_payload(),
            photo=request.files.get("photo") or None,
        )
        return jsonify({"id": new_id, "message": "Student created successfully"}), 201

    @app.route("/api/students/<student_id>", methods=["PUT"], endpoint="update_student")
    @token_required
    def update_student(student_id: str):
        container.student_service.update_student(
            current_caller(),
            _parse_student_id(student_id),
            _student_payload(),
            photo=request.files.get("photo") or None,
        )
        return jsonify({"ok": True, "message": "Student updated successfully"})

    @app.route("/api/students/<student_id>", methods=["DELETE"], endpoint="delete_student")
    @token_required
    def delete_student(student_id: str):
        container.student_service.delete_student(current_caller(), _parse_student_id(student_id))
        return jsonify({"ok": True, "message": "Student deleted successfully"})
