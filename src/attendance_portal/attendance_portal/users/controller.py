from __future__ import annotations

from flask import Flask, jsonify

from ..api.payload import json_object
from ..api.security import current_caller
from ..container import Container


def register(app: Flask, container: Container) -> None:
    _, admin_required = container.guards

    @app.route("/api/auth/register", methods=["POST"], endpoint="auth_register")
    def auth_register():
        data = json_object()
        result = container.auth_service.register(
            email=data.get("email"),
            password=data.get("password"),
            confirm_password=data.get("confirmPassword"),
            first_name=data.get("firstName"),
            last_name=data.get("lastName"),
            phone=data.get("phone"),
            institute_code=data.get("instituteCode"),
        )
        body = {"message": "Registration successful", **result.to_dict()}
        return jsonify(body), 201

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def auth_login():
        data = json_object()
        result = container.auth_service.login(data.get("email"), data.get("password"))
        return jsonify(result.to_dict())

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    @admin_required
    def list_users():
        users = container.user_service.list_users(caller=current_caller())
        return jsonify([u.to_public() for u in users])
