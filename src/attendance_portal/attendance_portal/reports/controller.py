from __future__ import annotations

from flask import Flask, jsonify

from ..api.security import current_caller
from ..container import Container


def register(app: Flask, container: Container) -> None:
    token_required, _ = container.guards

    @app.route("/api/reports/summary", methods=["GET"], endpoint="report_summary")
    @token_required
    def report_summary():
        rows = container.report_service.summary(current_caller())
        return jsonify([r.to_dict() for r in rows])
