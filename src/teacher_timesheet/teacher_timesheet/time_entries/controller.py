from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.serializers import time_entry_to_json
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/time-entries", methods=["GET"], endpoint="list_time_entries")
    def list_time_entries():
        entries = container.time_entry_service.list_entries(
            teacher_id=request.args.get("teacherId") or None,
            date=request.args.get("date") or None,
        )
        return jsonify([time_entry_to_json(e) for e in entries])
