from __future__ import annotations

from flask import Flask, jsonify

from ..common.serializers import teacher_to_json
from ..common.web import admin_required, json_body, message
from ..container import Container

# wire name -> service keyword
_EDITABLE_KEYS = {"name": "name", "hourlyRate": "hourly_rate", "maxBillableHours": "max_billable_hours"}


def register(app: Flask, container: Container) -> None:
    @app.route("/api/teachers", methods=["GET"], endpoint="list_teachers")
    def list_teachers():
        return jsonify([teacher_to_json(t) for t in container.teacher_service.list_teachers()])

    @app.route("/api/teachers", methods=["POST"], endpoint="create_teacher")
    @admin_required
    def create_teacher():
        data = json_body()
        teacher = container.teacher_service.create_teacher(
            name=data.get("name"),
            hourly_rate=data.get("hourlyRate"),
            max_billable_hours=data.get("maxBillableHours"),
        )
        return jsonify(teacher_to_json(teacher)), 201

    @app.route("/api/teachers/<teacher_id>", methods=["PATCH"], endpoint="update_teacher")
    @admin_required
    def update_teacher(teacher_id: str):
        data = json_body()
        # id and check-in status are not editable here; silently dropped
        changes = {kw: data[key] for key, kw in _EDITABLE_KEYS.items() if key in data}
        teacher = container.teacher_service.update_teacher(teacher_id, **changes)
        return jsonify(teacher_to_json(teacher))

    @app.route("/api/teachers/<teacher_id>", methods=["DELETE"], endpoint="delete_teacher")
    @admin_required
    def delete_teacher(teacher_id: str):
        container.teacher_service.delete_teacher(teacher_id)
        return message("Teacher deleted successfully")
