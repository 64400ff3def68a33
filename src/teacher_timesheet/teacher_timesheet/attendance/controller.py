from __future__ import annotations

from flask import Flask, jsonify

from ..common.serializers import teacher_to_json
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/teachers/<teacher_id>/checkin", methods=["POST"], endpoint="checkin")
    def checkin(teacher_id: str):
        teacher = container.attendance_service.check_in(teacher_id)
        return jsonify(teacher_to_json(teacher))

    @app.route("/api/teachers/<teacher_id>/checkout", methods=["POST"], endpoint="checkout")
    def checkout(teacher_id: str):
        teacher = container.attendance_service.check_out(teacher_id)
        return jsonify(teacher_to_json(teacher))
