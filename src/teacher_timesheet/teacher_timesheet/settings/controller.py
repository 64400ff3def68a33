from __future__ import annotations

import logging

from flask import Flask, current_app, jsonify

from ..common.web import admin_required, client_key, grant_admin, is_admin, json_body, message, revoke_admin
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/settings/pin-setup", methods=["GET"], endpoint="pin_setup_status")
    def pin_setup_status():
        return jsonify({"hasPin": container.pin_service.has_pin()})

    @app.route("/api/settings/setup-pin", methods=["POST"], endpoint="setup_pin")
    def setup_pin():
        container.pin_service.setup_pin(json_body().get("pin"))
        return message("PIN set up successfully")

    def _reset():
        container.pin_service.reset_all_data()
        revoke_admin()
        return message("All data reset successfully")

    # "Forgot PIN" recovery is reachable without a session unless the deployment gates it.
    gated_reset = admin_required(_reset)

    @app.route("/api/settings/reset", methods=["POST"], endpoint="reset_all_data")
    def reset_all_data():
        if current_app.config.get("RESET_REQUIRES_ADMIN", False):
            return gated_reset()
        return _reset()

    @app.route("/api/auth/validate-pin", methods=["POST"], endpoint="validate_pin")
    def validate_pin():
        container.pin_service.validate_pin(json_body().get("pin"), client_key=client_key())
        grant_admin()
        return message("PIN validated successfully")

    @app.route("/api/auth/check-admin", methods=["GET"], endpoint="check_admin")
    def check_admin():
        return jsonify({"isAdmin": is_admin()})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        revoke_admin()
        logger.info("Admin session closed for %s", client_key())
        return message("Logged out successfully")
