from __future__ import annotations

import logging
from datetime import date

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, parse_iso_date, parse_iso_datetime
from ..core.exceptions import LockUnavailable, NotFoundError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _error(message: str, status: int):
        return jsonify({"success": False, "message": message}), status

    @app.route("/api/toil/attendance/<int:interval_id>/process", methods=["POST"], endpoint="api_toil_process")
    def api_toil_process(interval_id: int):
        try:
            entry = container.toil_service.process_attendance_for_toil(interval_id)
        except ValidationError as e:
            return _error(str(e), 400)
        return jsonify({"success": True, "entry": entry.to_dict() if entry else None}), 200

    @app.route("/api/toil/<int:employee_id>/balance", methods=["GET"], endpoint="api_toil_balance")
    def api_toil_balance(employee_id: int):
        summary = container.toil_service.get_user_toil_balance(employee_id)
        return jsonify({"success": True, "balance": summary.to_dict()}), 200

    @app.route("/api/toil/<int:employee_id>/entries", methods=["GET"], endpoint="api_toil_entries")
    def api_toil_entries(employee_id: int):
        entries = container.toil_service.list_toil_history(employee_id)
        return jsonify({"success": True, "entries": [e.to_dict() for e in entries]}), 200

    @app.route("/api/toil/<int:employee_id>/use", methods=["POST"], endpoint="api_toil_use")
    def api_toil_use(employee_id: int):
        data = request.get_json(silent=True) or {}
        try:
            result = container.toil_service.use_toil_hours(employee_id, data.get("hours"))
        except ValidationError as e:
            return _error(str(e), 400)
        except NotFoundError as e:
            return _error(str(e), 404)
        except LockUnavailable:
            logger.warning("TOIL usage for employee %s timed out waiting for lock", employee_id)
            return _error("Service busy, please retry", 503)

        if not result.success:
            body = result.to_dict()
            body["message"] = "Insufficient TOIL balance"
            return jsonify(body), 409
        return jsonify(result.to_dict()), 200

    @app.route("/api/toil/expire", methods=["POST"], endpoint="api_toil_expire")
    def api_toil_expire():
        data = request.get_json(silent=True) or {}
        try:
            now = parse_iso_datetime(data.get("now"))
        except ValueError:
            return _error("Invalid timestamp (ISO-8601)", 400)
        if now is not None and now > now_local():
            return _error("Sweep time cannot be in the future", 400)
        count = container.toil_service.expire_old_toil(now)
        return jsonify({"success": True, "expired": count}), 200

    @app.route("/api/toil/<int:employee_id>/eligibility", methods=["GET"], endpoint="api_toil_eligibility")
    def api_toil_eligibility(employee_id: int):
        day_s = request.args.get("date") or date.today().strftime("%Y-%m-%d")
        try:
            day = parse_iso_date(day_s)
        except ValueError:
            return _error("Invalid date (YYYY-MM-DD)", 400)
        eligibility = container.toil_service.check_attendance_eligibility(employee_id, day)
        return jsonify({"success": True, "eligibility": eligibility.to_dict()}), 200
