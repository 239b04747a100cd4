from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import optional_int, require_date
from ..container import Container
from ..core.exceptions import ValidationError
from ..users.model import CurrentUser
from ..users.session import login_required


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendances/date/<day>", methods=["GET"], endpoint="attendance_by_date")
    @login_required
    def attendance_by_date(day: str, *, user: CurrentUser):
        rows = container.attendance_service.get_daily(
            user,
            attendance_date=require_date(day, "date"),
            class_id=optional_int(request.args.get("class_id"), "class_id"),
        )
        return jsonify([r.to_dict() for r in rows])

    @app.route("/api/attendances", methods=["POST"], endpoint="attendance_record")
    @login_required
    def attendance_record(*, user: CurrentUser):
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")

        raw_date = data.get("attendance_date")
        count = container.attendance_service.record_batch(
            user,
            data.get("attendances"),
            attendance_date=require_date(raw_date, "attendance_date") if raw_date else None,
        )
        return jsonify({"message": "Attendance recorded successfully", "count": count}), 201
