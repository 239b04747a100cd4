from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file

from ..common.validators import optional_int, require_date
from ..container import Container
from ..users.model import CurrentUser
from ..users.session import login_required
from .periods import parse_date_range, parse_month_range, parse_report_request, parse_single_month
from .service import ExportFile


def _send(export: ExportFile):
    return send_file(
        io.BytesIO(export.content),
        mimetype=export.mimetype,
        as_attachment=True,
        download_name=export.filename,
    )


def register(app: Flask, container: Container) -> None:
    reports = container.report_service

    @app.route("/api/attendances/report", methods=["GET"], endpoint="attendance_report")
    @login_required
    def attendance_report(*, user: CurrentUser):
        period = parse_report_request(request.args)
        return jsonify(reports.build_report(user, period))

    @app.route("/api/attendances/download/daily/<day>", methods=["GET"], endpoint="download_daily")
    @login_required
    def download_daily(day: str, *, user: CurrentUser):
        export = reports.export_daily(
            user,
            attendance_date=require_date(day, "date"),
            class_id=optional_int(request.args.get("class_id"), "class_id"),
        )
        return _send(export)

    @app.route("/api/attendances/download/date-range", methods=["GET"], endpoint="download_date_range")
    @login_required
    def download_date_range(*, user: CurrentUser):
        return _send(reports.export_date_range(user, parse_date_range(request.args)))

    @app.route("/api/attendances/download/month-range", methods=["GET"], endpoint="download_month_range")
    @login_required
    def download_month_range(*, user: CurrentUser):
        return _send(reports.export_month_range(user, parse_month_range(request.args)))

    @app.route("/api/attendances/download/month", methods=["GET"], endpoint="download_month")
    @login_required
    def download_month(*, user: CurrentUser):
        return _send(reports.export_single_month(user, parse_single_month(request.args)))
