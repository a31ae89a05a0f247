from __future__ import annotations

from flask import Flask, Response, jsonify, request

from ..common.datetime_utils import month_range, parse_iso_date, week_range
from ..common.http import current_user_id, login_required
from ..container import Container
from ..core.exceptions import BadRequestError
from .export import timesheet_to_csv


def register(app: Flask, container: Container) -> None:
    def _int_arg(name: str) -> int:
        try:
            return int(request.args.get(name, ""))
        except ValueError:
            raise BadRequestError(f"Query parameter '{name}' must be an integer")

    @app.route("/time/summary/daily/<day>", methods=["GET"], endpoint="summary_daily")
    @login_required
    def summary_daily(day: str):
        summary = container.summary_service.get_daily_summary(current_user_id(), parse_iso_date(day))
        return jsonify(summary.to_dict())

    @app.route("/time/summary/weekly", methods=["GET"], endpoint="summary_weekly")
    @login_required
    def summary_weekly():
        start, end = week_range(parse_iso_date(request.args.get("week_start", "")))
        sheet = container.summary_service.get_time_sheet(current_user_id(), start, end)
        return jsonify(sheet.to_dict())

    @app.route("/time/summary/monthly", methods=["GET"], endpoint="summary_monthly")
    @login_required
    def summary_monthly():
        start, end = month_range(_int_arg("year"), _int_arg("month"))
        sheet = container.summary_service.get_time_sheet(current_user_id(), start, end)
        return jsonify(sheet.to_dict())

    @app.route("/time/timesheet", methods=["GET"], endpoint="timesheet")
    @login_required
    def timesheet():
        start = parse_iso_date(request.args.get("start", ""))
        end = parse_iso_date(request.args.get("end", ""))
        sheet = container.summary_service.get_time_sheet(current_user_id(), start, end)
        return jsonify(sheet.to_dict())

    @app.route("/time/export/csv", methods=["GET"], endpoint="export_csv")
    @login_required
    def export_csv():
        start = parse_iso_date(request.args.get("start", ""))
        end = parse_iso_date(request.args.get("end", ""))
        sheet = container.summary_service.get_time_sheet(current_user_id(), start, end)
        filename = f"timesheet_{start.isoformat()}-{end.isoformat()}.csv"
        return Response(
            timesheet_to_csv(sheet),
            mimetype="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )
