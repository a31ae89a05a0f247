from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_datetime, utc_now
from ..common.http import current_user_id, entry_source, json_body, login_required
from ..container import Container
from ..core.constants import RECENT_ENTRIES_LIMIT


def register(app: Flask, container: Container) -> None:
    def _clock_action(action):
        body = json_body()
        entry = action(
            current_user_id(),
            entry_source(body.get("source")),
            terminal_id=body.get("terminal_id"),
            notes=body.get("notes"),
        )
        return jsonify(entry.to_dict()), 201

    @app.route("/time/clock-in", methods=["POST"], endpoint="clock_in")
    @login_required
    def clock_in():
        return _clock_action(container.clock_service.clock_in)

    @app.route("/time/clock-out", methods=["POST"], endpoint="clock_out")
    @login_required
    def clock_out():
        return _clock_action(container.clock_service.clock_out)

    @app.route("/time/break/start", methods=["POST"], endpoint="break_start")
    @login_required
    def break_start():
        return _clock_action(container.clock_service.start_break)

    @app.route("/time/break/end", methods=["POST"], endpoint="break_end")
    @login_required
    def break_end():
        return _clock_action(container.clock_service.end_break)

    @app.route("/time/status", methods=["GET"], endpoint="time_status")
    @login_required
    def time_status():
        status = container.status_resolver.get_status(current_user_id())
        return jsonify(status.to_dict())

    @app.route("/time/today", methods=["GET"], endpoint="time_today")
    @login_required
    def time_today():
        user_id = current_user_id()
        today = container.summary_service.work_date_of(user_id, utc_now())
        # today is still changing; rebuild instead of serving the cache
        summary = container.summary_service.recalculate(user_id, today)
        return jsonify(summary.to_dict())

    @app.route("/time/entries", methods=["GET"], endpoint="time_entries")
    @login_required
    def time_entries():
        if "start" not in request.args and "end" not in request.args:
            limit = request.args.get("limit", RECENT_ENTRIES_LIMIT, type=int)
            entries = container.entry_service.recent_entries(current_user_id(), limit)
            return jsonify([e.to_dict() for e in entries])

        start = parse_iso_datetime(request.args.get("start", ""))
        end = parse_iso_datetime(request.args.get("end", ""))
        entries = container.entry_service.get_entries_for_user(current_user_id(), start, end)
        return jsonify([e.to_dict() for e in entries])
