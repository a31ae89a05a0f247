from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_datetime
from ..common.http import current_user_id, login_required
from ..container import Container
from ..core.exceptions import BadRequestError


def register(app: Flask, container: Container) -> None:
    @app.route("/time/manage/team/status", methods=["GET"], endpoint="team_status")
    @login_required
    def team_status():
        statuses = container.team_service.get_team_status(current_user_id())
        return jsonify({str(uid): status.to_dict() for uid, status in statuses.items()})

    @app.route("/time/manage/team/entries", methods=["GET"], endpoint="team_entries")
    @login_required
    def team_entries():
        try:
            target_user_id = int(request.args.get("user_id", ""))
        except ValueError:
            raise BadRequestError("user_id is required")
        entries = container.team_service.get_team_member_entries(
            current_user_id(),
            target_user_id,
            parse_iso_datetime(request.args.get("start", "")),
            parse_iso_datetime(request.args.get("end", "")),
        )
        return jsonify([e.to_dict() for e in entries])
