from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_datetime
from ..common.http import current_user_id, json_body, login_required
from ..container import Container
from ..core.enums import EntryKind
from ..core.exceptions import BadRequestError


def register(app: Flask, container: Container) -> None:
    def _entry_kind(value) -> EntryKind:
        try:
            return EntryKind(str(value or "").upper())
        except ValueError:
            raise BadRequestError(f"Unknown entry type: {value!r}")

    def _target_user_id() -> int:
        raw = request.args.get("user_id") or json_body().get("user_id")
        try:
            return int(raw)
        except (TypeError, ValueError):
            raise BadRequestError("user_id is required")

    @app.route("/time/manage/entry", methods=["POST"], endpoint="manual_entry_add")
    @login_required
    def manual_entry_add():
        body = json_body()
        entry = container.correction_service.add_manual_entry(
            current_user_id(),
            _target_user_id(),
            _entry_kind(body.get("entry_type")),
            parse_iso_datetime(body.get("timestamp", "")),
            body.get("reason", ""),
            notes=body.get("notes"),
        )
        return jsonify(entry.to_dict()), 201

    @app.route("/time/manage/entry/<int:entry_id>", methods=["PUT"], endpoint="manual_entry_edit")
    @login_required
    def manual_entry_edit(entry_id: int):
        body = json_body()
        timestamp = parse_iso_datetime(body["timestamp"]) if body.get("timestamp") else None
        entry = container.correction_service.edit_time_entry(
            current_user_id(),
            entry_id,
            timestamp=timestamp,
            notes=body.get("notes"),
            reason=body.get("reason", ""),
        )
        return jsonify(entry.to_dict())

    @app.route("/time/manage/entry/<int:entry_id>", methods=["DELETE"], endpoint="manual_entry_delete")
    @login_required
    def manual_entry_delete(entry_id: int):
        reason = request.args.get("reason") or json_body().get("reason", "")
        container.correction_service.delete_time_entry(current_user_id(), entry_id, reason)
        return "", 204
