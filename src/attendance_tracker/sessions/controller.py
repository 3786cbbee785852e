from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, jsonify, request

from ..common.http import current_user_id, login_required, parse_kind
from ..container import Container
from ..core.enums import SessionKind
from ..core.exceptions import InvalidStateError, ValidationError
from ..geofence.provider import ReportedCoordinateProvider

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    service = container.session_service

    def _payload() -> dict:
        return request.get_json(silent=True) or {}

    def _resolve_session_id(user_id: int, kind: SessionKind, requested: Optional[object]) -> int:
        """Trust a client-held session id only while it still names this user's open session."""
        if requested not in (None, ""):
            try:
                requested_id = int(requested)
            except (TypeError, ValueError):
                raise ValidationError("session_id must be an integer")
            held = container.sessions_repo.get_session(requested_id)
            if held is not None and held.user_id == user_id and held.is_open:
                return held.session_id
            logger.info("Stale session id %s for user %s; re-resolving", requested_id, user_id)

        current = service.resolve_open_session(user_id, kind)
        if current is None:
            raise InvalidStateError("You are not checked in")
        return current.session_id

    @app.route("/api/attendance/current", methods=["GET"], endpoint="attendance_current")
    @login_required
    def attendance_current():
        ctx = service.context_for(current_user_id(), parse_kind(request.args.get("kind")))
        return jsonify({"success": True, "context": ctx.to_dict()})

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="attendance_check_in")
    @login_required
    def attendance_check_in():
        data = _payload()
        geo = ReportedCoordinateProvider(data.get("lat"), data.get("lon"))
        ctx = service.check_in(
            current_user_id(),
            parse_kind(data.get("kind")),
            geo,
            confirm_remote=bool(data.get("confirm_remote", False)),
        )
        return jsonify({"success": True, "context": ctx.to_dict()}), 201

    @app.route("/api/attendance/breaks/start", methods=["POST"], endpoint="attendance_break_start")
    @login_required
    def attendance_break_start():
        data = _payload()
        user_id = current_user_id()
        session_id = _resolve_session_id(user_id, parse_kind(data.get("kind")), data.get("session_id"))
        ctx = service.start_break(user_id, session_id)
        return jsonify({"success": True, "context": ctx.to_dict()})

    @app.route("/api/attendance/breaks/end", methods=["POST"], endpoint="attendance_break_end")
    @login_required
    def attendance_break_end():
        data = _payload()
        user_id = current_user_id()
        session_id = _resolve_session_id(user_id, parse_kind(data.get("kind")), data.get("session_id"))
        ctx = service.end_break(user_id, session_id)
        return jsonify({"success": True, "context": ctx.to_dict()})

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="attendance_check_out")
    @login_required
    def attendance_check_out():
        data = _payload()
        user_id = current_user_id()
        session_id = _resolve_session_id(user_id, parse_kind(data.get("kind")), data.get("session_id"))
        ctx = service.check_out(user_id, session_id)
        return jsonify({"success": True, "context": ctx.to_dict()})
