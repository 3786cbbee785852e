from __future__ import annotations

import csv
import io
from datetime import date

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.http import admin_required, current_user_id, login_required, parse_kind
from ..container import Container
from ..core.enums import Period
from ..core.exceptions import ValidationError
from .periods import period_bounds


def register(app: Flask, container: Container) -> None:
    stats = container.stats_service

    def _parse_date(value: str | None, *, default: date) -> date:
        if not value:
            return default
        try:
            return parse_iso_date(value)
        except ValueError:
            raise ValidationError("Dates must be YYYY-MM-DD")

    def _range_from_args() -> tuple[date, date]:
        month_start, month_end = period_bounds(Period.MONTH, now_local().date())
        start = _parse_date(request.args.get("start"), default=month_start)
        end = _parse_date(request.args.get("end"), default=month_end)
        return start, end

    def _write_daily_csv(rows, *, filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(
            out,
            fieldnames=["work_date", "status", "work_mode", "check_in", "check_out", "check_out_estimated", "net_hours"],
        )
        writer.writeheader()
        for row in rows:
            writer.writerow(row.to_dict())

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/stats", methods=["GET"], endpoint="stats_period")
    @login_required
    def stats_period():
        try:
            period = Period((request.args.get("period") or Period.MONTH.value).lower())
        except ValueError:
            raise ValidationError("period must be day, week or month")
        anchor = _parse_date(request.args.get("date"), default=now_local().date())
        start, end = period_bounds(period, anchor)

        result = stats.compute_stats(current_user_id(), start, end, kind=parse_kind(request.args.get("kind")))
        return jsonify({"success": True, "period": period.value, "stats": result.to_dict()})

    @app.route("/api/stats/daily", methods=["GET"], endpoint="stats_daily")
    @login_required
    def stats_daily():
        start, end = _range_from_args()
        rows = stats.daily_rows(current_user_id(), start, end, kind=parse_kind(request.args.get("kind")))
        return jsonify({"success": True, "rows": [r.to_dict() for r in rows]})

    @app.route("/api/stats/daily.csv", methods=["GET"], endpoint="stats_daily_csv")
    @login_required
    def stats_daily_csv():
        start, end = _range_from_args()
        rows = stats.daily_rows(current_user_id(), start, end, kind=parse_kind(request.args.get("kind")))
        return _write_daily_csv(rows, filename=f"attendance_{start:%Y%m%d}_{end:%Y%m%d}.csv")

    @app.route("/api/stats/unrecorded-absences", methods=["GET"], endpoint="stats_unrecorded_absences")
    @login_required
    def stats_unrecorded_absences():
        start, end = _range_from_args()
        holidays = [_parse_date(h, default=start) for h in request.args.getlist("holiday")]
        days = stats.find_unrecorded_absences(current_user_id(), start, end, holidays=holidays)
        return jsonify({"success": True, "dates": [d.isoformat() for d in days], "total": len(days)})

    @app.route("/api/admin/stats", methods=["GET"], endpoint="admin_stats")
    @admin_required
    def admin_stats():
        start, end = _range_from_args()
        result = stats.compute_stats_for_all_users(start, end, kind=parse_kind(request.args.get("kind")))
        return jsonify({"success": True, "users": [s.to_dict() for s in result.values()]})
