from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from flask import Flask, flash, g, redirect, render_template, request, url_for

from ..common.datetime_utils import today_local
from ..common.validators import require_date
from ..container import Container
from ..core.enums import AttendanceStatus
from ..core.exceptions import AuthorizationError, BackendUnavailableError, ValidationError
from ..navigation.guards import current_user, destination_required
from ..navigation.permissions import Destination
from ..navigation.router import Screen
from .service import summarize

logger = logging.getLogger(__name__)


def _optional_date(name: str) -> Optional[date]:
    value = request.values.get(name)
    return require_date(value, name) if value else None


def register(app: Flask, container: Container) -> None:
    svc = container.attendance_service

    @app.route("/attendance", methods=["GET"], endpoint="attendance")
    @destination_required(Destination.ATTENDANCE)
    def attendance():
        user = current_user()

        if g.resolution.screen == Screen.ATTENDANCE_DEPARTMENT:
            records = svc.list_department(user.department_id) if user.department_id else []
            names = {u.id: u.name for u in container.user_service.list_by_department(user.department_id)} \
                if user.department_id else {}
            return render_template(
                "attendance/department.html",
                records=[svc.to_ui(r, names=names) for r in records],
                summary=summarize(records),
            )

        start = end = None
        records = []
        try:
            start = _optional_date("start")
            end = _optional_date("end")
            records = svc.list_own(user.id, start=start, end=end)
        except ValidationError as e:
            flash(str(e), "danger")

        summary = summarize(records)
        return render_template(
            "attendance/own.html",
            records=[svc.to_ui(r) for r in records],
            summary=summary,
            rate=summary.rate(),
            start=start.isoformat() if start else "",
            end=end.isoformat() if end else "",
        )

    @app.route("/check-attendance", methods=["GET"], endpoint="check_attendance")
    @destination_required(Destination.CHECK_ATTENDANCE)
    def check_attendance():
        user = current_user()
        try:
            day = _optional_date("date") or today_local()
        except ValidationError as e:
            flash(str(e), "danger")
            day = today_local()

        roll = svc.roll_call(marker_role=user.role, day=day)
        return render_template(
            "attendance/check.html",
            roll=roll,
            summary=roll.summary,
            statuses=list(AttendanceStatus),
            day=day.isoformat(),
            rate=roll.summary.rate(len(roll.entries)),
        )

    @app.route("/check-attendance", methods=["POST"], endpoint="mark_attendance")
    @destination_required(Destination.CHECK_ATTENDANCE)
    def mark_attendance():
        user = current_user()
        day_s = request.form.get("date", "")
        try:
            day = require_date(day_s, "Date")
            svc.mark_attendance(
                marker_role=user.role,
                target_user_id=int(request.form.get("user_id") or 0),
                day=day,
                status=request.form.get("status", ""),
                notes=request.form.get("notes", ""),
            )
            flash("Attendance saved", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except BackendUnavailableError as e:
            logger.exception("Cannot mark attendance")
            flash(str(e), "danger")
        except ValueError:
            flash("Invalid user", "danger")

        return redirect(url_for("check_attendance", date=day_s or None))
