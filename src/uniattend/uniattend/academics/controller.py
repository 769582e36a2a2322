from __future__ import annotations

import logging
from typing import Callable

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.validators import optional_int
from ..container import Container
from ..core.enums import Weekday
from ..core.exceptions import AuthorizationError, BackendUnavailableError, ValidationError
from ..navigation.guards import current_user, destination_required
from ..navigation.permissions import Destination
from .service import ClassForm, ScheduleForm

logger = logging.getLogger(__name__)


def _class_form() -> ClassForm:
    return ClassForm(
        name=request.form.get("name", ""),
        major_id=request.form.get("major_id"),
        year=request.form.get("year"),
        semester=request.form.get("semester"),
        academic_year=request.form.get("academic_year", ""),
        group=request.form.get("group", ""),
        is_active=request.form.get("is_active") in ("1", "on", "true"),
    )


def _schedule_form() -> ScheduleForm:
    return ScheduleForm(
        class_id=request.form.get("class_id"),
        subject_id=request.form.get("subject_id"),
        day_of_week=request.form.get("day_of_week", ""),
        start_time=request.form.get("start_time", ""),
        end_time=request.form.get("end_time", ""),
        academic_year=request.form.get("academic_year", ""),
        semester=request.form.get("semester"),
        room=request.form.get("room", ""),
    )


def register(app: Flask, container: Container) -> None:
    svc = container.academic_service

    def _run(action: Callable[[], object], ok_message: str) -> None:
        try:
            action()
            flash(ok_message, "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except BackendUnavailableError as e:
            logger.exception("Academic change failed")
            flash(str(e), "danger")

    def _query_int(name: str):
        try:
            return optional_int(request.args.get(name), name)
        except ValidationError:
            return None

    # -------- Classes --------
    @app.route("/academic/class", methods=["GET"], endpoint="academic_class")
    @destination_required(Destination.ACADEMIC_CLASS)
    def academic_class():
        edit_id = _query_int("edit")
        return render_template(
            "academics/class.html",
            classes=svc.list_classes(),
            majors=container.configuration_service.list_majors(),
            editing=svc.get_class(edit_id) if edit_id else None,
        )

    @app.route("/academic/class/create", methods=["POST"], endpoint="create_class")
    @destination_required(Destination.ACADEMIC_CLASS)
    def create_class():
        _run(lambda: svc.create_class(current_role=current_user().role, form=_class_form()), "Class created")
        return redirect(url_for("academic_class"))

    @app.route("/academic/class/<int:class_id>/update", methods=["POST"], endpoint="update_class")
    @destination_required(Destination.ACADEMIC_CLASS)
    def update_class(class_id: int):
        _run(
            lambda: svc.update_class(current_role=current_user().role, class_id=class_id, form=_class_form()),
            "Class updated",
        )
        return redirect(url_for("academic_class"))

    @app.route("/academic/class/<int:class_id>/delete", methods=["POST"], endpoint="delete_class")
    @destination_required(Destination.ACADEMIC_CLASS)
    def delete_class(class_id: int):
        _run(lambda: svc.delete_class(current_role=current_user().role, class_id=class_id), "Class deleted")
        return redirect(url_for("academic_class"))

    # -------- Schedules --------
    @app.route("/academic/schedule", methods=["GET"], endpoint="academic_schedule")
    @destination_required(Destination.ACADEMIC_SCHEDULE)
    def academic_schedule():
        class_id = _query_int("class_id")
        edit_id = _query_int("edit")
        return render_template(
            "academics/schedule.html",
            schedules=svc.list_schedules(class_id=class_id),
            classes=svc.list_classes(),
            subjects=container.configuration_service.list_subjects(),
            weekdays=list(Weekday),
            selected_class_id=class_id,
            editing=svc.get_schedule(edit_id) if edit_id else None,
        )

    @app.route("/academic/schedule/create", methods=["POST"], endpoint="create_schedule")
    @destination_required(Destination.ACADEMIC_SCHEDULE)
    def create_schedule():
        _run(lambda: svc.create_schedule(current_role=current_user().role, form=_schedule_form()), "Schedule created")
        return redirect(url_for("academic_schedule"))

    @app.route("/academic/schedule/<int:schedule_id>/update", methods=["POST"], endpoint="update_schedule")
    @destination_required(Destination.ACADEMIC_SCHEDULE)
    def update_schedule(schedule_id: int):
        _run(
            lambda: svc.update_schedule(current_role=current_user().role, schedule_id=schedule_id, form=_schedule_form()),
            "Schedule updated",
        )
        return redirect(url_for("academic_schedule"))

    @app.route("/academic/schedule/<int:schedule_id>/delete", methods=["POST"], endpoint="delete_schedule")
    @destination_required(Destination.ACADEMIC_SCHEDULE)
    def delete_schedule(schedule_id: int):
        _run(lambda: svc.delete_schedule(current_role=current_user().role, schedule_id=schedule_id), "Schedule deleted")
        return redirect(url_for("academic_schedule"))
