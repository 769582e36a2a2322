from __future__ import annotations

import logging
from typing import Callable

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.validators import optional_int
from ..container import Container
from ..core.exceptions import AuthorizationError, BackendUnavailableError, ValidationError
from ..navigation.guards import current_user, destination_required
from ..navigation.permissions import Destination

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    svc = container.configuration_service

    def _run(action: Callable[[], object], ok_message: str) -> None:
        try:
            action()
            flash(ok_message, "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except BackendUnavailableError as e:
            logger.exception("Configuration change failed")
            flash(str(e), "danger")

    def _edit_id():
        try:
            return optional_int(request.args.get("edit"), "edit")
        except ValidationError:
            return None

    # -------- Departments --------
    @app.route("/configuration/department", methods=["GET"], endpoint="config_department")
    @destination_required(Destination.CONFIG_DEPARTMENT)
    def config_department():
        edit_id = _edit_id()
        return render_template(
            "configuration/department.html",
            departments=svc.list_departments(),
            editing=svc.get_department(edit_id) if edit_id else None,
        )

    @app.route("/configuration/department/create", methods=["POST"], endpoint="create_department")
    @destination_required(Destination.CONFIG_DEPARTMENT)
    def create_department():
        _run(
            lambda: svc.create_department(
                current_role=current_user().role,
                name=request.form.get("name", ""),
                short_name=request.form.get("short_name", ""),
            ),
            "Department created",
        )
        return redirect(url_for("config_department"))

    @app.route("/configuration/department/<int:department_id>/update", methods=["POST"], endpoint="update_department")
    @destination_required(Destination.CONFIG_DEPARTMENT)
    def update_department(department_id: int):
        _run(
            lambda: svc.update_department(
                current_role=current_user().role,
                department_id=department_id,
                name=request.form.get("name", ""),
                short_name=request.form.get("short_name", ""),
            ),
            "Department updated",
        )
        return redirect(url_for("config_department"))

    @app.route("/configuration/department/<int:department_id>/delete", methods=["POST"], endpoint="delete_department")
    @destination_required(Destination.CONFIG_DEPARTMENT)
    def delete_department(department_id: int):
        _run(
            lambda: svc.delete_department(current_role=current_user().role, department_id=department_id),
            "Department deleted",
        )
        return redirect(url_for("config_department"))

    # -------- Majors --------
    @app.route("/configuration/major", methods=["GET"], endpoint="config_major")
    @destination_required(Destination.CONFIG_MAJOR)
    def config_major():
        edit_id = _edit_id()
        return render_template(
            "configuration/major.html",
            majors=svc.list_majors(),
            departments=svc.list_departments(),
            editing=svc.get_major(edit_id) if edit_id else None,
        )

    @app.route("/configuration/major/create", methods=["POST"], endpoint="create_major")
    @destination_required(Destination.CONFIG_MAJOR)
    def create_major():
        _run(
            lambda: svc.create_major(
                current_role=current_user().role,
                name=request.form.get("name", ""),
                short_name=request.form.get("short_name", ""),
                department_id=request.form.get("department_id"),
            ),
            "Major created",
        )
        return redirect(url_for("config_major"))

    @app.route("/configuration/major/<int:major_id>/update", methods=["POST"], endpoint="update_major")
    @destination_required(Destination.CONFIG_MAJOR)
    def update_major(major_id: int):
        _run(
            lambda: svc.update_major(
                current_role=current_user().role,
                major_id=major_id,
                name=request.form.get("name", ""),
                short_name=request.form.get("short_name", ""),
                department_id=request.form.get("department_id"),
            ),
            "Major updated",
        )
        return redirect(url_for("config_major"))

    @app.route("/configuration/major/<int:major_id>/delete", methods=["POST"], endpoint="delete_major")
    @destination_required(Destination.CONFIG_MAJOR)
    def delete_major(major_id: int):
        _run(lambda: svc.delete_major(current_role=current_user().role, major_id=major_id), "Major deleted")
        return redirect(url_for("config_major"))

    # -------- Subjects --------
    @app.route("/configuration/subject", methods=["GET"], endpoint="config_subject")
    @destination_required(Destination.CONFIG_SUBJECT)
    def config_subject():
        edit_id = _edit_id()
        return render_template(
            "configuration/subject.html",
            subjects=svc.list_subjects(),
            editing=svc.get_subject(edit_id) if edit_id else None,
        )

    @app.route("/configuration/subject/create", methods=["POST"], endpoint="create_subject")
    @destination_required(Destination.CONFIG_SUBJECT)
    def create_subject():
        _run(
            lambda: svc.create_subject(
                current_role=current_user().role,
                name=request.form.get("name", ""),
                code=request.form.get("code", ""),
                credits=request.form.get("credits"),
            ),
            "Subject created",
        )
        return redirect(url_for("config_subject"))

    @app.route("/configuration/subject/<int:subject_id>/update", methods=["POST"], endpoint="update_subject")
    @destination_required(Destination.CONFIG_SUBJECT)
    def update_subject(subject_id: int):
        _run(
            lambda: svc.update_subject(
                current_role=current_user().role,
                subject_id=subject_id,
                name=request.form.get("name", ""),
                code=request.form.get("code", ""),
                credits=request.form.get("credits"),
            ),
            "Subject updated",
        )
        return redirect(url_for("config_subject"))

    @app.route("/configuration/subject/<int:subject_id>/delete", methods=["POST"], endpoint="delete_subject")
    @destination_required(Destination.CONFIG_SUBJECT)
    def delete_subject(subject_id: int):
        _run(lambda: svc.delete_subject(current_role=current_user().role, subject_id=subject_id), "Subject deleted")
        return redirect(url_for("config_subject"))
