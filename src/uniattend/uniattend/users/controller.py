from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.validators import optional_int
from ..container import Container
from ..core.enums import Role, UserStatus
from ..core.exceptions import AuthorizationError, BackendUnavailableError, ValidationError
from ..navigation.guards import current_user, destination_required
from ..navigation.permissions import Destination

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _form_fields() -> dict:
        return dict(
            name=request.form.get("name", ""),
            email=request.form.get("email", ""),
            role=request.form.get("role", ""),
            status=request.form.get("status", UserStatus.ACTIVE.value),
            department_id=optional_int(request.form.get("department_id"), "Department"),
            class_id=optional_int(request.form.get("class_id"), "Class"),
            password=request.form.get("password", ""),
        )

    def _render(**extra):
        return render_template(
            "users/index.html",
            users=container.user_service.list_all(),
            departments=container.configuration_service.list_departments(),
            classes=container.academic_service.list_classes(),
            roles=list(Role),
            statuses=list(UserStatus),
            **extra,
        )

    @app.route("/user-management", methods=["GET"], endpoint="user_management")
    @destination_required(Destination.USER_MANAGEMENT)
    def user_management():
        return _render()

    @app.route("/user-management/create", methods=["POST"], endpoint="create_user")
    @destination_required(Destination.USER_MANAGEMENT)
    def create_user():
        try:
            container.user_service.create_account(
                current_role=current_user().role,
                unique_id=request.form.get("unique_id", ""),
                **_form_fields(),
            )
            flash("User created", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except BackendUnavailableError as e:
            logger.exception("Cannot create user")
            flash(str(e), "danger")
        return redirect(url_for("user_management"))

    @app.route("/user-management/<int:user_id>/edit", methods=["GET", "POST"], endpoint="edit_user")
    @destination_required(Destination.USER_MANAGEMENT)
    def edit_user(user_id: int):
        if request.method == "POST":
            try:
                container.user_service.update_account(
                    current_role=current_user().role,
                    user_id=user_id,
                    **_form_fields(),
                )
                flash("User updated", "success")
                return redirect(url_for("user_management"))
            except (ValidationError, AuthorizationError) as e:
                flash(str(e), "danger")
            except BackendUnavailableError as e:
                logger.exception("Cannot update user %s", user_id)
                flash(str(e), "danger")

        user = container.user_service.get(user_id)
        if not user:
            flash("User not found", "danger")
            return redirect(url_for("user_management"))
        return _render(editing=user)

    @app.route("/user-management/<int:user_id>/delete", methods=["POST"], endpoint="delete_user")
    @destination_required(Destination.USER_MANAGEMENT)
    def delete_user(user_id: int):
        me = current_user()
        try:
            container.user_service.delete_user(current_role=me.role, current_user_id=me.id, user_id=user_id)
            flash("User deleted", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except BackendUnavailableError as e:
            logger.exception("Cannot delete user %s", user_id)
            flash(str(e), "danger")
        return redirect(url_for("user_management"))
