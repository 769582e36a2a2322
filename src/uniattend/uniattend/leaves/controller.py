from __future__ import annotations

import logging

from flask import Flask, flash, g, redirect, render_template, request, url_for

from ..common.validators import require_date
from ..container import Container
from ..core.exceptions import AuthorizationError, BackendUnavailableError, ValidationError
from ..navigation.guards import current_user, destination_required
from ..navigation.permissions import Destination
from ..navigation.router import Screen

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    svc = container.leave_service

    @app.route("/leave-requests", methods=["GET"], endpoint="leave_requests")
    @destination_required(Destination.LEAVE_REQUESTS)
    def leave_requests():
        user = current_user()

        if g.resolution.screen == Screen.LEAVE_REVIEW:
            history = svc.department_requests(user.department_id)
            return render_template(
                "leaves/review.html",
                pending=[svc.to_ui(r) for r in svc.pending_for_reviewer(user)],
                history=[svc.to_ui(r) for r in history if r.is_terminal],
                counts=svc.status_counts(history),
            )

        mine = svc.list_by_requester(user.id)
        return render_template(
            "leaves/request.html",
            requests=[svc.to_ui(r) for r in mine],
            counts=svc.status_counts(mine),
        )

    @app.route("/leave-requests", methods=["POST"], endpoint="submit_leave")
    @destination_required(Destination.LEAVE_REQUESTS)
    def submit_leave():
        try:
            svc.submit(
                requester=current_user(),
                from_date=require_date(request.form.get("from_date"), "From date"),
                to_date=require_date(request.form.get("to_date"), "To date"),
                reason=request.form.get("reason", ""),
            )
            flash("Leave request submitted", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except BackendUnavailableError as e:
            logger.exception("Cannot submit leave request")
            flash(str(e), "danger")
        return redirect(url_for("leave_requests"))

    @app.route("/leave-requests/<int:request_id>/approve", methods=["POST"], endpoint="approve_leave")
    @destination_required(Destination.LEAVE_REQUESTS)
    def approve_leave(request_id: int):
        try:
            svc.approve(reviewer=current_user(), request_id=request_id, comments=request.form.get("comments", ""))
            flash("Leave request approved", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except BackendUnavailableError as e:
            logger.exception("Cannot approve leave request %s", request_id)
            flash(str(e), "danger")
        return redirect(url_for("leave_requests"))

    @app.route("/leave-requests/<int:request_id>/reject", methods=["POST"], endpoint="reject_leave")
    @destination_required(Destination.LEAVE_REQUESTS)
    def reject_leave(request_id: int):
        try:
            rejected = svc.reject(reviewer=current_user(), request_id=request_id, comments=request.form.get("comments", ""))
            if rejected is None:
                flash("Please give a reason for rejecting the request", "warning")
            else:
                flash("Leave request rejected", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except BackendUnavailableError as e:
            logger.exception("Cannot reject leave request %s", request_id)
            flash(str(e), "danger")
        return redirect(url_for("leave_requests"))

    @app.route("/leave-requests/<int:request_id>/cancel", methods=["POST"], endpoint="cancel_leave")
    @destination_required(Destination.LEAVE_REQUESTS)
    def cancel_leave(request_id: int):
        try:
            svc.cancel(requester=current_user(), request_id=request_id)
            flash("Leave request cancelled", "success")
        except (ValidationError, AuthorizationError) as e:
            flash(str(e), "danger")
        except BackendUnavailableError as e:
            logger.exception("Cannot cancel leave request %s", request_id)
            flash(str(e), "danger")
        return redirect(url_for("leave_requests"))
