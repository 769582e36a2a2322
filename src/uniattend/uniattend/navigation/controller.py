from __future__ import annotations

import logging

from flask import Flask, flash, g, redirect, render_template, session, url_for

from ..auth.session import SessionHolder
from ..common.datetime_utils import today_local
from ..container import Container
from ..core.exceptions import BackendUnavailableError
from .guards import current_user, destination_required
from .permissions import Destination, navigation_for

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.before_request
    def attach_session_holder():
        g.session_holder = SessionHolder(session, container.auth_service)

    @app.context_processor
    def inject_navigation():
        user = current_user()
        resolution = g.get("resolution")
        return {
            "current_user": user,
            "nav_entries": navigation_for(user.role if user else None),
            "active_destination": resolution.destination if resolution else None,
        }

    @app.errorhandler(404)
    def not_found(_e):
        return render_template("not_found.html"), 404

    @app.errorhandler(BackendUnavailableError)
    def backend_unavailable(e):
        logger.exception("Backend unavailable while serving a page")
        return render_template("unavailable.html", message=str(e)), 503

    @app.route("/", endpoint="index")
    def index():
        if current_user() is None:
            return redirect(url_for("login"))
        return redirect(url_for("dashboard"))

    @app.route("/dashboard", endpoint="dashboard")
    @destination_required(Destination.DASHBOARD)
    def dashboard():
        user = current_user()
        try:
            data = container.dashboard_service.build(user, today_local())
        except BackendUnavailableError as e:
            logger.exception("Dashboard data unavailable for %s", user.unique_id)
            flash(str(e), "danger")
            data = {"variant": "welcome", "user": user}

        return render_template(f"dashboards/{data['variant']}.html", **data)
