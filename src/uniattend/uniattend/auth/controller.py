from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..container import Container
from ..core.exceptions import AuthenticationError, BackendUnavailableError
from ..navigation.guards import current_user, session_holder

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["GET", "POST"], endpoint="login")
    def login():
        if current_user() is not None:
            return redirect(url_for("dashboard"))

        if request.method == "POST":
            unique_id = request.form.get("unique_id", "")
            password = request.form.get("password", "")

            try:
                user = session_holder().login(unique_id, password)
                session.permanent = bool(request.form.get("remember_me"))
                flash(f"Welcome back, {user.name}!", "success")
                return redirect(url_for("dashboard"))
            except AuthenticationError as e:
                flash(str(e), "danger")
            except BackendUnavailableError as e:
                logger.exception("Login failed: backend unavailable")
                flash(str(e), "danger")

        return render_template("login.html")

    @app.route("/logout", methods=["GET", "POST"], endpoint="logout")
    def logout():
        session_holder().logout()
        flash("You have been logged out.", "info")
        return redirect(url_for("login"))
