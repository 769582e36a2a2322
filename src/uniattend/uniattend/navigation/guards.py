"""View decorators shared by the controllers.

The per-request `SessionHolder` lives on `flask.g` (installed by
`navigation.controller.register`); these helpers read it from there.
"""

from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import flash, g, redirect, render_template, url_for

from ..auth.service import SessionUser
from ..auth.session import SessionHolder
from .permissions import Destination
from .router import resolve


def session_holder() -> SessionHolder:
    return g.session_holder


def current_user() -> Optional[SessionUser]:
    holder = g.get("session_holder")
    return holder.current_user() if holder else None


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_user() is None:
            flash("Please log in to continue.", "warning")
            return redirect(url_for("login"))
        return view(*args, **kwargs)

    return wrapper


def destination_required(destination: Destination):
    """Guard a screen route: anonymous users go to login, disallowed roles get 403."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = current_user()
            if user is None:
                flash("Please log in to continue.", "warning")
                return redirect(url_for("login"))

            resolution = resolve(destination.value, user.role)
            if not resolution.allowed:
                return render_template("no_access.html"), 403

            g.resolution = resolution
            return view(*args, **kwargs)

        return wrapper

    return decorator
