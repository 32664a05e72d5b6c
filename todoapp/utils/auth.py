import logging
from functools import wraps

from flask import flash, redirect, request, session, url_for

from todoapp.models.user_model import SessionIdentity

logger = logging.getLogger(__name__)


def current_identity():
    return SessionIdentity.from_session(session)


def login_required(view):
    """Pass the signed-in identity as the first argument, or bounce to the login page."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        identity = current_identity()
        if identity is None:
            logger.warning("Unauthenticated access attempt to %s", request.path)
            flash("Please log in to access this page", "error")
            return redirect(url_for("auth.login"))
        return view(identity, *args, **kwargs)

    return wrapper


def redirect_if_authenticated(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        identity = current_identity()
        if identity is not None:
            logger.info("Authenticated user %s redirected from auth page", identity.username)
            return redirect(url_for("tasks.list_tasks"))
        return view(*args, **kwargs)

    return wrapper


def form_payload():
    # HTML forms post form-encoded bodies; API clients may send JSON.
    payload = request.get_json(silent=True)
    if payload is None:
        return request.form
    # Only a JSON object carries named fields.
    return payload if isinstance(payload, dict) else {}
