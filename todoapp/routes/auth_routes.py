import logging

from flask import Blueprint, flash, redirect, render_template, session, url_for
from pymongo.errors import PyMongoError

from todoapp.errors import LogoutError, TodoAppError
from todoapp.services.auth_service import AuthService
from todoapp.stores.user_store import UserStore
from todoapp.utils.auth import form_payload, redirect_if_authenticated
from todoapp.utils.db import get_db

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__)


def _service():
    return AuthService(UserStore(get_db()))


@auth_bp.get("/signup")
@redirect_if_authenticated
def signup():
    return render_template("auth/signup.html", title="Sign Up")


@auth_bp.post("/signup")
@redirect_if_authenticated
def signup_submit():
    payload = form_payload()
    try:
        _service().signup(
            payload.get("username"),
            payload.get("password"),
            payload.get("confirmPassword"),
        )
    except TodoAppError as exc:
        flash(exc.message, "error")
        return redirect(url_for("auth.signup"))
    except PyMongoError:
        logger.exception("Signup error")
        flash("Registration failed. Please try again.", "error")
        return redirect(url_for("auth.signup"))

    flash("Registration successful! Please log in.", "success")
    return redirect(url_for("auth.login"))


@auth_bp.get("/login")
@redirect_if_authenticated
def login():
    return render_template("auth/login.html", title="Login")


@auth_bp.post("/login")
@redirect_if_authenticated
def login_submit():
    payload = form_payload()
    try:
        identity = _service().login(payload.get("username"), payload.get("password"))
    except TodoAppError as exc:
        flash(exc.message, "error")
        return redirect(url_for("auth.login"))
    except PyMongoError:
        logger.exception("Login error")
        flash("Login failed. Please try again.", "error")
        return redirect(url_for("auth.login"))

    # Start from a fresh session so nothing from an earlier login survives.
    session.clear()
    session.update(identity.to_session())
    session.permanent = True

    flash(f"Welcome back, {identity.username}!", "success")
    return redirect(url_for("tasks.list_tasks"))


@auth_bp.post("/logout")
def logout():
    try:
        _service().logout(session)
    except LogoutError:
        logger.exception("Logout error")
        flash("Logout failed", "error")
    return redirect(url_for("index"))
