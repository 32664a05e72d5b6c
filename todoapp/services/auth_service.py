import logging
import re

from werkzeug.security import generate_password_hash

from todoapp.errors import InvalidCredentials, LogoutError, ValidationError
from todoapp.models.user_model import SessionIdentity

logger = logging.getLogger(__name__)

USERNAME_RE = re.compile(r"[A-Za-z0-9]+")
USERNAME_MIN, USERNAME_MAX = 3, 20
PASSWORD_MIN = 6


def _text(value, label):
    """Return ``value`` as a string; missing becomes "", anything else is rejected."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{label} must be a string")
    return value


def validate_signup(username, password, confirm_password):
    """Return the username or raise ValidationError for the first failing rule."""
    username = _text(username, "Username")
    password = _text(password, "Password")
    confirm_password = _text(confirm_password, "Confirm password")

    if not username:
        raise ValidationError("Username is required")
    # No trimming: surrounding whitespace fails the alphanumeric rule.
    if not USERNAME_RE.fullmatch(username):
        raise ValidationError("Username must only contain letters and numbers")
    if not USERNAME_MIN <= len(username) <= USERNAME_MAX:
        raise ValidationError(f"Username must be between {USERNAME_MIN} and {USERNAME_MAX} characters")
    if not password:
        raise ValidationError("Password is required")
    if len(password) < PASSWORD_MIN:
        raise ValidationError(f"Password must be at least {PASSWORD_MIN} characters")
    if confirm_password != password:
        raise ValidationError("Passwords do not match")
    return username


class AuthService:
    def __init__(self, user_store):
        self.users = user_store

    def signup(self, username, password, confirm_password):
        username = validate_signup(username, password, confirm_password)
        user = self.users.create(username, generate_password_hash(password))
        logger.info("New user registered: %s", username)
        return user

    def login(self, username, password):
        username = _text(username, "Username")
        password = _text(password, "Password")
        if not username.strip():
            raise ValidationError("Username is required")
        if not password:
            raise ValidationError("Password is required")

        user = self.users.find_by_username(username)
        if user is None or not self.users.verify_password(user, password):
            raise InvalidCredentials()

        logger.info("User logged in: %s", username)
        return SessionIdentity(user_id=user.id, username=user.username)

    def logout(self, session):
        """Drop everything held in ``session``."""
        username = session.get("username")
        try:
            session.clear()
        except Exception as exc:  # noqa: BLE001
            raise LogoutError() from exc
        logger.info("User logged out: %s", username)
