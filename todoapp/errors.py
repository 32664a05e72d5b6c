class TodoAppError(Exception):
    """Base class for failures that are reported back to the user."""

    message = "Something went wrong"

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(TodoAppError):
    message = "Invalid input"


class DuplicateUsername(TodoAppError):
    message = "Username already exists"


class InvalidCredentials(TodoAppError):
    # Same text for unknown users and wrong passwords.
    message = "Invalid username or password"


class NotFoundOrUnauthorized(TodoAppError):
    message = "Task not found or unauthorized"


class NotFound(NotFoundOrUnauthorized):
    message = "Task not found"


class LogoutError(TodoAppError):
    message = "Logout failed"


class InfrastructureError(TodoAppError):
    message = "Service temporarily unavailable. Please try again."
