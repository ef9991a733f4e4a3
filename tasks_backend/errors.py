"""
Error taxonomy raised by the services and rendered by the HTTP layer.

Every error carries the status code it maps to and a caller-safe message.
"""


class AppError(Exception):
    status_code = 500
    message = "Server error"

    def __init__(self, message=None):
        self.message = message or self.message
        super().__init__(self.message)


class ValidationError(AppError):
    """Missing or malformed input."""
    status_code = 400
    message = "Invalid request"


class ConflictError(AppError):
    """Duplicate registration."""
    status_code = 400
    message = "User already exists"


class AuthError(AppError):
    """Bad credentials, or a missing, invalid or expired token."""
    status_code = 401
    message = "Invalid credentials"


class NotFoundError(AppError):
    """Resource absent or owned by someone else."""
    status_code = 404
    message = "Not found"


class ServerError(AppError):
    status_code = 500
    message = "Server error"
