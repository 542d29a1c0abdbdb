"""
Application error hierarchy.

Services raise these exceptions and never deal with HTTP.  The
application factory maps each kind to a status code (see
``main.register_exception_handlers``) and returns the message as the
response ``detail``.
"""


class AppError(Exception):
    """Base class for errors that carry a human readable message."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Raised when input is malformed or out of range.

    Always raised before the store is touched.
    """

    status_code = 400


class ConflictError(AppError):
    """Raised when a write would break an email uniqueness rule."""

    status_code = 409


class NotFoundError(AppError):
    """Raised when a referenced record is absent or a search matched nothing."""

    status_code = 404


class AuthError(AppError):
    """Raised when supplied credentials do not match."""

    status_code = 401


class StorageError(AppError):
    """Raised when the underlying store fails for any other reason."""

    status_code = 503
