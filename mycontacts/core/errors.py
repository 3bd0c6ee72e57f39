# mycontacts/core/errors.py
from fastapi import status


class AppError(Exception):
    """
    Base class for errors raised by the service layer.

    Each subclass pins an HTTP status and a machine-readable code; the
    exception handlers in `main.py` render them as:

        {"ok": false, "message": ..., "error": {"status", "message", "code"}}
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str | None = "internal_error"
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, code: str | None = None):
        self.message = message or self.default_message
        if code is not None:
            self.code = code
        super().__init__(self.message)


class InvalidInputError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_input"
    default_message = "Invalid input"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    code = "conflict"
    default_message = "Resource already exists"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_message = "Not found"


class InvalidCredentialsError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "invalid_credentials"
    default_message = "Invalid credentials"


class NoTokenError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "no_token"
    default_message = "No token provided"


class InvalidTokenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "invalid_token"
    default_message = "Invalid token"


class InternalError(AppError):
    pass


def error_body(status_code: int, message: str, code: str | None = None) -> dict:
    """JSON body shared by every error response."""
    error: dict = {"status": status_code, "message": message}
    if code:
        error["code"] = code
    return {"ok": False, "message": message, "error": error}
