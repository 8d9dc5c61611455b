"""
Error types raised by the queue service and the admin gate.

Each error carries the HTTP status it is rendered with; the application turns
them into ``{"error": message}`` responses.
"""

from fastapi import status


class QueueError(Exception):
    """Base class for all waitlist errors."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(QueueError):
    """A required field is missing or malformed."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthorizationError(QueueError):
    """Missing, invalid or expired admin token."""

    status_code = status.HTTP_403_FORBIDDEN


class InvalidCredentialsError(AuthorizationError):
    """Wrong admin username or password."""

    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(QueueError):
    """The targeted entry does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class InvalidTransitionError(QueueError):
    """The entry's current status does not allow the requested change."""

    status_code = status.HTTP_409_CONFLICT


ERRORS_BY_STATUS: dict[int, type[QueueError]] = {
    status.HTTP_400_BAD_REQUEST: ValidationError,
    status.HTTP_401_UNAUTHORIZED: InvalidCredentialsError,
    status.HTTP_403_FORBIDDEN: AuthorizationError,
    status.HTTP_404_NOT_FOUND: NotFoundError,
    status.HTTP_409_CONFLICT: InvalidTransitionError,
}


def error_for_status(status_code: int, message: str) -> QueueError:
    """Rebuild the matching error from an HTTP error response."""
    error_cls = ERRORS_BY_STATUS.get(status_code, QueueError)
    return error_cls(message)
