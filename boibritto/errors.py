"""
Error taxonomy for the API.

Every domain failure is raised as a subclass of ``BoiBrittoError``; the
exception handler in ``boibritto.main`` renders it as the error envelope with
the status code carried by the class.
"""

from fastapi import status


class BoiBrittoError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Something went wrong"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(BoiBrittoError):
    """Malformed input or an invariant violation."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class UnauthenticatedError(BoiBrittoError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "unauthorized"


class ForbiddenError(BoiBrittoError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFoundError(BoiBrittoError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "The requested resource was not found"


class ConflictError(BoiBrittoError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class InternalError(BoiBrittoError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "An unexpected error occurred"
