"""Domain errors raised by the services and mapped to HTTP responses in main."""
from fastapi import status


class AppError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(AppError):
    """Unique field collision on create or update."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Resource already exists"


class UnauthorizedError(AppError):
    """Requester may not act on another user's profile (reported as 400 like the profile routes always have)."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "You are not authorized to perform this action"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class InvalidCredentialsError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid email or password"


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class SelfReferenceError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "You cannot perform this action on yourself"


class ConfigurationError(RuntimeError):
    """Missing required startup configuration. Fatal."""
