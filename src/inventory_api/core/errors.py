"""
Service-level errors.

Services raise one of the four kinds below; the HTTP layer turns them into
responses in one place (see ``inventory_api.main``). Nothing else in the core
raises HTTP-shaped exceptions.
"""

from fastapi import status


class ServiceError(Exception):
    """Base class for expected business failures."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConflictError(ServiceError):
    """Duplicate name/email/username, or delete blocked by references."""

    status_code = status.HTTP_409_CONFLICT


class NotFoundError(ServiceError):
    """Missing id, or missing referenced category."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str):
        self.resource = resource
        super().__init__(f"{resource} not found")


class UnauthorizedError(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED


class ValidationError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
