"""
Domain errors raised by the mall services and rendered by the API layer.
"""
from typing import Optional

from fastapi import status


class StoreLocatorError(Exception):
    """Base class for errors reported to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal server error"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class Unauthenticated(StoreLocatorError):
    """No credential, or the credential could not be resolved to a user."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Not authenticated"


class Forbidden(StoreLocatorError):
    """Authenticated caller whose role may not perform the operation."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Forbidden: insufficient privileges"


class NotFound(StoreLocatorError):
    """Mall or store id is absent from the dataset."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class InvalidOperation(StoreLocatorError):
    """Business rule violation, e.g. opening a store inside a closed mall."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid operation"


class PersistenceFailure(StoreLocatorError):
    """The mall document could not be written."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Failed to save changes"


class ValidationFailure(StoreLocatorError):
    """Malformed input that passed schema parsing but is still unusable."""

    status_code = 422
    default_detail = "Invalid input"
