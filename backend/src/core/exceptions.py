"""
Custom Exception Hierarchy
Domain and application-level exceptions
"""
from typing import Any, Optional


class DomainException(Exception):
    """Base exception for all domain errors"""
    pass


class AuthenticationException(DomainException):
    """Authentication failed"""
    pass


class AuthorizationException(DomainException):
    """User not authorized for this operation"""
    pass


class ValidationException(DomainException):
    """Data validation failed"""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class ResourceNotFoundException(DomainException):
    """Requested resource not found"""

    def __init__(self, resource_type: str, identifier: str):
        self.resource_type = resource_type
        self.identifier = identifier
        super().__init__(f"{resource_type} not found: {identifier}")


class StorageException(DomainException):
    """Key/value storage read or write failed"""
    pass


class ApiError(DomainException):
    """Backend API call failed

    The message keeps the backend's own wording (or "HTTP error! status: N"),
    so callers may still look for status substrings such as "401".
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        payload: Optional[Any] = None
    ):
        self.message = message
        self.status_code = status_code
        self.payload = payload
        super().__init__(message)

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401


class ApiConnectionError(ApiError):
    """Backend could not be reached"""
    pass
