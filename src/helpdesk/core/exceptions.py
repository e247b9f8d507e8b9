"""
Core Exceptions
================

Custom exceptions for the application following clean architecture principles.

These exceptions define domain-specific errors that can be caught and handled
appropriately at the application boundaries. Each concrete error carries a
``code`` naming its entry in the error taxonomy exposed to API clients.
"""

from typing import Iterable, Optional


class ApplicationException(Exception):
    """Base exception for all application errors."""

    code = "ApplicationError"

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class DomainException(ApplicationException):
    """Base exception for domain logic violations."""


class RepositoryException(ApplicationException):
    """Base exception for repository/data access errors."""


class StoreFailureException(RepositoryException):
    """The underlying store rejected or failed a statement."""

    code = "StoreFailure"


class ValidationException(ApplicationException):
    """Exception for validation errors."""

    code = "ValidationError"


class MissingRequiredFieldException(ValidationException):
    """One or more required fields were absent or empty."""

    code = "MissingRequiredField"

    def __init__(self, fields: Iterable[str], message: Optional[str] = None):
        self.fields = list(fields)
        super().__init__(
            message or f"Missing required fields: {', '.join(self.fields)}",
            {"fields": self.fields}
        )


class InvalidPriorityException(ValidationException):
    """Priority is not one of the enumerated values."""

    code = "InvalidPriority"

    def __init__(self, value: object, allowed: Iterable[str]):
        allowed = list(allowed)
        super().__init__(
            f"Invalid priority. Must be one of: {', '.join(allowed)}",
            {"value": value, "allowed": allowed}
        )


class InvalidStatusException(ValidationException):
    """Status is not one of the enumerated values."""

    code = "InvalidStatus"

    def __init__(self, value: object, allowed: Iterable[str]):
        allowed = list(allowed)
        super().__init__(
            f"Invalid status. Must be one of: {', '.join(allowed)}",
            {"value": value, "allowed": allowed}
        )


class NoFieldsProvidedException(ValidationException):
    """A partial update carried no fields."""

    code = "NoFieldsProvided"

    def __init__(self, message: str = "No fields to update"):
        super().__init__(message)


class ResourceNotFoundException(ApplicationException):
    """Exception when a requested resource is not found."""

    code = "NotFound"

    def __init__(
        self,
        resource_type: str,
        resource_id: Optional[str] = None,
        details: Optional[dict] = None
    ):
        self.resource_type = resource_type
        self.resource_id = resource_id
        message = f"{resource_type}"
        if resource_id:
            message += f" with id '{resource_id}'"
        message += " not found"
        super().__init__(message, details)
