"""
Core Module
============

Shared core utilities and abstractions used across the application.

This module contains framework-agnostic code that defines the fundamental
building blocks of the system.
"""

from helpdesk.core.exceptions import (
    ApplicationException,
    DomainException,
    RepositoryException,
    StoreFailureException,
    ValidationException,
    MissingRequiredFieldException,
    InvalidPriorityException,
    InvalidStatusException,
    NoFieldsProvidedException,
    ResourceNotFoundException,
)
from helpdesk.core.persistence import IPersistenceAdapter, RunResult, Row
from helpdesk.core.clock import Clock, utc_now, to_timestamp, from_timestamp

__all__ = [
    "ApplicationException",
    "DomainException",
    "RepositoryException",
    "StoreFailureException",
    "ValidationException",
    "MissingRequiredFieldException",
    "InvalidPriorityException",
    "InvalidStatusException",
    "NoFieldsProvidedException",
    "ResourceNotFoundException",
    "IPersistenceAdapter",
    "RunResult",
    "Row",
    "Clock",
    "utc_now",
    "to_timestamp",
    "from_timestamp",
]
