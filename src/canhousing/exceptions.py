"""
Custom Exceptions for Canadian Housing Insights

Provides a hierarchy of exceptions for standardized error handling across all modules.

Exception Hierarchy:
    CanHousingError (base)
    ├── ConfigurationError
    ├── DatasetError
    │   ├── DatasetNotFoundError
    │   └── DatasetSchemaError
    └── ValidationError
        └── InvalidComparisonError
"""

from typing import Iterable, Optional


class CanHousingError(Exception):
    """Base exception for all Canadian Housing Insights errors."""

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


# Configuration Errors
class ConfigurationError(CanHousingError):
    """Raised when there's a configuration problem."""

    pass


# Dataset Errors
class DatasetError(CanHousingError):
    """Base exception for dataset loading errors.

    These are fatal: without a working dataset no session can start.
    """

    def __init__(self, message: str, source: str = None):
        self.source = source
        super().__init__(message)


class DatasetNotFoundError(DatasetError):
    """Raised when the listings file is missing or unreadable."""

    def __init__(self, source: str = None, reason: str = None):
        message = f"Listings file not readable: {source}" if source else "Listings file not readable"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, source=source)


class DatasetSchemaError(DatasetError):
    """Raised when the listings file lacks required columns."""

    def __init__(self, missing: Iterable[str], source: str = None):
        self.missing = sorted(missing)
        message = f"Listings file is missing required columns: {', '.join(self.missing)}"
        if source:
            message = f"{message} [{source}]"
        super().__init__(message, source=source)


# Validation Errors
class ValidationError(CanHousingError):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str = None, value=None):
        self.field = field
        self.value = value
        super().__init__(message)


class InvalidComparisonError(ValidationError):
    """Raised when a city comparison is not given exactly two distinct cities."""

    def __init__(self, cities: Optional[Iterable[str]] = None):
        selected = list(cities or [])
        super().__init__(
            "Please select exactly two cities for comparison.",
            field="comparison_cities",
            value=selected,
        )
