"""Mindify utilities package.

This package provides constants, exceptions, logging, request context and
datetime helpers used throughout the Mindify application.
"""

from mindify.utils.constants import Collections, ResultBand
from mindify.utils.datetime_utils import ensure_utc, utc_now
from mindify.utils.exceptions import (
    ConfigurationError,
    DatabaseError,
    ExternalServiceError,
    MindifyError,
    ResourceNotFoundError,
    ServiceUnavailableError,
    ValidationError,
)

__all__ = [
    "Collections",
    "ResultBand",
    "ensure_utc",
    "utc_now",
    "ConfigurationError",
    "DatabaseError",
    "ExternalServiceError",
    "MindifyError",
    "ResourceNotFoundError",
    "ServiceUnavailableError",
    "ValidationError",
]
