"""Custom exception classes for the Mindify application.

This module defines a hierarchy of custom exceptions for different types
of errors that can occur in the application.
"""

from typing import Any, Dict, List, Optional


class MindifyError(Exception):
    """Base exception class for all Mindify application errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        """Initialize Mindify error.

        Args:
            message: Error message
            error_code: Application-specific error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary representation.

        Returns:
            Dict[str, Any]: Exception data
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
            "cause": str(self.cause) if self.cause else None,
        }

    def __str__(self) -> str:
        parts = [self.message]
        if self.error_code:
            parts.append(f"Code: {self.error_code}")
        if self.details:
            parts.append(f"Details: {self.details}")
        return " | ".join(parts)


class ValidationError(MindifyError):
    """Exception for missing or unusable request input."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        validation_errors: Optional[List[str]] = None,
        **kwargs
    ):
        """Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            validation_errors: List of specific validation errors
            **kwargs: Additional arguments for parent class
        """
        details = kwargs.get("details", {})
        if field:
            details["field"] = field
        if validation_errors:
            details["validation_errors"] = validation_errors

        kwargs["details"] = details
        kwargs.setdefault("error_code", "BAD_REQUEST")
        super().__init__(message, **kwargs)

        self.field = field
        self.validation_errors = validation_errors or []


class ResourceNotFoundError(MindifyError):
    """Exception for when a requested resource is not found."""

    def __init__(
        self,
        message: str,
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        **kwargs
    ):
        """Initialize resource not found error.

        Args:
            message: Error message
            resource_type: Type of resource (post, test)
            resource_id: ID of the resource
            **kwargs: Additional arguments for parent class
        """
        details = kwargs.get("details", {})
        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id

        kwargs["details"] = details
        kwargs.setdefault("error_code", "NOT_FOUND")
        super().__init__(message, **kwargs)

        self.resource_type = resource_type
        self.resource_id = resource_id


class DatabaseError(MindifyError):
    """Exception for database operation failures."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        collection: Optional[str] = None,
        **kwargs
    ):
        """Initialize database error.

        Args:
            message: Error message
            operation: Database operation (find, insert, update)
            collection: Collection name
            **kwargs: Additional arguments for parent class
        """
        details = kwargs.get("details", {})
        if operation:
            details["operation"] = operation
        if collection:
            details["collection"] = collection

        kwargs["details"] = details
        kwargs.setdefault("error_code", "DATABASE_ERROR")
        super().__init__(message, **kwargs)

        self.operation = operation
        self.collection = collection


class ExternalServiceError(MindifyError):
    """Exception for failures of an upstream service such as the AI provider."""

    def __init__(
        self,
        message: str,
        service_name: Optional[str] = None,
        status_code: Optional[int] = None,
        **kwargs
    ):
        """Initialize external service error.

        Args:
            message: Error message safe to show to callers
            service_name: Name of the upstream service
            status_code: HTTP status returned by the upstream, if any
            **kwargs: Additional arguments for parent class
        """
        details = kwargs.get("details", {})
        if service_name:
            details["service_name"] = service_name
        if status_code is not None:
            details["status_code"] = status_code

        kwargs["details"] = details
        kwargs.setdefault("error_code", "UPSTREAM_FAILURE")
        super().__init__(message, **kwargs)

        self.service_name = service_name
        self.status_code = status_code


class ServiceUnavailableError(ExternalServiceError):
    """Exception for an upstream service whose client was never created."""

    def __init__(self, message: str, service_name: Optional[str] = None, **kwargs):
        kwargs.setdefault("error_code", "SERVICE_UNAVAILABLE")
        super().__init__(message, service_name=service_name, **kwargs)


class ConfigurationError(MindifyError):
    """Exception for invalid or missing configuration."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        **kwargs
    ):
        """Initialize configuration error.

        Args:
            message: Error message
            config_key: Configuration key that is invalid
            **kwargs: Additional arguments for parent class
        """
        details = kwargs.get("details", {})
        if config_key:
            details["config_key"] = config_key

        kwargs["details"] = details
        kwargs.setdefault("error_code", "CONFIGURATION_ERROR")
        super().__init__(message, **kwargs)

        self.config_key = config_key


__all__ = [
    "MindifyError",
    "ValidationError",
    "ResourceNotFoundError",
    "DatabaseError",
    "ExternalServiceError",
    "ConfigurationError",
    "ServiceUnavailableError",
]
