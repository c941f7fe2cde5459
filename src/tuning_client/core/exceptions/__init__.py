"""
Exception hierarchy for the tuning client.

Every error raised by the client derives from ``TuningClientError`` and
carries an optional context dictionary and the underlying cause, so that
failures can be logged or serialized with enough information to debug them.
"""

from typing import Dict, Any, Optional
import traceback
import time


class TuningClientError(Exception):
    """Root exception for all tuning client errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.cause = cause
        self.timestamp = time.time()
        self.traceback_str = traceback.format_exc()

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp,
            "traceback": self.traceback_str,
            "cause": str(self.cause) if self.cause else None
        }

    def __str__(self) -> str:
        base = f"{self.__class__.__name__}: {self.message}"
        if self.context:
            base += f" (Context: {self.context})"
        if self.cause:
            base += f" (Caused by: {self.cause})"
        return base


# Configuration-related errors
class ConfigurationError(TuningClientError):
    """Configuration-related issues."""
    pass


# Naming and request-shape errors
class InvalidNameError(TuningClientError, ValueError):
    """Model identifier lacks a recognized prefix or targets the wrong kind."""

    def __init__(self, message: str, name: Any = None,
                 context: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, context, cause)
        self.name = name

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["name"] = repr(self.name)
        return result


class TypeMismatchError(TuningClientError, TypeError):
    """An argument has the wrong shape for the requested operation."""
    pass


class AmbiguousUpdateError(TuningClientError, ValueError):
    """Both a mutated resource and an updates mapping were supplied."""
    pass


# Data-related errors
class DataError(TuningClientError):
    """Data-related issues."""
    pass


class TrainingDataError(DataError):
    """Training data could not be encoded."""

    def __init__(self, message: str, record: Any = None, index: Optional[int] = None,
                 context: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, context, cause)
        self.record = record
        self.index = index

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["record"] = repr(self.record)
        result["index"] = self.index
        return result


# Integration-related errors
class IntegrationError(TuningClientError):
    """Integration-related issues."""
    pass


class TransportError(IntegrationError):
    """A remote call failed; surfaced unchanged to the caller."""
    pass


class APIError(TransportError):
    """The remote service answered with an error status."""

    def __init__(self, message: str, status_code: Optional[int] = None,
                 response_data: Optional[Dict[str, Any]] = None,
                 context: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, context, cause)
        self.status_code = status_code
        self.response_data = response_data

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["status_code"] = self.status_code
        result["response_data"] = self.response_data
        return result


class OperationError(IntegrationError):
    """A long-running operation finished with an error."""

    def __init__(self, message: str, operation_name: Optional[str] = None,
                 error: Optional[Dict[str, Any]] = None,
                 context: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, context, cause)
        self.operation_name = operation_name
        self.error = error or {}

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["operation_name"] = self.operation_name
        result["error"] = self.error
        return result


# Utility functions for exception handling
def create_error_context(
    component: str,
    operation: str,
    parameters: Optional[Dict[str, Any]] = None,
    additional_info: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Create standardized error context."""
    context = {
        "component": component,
        "operation": operation,
        "timestamp": time.time()
    }

    if parameters:
        context["parameters"] = parameters

    if additional_info:
        context.update(additional_info)

    return context


def wrap_exception(original_exception: Exception, new_exception_class: type,
                   message: str, context: Optional[Dict[str, Any]] = None) -> TuningClientError:
    """Wrap an existing exception with a tuning client exception."""
    return new_exception_class(
        message=message,
        context=context,
        cause=original_exception
    )


__all__ = [
    "TuningClientError",
    "ConfigurationError",
    "InvalidNameError",
    "TypeMismatchError",
    "AmbiguousUpdateError",
    "DataError",
    "TrainingDataError",
    "IntegrationError",
    "TransportError",
    "APIError",
    "OperationError",
    "create_error_context",
    "wrap_exception",
]
