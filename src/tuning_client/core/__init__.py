"""Core exceptions and ports of the tuning client."""

from .exceptions import (
    TuningClientError,
    InvalidNameError,
    TypeMismatchError,
    AmbiguousUpdateError,
    TransportError,
)
from .interfaces import ModelServicePort, OperationsPort

__all__ = [
    "TuningClientError",
    "InvalidNameError",
    "TypeMismatchError",
    "AmbiguousUpdateError",
    "TransportError",
    "ModelServicePort",
    "OperationsPort",
]
