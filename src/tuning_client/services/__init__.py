"""
Services for the tuned-model lifecycle and long-running operations.
"""

from .model_service import ModelService
from .operations import OperationPoller, CreateTunedModelOperation

__all__ = [
    "ModelService",
    "OperationPoller",
    "CreateTunedModelOperation",
]
