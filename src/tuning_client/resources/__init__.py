"""
Resource types exchanged with the tuning service.
"""

from .models import (
    Model,
    TunedModel,
    TunedModelSource,
    TunedModelState,
    TuningTask,
    TuningExample,
    TuningSnapshot,
    Dataset,
    Hyperparameters,
)
from .operations import Operation, OperationStatus

__all__ = [
    "Model",
    "TunedModel",
    "TunedModelSource",
    "TunedModelState",
    "TuningTask",
    "TuningExample",
    "TuningSnapshot",
    "Dataset",
    "Hyperparameters",
    "Operation",
    "OperationStatus",
]
