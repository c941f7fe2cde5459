"""
Tuning client: manage base and tuned models on a remote tuning service.

Resolve model names, fetch and list models, start tuning jobs, apply
field-mask updates, delete tuned models and follow long-running operations.
"""

from ._version import __version__

_LAZY_ATTRIBUTES = {
    # Services
    "ModelService": ".services",
    "OperationPoller": ".services",
    "CreateTunedModelOperation": ".services",
    # Resources
    "Model": ".resources",
    "TunedModel": ".resources",
    "TunedModelSource": ".resources",
    "TuningTask": ".resources",
    "TuningExample": ".resources",
    "Hyperparameters": ".resources",
    "Operation": ".resources",
    "OperationStatus": ".resources",
    # Naming
    "normalize": ".naming",
    "classify": ".naming",
    "ModelKind": ".naming",
    "resolve_base_model_name": ".naming",
    # Configuration
    "ClientConfig": ".config",
    "load_config": ".config",
    # Default clients and shortcuts
    "configure": ".client",
    "get_model": ".client",
    "get_base_model": ".client",
    "get_tuned_model": ".client",
    "get_base_model_name": ".client",
    "list_models": ".client",
    "list_tuned_models": ".client",
    "create_tuned_model": ".client",
    "update_tuned_model": ".client",
    "delete_tuned_model": ".client",
    # Exceptions
    "TuningClientError": ".core.exceptions",
    "InvalidNameError": ".core.exceptions",
    "TypeMismatchError": ".core.exceptions",
    "AmbiguousUpdateError": ".core.exceptions",
    "TrainingDataError": ".core.exceptions",
    "TransportError": ".core.exceptions",
    "APIError": ".core.exceptions",
    "OperationError": ".core.exceptions",
}


def __getattr__(name: str):
    """Lazy import for public API components."""
    module_name = _LAZY_ATTRIBUTES.get(name)
    if module_name is None:
        raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
    import importlib
    module = importlib.import_module(module_name, __name__)
    return getattr(module, name)


__all__ = sorted(_LAZY_ATTRIBUTES) + ["__version__"]

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
