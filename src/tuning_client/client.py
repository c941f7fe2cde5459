"""
Default clients.

``configure()`` sets the process-wide configuration; the default ports and
service are built from it on first use. The module-level functions mirror the
``ModelService`` methods for quick scripting.
"""

from typing import Any, Dict, Iterator, Optional
import logging

from .config import ClientConfig, load_config
from .core.interfaces import ModelServicePort, OperationsPort

logger = logging.getLogger(__name__)

_config: Optional[ClientConfig] = None
_model_client: Optional[ModelServicePort] = None
_operations_client: Optional[OperationsPort] = None
_service = None


def configure(config: Optional[ClientConfig] = None,
              model_client: Optional[ModelServicePort] = None,
              operations_client: Optional[OperationsPort] = None,
              **overrides: Any) -> ClientConfig:
    """
    Set the default configuration and, optionally, the default ports.

    Keyword overrides (``api_key=...``, ``base_url=...``) are merged on top of
    the file and environment configuration when ``config`` is not given.
    """
    global _config, _model_client, _operations_client, _service
    _config = config or load_config(**overrides)
    _model_client = model_client
    _operations_client = operations_client
    _service = None
    logger.debug(f"Configured tuning client: {_config.to_dict()}")
    return _config


def reset() -> None:
    """Forget all defaults."""
    global _config, _model_client, _operations_client, _service
    _config = None
    _model_client = None
    _operations_client = None
    _service = None


def get_config() -> ClientConfig:
    global _config
    if _config is None:
        _config = load_config()
    return _config


def get_default_model_client() -> ModelServicePort:
    global _model_client
    if _model_client is None:
        from .adapters import RestModelServiceClient
        _model_client = RestModelServiceClient.from_config(get_config())
    return _model_client


def get_default_operations_client() -> OperationsPort:
    global _operations_client
    if _operations_client is None:
        from .adapters import RestOperationsClient
        _operations_client = RestOperationsClient.from_config(get_config())
    return _operations_client


def get_default_service():
    """The ``ModelService`` built from the defaults."""
    global _service
    if _service is None:
        from .services import ModelService
        _service = ModelService(
            get_default_model_client(), get_default_operations_client(), get_config()
        )
    return _service


def get_model(name: str):
    return get_default_service().get_model(name)


def get_base_model(name: str):
    return get_default_service().get_base_model(name)


def get_tuned_model(name: str):
    return get_default_service().get_tuned_model(name)


def get_base_model_name(model: Any) -> str:
    return get_default_service().get_base_model_name(model)


def list_models(page_size: Optional[int] = None) -> Iterator:
    return get_default_service().list_models(page_size)


def list_tuned_models(page_size: Optional[int] = None) -> Iterator:
    return get_default_service().list_tuned_models(page_size)


def create_tuned_model(source_model: Any, training_data: Any, **options: Any):
    return get_default_service().create_tuned_model(source_model, training_data, **options)


def update_tuned_model(tuned_model: Any, updates: Optional[Dict[str, Any]] = None):
    return get_default_service().update_tuned_model(tuned_model, updates)


def delete_tuned_model(tuned_model: Any) -> None:
    get_default_service().delete_tuned_model(tuned_model)
