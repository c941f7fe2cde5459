"""
Model name resolution.

Model references come in several shapes: ``models/...`` and
``tunedModels/...`` strings, ``Model`` and ``TunedModel`` resources, and
handles bound to a model (anything exposing ``model_name``). This module
classifies a reference once, at the boundary, and resolves each variant with
its own function.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional
import logging

from ..core.exceptions import InvalidNameError, TypeMismatchError
from ..core.interfaces import ModelServicePort
from ..resources import Model, TunedModel

logger = logging.getLogger(__name__)

BASE_MODEL_PREFIX = "models/"
TUNED_MODEL_PREFIX = "tunedModels/"


class ModelKind(Enum):
    """Kind of model a name addresses."""
    BASE = "base"
    TUNED = "tuned"


class SourceKind(Enum):
    """Variants accepted wherever a source model is expected."""
    NAME = "name"
    TUNED_MODEL = "tuned_model"
    BASE_MODEL = "base_model"
    CLIENT = "client"


@dataclass(frozen=True)
class SourceRef:
    """A model reference tagged with its variant."""
    kind: SourceKind
    value: Any


def normalize(name: str) -> str:
    """
    Trim and validate a model identifier.

    Args:
        name: Raw identifier

    Returns:
        The trimmed identifier

    Raises:
        InvalidNameError: If the identifier has neither accepted prefix
    """
    if not isinstance(name, str):
        raise TypeMismatchError(f"Model names must be strings, got: {name!r}")
    name = name.strip()
    if not name.startswith((BASE_MODEL_PREFIX, TUNED_MODEL_PREFIX)):
        raise InvalidNameError(
            f"Model names must start with `{BASE_MODEL_PREFIX}` or `{TUNED_MODEL_PREFIX}`, got: {name!r}",
            name=name,
        )
    if name in (BASE_MODEL_PREFIX, TUNED_MODEL_PREFIX):
        raise InvalidNameError(f"Model name is missing an id: {name!r}", name=name)
    return name


def classify(name: str) -> ModelKind:
    """Classify a normalized name by its prefix."""
    if name.startswith(BASE_MODEL_PREFIX):
        return ModelKind.BASE
    if name.startswith(TUNED_MODEL_PREFIX):
        return ModelKind.TUNED
    raise InvalidNameError(
        f"Model names must start with `{BASE_MODEL_PREFIX}` or `{TUNED_MODEL_PREFIX}`, got: {name!r}",
        name=name,
    )


def make_model_name(model: Any) -> str:
    """Canonical name of a string or resource reference."""
    if isinstance(model, str):
        return normalize(model)
    if isinstance(model, (Model, TunedModel)):
        if not model.name:
            raise InvalidNameError(f"{type(model).__name__} has no name", name=model)
        return normalize(model.name)
    raise TypeMismatchError(f"Cannot understand model reference: {model!r}")


def tag_source(model: Any) -> SourceRef:
    """Discriminate a source-model reference into its variant."""
    if isinstance(model, str):
        return SourceRef(SourceKind.NAME, normalize(model))
    if isinstance(model, TunedModel):
        return SourceRef(SourceKind.TUNED_MODEL, model)
    if isinstance(model, Model):
        return SourceRef(SourceKind.BASE_MODEL, model)
    if isinstance(getattr(model, "model_name", None), str):
        return SourceRef(SourceKind.CLIENT, model)
    raise TypeMismatchError(f"Cannot understand model: {model!r}")


def _base_from_tuned_model(tuned_model: TunedModel, client: Optional[ModelServicePort]) -> str:
    base_model = tuned_model.source_base_model
    if not base_model or not base_model.startswith(BASE_MODEL_PREFIX):
        # The service only records one hop of provenance.
        raise InvalidNameError(
            f"Could not resolve a base model for {tuned_model.name!r}; "
            f"expected a `{BASE_MODEL_PREFIX}` name one hop away, got: {base_model!r}",
            name=tuned_model.name,
        )
    return base_model


def _base_from_name(name: str, client: Optional[ModelServicePort]) -> str:
    if classify(name) is ModelKind.BASE:
        return name
    if client is None:
        from ..client import get_default_model_client
        client = get_default_model_client()
    logger.debug(f"Fetching {name} to resolve its base model")
    tuned_model = TunedModel.from_dict(client.get_tuned_model(name))
    return _base_from_tuned_model(tuned_model, client)


def _base_from_base_model(model: Model, client: Optional[ModelServicePort]) -> str:
    return normalize(model.name)


def _base_from_handle(handle: Any, client: Optional[ModelServicePort]) -> str:
    return _base_from_name(normalize(handle.model_name), client)


_RESOLVERS: Dict[SourceKind, Callable[[Any, Optional[ModelServicePort]], str]] = {
    SourceKind.NAME: _base_from_name,
    SourceKind.TUNED_MODEL: _base_from_tuned_model,
    SourceKind.BASE_MODEL: _base_from_base_model,
    SourceKind.CLIENT: _base_from_handle,
}


def resolve_base_model_name(model: Any, client: Optional[ModelServicePort] = None) -> str:
    """
    Resolve the base model underlying a model reference.

    Base names are returned unchanged. Tuned models are followed exactly one
    hop: ``base_model`` if set, otherwise ``tuned_model_source.base_model``.

    Args:
        model: Name string, ``TunedModel``, ``Model`` or model-bound handle
        client: Service port used when a tuned name has to be fetched

    Returns:
        A ``models/...`` name

    Raises:
        TypeMismatchError: If the reference is of an unsupported type
        InvalidNameError: If the name is malformed or provenance is deeper
            than one hop
    """
    ref = tag_source(model)
    return _RESOLVERS[ref.kind](ref.value, client)
