"""
Model service for the tuned-model lifecycle.

This service fetches and lists base and tuned models, builds creation
requests, applies field-mask updates and deletes tuned models. Every method is
a sequence of plain request/response calls on the injected ports; transport
failures propagate to the caller unchanged.
"""

from collections.abc import Mapping
from typing import Any, Dict, Iterator, Optional
import logging

from ..config import ClientConfig
from ..core.exceptions import (
    AmbiguousUpdateError,
    InvalidNameError,
    TypeMismatchError,
)
from ..core.interfaces import ModelServicePort, OperationsPort
from ..data import DEFAULT_INPUT_KEY, DEFAULT_OUTPUT_KEY, encode_tuning_data
from ..naming import (
    BASE_MODEL_PREFIX,
    TUNED_MODEL_PREFIX,
    ModelKind,
    SourceKind,
    classify,
    make_model_name,
    normalize,
    resolve_base_model_name,
    tag_source,
)
from ..resources import (
    Hyperparameters,
    Model,
    Operation,
    TunedModel,
    TunedModelSource,
    TuningTask,
)
from ..utils.field_mask import apply_updates, field_mask, flatten_update_paths, mask_from_paths
from .operations import CreateTunedModelOperation, OperationPoller

logger = logging.getLogger(__name__)


class ModelService:
    """
    Client-side manager for base and tuned models.

    Provides name-aware fetching, lazy listing, tuned-model creation,
    partial updates and deletion on top of a ``ModelServicePort``.
    """

    def __init__(self,
                 client: Optional[ModelServicePort] = None,
                 operations_client: Optional[OperationsPort] = None,
                 config: Optional[ClientConfig] = None):
        """
        Initialize model service.

        Args:
            client: Model service port; the configured default when omitted
            operations_client: Operations port; the configured default when omitted
            config: Client configuration; the configured default when omitted
        """
        if client is None or operations_client is None or config is None:
            from .. import client as defaults
            client = client or defaults.get_default_model_client()
            operations_client = operations_client or defaults.get_default_operations_client()
            config = config or defaults.get_config()

        self.client = client
        self.config = config
        self.poller = OperationPoller(
            operations_client,
            project=config.project,
            poll_interval=config.poll_interval,
        )

    # Fetching

    def get_model(self, name: str):
        """
        Fetch a base or tuned model, dispatching on the name prefix.

        Returns:
            ``Model`` for ``models/...`` names, ``TunedModel`` for
            ``tunedModels/...`` names
        """
        name = make_model_name(name)
        if classify(name) is ModelKind.BASE:
            return self.get_base_model(name)
        return self.get_tuned_model(name)

    def get_base_model(self, name: str) -> Model:
        """Fetch a base model; rejects tuned-model names."""
        name = make_model_name(name)
        if not name.startswith(BASE_MODEL_PREFIX):
            raise InvalidNameError(
                f"Base model names must start with `{BASE_MODEL_PREFIX}`, got: {name}", name=name
            )
        return Model.from_dict(self.client.get_model(name))

    def get_tuned_model(self, name: str) -> TunedModel:
        """Fetch a tuned model; rejects base-model names."""
        name = make_model_name(name)
        if not name.startswith(TUNED_MODEL_PREFIX):
            raise InvalidNameError(
                f"Tuned model names must start with `{TUNED_MODEL_PREFIX}`, got: {name}", name=name
            )
        return TunedModel.from_dict(self.client.get_tuned_model(name))

    def get_base_model_name(self, model: Any) -> str:
        """Resolve the base model underlying ``model`` (one provenance hop)."""
        return resolve_base_model_name(model, self.client)

    def list_models(self, page_size: Optional[int] = None) -> Iterator[Model]:
        """
        Lazily iterate over base models.

        Pages are requested only when the previous one is exhausted; every
        call starts a fresh iteration.
        """
        for page in self.client.list_models(page_size or self.config.page_size):
            for item in page:
                yield Model.from_dict(item)

    def list_tuned_models(self, page_size: Optional[int] = None) -> Iterator[TunedModel]:
        """Lazily iterate over tuned models."""
        for page in self.client.list_tuned_models(page_size or self.config.page_size):
            for item in page:
                yield TunedModel.from_dict(item)

    # Creation

    def _source_name(self, source_model: Any) -> str:
        ref = tag_source(source_model)
        if ref.kind is SourceKind.NAME:
            return ref.value
        if ref.kind is SourceKind.CLIENT:
            return normalize(ref.value.model_name)
        return make_model_name(ref.value)

    def _source_descriptor(self, source_model: Any) -> Dict[str, Any]:
        source_name = self._source_name(source_model)
        base_model_name = resolve_base_model_name(source_model, self.client)

        kind = classify(source_name)
        if kind is ModelKind.BASE:
            return {"base_model": source_name}
        if kind is ModelKind.TUNED:
            return {"tuned_model_source": TunedModelSource(
                tuned_model=source_name, base_model=base_model_name
            )}
        raise InvalidNameError(f"Not understood: `{source_name}`", name=source_name)

    def create_tuned_model(self,
                           source_model: Any,
                           training_data: Any,
                           *,
                           id: Optional[str] = None,
                           display_name: Optional[str] = None,
                           description: Optional[str] = None,
                           temperature: Optional[float] = None,
                           top_p: Optional[float] = None,
                           top_k: Optional[int] = None,
                           epoch_count: Optional[int] = None,
                           batch_size: Optional[int] = None,
                           learning_rate: Optional[float] = None,
                           input_key: str = DEFAULT_INPUT_KEY,
                           output_key: str = DEFAULT_OUTPUT_KEY) -> CreateTunedModelOperation:
        """
        Start tuning a new model.

        Args:
            source_model: Base or tuned model to tune from (name, resource or
                model-bound handle)
            training_data: Training examples in any shape accepted by
                ``encode_tuning_data``
            id: Optional resource id for the new tuned model
            display_name: Human-readable name
            description: Free-form description
            temperature: Default sampling temperature of the tuned model
            top_p: Default nucleus sampling parameter
            top_k: Default top-k sampling parameter
            epoch_count: Number of training epochs
            batch_size: Training batch size
            learning_rate: Training learning rate
            input_key: Input field name in training records
            output_key: Output field name in training records

        Returns:
            Handle to the creation operation; training continues remotely
        """
        descriptor = self._source_descriptor(source_model)
        dataset = encode_tuning_data(training_data, input_key, output_key)

        hyperparameters = Hyperparameters(
            epoch_count=epoch_count,
            batch_size=batch_size,
            learning_rate=learning_rate,
        )
        tuning_task = TuningTask(
            training_data=dataset,
            hyperparameters=hyperparameters if hyperparameters.to_dict() else None,
        )
        tuned_model = TunedModel(
            display_name=display_name,
            description=description,
            temperature=temperature,
            top_p=top_p,
            top_k=top_k,
            tuning_task=tuning_task,
            **descriptor,
        )

        logger.info(
            f"Creating tuned model {id or '<auto>'} from {self._source_name(source_model)} "
            f"with {len(dataset)} examples"
        )
        response = self.client.create_tuned_model(id, tuned_model.to_dict())
        return CreateTunedModelOperation(Operation.from_dict(response), self.poller, self.client)

    # Updates

    def update_tuned_model(self, tuned_model: Any,
                           updates: Optional[Dict[str, Any]] = None) -> TunedModel:
        """
        Apply a partial update to a tuned model.

        Two call shapes are accepted:

        * ``update_tuned_model("tunedModels/x", {"display_name": "New"})``:
          the current resource is fetched, ``updates`` is flattened into
          dotted paths, and exactly those paths form the field mask.
        * ``update_tuned_model(tuned_model)``: the current resource is
          fetched and the field mask is every path that differs from the
          given, already-modified object.
          Start from a snapshot returned by ``get_tuned_model``: every field
          left unset on the object (``state``, ``tuning_task``, timestamps)
          differs from the stored resource and lands in the mask.

        Raises:
            TypeMismatchError: If ``updates`` is not a mapping in the first
                form, or ``tuned_model`` is neither a name nor a ``TunedModel``
            AmbiguousUpdateError: If ``updates`` is given in the second form
        """
        if isinstance(tuned_model, str):
            name = self._tuned_model_name(tuned_model)
            if not isinstance(updates, Mapping):
                raise TypeMismatchError(
                    "When calling `update_tuned_model(name: str, updates: dict)`, "
                    f"updates must be a mapping, got: {type(updates).__name__}"
                )
            payload = self.client.get_tuned_model(name)
            flat_updates = flatten_update_paths(updates)
            mask = mask_from_paths(flat_updates)
            apply_updates(payload, flat_updates)
        elif isinstance(tuned_model, TunedModel):
            if updates is not None:
                raise AmbiguousUpdateError(
                    "When calling `update_tuned_model(tuned_model: TunedModel, updates=None)`, "
                    "updates must not be set"
                )
            name = self._tuned_model_name(tuned_model)
            before = TunedModel.from_dict(self.client.get_tuned_model(name)).to_dict()
            payload = tuned_model.to_dict()
            mask = field_mask(before, payload)
        else:
            raise TypeMismatchError(
                "For `update_tuned_model(tuned_model: str | TunedModel)`, "
                f"tuned_model must be a name or a TunedModel, got: {type(tuned_model).__name__}"
            )

        payload["name"] = name
        if not mask:
            logger.warning(f"Updating {name} with an empty field mask")
        else:
            logger.info(f"Updating {name}: {mask.to_string()}")

        result = self.client.update_tuned_model(payload, list(mask))
        return TunedModel.from_dict(result)

    # Deletion

    def delete_tuned_model(self, tuned_model: Any) -> None:
        """Delete a tuned model by name or resource."""
        name = self._tuned_model_name(tuned_model)
        self.client.delete_tuned_model(name)
        logger.info(f"Deleted {name}")

    def _tuned_model_name(self, tuned_model: Any) -> str:
        name = make_model_name(tuned_model)
        if classify(name) is not ModelKind.TUNED:
            raise InvalidNameError(
                f"Tuned model names must start with `{TUNED_MODEL_PREFIX}`, got: {name}", name=name
            )
        return name
