"""
Resource types for base and tuned models.

Resources are plain dataclasses that convert to and from a canonical
key-value tree (``to_dict`` / ``from_dict``). The tree is what travels to the
remote service and what the field-mask utilities operate on; ``None`` values
are omitted from it.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Dict, List, Optional, Any, Tuple
import logging

logger = logging.getLogger(__name__)


def _prune(tree: Dict[str, Any]) -> Dict[str, Any]:
    """Drop keys whose value is ``None``."""
    return {key: value for key, value in tree.items() if value is not None}


def _known_fields(cls, data: Dict[str, Any]) -> Dict[str, Any]:
    names = {f.name for f in fields(cls)}
    unknown = set(data) - names
    if unknown:
        logger.debug(f"Ignoring unknown {cls.__name__} fields: {sorted(unknown)}")
    return {key: value for key, value in data.items() if key in names}


class TunedModelState(Enum):
    """Lifecycle state of a tuned model."""
    STATE_UNSPECIFIED = "STATE_UNSPECIFIED"
    CREATING = "CREATING"
    ACTIVE = "ACTIVE"
    FAILED = "FAILED"

    @classmethod
    def parse(cls, value: Any) -> "TunedModelState":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            logger.warning(f"Unknown tuned model state: {value!r}")
            return cls.STATE_UNSPECIFIED


@dataclass(frozen=True)
class Model:
    """A foundation model offered by the service. Read-only."""
    name: str
    base_model_id: Optional[str] = None
    version: Optional[str] = None
    display_name: Optional[str] = None
    description: Optional[str] = None
    input_token_limit: Optional[int] = None
    output_token_limit: Optional[int] = None
    supported_generation_methods: Tuple[str, ...] = ()
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    top_k: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Model":
        data = _known_fields(cls, data)
        data["supported_generation_methods"] = tuple(data.get("supported_generation_methods") or ())
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        tree = _prune({f.name: getattr(self, f.name) for f in fields(self)})
        if self.supported_generation_methods:
            tree["supported_generation_methods"] = list(self.supported_generation_methods)
        else:
            tree.pop("supported_generation_methods", None)
        return tree


@dataclass
class TuningExample:
    """A single input/output training pair."""
    text_input: str
    output: str

    def to_dict(self) -> Dict[str, Any]:
        return {"text_input": self.text_input, "output": self.output}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TuningExample":
        return cls(text_input=data.get("text_input", ""), output=data.get("output", ""))


@dataclass
class Dataset:
    """Encoded training data in the shape the service expects."""
    examples: List[TuningExample] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.examples)

    def to_dict(self) -> Dict[str, Any]:
        return {"examples": {"examples": [example.to_dict() for example in self.examples]}}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Dataset":
        inner = (data.get("examples") or {}).get("examples") or []
        return cls(examples=[TuningExample.from_dict(item) for item in inner])


@dataclass
class Hyperparameters:
    """Optional tuning knobs; unset values are left to the service."""
    epoch_count: Optional[int] = None
    batch_size: Optional[int] = None
    learning_rate: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return _prune({
            "epoch_count": self.epoch_count,
            "batch_size": self.batch_size,
            "learning_rate": self.learning_rate,
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Hyperparameters":
        return cls(**_known_fields(cls, data))


@dataclass
class TuningSnapshot:
    """Training progress recorded by the service at one step."""
    step: Optional[int] = None
    epoch: Optional[int] = None
    mean_loss: Optional[float] = None
    compute_time: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _prune({f.name: getattr(self, f.name) for f in fields(self)})

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TuningSnapshot":
        return cls(**_known_fields(cls, data))


@dataclass
class TuningTask:
    """Training data, hyperparameters and the progress of a tuning job."""
    training_data: Optional[Dataset] = None
    hyperparameters: Optional[Hyperparameters] = None
    start_time: Optional[str] = None
    complete_time: Optional[str] = None
    snapshots: List[TuningSnapshot] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        tree = _prune({
            "training_data": self.training_data.to_dict() if self.training_data else None,
            "hyperparameters": self.hyperparameters.to_dict() if self.hyperparameters else None,
            "start_time": self.start_time,
            "complete_time": self.complete_time,
        })
        if self.snapshots:
            tree["snapshots"] = [snapshot.to_dict() for snapshot in self.snapshots]
        return tree

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TuningTask":
        training_data = data.get("training_data")
        hyperparameters = data.get("hyperparameters")
        return cls(
            training_data=Dataset.from_dict(training_data) if training_data else None,
            hyperparameters=Hyperparameters.from_dict(hyperparameters) if hyperparameters else None,
            start_time=data.get("start_time"),
            complete_time=data.get("complete_time"),
            snapshots=[TuningSnapshot.from_dict(s) for s in data.get("snapshots") or []],
        )


@dataclass
class TunedModelSource:
    """Provenance of a model tuned from another tuned model."""
    tuned_model: str
    base_model: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _prune({"tuned_model": self.tuned_model, "base_model": self.base_model})

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TunedModelSource":
        return cls(tuned_model=data.get("tuned_model", ""), base_model=data.get("base_model"))


@dataclass
class TunedModel:
    """
    A tuned model owned by the caller.

    Exactly one of ``base_model`` and ``tuned_model_source`` describes where
    the model came from. Instances are snapshots; the service owns the state.
    """
    name: Optional[str] = None
    display_name: Optional[str] = None
    description: Optional[str] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    top_k: Optional[int] = None
    base_model: Optional[str] = None
    tuned_model_source: Optional[TunedModelSource] = None
    state: Optional[TunedModelState] = None
    create_time: Optional[str] = None
    update_time: Optional[str] = None
    tuning_task: Optional[TuningTask] = None

    @property
    def source_base_model(self) -> Optional[str]:
        """The base model, following ``tuned_model_source`` if needed."""
        if self.base_model:
            return self.base_model
        if self.tuned_model_source is not None:
            return self.tuned_model_source.base_model
        return None

    def to_dict(self) -> Dict[str, Any]:
        return _prune({
            "name": self.name,
            "display_name": self.display_name,
            "description": self.description,
            "temperature": self.temperature,
            "top_p": self.top_p,
            "top_k": self.top_k,
            "base_model": self.base_model,
            "tuned_model_source": self.tuned_model_source.to_dict() if self.tuned_model_source else None,
            "state": self.state.value if self.state else None,
            "create_time": self.create_time,
            "update_time": self.update_time,
            "tuning_task": self.tuning_task.to_dict() if self.tuning_task else None,
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TunedModel":
        data = _known_fields(cls, data)
        source = data.pop("tuned_model_source", None)
        task = data.pop("tuning_task", None)
        state = data.pop("state", None)
        return cls(
            tuned_model_source=TunedModelSource.from_dict(source) if source else None,
            tuning_task=TuningTask.from_dict(task) if task else None,
            state=TunedModelState.parse(state) if state is not None else None,
            **data,
        )
