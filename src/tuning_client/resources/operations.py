"""Long-running operation snapshots."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Any

from .models import TuningSnapshot


class OperationStatus(Enum):
    """Operation status; everything except ``DONE`` is non-terminal."""
    PENDING = "PENDING"
    RUNNING = "RUNNING"
    DONE = "DONE"

    @classmethod
    def parse(cls, value: Any) -> "OperationStatus":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            return cls.PENDING

    @property
    def is_terminal(self) -> bool:
        return self is OperationStatus.DONE


@dataclass
class Operation:
    """
    Snapshot of asynchronous work on the service.

    The status is read from ``status`` when present; operations that only
    report a boolean ``done`` flag are mapped onto ``DONE``/``PENDING``.
    """
    name: str
    status: OperationStatus = OperationStatus.PENDING
    zone: Optional[str] = None
    region: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    error: Optional[Dict[str, Any]] = None
    response: Optional[Dict[str, Any]] = None

    @property
    def done(self) -> bool:
        return self.status.is_terminal

    @property
    def completed_steps(self) -> Optional[int]:
        return self.metadata.get("completed_steps")

    @property
    def total_steps(self) -> Optional[int]:
        return self.metadata.get("total_steps")

    @property
    def completed_percent(self) -> Optional[float]:
        percent = self.metadata.get("completed_percent")
        if percent is not None:
            return float(percent)
        if self.completed_steps is not None and self.total_steps:
            return 100.0 * self.completed_steps / self.total_steps
        return None

    @property
    def snapshots(self) -> List[TuningSnapshot]:
        return [TuningSnapshot.from_dict(s) for s in self.metadata.get("snapshots") or []]

    @property
    def tuned_model(self) -> Optional[str]:
        """Name of the tuned model this operation produces, if known."""
        if self.response and self.response.get("name"):
            return self.response["name"]
        return self.metadata.get("tuned_model")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Operation":
        if "status" in data:
            status = OperationStatus.parse(data["status"])
        else:
            status = OperationStatus.DONE if data.get("done") else OperationStatus.PENDING
        return cls(
            name=data.get("name", ""),
            status=status,
            zone=data.get("zone"),
            region=data.get("region"),
            metadata=dict(data.get("metadata") or {}),
            error=data.get("error"),
            response=data.get("response"),
        )

    def to_dict(self) -> Dict[str, Any]:
        tree = {"name": self.name, "status": self.status.value}
        for key in ("zone", "region", "error", "response"):
            value = getattr(self, key)
            if value is not None:
                tree[key] = value
        if self.metadata:
            tree["metadata"] = dict(self.metadata)
        return tree
