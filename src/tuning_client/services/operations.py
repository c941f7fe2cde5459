"""
Long-running operation polling.

An operation is either pending (any non-terminal status) or ``DONE``. The
poller re-issues ``wait`` against the operations port until the snapshot it
gets back is terminal. There is no iteration cap or timeout: callers that need
one stop the loop themselves, e.g. by raising from ``on_update``.
"""

import time
from typing import Any, Callable, Dict, Optional, Tuple, Union
import logging

from ..core.exceptions import OperationError, TypeMismatchError
from ..core.interfaces import ModelServicePort, OperationsPort
from ..resources import Operation, TunedModel, TuningSnapshot

logger = logging.getLogger(__name__)

OperationCallback = Callable[[Operation], None]


def _last_segment(value: Optional[str]) -> Optional[str]:
    return value.rstrip('/').rsplit('/', 1)[-1] if value else None


class OperationPoller:
    """Drives an operation to its terminal state."""

    def __init__(self, operations_client: OperationsPort,
                 project: Optional[str] = None,
                 poll_interval: float = 0.0):
        """
        Args:
            operations_client: Port used to refresh operation snapshots
            project: Project added to the addressing context, if any
            poll_interval: Fixed pause between polls in seconds
        """
        self.operations_client = operations_client
        self.project = project
        self.poll_interval = poll_interval

    def addressing_context(self, operation: Operation) -> Dict[str, Any]:
        """Addressing fields derived from the operation's own metadata."""
        context: Dict[str, Any] = {}
        if self.project:
            context['project'] = self.project
        zone = _last_segment(operation.zone)
        if zone:
            context['zone'] = zone
        region = _last_segment(operation.region)
        if region:
            context['region'] = region
        return context

    def poll_once(self, operation: Operation) -> Operation:
        """Fetch a fresh snapshot of ``operation``."""
        response = self.operations_client.wait(operation.name, self.addressing_context(operation))
        snapshot = Operation.from_dict(response)
        for key in ("name", "zone", "region"):
            if not getattr(snapshot, key):
                setattr(snapshot, key, getattr(operation, key))
        return snapshot

    def wait_for_completion(self,
                            operation: Union[Operation, Dict[str, Any]],
                            on_update: Optional[OperationCallback] = None,
                            poll_interval: Optional[float] = None) -> Operation:
        """
        Poll until the operation is ``DONE``.

        Args:
            operation: Operation snapshot or its raw tree
            on_update: Called with every new snapshot
            poll_interval: Overrides the poller's fixed pause

        Returns:
            The terminal snapshot

        Raises:
            OperationError: If the terminal snapshot carries an error
            TransportError: If a poll fails
        """
        if isinstance(operation, dict):
            operation = Operation.from_dict(operation)
        elif not isinstance(operation, Operation):
            raise TypeMismatchError(f"Expected an Operation, got: {operation!r}")

        interval = self.poll_interval if poll_interval is None else poll_interval
        polls = 0

        while not operation.done:
            operation = self.poll_once(operation)
            polls += 1
            logger.debug(f"Operation {operation.name} status={operation.status.value} (poll {polls})")
            if on_update is not None:
                on_update(operation)
            if not operation.done and interval > 0:
                time.sleep(interval)

        logger.info(f"Operation {operation.name} finished after {polls} poll(s)")

        if operation.error:
            raise OperationError(
                f"Operation {operation.name} failed: {operation.error.get('message', operation.error)}",
                operation_name=operation.name,
                error=operation.error,
            )
        return operation


class CreateTunedModelOperation:
    """
    Handle to a tuned-model creation job.

    Creation does not block; use ``wait`` or ``result`` to follow training
    through to completion.
    """

    def __init__(self, operation: Operation, poller: OperationPoller,
                 model_client: ModelServicePort):
        self.operation = operation
        self.poller = poller
        self.model_client = model_client

    @property
    def name(self) -> str:
        return self.operation.name

    @property
    def metadata(self) -> Dict[str, Any]:
        return self.operation.metadata

    @property
    def snapshots(self) -> list:
        return self.operation.snapshots

    def done(self) -> bool:
        """Whether the last known snapshot is terminal. No remote call."""
        return self.operation.done

    def progress(self) -> Tuple[Optional[int], Optional[int]]:
        """Completed and total tuning steps, as far as reported."""
        return self.operation.completed_steps, self.operation.total_steps

    def update(self) -> Operation:
        """Refresh the snapshot once."""
        if not self.operation.done:
            self.operation = self.poller.poll_once(self.operation)
        return self.operation

    def wait(self, on_update: Optional[OperationCallback] = None,
             poll_interval: Optional[float] = None) -> Operation:
        """Block until training finishes."""
        def track(snapshot: Operation) -> None:
            self.operation = snapshot
            _log_progress(snapshot)
            if on_update is not None:
                on_update(snapshot)

        self.operation = self.poller.wait_for_completion(
            self.operation, on_update=track, poll_interval=poll_interval
        )
        return self.operation

    def result(self, on_update: Optional[OperationCallback] = None) -> TunedModel:
        """Wait for completion and fetch the resulting tuned model."""
        self.wait(on_update=on_update)
        name = self.operation.tuned_model
        if not name:
            raise OperationError(
                f"Operation {self.operation.name} finished without naming a tuned model",
                operation_name=self.operation.name,
            )
        if self.operation.response and 'tuning_task' in self.operation.response:
            return TunedModel.from_dict(self.operation.response)
        return TunedModel.from_dict(self.model_client.get_tuned_model(name))


def _log_progress(operation: Operation) -> None:
    percent = operation.completed_percent
    snapshots = operation.snapshots
    latest: Optional[TuningSnapshot] = snapshots[-1] if snapshots else None
    if percent is not None:
        message = f"Tuning {operation.tuned_model or operation.name}: {percent:.1f}%"
        if latest is not None and latest.mean_loss is not None:
            message += f" (step {latest.step}, loss {latest.mean_loss:.4f})"
        logger.info(message)
