"""
Ports for the remote model-tuning service.

The services in this package only talk to the outside world through these
abstract ports. Each method is a single synchronous remote call that returns
the decoded JSON tree of a resource or raises ``TransportError``.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Any, Iterator


class ModelServicePort(ABC):
    """Port for model and tuned-model resource operations."""

    @abstractmethod
    def get_model(self, name: str) -> Dict[str, Any]:
        """Fetch a base model."""
        pass

    @abstractmethod
    def get_tuned_model(self, name: str) -> Dict[str, Any]:
        """Fetch a tuned model."""
        pass

    @abstractmethod
    def list_models(self, page_size: Optional[int] = None) -> Iterator[List[Dict[str, Any]]]:
        """
        Iterate over pages of base models.

        Pages must be requested lazily: the next page is only fetched once
        the consumer asks for it.
        """
        pass

    @abstractmethod
    def list_tuned_models(self, page_size: Optional[int] = None) -> Iterator[List[Dict[str, Any]]]:
        """Iterate over pages of tuned models."""
        pass

    @abstractmethod
    def create_tuned_model(self, tuned_model_id: Optional[str],
                           payload: Dict[str, Any]) -> Dict[str, Any]:
        """Start creating a tuned model; returns the operation tree."""
        pass

    @abstractmethod
    def update_tuned_model(self, payload: Dict[str, Any], mask: List[str]) -> Dict[str, Any]:
        """Write the masked fields of ``payload``; returns the updated tree."""
        pass

    @abstractmethod
    def delete_tuned_model(self, name: str) -> None:
        """Delete a tuned model."""
        pass


class OperationsPort(ABC):
    """Port for long-running operation status."""

    @abstractmethod
    def wait(self, operation_id: str, context: Dict[str, Any]) -> Dict[str, Any]:
        """Return a fresh snapshot of the operation (may long-poll)."""
        pass


__all__ = ["ModelServicePort", "OperationsPort"]
