"""
Fakes for the remote tuning service.
"""

from .service_mocks import FakeModelServiceClient, FakeOperationsClient

__all__ = [
    "FakeModelServiceClient",
    "FakeOperationsClient",
]
