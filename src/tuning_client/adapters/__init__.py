"""
Adapters implementing the service ports over HTTP.
"""

from .api import APIAdapter
from .rest import RestModelServiceClient, RestOperationsClient

__all__ = [
    "APIAdapter",
    "RestModelServiceClient",
    "RestOperationsClient",
]
