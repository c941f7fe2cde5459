"""
REST implementations of the service ports.

Resources travel as camelCase JSON on the wire and as snake_case trees inside
the client; keys (never values) are converted at this boundary. Pagination
tokens stay inside this module.
"""

import re
from typing import Dict, List, Optional, Any, Iterator
import logging

from .api import APIAdapter
from ..config import ClientConfig
from ..core.interfaces import ModelServicePort, OperationsPort

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r'(?<!^)(?=[A-Z])')


def to_camel(key: str) -> str:
    head, *rest = key.split('_')
    return head + ''.join(part[:1].upper() + part[1:] for part in rest)


def to_snake(key: str) -> str:
    return _CAMEL_BOUNDARY.sub('_', key).lower()


def convert_keys(value: Any, convert) -> Any:
    """Recursively rename mapping keys, leaving values untouched."""
    if isinstance(value, dict):
        return {convert(key): convert_keys(item, convert) for key, item in value.items()}
    if isinstance(value, list):
        return [convert_keys(item, convert) for item in value]
    return value


def camelize_path(path: str) -> str:
    return '.'.join(to_camel(segment) for segment in path.split('.'))


class RestModelServiceClient(ModelServicePort):
    """Model service port over HTTP."""

    def __init__(self, api: APIAdapter, api_version: str = 'v1beta'):
        """
        Args:
            api: HTTP adapter bound to the service base URL
            api_version: Path prefix of every endpoint
        """
        self.api = api
        self.api_version = api_version

    @classmethod
    def from_config(cls, config: ClientConfig) -> "RestModelServiceClient":
        api = APIAdapter(config.base_url, timeout=config.timeout, api_key=config.api_key)
        return cls(api, api_version=config.api_version)

    def _endpoint(self, path: str) -> str:
        return f"{self.api_version}/{path}"

    def get_model(self, name: str) -> Dict[str, Any]:
        return convert_keys(self.api.get(self._endpoint(name)), to_snake)

    def get_tuned_model(self, name: str) -> Dict[str, Any]:
        return convert_keys(self.api.get(self._endpoint(name)), to_snake)

    def _pages(self, collection: str, items_key: str,
               page_size: Optional[int]) -> Iterator[List[Dict[str, Any]]]:
        params: Dict[str, Any] = {}
        if page_size:
            params['pageSize'] = page_size

        while True:
            response = self.api.get(self._endpoint(collection), params=dict(params))
            items = response.get(items_key) or []
            logger.debug(f"Fetched page of {len(items)} {collection}")
            yield [convert_keys(item, to_snake) for item in items]

            token = response.get('nextPageToken')
            if not token:
                return
            params['pageToken'] = token

    def list_models(self, page_size: Optional[int] = None) -> Iterator[List[Dict[str, Any]]]:
        return self._pages('models', 'models', page_size)

    def list_tuned_models(self, page_size: Optional[int] = None) -> Iterator[List[Dict[str, Any]]]:
        return self._pages('tunedModels', 'tunedModels', page_size)

    def create_tuned_model(self, tuned_model_id: Optional[str],
                           payload: Dict[str, Any]) -> Dict[str, Any]:
        params = {'tunedModelId': tuned_model_id} if tuned_model_id else None
        response = self.api.post(
            self._endpoint('tunedModels'),
            json_data=convert_keys(payload, to_camel),
            params=params,
        )
        return convert_keys(response, to_snake)

    def update_tuned_model(self, payload: Dict[str, Any], mask: List[str]) -> Dict[str, Any]:
        params = {'updateMask': ','.join(camelize_path(path) for path in mask)}
        response = self.api.patch(
            self._endpoint(payload['name']),
            json_data=convert_keys(payload, to_camel),
            params=params,
        )
        return convert_keys(response, to_snake)

    def delete_tuned_model(self, name: str) -> None:
        self.api.delete(self._endpoint(name))

    def close(self) -> None:
        self.api.close()


class RestOperationsClient(OperationsPort):
    """Operations port over HTTP; ``wait`` is a server-side long poll."""

    def __init__(self, api: APIAdapter, api_version: str = 'v1beta'):
        self.api = api
        self.api_version = api_version

    @classmethod
    def from_config(cls, config: ClientConfig) -> "RestOperationsClient":
        api = APIAdapter(config.base_url, timeout=config.timeout, api_key=config.api_key)
        return cls(api, api_version=config.api_version)

    def wait(self, operation_id: str, context: Dict[str, Any]) -> Dict[str, Any]:
        params = {to_camel(key): value for key, value in context.items() if value is not None}
        response = self.api.post(
            f"{self.api_version}/{operation_id}:wait",
            params=params or None,
        )
        return convert_keys(response, to_snake)

    def close(self) -> None:
        self.api.close()
