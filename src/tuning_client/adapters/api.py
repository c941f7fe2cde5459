"""
HTTP API adapter.

This module provides the HTTP plumbing used by the REST implementations of
the service ports. Failures are surfaced as ``TransportError`` (or
``APIError`` when the service answered with an error status) and are never
retried here.
"""

import requests
from typing import Dict, Any, Optional
from urllib.parse import urljoin
from datetime import datetime
import logging

from ..core.exceptions import APIError, TransportError, create_error_context

logger = logging.getLogger(__name__)


class APIAdapter:
    """
    Thin JSON-over-HTTP client.

    Keeps a ``requests.Session`` for connection pooling and basic request
    statistics.
    """

    def __init__(self,
                 base_url: str,
                 timeout: int = 30,
                 api_key: Optional[str] = None,
                 api_key_header: str = 'x-goog-api-key',
                 headers: Optional[Dict[str, str]] = None,
                 session: Optional[requests.Session] = None):
        """
        Initialize API adapter.

        Args:
            base_url: Base URL for API requests
            timeout: Request timeout in seconds
            api_key: API key for authentication
            api_key_header: Header that carries the API key
            headers: Default headers for requests
            session: Pre-built session, mostly for tests
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

        self.default_headers = {
            'Content-Type': 'application/json',
            'Accept': 'application/json',
            'User-Agent': 'tuning-client/1.0'
        }

        if headers:
            self.default_headers.update(headers)

        if api_key:
            self.default_headers[api_key_header] = api_key

        self.session = session or requests.Session()
        self.session.headers.update(self.default_headers)

        self.stats = {
            'total_requests': 0,
            'successful_requests': 0,
            'failed_requests': 0,
            'average_response_time': 0.0
        }

        logger.info(f"Initialized APIAdapter with base_url: {self.base_url}")

    def _build_url(self, endpoint: str) -> str:
        """Build full URL from endpoint."""
        return urljoin(self.base_url + '/', endpoint.lstrip('/'))

    def _update_stats(self, success: bool, response_time: float):
        """Update request statistics."""
        self.stats['total_requests'] += 1

        if success:
            self.stats['successful_requests'] += 1
        else:
            self.stats['failed_requests'] += 1

        total = self.stats['total_requests']
        current_avg = self.stats['average_response_time']
        self.stats['average_response_time'] = ((current_avg * (total - 1)) + response_time) / total

    def request(self,
                method: str,
                endpoint: str,
                params: Optional[Dict[str, Any]] = None,
                json_data: Optional[Dict[str, Any]] = None,
                timeout: Optional[int] = None) -> Dict[str, Any]:
        """
        Make a request and decode the JSON response.

        Args:
            method: HTTP method
            endpoint: API endpoint
            params: Query parameters
            json_data: JSON body
            timeout: Request timeout

        Returns:
            Response data as dictionary (empty for empty bodies)

        Raises:
            APIError: If the service answers with an error status
            TransportError: If the request could not be completed
        """
        url = self._build_url(endpoint)
        start_time = datetime.now()

        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=json_data,
                timeout=timeout or self.timeout
            )
        except requests.exceptions.RequestException as e:
            response_time = (datetime.now() - start_time).total_seconds()
            self._update_stats(False, response_time)
            logger.error(f"{method} {url} failed: {e}")
            raise TransportError(
                f"{method} request failed: {e}",
                context=create_error_context("api", method, parameters={"url": url}),
                cause=e,
            )

        response_time = (datetime.now() - start_time).total_seconds()

        if not response.ok:
            self._update_stats(False, response_time)
            try:
                error_data = response.json()
            except ValueError:
                error_data = {'content': response.text}
            logger.error(f"{method} {url} - Status: {response.status_code}")
            raise APIError(
                f"{method} {endpoint} returned {response.status_code}",
                status_code=response.status_code,
                response_data=error_data,
            )

        self._update_stats(True, response_time)
        logger.debug(f"{method} {url} - Status: {response.status_code}, Time: {response_time:.3f}s")

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f"{method} {endpoint} returned a non-JSON body", cause=e)

    def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Make GET request."""
        return self.request('GET', endpoint, params=params)

    def post(self, endpoint: str, json_data: Optional[Dict[str, Any]] = None,
             params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Make POST request."""
        return self.request('POST', endpoint, params=params, json_data=json_data)

    def patch(self, endpoint: str, json_data: Optional[Dict[str, Any]] = None,
              params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Make PATCH request."""
        return self.request('PATCH', endpoint, params=params, json_data=json_data)

    def delete(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Make DELETE request."""
        return self.request('DELETE', endpoint, params=params)

    def get_statistics(self) -> Dict[str, Any]:
        """
        Get API adapter statistics.

        Returns:
            Dictionary with statistics
        """
        total = self.stats['total_requests']
        success_rate = (self.stats['successful_requests'] / total * 100) if total > 0 else 0

        return {
            **self.stats,
            'success_rate': success_rate,
            'base_url': self.base_url,
            'timeout': self.timeout
        }

    def close(self):
        """Close the session and log its request statistics."""
        stats = self.get_statistics()
        self.session.close()
        logger.debug(
            f"API adapter session closed: {stats['total_requests']} requests, "
            f"{stats['success_rate']:.1f}% successful, "
            f"avg {stats['average_response_time']:.3f}s"
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
