# utils/api_client.py

"""
HTTP client for the inventory backend service
"""

import logging
from typing import Any, Dict, Optional

import requests
from requests.auth import HTTPBasicAuth

from .config import config

logger = logging.getLogger(__name__)

BODY_PREVIEW_LENGTH = 255


class BackendAPIError(Exception):
    """Raised for any failed backend call (transport, HTTP status or payload)"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self):
        if self.status_code:
            return f"[{self.status_code}] {self.message}"
        return self.message


class BackendClient:
    """Thin wrapper over a requests session bound to the backend base URL"""

    def __init__(
        self,
        base_url: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None
    ):
        if not base_url:
            raise ValueError("Missing BACKEND_SERVICE_URL configuration")

        self.base_url = base_url if base_url.endswith('/') else base_url + '/'
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({'Content-Type': 'application/json'})

        if username and password:
            self.session.auth = HTTPBasicAuth(username, password)

        logger.info(f"Backend client initialized for {self.base_url}")

    def url_for(self, path: str) -> str:
        """Build an absolute URL from a path relative to the base URL"""
        return self.base_url + path.lstrip('/')

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None
    ) -> Any:
        """
        Send a request and return the decoded JSON body.

        Raises:
            BackendAPIError: on transport failure, non-2xx status or invalid JSON
        """
        url = self.url_for(path)
        params = {k: v for k, v in (params or {}).items() if v is not None}

        logger.debug(f"{method} {url} params={params}")

        try:
            response = self.session.request(
                method,
                url,
                params=params or None,
                json=json,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise BackendAPIError(f"Could not reach backend service: {e}") from e

        body = response.text or ''
        preview = body if len(body) <= BODY_PREVIEW_LENGTH else body[:BODY_PREVIEW_LENGTH] + '...'
        logger.info(f"{method} {url} -> {response.status_code}")
        logger.debug(f"Response body: {preview}")

        if not response.ok:
            raise BackendAPIError(
                self._error_message(response),
                status_code=response.status_code
            )

        if not body.strip():
            return {}

        try:
            return response.json()
        except ValueError as e:
            raise BackendAPIError(
                f"Invalid JSON from {path}",
                status_code=response.status_code
            ) from e

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request('GET', path, params=params)

    def post(self, path: str, json: Optional[Any] = None, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request('POST', path, params=params, json=json)

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        """Prefer the backend's own message over the HTTP reason"""
        try:
            payload = response.json()
            if isinstance(payload, dict) and payload.get('message'):
                return str(payload['message'])
        except ValueError:
            pass
        return response.reason or f"HTTP {response.status_code}"


# Singleton instance
_client = None


def get_backend_client() -> BackendClient:
    """Get or create the backend client from configuration"""
    global _client
    if _client is None:
        backend = config.backend_config
        _client = BackendClient(
            base_url=backend['base_url'],
            username=backend['username'],
            password=backend['password'],
            timeout=backend['timeout']
        )
    return _client
