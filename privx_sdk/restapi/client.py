"""Low-level HTTP connector for PrivX REST APIs.

Handles bearer authentication, request timeouts and error mapping. API
clients (e.g. the role-store client) only rely on the four verbs exposed
here.
"""
from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

import requests

from .exceptions import PrivXAPIError, PrivXConnectionError

if TYPE_CHECKING:
    from privx_sdk.oauth.authorizer import Authorizer

REQUEST_TIMEOUT = 5

logger = logging.getLogger(__name__)


class RestConnector:
    """HTTP connector for PrivX APIs.

    Usage:
        connector = RestConnector("https://privx.example.com", authorizer=auth)
        response = connector.get("/role-store/api/v1/roles")
    """

    def __init__(
        self,
        base_url: str,
        authorizer: Optional[Authorizer] = None,
        timeout: float = REQUEST_TIMEOUT,
    ):
        """Initialize connector.

        Args:
            base_url: PrivX base URL, e.g. https://privx.example.com
            authorizer: Source of bearer tokens (None for anonymous calls)
            timeout: Per-request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.authorizer = authorizer
        self.timeout = timeout

    def get(self, path: str, params: Optional[Dict] = None, **kwargs) -> requests.Response:
        """Execute GET request.

        Raises:
            PrivXAPIError: On HTTP error
            PrivXConnectionError: On transport failure
        """
        return self._send("GET", requests.get, path, params=params, **kwargs)

    def post(self, path: str, json: Any = None, data: Optional[Dict] = None, **kwargs) -> requests.Response:
        """Execute POST request with a JSON or form payload.

        Raises:
            PrivXAPIError: On HTTP error
            PrivXConnectionError: On transport failure
        """
        return self._send("POST", requests.post, path, json=json, data=data, **kwargs)

    def put(self, path: str, json: Any = None, **kwargs) -> requests.Response:
        """Execute PUT request with a JSON payload.

        Raises:
            PrivXAPIError: On HTTP error
            PrivXConnectionError: On transport failure
        """
        return self._send("PUT", requests.put, path, json=json, **kwargs)

    def delete(self, path: str, **kwargs) -> requests.Response:
        """Execute DELETE request.

        Raises:
            PrivXAPIError: On HTTP error
            PrivXConnectionError: On transport failure
        """
        return self._send("DELETE", requests.delete, path, **kwargs)

    def _send(self, verb: str, method: Callable[..., requests.Response], path: str, **kwargs) -> requests.Response:
        url = f"{self.base_url}{path}"
        headers = dict(kwargs.pop("headers", None) or {})
        if self.authorizer is not None:
            headers["Authorization"] = f"Bearer {self.authorizer.access_token()}"

        logger.debug(f"[http] {verb} {url}")
        try:
            resp = method(url, headers=headers, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise PrivXConnectionError(url, str(e)) from e
        self._handle_error(resp)
        return resp

    def _handle_error(self, resp: requests.Response) -> None:
        """Centralized error handling for HTTP responses.

        Raises:
            PrivXAPIError: If response status indicates error
        """
        if resp.status_code == 401 and self.authorizer is not None:
            # Rejected token; the next request fetches a fresh one.
            self.authorizer.invalidate()
        if resp.status_code >= 400:
            raise PrivXAPIError(resp.status_code, resp.text, resp.url)
