"""OAuth authorizer that turns a resolved credential into bearer tokens."""
from __future__ import annotations
import logging
from datetime import datetime, timedelta
from typing import Optional

import requests

from privx_sdk.restapi.client import REQUEST_TIMEOUT
from privx_sdk.restapi.exceptions import PrivXAPIError, PrivXConnectionError

from .credentials import Credential
from .exceptions import AuthenticationError

TOKEN_PATH = "/auth/api/v1/oauth/token"
DEFAULT_EXPIRES_IN = 60
REFRESH_MARGIN = timedelta(seconds=10)

logger = logging.getLogger(__name__)


class Authorizer:
    """Obtains and caches access tokens using the password grant.

    The credential's access/secret pair is sent as username/password, and
    the digest (when present) as HTTP Basic auth identifying the OAuth
    client. Not thread-safe; use one instance per thread.
    """

    def __init__(self, credential: Credential, base_url: str, timeout: float = REQUEST_TIMEOUT):
        self.credential = credential
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._token: Optional[str] = None
        self._token_expires_at: Optional[datetime] = None

    def access_token(self) -> str:
        """Return a valid token, refreshing if missing or about to expire."""
        if not self._token or not self._token_expires_at or datetime.now() >= self._token_expires_at - REFRESH_MARGIN:
            self._token, expires_in = self._request_token()
            self._token_expires_at = datetime.now() + timedelta(seconds=expires_in)
        return self._token

    def invalidate(self) -> None:
        """Forget the cached token so the next call requests a new one."""
        self._token = None
        self._token_expires_at = None

    def _request_token(self) -> tuple[str, int]:
        if not self.credential.access or not self.credential.secret:
            raise AuthenticationError("Credential is missing the API client id or secret")

        url = f"{self.base_url}{TOKEN_PATH}"
        data = {
            "grant_type": "password",
            "username": self.credential.access,
            "password": self.credential.secret,
        }
        headers = {}
        if self.credential.digest:
            headers["Authorization"] = f"Basic {self.credential.digest}"

        try:
            resp = requests.post(url, data=data, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise PrivXConnectionError(url, str(e)) from e
        if resp.status_code != 200:
            raise PrivXAPIError(resp.status_code, resp.text, url)

        try:
            payload = resp.json()
        except ValueError as e:
            raise AuthenticationError(f"Token response from {url} is not JSON") from e
        if not isinstance(payload, dict):
            raise AuthenticationError(f"Token response from {url} is not a JSON object")

        token = payload.get("access_token")
        if not token or not isinstance(token, str):
            raise AuthenticationError(f"Token response from {url} has no access_token")
        try:
            expires_in = int(payload.get("expires_in") or DEFAULT_EXPIRES_IN)
        except (ValueError, TypeError) as e:
            raise AuthenticationError(f"Token response from {url} has an invalid expires_in") from e

        logger.info(f"[oauth] Obtained access token for client '{self.credential.access}'")
        return token, expires_in
