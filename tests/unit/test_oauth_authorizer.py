from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest
import requests

from privx_sdk.oauth.authorizer import TOKEN_PATH, Authorizer
from privx_sdk.oauth.credentials import Credential, resolve, use_access, use_digest, use_secret
from privx_sdk.oauth.exceptions import AuthenticationError
from privx_sdk.restapi.exceptions import PrivXAPIError, PrivXConnectionError

BASE_URL = "https://privx.example.com"


@pytest.fixture()
def credential():
    return resolve([use_access("api-id"), use_secret("api-secret"), use_digest("oauth-id", "oauth-secret")])


@pytest.fixture()
def token_endpoint(monkeypatch, stub_response):
    """Stub the token endpoint and record requests."""
    calls = SimpleNamespace(requests=[], payload={"access_token": "tok-1", "expires_in": 300}, status=200)

    def _post(url, *args, **kwargs):
        calls.requests.append((url, kwargs))
        return stub_response(calls.payload, status_code=calls.status, url=url)

    monkeypatch.setattr(requests, "post", _post)
    return calls


def test_password_grant_with_basic_digest(credential, token_endpoint):
    auth = Authorizer(credential, BASE_URL + "/")

    assert auth.access_token() == "tok-1"

    url, kwargs = token_endpoint.requests[0]
    assert url == BASE_URL + TOKEN_PATH
    assert kwargs["data"] == {"grant_type": "password", "username": "api-id", "password": "api-secret"}
    assert kwargs["headers"] == {"Authorization": f"Basic {credential.digest}"}


def test_no_basic_header_without_digest(token_endpoint):
    auth = Authorizer(Credential(access="a", secret="s"), BASE_URL)
    auth.access_token()
    assert token_endpoint.requests[0][1]["headers"] == {}


def test_token_is_cached(credential, token_endpoint):
    auth = Authorizer(credential, BASE_URL)
    auth.access_token()
    auth.access_token()
    assert len(token_endpoint.requests) == 1


def test_token_refreshed_near_expiry(credential, token_endpoint):
    auth = Authorizer(credential, BASE_URL)
    auth.access_token()
    auth._token_expires_at = datetime.now() + timedelta(seconds=5)
    token_endpoint.payload = {"access_token": "tok-2", "expires_in": 300}

    assert auth.access_token() == "tok-2"
    assert len(token_endpoint.requests) == 2


def test_invalidate_forces_new_token(credential, token_endpoint):
    auth = Authorizer(credential, BASE_URL)
    auth.access_token()
    auth.invalidate()
    auth.access_token()
    assert len(token_endpoint.requests) == 2


@pytest.mark.parametrize("cred", [Credential(), Credential(access="a"), Credential(secret="s")])
def test_incomplete_credential_rejected_without_network(cred):
    # The autouse guard rail raises RuntimeError on any HTTP call.
    with pytest.raises(AuthenticationError):
        Authorizer(cred, BASE_URL).access_token()


def test_token_error_status_raises(credential, token_endpoint):
    token_endpoint.status = 401
    token_endpoint.payload = {"error": "invalid_grant"}
    with pytest.raises(PrivXAPIError) as excinfo:
        Authorizer(credential, BASE_URL).access_token()
    assert excinfo.value.status_code == 401


def test_missing_access_token_raises(credential, token_endpoint):
    token_endpoint.payload = {"token_type": "bearer"}
    with pytest.raises(AuthenticationError):
        Authorizer(credential, BASE_URL).access_token()


def test_transport_failure_raises(credential, monkeypatch):
    def _post(url, *args, **kwargs):
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(requests, "post", _post)
    with pytest.raises(PrivXConnectionError):
        Authorizer(credential, BASE_URL).access_token()


class _NotJsonResponse:
    status_code = 200
    text = "<html>maintenance</html>"

    def json(self):
        raise requests.JSONDecodeError("Expecting value", self.text, 0)


@pytest.mark.parametrize(
    "response",
    [
        _NotJsonResponse(),
        ["list"],
        {"access_token": "t", "expires_in": "soon"},
        {"access_token": "t", "expires_in": [300]},
    ],
    ids=["not-json", "json-array", "expires-in-not-numeric", "expires-in-wrong-type"],
)
def test_malformed_token_response_raises(credential, monkeypatch, stub_response, response):
    def _post(url, *args, **kwargs):
        if isinstance(response, _NotJsonResponse):
            return response
        return stub_response(response, url=url)

    monkeypatch.setattr(requests, "post", _post)
    with pytest.raises(AuthenticationError) as excinfo:
        Authorizer(credential, BASE_URL).access_token()
    assert "Token response" in str(excinfo.value)
