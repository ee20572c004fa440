"""Pytest shared fixtures."""
import pathlib
import sys

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
import requests


# ─────────────────────────────────────────────────────────────────────────────
# Network Guard Rails
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture(autouse=True)
def _block_network(monkeypatch, request):
    """
    Prevent unit tests from reaching a live PrivX instance.

    Tests stub the verbs they expect with monkeypatch; anything else fails
    loudly. Tests marked @pytest.mark.integration are left untouched.
    """
    if request.node.get_closest_marker("integration"):
        return

    def _guard(verb):
        def _unexpected(url, *args, **kwargs):
            raise RuntimeError(f"Unexpected HTTP {verb} in unit test: {url}")
        return _unexpected

    for verb in ("get", "post", "put", "delete"):
        monkeypatch.setattr(requests, verb, _guard(verb.upper()))


@pytest.fixture(autouse=True)
def _clean_privx_env(monkeypatch):
    """Keep developer credentials out of the tests."""
    for name in (
        "PRIVX_API_CLIENT_ID",
        "PRIVX_API_CLIENT_SECRET",
        "PRIVX_API_OAUTH_CLIENT_ID",
        "PRIVX_API_OAUTH_CLIENT_SECRET",
        "PRIVX_API_BASE_URL",
        "PRIVX_API_REQUEST_TIMEOUT",
        "PRIVX_API_CONFIG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)


class StubResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, payload=None, status_code: int = 200, url: str = ""):
        self._payload = payload
        self.status_code = status_code
        self.url = url
        self.text = "" if payload is None else str(payload)

    def json(self):
        return self._payload


@pytest.fixture()
def stub_response():
    return StubResponse


# ─────────────────────────────────────────────────────────────────────────────
# Pytest Configuration
# ─────────────────────────────────────────────────────────────────────────────
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (requires a PrivX instance)"
    )
