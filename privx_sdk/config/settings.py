"""Settings loader for the SDK, driven by environment variables."""
from __future__ import annotations
import os
from dataclasses import dataclass
from typing import List, Mapping, Optional

from privx_sdk.oauth.credentials import DEFAULT_ENV_PREFIX, Option, use_config_file, use_environment
from privx_sdk.restapi.client import REQUEST_TIMEOUT


@dataclass
class SdkConfig:
    """SDK configuration container."""
    base_url: str
    request_timeout: float = REQUEST_TIMEOUT
    env_prefix: str = DEFAULT_ENV_PREFIX
    config_file: Optional[str] = None

    def credential_options(self) -> List[Option]:
        """Default credential precedence: configuration file, then environment."""
        return [
            use_config_file(self.config_file),
            use_environment(prefix=self.env_prefix),
        ]


def _parse_timeout(raw: Optional[str], var_name: str) -> float:
    if not raw:
        return REQUEST_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        raise RuntimeError(f"Environment variable {var_name} must be a number, got '{raw}'.")
    if timeout <= 0:
        raise RuntimeError(f"Environment variable {var_name} must be positive.")
    return timeout


def load_settings(environ: Optional[Mapping[str, str]] = None, prefix: str = DEFAULT_ENV_PREFIX) -> SdkConfig:
    """Load SDK settings from the environment.

    Reads:
        {prefix}_API_BASE_URL: PrivX base URL (required)
        {prefix}_API_REQUEST_TIMEOUT: timeout in seconds (optional)
        {prefix}_API_CONFIG_FILE: credential file path (optional)

    Raises:
        RuntimeError: If the base URL is missing or the timeout is invalid
    """
    env = os.environ if environ is None else environ

    base_url = env.get(f"{prefix}_API_BASE_URL")
    if not base_url:
        raise RuntimeError(f"Environment variable {prefix}_API_BASE_URL is required.")

    timeout_var = f"{prefix}_API_REQUEST_TIMEOUT"
    return SdkConfig(
        base_url=base_url.rstrip("/"),
        request_timeout=_parse_timeout(env.get(timeout_var), timeout_var),
        env_prefix=prefix,
        config_file=env.get(f"{prefix}_API_CONFIG_FILE") or None,
    )
