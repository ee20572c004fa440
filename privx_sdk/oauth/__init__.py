"""Credential resolution and token acquisition for PrivX APIs.

Usage:
    from privx_sdk.oauth import Authorizer, resolve, use_config_file, use_environment

    credential = resolve([use_config_file("privx.toml"), use_environment()])
    authorizer = Authorizer(credential, "https://privx.example.com")
"""
from .authorizer import Authorizer
from .credentials import (
    Credential,
    Option,
    resolve,
    use_access,
    use_secret,
    use_digest,
    use_config_file,
    use_environment,
)
from .exceptions import AuthenticationError, ConfigurationError

__all__ = [
    "Authorizer",
    "Credential",
    "Option",
    "resolve",
    "use_access",
    "use_secret",
    "use_digest",
    "use_config_file",
    "use_environment",
    "AuthenticationError",
    "ConfigurationError",
]
