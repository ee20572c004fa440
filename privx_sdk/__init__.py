"""Python SDK for PrivX APIs.

Architecture:
- config/: SDK settings from the environment
- oauth/: layered credential resolution and bearer token acquisition
- restapi/: HTTP connector with authentication and error mapping
- rolestore/: role-store client with idempotent role reconciliation

Usage:
    from privx_sdk import Authorizer, RestConnector, RoleStore, load_settings, resolve

    config = load_settings()
    credential = resolve(config.credential_options())
    authorizer = Authorizer(credential, config.base_url, config.request_timeout)
    store = RoleStore(RestConnector(config.base_url, authorizer, config.request_timeout))
    store.add_user_role(user_id, role_id)
"""
from .config import SdkConfig, load_settings
from .oauth import Authorizer, Credential, resolve
from .restapi import RestConnector, PrivXError, PrivXAPIError
from .rolestore import RoleStore

__all__ = [
    "SdkConfig",
    "load_settings",
    "Authorizer",
    "Credential",
    "resolve",
    "RestConnector",
    "PrivXError",
    "PrivXAPIError",
    "RoleStore",
]

__version__ = "0.1.0"
