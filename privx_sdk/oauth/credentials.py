"""Layered credential configuration for the PrivX OAuth client.

A credential is resolved by folding an ordered list of options over an empty
value. Each option may overwrite fields set by earlier ones, so callers
control precedence purely by ordering:

    credential = resolve([
        use_config_file(args.config),
        use_environment(),
        use_access(args.client_id),
    ])

Error policy of ``use_config_file`` is asymmetric on purpose: a file the
caller asked for that cannot be opened or read aborts the resolution with
``ConfigurationError``, while a file with malformed content is logged and
ignored so that other options can still supply the fields.
"""
from __future__ import annotations
import base64
import logging
import os
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Callable, Iterable, Mapping, Optional

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_ENV_PREFIX = "PRIVX"

CONFIG_FIELDS = (
    "oauth_client_id",
    "oauth_client_secret",
    "api_client_id",
    "api_client_secret",
)


@dataclass(frozen=True)
class Credential:
    """Resolved client credential.

    Attributes:
        access: API client identifier
        secret: API client secret
        digest: base64("oauth_client_id:oauth_client_secret"), sent as HTTP
            Basic auth to the OAuth layer
    """
    access: str = ""
    secret: str = field(default="", repr=False)
    digest: str = field(default="", repr=False)


Option = Callable[[Credential], Credential]


def _encode_digest(access: str, secret: str) -> str:
    return base64.b64encode(f"{access}:{secret}".encode("utf-8")).decode("ascii")


def use_access(access: Optional[str]) -> Option:
    """Set the client access key when a value is given."""
    def apply(credential: Credential) -> Credential:
        if access is None:
            return credential
        return replace(credential, access=access)
    return apply


def use_secret(secret: Optional[str]) -> Option:
    """Set the client secret when a value is given."""
    def apply(credential: Credential) -> Credential:
        if secret is None:
            return credential
        return replace(credential, secret=secret)
    return apply


def use_digest(oauth_access: Optional[str], oauth_secret: Optional[str]) -> Option:
    """Set the OAuth digest from an id/secret pair; no-op unless both are given."""
    def apply(credential: Credential) -> Credential:
        if oauth_access is None or oauth_secret is None:
            return credential
        return replace(credential, digest=_encode_digest(oauth_access, oauth_secret))
    return apply


def _read_file(path: str) -> bytes:
    return Path(path).read_bytes()


def _parse_auth_section(data: bytes) -> Optional[dict[str, str]]:
    """Extract the ``[auth]`` table from a TOML document.

    Returns None when the document is malformed. Section lookup is
    case-insensitive so both ``[auth]`` and ``[Auth]`` are accepted.
    """
    try:
        document = tomllib.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        logger.warning(f"[credentials] Ignoring malformed configuration: {e}")
        return None

    section: object = {}
    for key, value in document.items():
        if key.lower() == "auth":
            section = value
            break

    if not isinstance(section, dict):
        logger.warning("[credentials] Ignoring configuration: 'auth' is not a table")
        return None

    values = {}
    for name in CONFIG_FIELDS:
        value = section.get(name, "")
        if not isinstance(value, str):
            logger.warning(f"[credentials] Ignoring configuration: '{name}' is not a string")
            return None
        values[name] = value
    return values


def use_config_file(
    path: Optional[str],
    *,
    read_file: Callable[[str], bytes] = _read_file,
) -> Option:
    """Load credentials from a TOML configuration file.

    Expected layout:

        [auth]
        api_client_id = "..."
        api_client_secret = "..."
        oauth_client_id = "..."
        oauth_client_secret = "..."

    Args:
        path: File path; None makes the option a no-op
        read_file: Reader returning the raw file bytes

    Raises:
        ConfigurationError: When the file cannot be opened or read
    """
    def apply(credential: Credential) -> Credential:
        if path is None:
            return credential

        try:
            data = read_file(path)
        except OSError as e:
            raise ConfigurationError(path, str(e)) from e

        auth = _parse_auth_section(data)
        if auth is None:
            return credential

        if auth["api_client_id"]:
            credential = replace(credential, access=auth["api_client_id"])
        if auth["api_client_secret"]:
            credential = replace(credential, secret=auth["api_client_secret"])
        if auth["oauth_client_id"] and auth["oauth_client_secret"]:
            credential = use_digest(auth["oauth_client_id"], auth["oauth_client_secret"])(credential)

        logger.debug(f"[credentials] Applied configuration file {path}")
        return credential
    return apply


def use_environment(
    *,
    environ: Optional[Mapping[str, str]] = None,
    prefix: str = DEFAULT_ENV_PREFIX,
) -> Option:
    """Load credentials from environment variables.

    Reads ``{prefix}_API_CLIENT_ID``, ``{prefix}_API_CLIENT_SECRET``,
    ``{prefix}_API_OAUTH_CLIENT_ID`` and ``{prefix}_API_OAUTH_CLIENT_SECRET``.
    Variables that are not set are skipped; the digest is only computed when
    both OAuth variables are set.

    Args:
        environ: Variables to read (defaults to os.environ at apply time)
        prefix: Variable name prefix
    """
    def apply(credential: Credential) -> Credential:
        env = os.environ if environ is None else environ

        credential = use_access(env.get(f"{prefix}_API_CLIENT_ID"))(credential)
        credential = use_secret(env.get(f"{prefix}_API_CLIENT_SECRET"))(credential)
        credential = use_digest(
            env.get(f"{prefix}_API_OAUTH_CLIENT_ID"),
            env.get(f"{prefix}_API_OAUTH_CLIENT_SECRET"),
        )(credential)
        return credential
    return apply


def resolve(options: Iterable[Option]) -> Credential:
    """Apply options left to right to an empty credential."""
    credential = Credential()
    for option in options:
        credential = option(credential)
    return credential
