"""Exceptions raised while building credentials and obtaining tokens."""
from privx_sdk.restapi.exceptions import PrivXError


class ConfigurationError(PrivXError):
    """Credential configuration file could not be opened or read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Unable to read configuration file '{path}': {reason}")


class AuthenticationError(PrivXError):
    """Credential rejected before or while requesting an access token."""
    pass
