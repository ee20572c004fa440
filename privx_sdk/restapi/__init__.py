"""REST connector shared by the PrivX API clients."""
from .client import RestConnector, REQUEST_TIMEOUT
from .exceptions import PrivXError, PrivXAPIError, PrivXConnectionError

__all__ = [
    "RestConnector",
    "REQUEST_TIMEOUT",
    "PrivXError",
    "PrivXAPIError",
    "PrivXConnectionError",
]
