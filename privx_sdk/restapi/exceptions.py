"""Typed exceptions raised by the PrivX REST connector."""


class PrivXError(Exception):
    """Base exception for all SDK operations."""
    pass


class PrivXAPIError(PrivXError):
    """HTTP error returned by a PrivX API.

    Attributes:
        status_code: HTTP status code
        message: Response body
        endpoint: URL that failed
    """

    def __init__(self, status_code: int, message: str, endpoint: str):
        self.status_code = status_code
        self.message = message
        self.endpoint = endpoint
        super().__init__(f"[{status_code}] {endpoint}: {message}")


class PrivXConnectionError(PrivXError):
    """Transport failure before any HTTP status was received."""

    def __init__(self, endpoint: str, reason: str):
        self.endpoint = endpoint
        self.reason = reason
        super().__init__(f"{endpoint}: {reason}")
