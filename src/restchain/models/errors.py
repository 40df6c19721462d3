from typing import Any, Optional


class RestChainError(Exception):
    """Base class for every error raised or delivered by restchain."""


class ConfigurationError(RestChainError):
    """Raised by ``Request.send`` when the request has no valid URL or method.

    This is a programming error, so it is raised synchronously instead of
    being delivered through the send future.
    """

    def __init__(self, url: Optional[str], method: Optional[str]):
        self.url = url
        self.method = method
        self.message = (
            f"Invalid request, valid method and url required: {url} | {method}"
        )
        super().__init__(self.message)


class UnsupportedOperationError(RestChainError):
    def __init__(self, method: Optional[str], operation: str = "form"):
        self.method = method
        self.operation = operation
        self.message = f"Operation '{operation}' is not supported via {method}"
        super().__init__(self.message)


class TransportUnavailableError(RestChainError):
    def __init__(
        self,
        message="Cannot send request, failed to find a compatible transport (no compatible transport)",
    ):
        self.message = message
        super().__init__(self.message)


class TransportFailure(RestChainError):
    """The transport reported a network-level error.

    ``error`` holds whatever the transport passed to its error hook.
    """

    def __init__(self, error: Any):
        self.error = error
        self.message = f"Transport failed: {error!r}"
        super().__init__(self.message)


class HttpStatusFailure(RestChainError):
    """A completed exchange answered with a status outside ``[200, 400)``."""

    def __init__(self, status_code: int, payload: Any):
        self.status_code = status_code
        self.payload = payload
        self.message = f"Request failed with status {status_code}"
        super().__init__(self.message)
