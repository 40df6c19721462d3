from .errors import (
    ConfigurationError,
    HttpStatusFailure,
    RestChainError,
    TransportFailure,
    TransportUnavailableError,
    UnsupportedOperationError,
)
from .request import RequestDescriptor

__all__ = [
    "RestChainError",
    "ConfigurationError",
    "UnsupportedOperationError",
    "TransportUnavailableError",
    "TransportFailure",
    "HttpStatusFailure",
    "RequestDescriptor",
]
