"""Chainable HTTP requests and REST resources on top of httpx."""

from ._config import Config
from ._http import Http
from ._request import Request, request
from ._services import Resource, RestService, StateChannel
from ._transport import HttpxTransport, SyncHttpxTransport, Transport, create_transport
from ._utils import FormData, mimeify
from ._utils.constants import METHODS
from .models import (
    ConfigurationError,
    HttpStatusFailure,
    RequestDescriptor,
    RestChainError,
    TransportFailure,
    TransportUnavailableError,
    UnsupportedOperationError,
)

__all__ = [
    "Config",
    "Http",
    "Request",
    "request",
    "Resource",
    "RestService",
    "StateChannel",
    "Transport",
    "HttpxTransport",
    "SyncHttpxTransport",
    "create_transport",
    "FormData",
    "mimeify",
    "METHODS",
    "RequestDescriptor",
    "RestChainError",
    "ConfigurationError",
    "UnsupportedOperationError",
    "TransportUnavailableError",
    "TransportFailure",
    "HttpStatusFailure",
]
