from .resource import Resource
from .rest_service import RestService, StateChannel

__all__ = [
    "Resource",
    "RestService",
    "StateChannel",
]
