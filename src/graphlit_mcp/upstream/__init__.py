"""Remote platform client module initialization."""

from .base import ClientFactory, GraphlitApi, GraphlitError, Record
from .graphlit import GraphlitClient

__all__ = [
    "ClientFactory",
    "GraphlitApi",
    "GraphlitClient",
    "GraphlitError",
    "Record",
]
