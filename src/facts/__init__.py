"""Cat fact domain: value type, remote client and observable store."""

from .client import FactClient
from .models import DecodeError, Fact, FactError, NetworkError
from .store import FactStore

__all__ = [
    "Fact",
    "FactClient",
    "FactStore",
    "FactError",
    "NetworkError",
    "DecodeError",
]
