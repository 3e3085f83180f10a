"""In-memory backend implementations for testing."""

from .auth import InMemoryAuthGateway
from .tables import InMemoryTableGateway

__all__ = [
    "InMemoryAuthGateway",
    "InMemoryTableGateway",
]
