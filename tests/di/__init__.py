"""Mock providers for testing."""

from .backend import MockBackendProvider
from .college import MockCollegeProvider
from .container import build_test_container

__all__ = [
    "MockBackendProvider",
    "MockCollegeProvider",
    "build_test_container",
]
