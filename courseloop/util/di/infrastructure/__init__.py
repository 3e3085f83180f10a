"""Infrastructure providers."""

# Import bases
from .backend import BackendProvider
from .college import CollegeProvider

# Import implementations (needed for __subclasses__())
from .backend import ProdBackendProvider  # noqa: F401
from .college import ProdCollegeProvider  # noqa: F401

__all__ = [
    "BackendProvider",
    "CollegeProvider",
    "ProdBackendProvider",
    "ProdCollegeProvider",
]
