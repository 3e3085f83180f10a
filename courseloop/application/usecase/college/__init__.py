"""College use cases."""

from .search_colleges import (
    SearchCollegesRequest,
    SearchCollegesResponse,
    SearchCollegesUseCase,
)

__all__ = [
    "SearchCollegesRequest",
    "SearchCollegesResponse",
    "SearchCollegesUseCase",
]
