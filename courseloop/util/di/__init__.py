"""Dependency injection module.

Concrete providers are used as-is. A mockable component is a provider base
class with a ``__mock_component__`` name and two subclasses, one flagged
``__is_mock__ = True``; ``select_providers`` picks between them.
"""

from typing import Type

from courseloop.util.di.application import ProdApplicationProvider
from courseloop.util.di.base import Component, ProviderBase
from courseloop.util.di.core import ProdConfigProvider
from courseloop.util.di.domain import ProdDomainProvider
from courseloop.util.di.infrastructure import (
    BackendProvider,
    CollegeProvider,
    ProdBackendProvider,
    ProdCollegeProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Mockable components
    BackendProvider,
    CollegeProvider,
]


def mockable_components() -> set[Component]:
    """Names of every component that has a mock implementation."""
    return {
        base.__mock_component__
        for base in PROVIDERS
        if base.__subclasses__() and base.__mock_component__ is not None
    }


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve a provider base to the class to instantiate.

    Raises:
        ValueError: If the component lacks the requested implementation
    """
    implementations = base.__subclasses__()
    if not implementations:
        return base

    for candidate in implementations:
        if candidate.__is_mock__ == use_mock:
            return candidate

    kind = "mock" if use_mock else "production"
    raise ValueError(f"No {kind} implementation for {base.__mock_component__ or base.__name__}")


def select_providers(mocked: set[Component] | None = None) -> list[ProviderBase]:
    """Instantiate one provider per entry of PROVIDERS.

    Args:
        mocked: Components to replace with their mock implementation

    Raises:
        ValueError: If ``mocked`` names an unknown component
    """
    mocked = mocked or set()
    unknown = mocked - mockable_components()
    if unknown:
        raise ValueError(f"Unknown components: {unknown}")

    return [
        get_provider(base, use_mock=base.__mock_component__ in mocked)()
        for base in PROVIDERS
    ]


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "mockable_components",
    "select_providers",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "BackendProvider",
    "CollegeProvider",
    "ProdBackendProvider",
    "ProdCollegeProvider",
]
