"""Dependency injection module.

Every provider is listed once in PROVIDERS. Concrete providers are used as
they are. Mockable components are abstract bases whose subclasses declare
``__is_mock__``; exactly one production and one mock subclass exist per
component.
"""

from typing import Collection, Type

from board.util.di.application import ProdApplicationProvider
from board.util.di.base import Component, ProviderBase
from board.util.di.core import ProdConfigProvider
from board.util.di.domain import ProdDomainProvider
from board.util.di.infrastructure import (
    NotifierProvider,
    PersistenceProvider,
    ProdNotifierProvider,
    ProdPersistenceProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    # Concrete
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Mockable
    PersistenceProvider,
    NotifierProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Pick the implementation of a provider entry.

    Raises:
        ValueError: If the component has no implementation of that kind
    """
    implementations = base.__subclasses__()
    if not implementations:
        return base

    for implementation in implementations:
        if implementation.__is_mock__ == use_mock:
            return implementation

    kind = "mock" if use_mock else "production"
    raise ValueError(f"No {kind} implementation for {base.__mock_component__}")


def mockable_components() -> set[Component]:
    """Names of every component that has a mock implementation."""
    return {base.__mock_component__ for base in PROVIDERS if base.__mock_component__}


def build_providers(mocked: Collection[Component] = ()) -> list[ProviderBase]:
    """Instantiate one provider per PROVIDERS entry.

    Args:
        mocked: Components to serve from their mock implementation

    Raises:
        ValueError: If ``mocked`` names an unknown component
    """
    unknown = set(mocked) - mockable_components()
    if unknown:
        raise ValueError(f"Unknown components: {sorted(unknown)}")

    return [
        get_provider(base, use_mock=base.__mock_component__ in mocked)()
        for base in PROVIDERS
    ]


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "build_providers",
    "get_provider",
    "mockable_components",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "NotifierProvider",
    "PersistenceProvider",
    "ProdNotifierProvider",
    "ProdPersistenceProvider",
]
