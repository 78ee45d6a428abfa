"""Base classes for dependency injection providers."""

from typing import ClassVar, Literal

from dishka import Provider

# Infrastructure that tests can swap for an in-process stand-in
Component = Literal["notifier", "persistence"]


class ProviderBase(Provider):
    """Base for all providers.

    Attributes:
        __mock_component__: Component a mockable base stands for (None on
            concrete providers)
        __is_mock__: Set on the mock subclass of a mockable component
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
