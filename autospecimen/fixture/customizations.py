"""Reusable customizations for ``Fixture``."""

from collections.abc import Callable
from typing import Any

from .fixture import Fixture


class InjectCustomization:
    """Always supply ``value`` for ``request_type``.

    >>> fixture = Fixture().customize(InjectCustomization(int, 42))
    """

    def __init__(self, request_type: Any, value: Any):
        self.request_type = request_type
        self.value = value

    def customize(self, fixture: Fixture) -> None:
        fixture.inject(self.request_type, self.value)


class RegisterCustomization:
    """Supply ``factory()`` for ``request_type``."""

    def __init__(self, request_type: Any, factory: Callable[[], Any]):
        self.request_type = request_type
        self.factory = factory

    def customize(self, fixture: Fixture) -> None:
        fixture.register(self.request_type, self.factory)


class CompositeCustomization:
    """Apply several customizations in order; later ones override earlier ones."""

    def __init__(self, *customizations: Any):
        self.customizations = tuple(customizations)

    def customize(self, fixture: Fixture) -> None:
        for customization in self.customizations:
            fixture.customize(customization)
