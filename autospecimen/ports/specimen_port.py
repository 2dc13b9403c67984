"""
Specimen Port interface definitions.

This module defines the contract a data provider relies on to obtain
generated values, and the contract for customizations that reconfigure a
specimen builder.
"""

from typing import Any

from typing_extensions import Protocol


class SpecimenBuilderPort(Protocol):
    """
    Interface for anything that can produce a value for a requested type.

    Implementations may keep internal state (sequence counters, frozen
    values) but must be safe to share between concurrent test invocations.
    """

    def create(self, request_type: Any, name: str | None = None) -> Any:
        """
        Create a specimen assignable to ``request_type``.

        Args:
            request_type: The type hint to satisfy
            name: Optional parameter or field name the value is destined for

        Returns:
            A value for ``request_type``

        Raises:
            SpecimenCreationError: If no value can be created for the type
        """
        ...


class CustomizationPort(Protocol):
    """Interface for reusable bundles of specimen builder configuration."""

    def customize(self, fixture: Any) -> None:
        """
        Apply this customization to ``fixture``.

        Args:
            fixture: The specimen builder being customized
        """
        ...
