"""
Data Source Port interface definition.

This module defines the contract between the test host and the objects that
supply argument rows for a parameterized test.
"""

from collections.abc import Iterable, Sequence

from typing_extensions import Protocol

from ..domain.models import DataRow, ParameterRequest


class DataSourcePort(Protocol):
    """
    Interface for providers of test argument rows.

    A provider receives the parameters it is responsible for, in positional
    order, and yields rows whose values map onto the leading parameters.
    """

    def get_data(self, parameters: Sequence[ParameterRequest]) -> Iterable[DataRow]:
        """
        Supply argument rows for ``parameters``.

        Args:
            parameters: The parameters this provider should fill

        Returns:
            Iterable of DataRow objects

        Raises:
            DataConfigurationError: If the provider's data does not fit
        """
        ...
