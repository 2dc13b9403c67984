"""
Data providers for parameterized tests.

Each provider receives the parameters it is responsible for and returns the
argument rows for them. ``CompositeData`` layers providers positionally: the
first provider fills the leading parameters and each later provider is only
asked for the parameters still uncovered. ``InlineAutoData`` is the usual
combination of literal values followed by generated specimens.
"""

import enum
import logging
from collections.abc import Sequence
from typing import Any

from ..domain.models import DataConfigurationError, DataRow, ParameterRequest
from ..fixture.fixture import Fixture
from ..ports.data_source_port import DataSourcePort
from ..ports.specimen_port import SpecimenBuilderPort

logger = logging.getLogger(__name__)

_ID_SCALARS = (str, int, float, bool, type(None), enum.Enum)


def format_row_id(values: Sequence[Any]) -> str:
    """Build a stable test id from literal values, pytest style."""
    parts = []
    for value in values:
        if isinstance(value, _ID_SCALARS):
            parts.append(str(value))
        else:
            parts.append(type(value).__name__)
    return "-".join(parts)


def _names(parameters: Sequence[ParameterRequest]) -> str:
    return ", ".join(p.name for p in parameters) or "<none>"


class InlineData:
    """Supplies one row of literal values, positionally."""

    def __init__(self, *values: Any):
        self._values = tuple(values)

    @property
    def values(self) -> tuple[Any, ...]:
        return self._values

    def get_data(self, parameters: Sequence[ParameterRequest]) -> list[DataRow]:
        parameters = list(parameters)
        if len(self._values) > len(parameters):
            error_msg = (
                f"{len(self._values)} inline value(s) supplied but only "
                f"{len(parameters)} parameter(s) available ({_names(parameters)})"
            )
            logger.error(error_msg)
            raise DataConfigurationError(error_msg)
        return [DataRow(values=self._values, id=format_row_id(self._values))]

    def __repr__(self) -> str:
        return f"InlineData{self._values!r}"


class AutoData:
    """
    Supplies one row of generated specimens, one per parameter.

    Args:
        fixture: Any specimen builder; a default ``Fixture`` is built when omitted.
            The builder is held by reference and never reconfigured here.
    """

    def __init__(self, fixture: SpecimenBuilderPort | None = None):
        if fixture is None:
            fixture = Fixture()
        elif not callable(getattr(fixture, "create", None)):
            raise TypeError(
                f"{fixture!r} does not provide a create(request_type, name=None) method"
            )
        self._fixture = fixture

    @property
    def fixture(self) -> SpecimenBuilderPort:
        return self._fixture

    def get_data(self, parameters: Sequence[ParameterRequest]) -> list[DataRow]:
        # Builder errors propagate unchanged.
        values = tuple(
            self._fixture.create(parameter.annotation, name=parameter.name)
            for parameter in parameters
        )
        return [DataRow(values=values)]

    def __repr__(self) -> str:
        return f"AutoData({self._fixture!r})"


class CompositeData:
    """
    Combines providers positionally.

    For the n-th row of the first provider, each later provider is asked for
    data for the parameters not yet covered, and its n-th row is appended.
    Earlier providers take precedence for the positions they cover; a provider
    is not consulted once the row is complete.
    """

    def __init__(self, *sources: DataSourcePort):
        if not sources:
            raise DataConfigurationError("CompositeData needs at least one data source")
        for source in sources:
            if not callable(getattr(source, "get_data", None)):
                raise TypeError(f"{source!r} does not provide get_data(parameters)")
        self._sources = tuple(sources)

    @property
    def sources(self) -> tuple[DataSourcePort, ...]:
        return self._sources

    def get_data(self, parameters: Sequence[ParameterRequest]) -> list[DataRow]:
        parameters = list(parameters)
        first, *rest = self._sources
        rows: list[DataRow] = []

        for index, row in enumerate(first.get_data(parameters)):
            for source in rest:
                if len(row) >= len(parameters):
                    break
                remaining = parameters[len(row) :]
                extra = list(source.get_data(remaining))
                if index < len(extra):
                    row = row.extend(extra[index])

            if len(row) != len(parameters):
                error_msg = (
                    f"Row {index} supplies {len(row)} value(s) but the test takes "
                    f"{len(parameters)} parameter(s) ({_names(parameters)})"
                )
                logger.error(error_msg)
                raise DataConfigurationError(error_msg)
            rows.append(row)

        logger.debug(f"Produced {len(rows)} row(s) for ({_names(parameters)})")
        return rows

    def __repr__(self) -> str:
        return f"CompositeData{self._sources!r}"


class InlineAutoData:
    """
    Literal values for the leading parameters, generated specimens for the rest.

    ``InlineAutoData(1337, 7)`` against ``(x: int, y: int, z: int)`` yields
    one row ``(1337, 7, <generated int>)``. The generator is never invoked
    when the literals cover every parameter.

    Custom generation is injected rather than inherited: pass a pre-built
    ``AutoData`` (or any specimen builder, which is wrapped in one) as
    ``auto_data``, or use ``InlineAutoData.with_auto_data``.

    Example:
        >>> fixture = Fixture().customize(InjectCustomization(int, 42))
        >>> source = InlineAutoData(1337, auto_data=AutoData(fixture))
    """

    def __init__(self, *values: Any, auto_data: Any = None):
        if auto_data is None:
            auto_data = AutoData()
        elif not isinstance(auto_data, AutoData):
            auto_data = AutoData(auto_data)
        self._values = tuple(values)
        self._auto_data = auto_data
        self._composite = CompositeData(InlineData(*self._values), auto_data)

    @classmethod
    def with_auto_data(cls, auto_data: Any, *values: Any) -> "InlineAutoData":
        """Build from a pre-built AutoData (or specimen builder) and literal values."""
        return cls(*values, auto_data=auto_data)

    @property
    def values(self) -> tuple[Any, ...]:
        """The literal values, in the order supplied."""
        return self._values

    @property
    def auto_data(self) -> AutoData:
        """The AutoData used for the parameters the literals do not cover."""
        return self._auto_data

    @property
    def fixture(self) -> SpecimenBuilderPort:
        """The specimen builder behind ``auto_data``."""
        return self._auto_data.fixture

    def get_data(self, parameters: Sequence[ParameterRequest]) -> list[DataRow]:
        """
        Produce exactly one row for ``parameters``.

        Raises:
            DataConfigurationError: If there are more literal values than parameters
            SpecimenCreationError: Propagated unchanged from the specimen builder
        """
        return self._composite.get_data(parameters)

    def __repr__(self) -> str:
        return f"InlineAutoData({', '.join(map(repr, self._values))})"
