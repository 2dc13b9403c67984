"""
Theory declarations.

A theory is a test function plus the data providers that feed it. Providers
are attached explicitly, either with the decorators below (read back by the
pytest plugin) or by constructing a ``Theory`` directly and running it.

Example:
    >>> @inline_auto_data(1337, 7)
    ... @inline_auto_data(1337)
    ... def test_sum(x: int, y: int, z: int):
    ...     assert x == 1337
    >>> results = Theory.from_function(test_sum).run()
"""

import logging
from collections.abc import Callable, Sequence
from typing import Any

import pytest

from .data.parameters import parameters_of
from .data.sources import AutoData, InlineAutoData, InlineData
from .domain.models import (
    DataConfigurationError,
    DataRow,
    ParameterRequest,
    TheoryCaseResult,
)
from .ports.data_source_port import DataSourcePort
from .ports.specimen_port import SpecimenBuilderPort

logger = logging.getLogger(__name__)

SOURCES_ATTRIBUTE = "__autospecimen_sources__"


def registered_sources(func: Callable[..., Any]) -> tuple[DataSourcePort, ...]:
    """Data providers attached to ``func``, in declaration order."""
    return tuple(getattr(func, SOURCES_ATTRIBUTE, ()))


def data_source(source: DataSourcePort) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Attach ``source`` to the decorated test function. Stackable."""
    if not callable(getattr(source, "get_data", None)):
        raise TypeError(f"{source!r} does not provide get_data(parameters)")

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        # Decorators apply bottom-up; prepend to keep top-down order.
        setattr(func, SOURCES_ATTRIBUTE, (source, *registered_sources(func)))
        return func

    return decorator


def inline_auto_data(*values: Any, auto_data: Any = None):
    """Feed the test literal ``values`` first and generated specimens for the rest."""
    return data_source(InlineAutoData(*values, auto_data=auto_data))


def auto_data(fixture: SpecimenBuilderPort | None = None):
    """Feed every parameter of the test with a generated specimen."""
    return data_source(AutoData(fixture))


def inline_data(*values: Any):
    """Feed the test literal ``values`` only."""
    return data_source(InlineData(*values))


class Theory:
    """
    A test function together with its data providers.

    Rows are produced per provider, in order, and each provider's rows are
    appended as they come. Configuration and generation errors raised while
    producing rows propagate to the caller; errors raised by the test body
    while running are recorded as failed cases, including ``pytest.fail``.
    ``pytest.skip`` and other outcome exceptions propagate.
    """

    def __init__(
        self,
        func: Callable[..., Any],
        sources: Sequence[DataSourcePort],
        skip_bound: bool = False,
        skip_defaults: bool = False,
    ):
        """
        Initialize the theory.

        Args:
            func: The test function to feed
            sources: Data providers, in declaration order
            skip_bound: Ignore a leading ``self``/``cls`` parameter
            skip_defaults: Leave parameters with defaults to their defaults
        """
        if not sources:
            raise DataConfigurationError(
                f"{getattr(func, '__qualname__', func)!r} has no data sources"
            )
        self.func = func
        self.sources = tuple(sources)
        self.skip_bound = skip_bound
        self.skip_defaults = skip_defaults

    @classmethod
    def from_function(
        cls, func: Callable[..., Any], skip_bound: bool = False, skip_defaults: bool = False
    ) -> "Theory":
        """Build a theory from the providers registered on ``func`` by the decorators."""
        return cls(
            func,
            registered_sources(func),
            skip_bound=skip_bound,
            skip_defaults=skip_defaults,
        )

    @property
    def name(self) -> str:
        return getattr(self.func, "__qualname__", repr(self.func))

    @property
    def parameters(self) -> list[ParameterRequest]:
        return parameters_of(
            self.func, skip_bound=self.skip_bound, skip_defaults=self.skip_defaults
        )

    def rows(self, parameters: Sequence[ParameterRequest] | None = None) -> list[DataRow]:
        """Produce every argument row from every provider."""
        if parameters is None:
            parameters = self.parameters
        rows: list[DataRow] = []
        for source in self.sources:
            rows.extend(source.get_data(parameters))
        logger.debug(f"Theory {self.name} produced {len(rows)} row(s)")
        return rows

    def run(self) -> list[TheoryCaseResult]:
        """Invoke the test once per row and collect the outcomes."""
        parameters = self.parameters
        results: list[TheoryCaseResult] = []

        for index, row in enumerate(self.rows(parameters)):
            args, kwargs = bind_arguments(parameters, row)
            try:
                self.func(*args, **kwargs)
            except (Exception, pytest.fail.Exception) as e:
                logger.debug(f"Theory {self.name} case {index} failed: {e!r}")
                results.append(
                    TheoryCaseResult(
                        index=index,
                        case_id=row.id,
                        arguments=row.values,
                        passed=False,
                        error_message=f"{type(e).__name__}: {e}",
                    )
                )
            else:
                results.append(
                    TheoryCaseResult(
                        index=index,
                        case_id=row.id,
                        arguments=row.values,
                        passed=True,
                    )
                )

        return results


def bind_arguments(
    parameters: Sequence[ParameterRequest], row: DataRow
) -> tuple[tuple[Any, ...], dict[str, Any]]:
    """Split a row into positional arguments and keyword-only arguments."""
    args = []
    kwargs = {}
    for parameter, value in zip(parameters, row.values):
        if parameter.keyword_only:
            kwargs[parameter.name] = value
        else:
            args.append(value)
    return tuple(args), kwargs
