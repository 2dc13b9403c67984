"""
pytest integration.

Registered through the ``pytest11`` entry point. Tests carrying providers
attached with ``inline_auto_data``/``auto_data``/``inline_data``/
``data_source`` are parametrized with every row of every provider, so data
configuration errors surface at collection time.
"""

import logging

import pytest

from .config.loader import ConfigLoader, ConfigurationError, set_active_config
from .theory import Theory, registered_sources

logger = logging.getLogger(__name__)


def pytest_configure(config: pytest.Config) -> None:
    try:
        active = ConfigLoader(config.rootpath).load_config()
    except ConfigurationError as e:
        raise pytest.UsageError(f"autospecimen: {e}") from e
    set_active_config(active)


def pytest_unconfigure(config: pytest.Config) -> None:
    set_active_config(None)


def pytest_generate_tests(metafunc: pytest.Metafunc) -> None:
    sources = registered_sources(metafunc.function)
    if not sources:
        return

    # pytest will not parametrize arguments that declare a default.
    theory = Theory(
        metafunc.function,
        sources,
        skip_bound=metafunc.cls is not None,
        skip_defaults=True,
    )
    parameters = theory.parameters
    rows = theory.rows(parameters)
    argnames = [parameter.name for parameter in parameters]
    if not argnames:
        logger.debug(f"{theory.name} takes no parameters, nothing to parametrize")
        return

    params = [
        pytest.param(*row.values, id=row.id or f"auto{index}")
        for index, row in enumerate(rows)
    ]
    metafunc.parametrize(argnames, params)
