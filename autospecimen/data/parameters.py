"""Resolution of test function signatures into parameter requests."""

import inspect
import typing
from collections.abc import Callable
from typing import Any

from ..domain.models import DataConfigurationError, ParameterRequest

_BOUND_NAMES = ("self", "cls")


def parameters_of(
    func: Callable[..., Any], skip_bound: bool = False, skip_defaults: bool = False
) -> list[ParameterRequest]:
    """
    Describe the parameters of ``func`` that need values.

    Variadic parameters are never filled. Forward references are resolved
    against the function's module globals. Keyword-only parameters are
    included after the positional ones and flagged as such.

    Args:
        func: The test function
        skip_bound: Drop a leading ``self``/``cls`` parameter
        skip_defaults: Drop parameters that declare a default value

    Returns:
        ParameterRequest objects in positional order

    Raises:
        DataConfigurationError: If the signature or its type hints cannot be read
    """
    qualname = getattr(func, "__qualname__", repr(func))
    try:
        signature = inspect.signature(func)
        hints = typing.get_type_hints(func, include_extras=True)
    except (NameError, TypeError, ValueError) as e:
        raise DataConfigurationError(
            f"Cannot inspect parameters of {qualname}: {e}"
        ) from e

    requests: list[ParameterRequest] = []
    for index, parameter in enumerate(signature.parameters.values()):
        if parameter.kind in (
            inspect.Parameter.VAR_POSITIONAL,
            inspect.Parameter.VAR_KEYWORD,
        ):
            continue
        if skip_bound and index == 0 and parameter.name in _BOUND_NAMES:
            continue
        if skip_defaults and parameter.default is not parameter.empty:
            continue
        requests.append(
            ParameterRequest(
                name=parameter.name,
                annotation=hints.get(parameter.name, Any),
                position=len(requests),
                keyword_only=parameter.kind is inspect.Parameter.KEYWORD_ONLY,
            )
        )
    return requests
