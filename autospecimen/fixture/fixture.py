"""
Default specimen builder.

``Fixture`` creates anonymous values for type hints: primitives from shared
sequences, collections of ``repeat_count`` items, and user types (dataclasses,
pydantic models, named tuples, plain classes) by recursively resolving their
constructor parameters. Registered customizations always win over the
built-in rules.
"""

import collections.abc
import dataclasses
import enum
import inspect
import itertools
import logging
import os
import threading
import types
import typing
import uuid
from collections.abc import Callable
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from pathlib import PurePath
from typing import Any

from pydantic import BaseModel

from ..config.loader import get_active_config
from ..config.models import FixtureConfig
from ..domain.models import RecursionDetectedError, SpecimenCreationError
from ..ports.specimen_port import CustomizationPort

logger = logging.getLogger(__name__)

_LIST_ORIGINS = {
    list,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Iterable,
    collections.abc.Collection,
}
_SET_ORIGINS = {set, collections.abc.Set, collections.abc.MutableSet}
_DICT_ORIGINS = {dict, collections.abc.Mapping, collections.abc.MutableMapping}

_NUMBER_TYPES = (int, float, Decimal, complex)
_CLOCK_TYPES = (datetime, date, time, timedelta)


def describe_type(request_type: Any) -> str:
    """Readable name for a type hint, used in logs and error paths."""
    if isinstance(request_type, type) and not typing.get_args(request_type):
        return request_type.__qualname__
    return repr(request_type).replace("typing.", "")


class Fixture:
    """
    Creates anonymous specimens for type hints.

    A fixture owns its sequences and customizations. It may be shared across
    threads: counters are lock-protected and the in-progress request chain
    used for recursion detection is tracked per thread.

    Example:
        >>> fixture = Fixture().inject(int, 42)
        >>> fixture.create(int)
        42
    """

    def __init__(self, config: FixtureConfig | None = None):
        """
        Initialize the fixture.

        Args:
            config: Builder settings; defaults to the active configuration
        """
        self.config = config if config is not None else get_active_config().fixture
        self._lock = threading.Lock()
        self._numbers = itertools.count(self.config.number_start)
        self._next_bool = True
        self._cycles: dict[Any, Any] = {}
        self._factories: dict[Any, Callable[[], Any]] = {}
        self._local = threading.local()
        self._epoch = datetime.now().replace(microsecond=0)

    # ------------------------------------------------------------------
    # Customization
    # ------------------------------------------------------------------

    def register(self, request_type: Any, factory: Callable[[], Any]) -> "Fixture":
        """Use ``factory()`` for every future request of ``request_type``."""
        if not callable(factory):
            raise TypeError(f"factory for {describe_type(request_type)} must be callable")
        with self._lock:
            self._factories[request_type] = factory
        logger.debug(f"Registered factory for {describe_type(request_type)}")
        return self

    def inject(self, request_type: Any, value: Any) -> "Fixture":
        """Always answer requests for ``request_type`` with ``value``."""
        return self.register(request_type, lambda: value)

    def freeze(self, request_type: Any, name: str | None = None) -> Any:
        """Create one specimen of ``request_type`` and inject it for later requests."""
        value = self.create(request_type, name=name)
        self.inject(request_type, value)
        return value

    def customize(self, customization: CustomizationPort) -> "Fixture":
        """Apply ``customization`` to this fixture and return the fixture."""
        if not callable(getattr(customization, "customize", None)):
            raise TypeError(
                f"{customization!r} does not provide a customize(fixture) method"
            )
        customization.customize(self)
        return self

    def is_customized(self, request_type: Any) -> bool:
        with self._lock:
            return request_type in self._factories

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def create(self, request_type: Any, name: str | None = None) -> Any:
        """
        Create a specimen assignable to ``request_type``.

        Args:
            request_type: The type hint to satisfy
            name: Parameter or field name, used to prefix generated strings

        Returns:
            The generated value

        Raises:
            SpecimenCreationError: If the type cannot be constructed
            RecursionDetectedError: If the type recurses and recursion_behavior is "throw"
        """
        value = self._resolve(request_type, name)
        logger.debug(
            f"Created specimen for {describe_type(request_type)}"
            + (f" ({name})" if name else "")
        )
        return value

    def create_many(
        self, request_type: Any, count: int | None = None, name: str | None = None
    ) -> list[Any]:
        """Create ``count`` specimens (``repeat_count`` by default)."""
        count = self.config.repeat_count if count is None else count
        if count < 0:
            raise ValueError("count must not be negative")
        return [self.create(request_type, name=name) for _ in range(count)]

    def _resolve(self, request_type: Any, name: str | None) -> Any:
        factory = self._lookup_factory(request_type)
        if factory is not None:
            return factory()

        origin = typing.get_origin(request_type)
        args = typing.get_args(request_type)

        if origin is typing.Annotated:
            return self._resolve(args[0], name)
        if request_type is Any or request_type is object:
            return object()
        if request_type is None or request_type is type(None):
            return None
        if origin is typing.Union or origin is types.UnionType:
            members = [arg for arg in args if arg is not type(None)]
            return self._resolve(members[0], name) if members else None
        if origin is typing.Literal:
            return self._cycle(request_type, args)
        if origin is not None:
            return self._create_generic(request_type, origin, args, name)
        if isinstance(request_type, type):
            if request_type in _LIST_ORIGINS or request_type in _SET_ORIGINS:
                return self._create_generic(request_type, request_type, (), name)
            if request_type in _DICT_ORIGINS or request_type in (tuple, frozenset):
                return self._create_generic(request_type, request_type, (), name)
            return self._create_from_type(request_type, name)

        raise SpecimenCreationError(
            f"Unsupported type hint {describe_type(request_type)}", self._path()
        )

    def _lookup_factory(self, request_type: Any) -> Callable[[], Any] | None:
        try:
            with self._lock:
                return self._factories.get(request_type)
        except TypeError:
            # unhashable hint
            return None

    def _create_generic(
        self, request_type: Any, origin: Any, args: tuple[Any, ...], name: str | None
    ) -> Any:
        count = self.config.repeat_count
        item = args[0] if args else Any

        if origin in _LIST_ORIGINS:
            return [self._resolve(item, name) for _ in range(count)]
        if origin in _SET_ORIGINS:
            return {self._resolve(item, name) for _ in range(count)}
        if origin is frozenset:
            return frozenset(self._resolve(item, name) for _ in range(count))
        if origin is tuple:
            if request_type is tuple:
                return tuple(self._resolve(Any, name) for _ in range(count))
            if not args or args == ((),):
                return ()
            if len(args) == 2 and args[1] is Ellipsis:
                return tuple(self._resolve(args[0], name) for _ in range(count))
            return tuple(self._resolve(arg, name) for arg in args)
        if origin in _DICT_ORIGINS:
            key_type, value_type = args if len(args) == 2 else (Any, Any)
            return {
                self._resolve(key_type, name): self._resolve(value_type, name)
                for _ in range(count)
            }
        if origin is type and args and isinstance(args[0], type):
            return args[0]

        raise SpecimenCreationError(
            f"Unsupported generic type {describe_type(request_type)}", self._path()
        )

    def _create_from_type(self, request_type: type, name: str | None) -> Any:
        if issubclass(request_type, enum.Enum):
            members = list(request_type)
            if not members:
                raise SpecimenCreationError(
                    f"Enum {describe_type(request_type)} has no members", self._path()
                )
            return self._cycle(request_type, members)
        if request_type is bool:
            with self._lock:
                value, self._next_bool = self._next_bool, not self._next_bool
            return value
        if request_type in _NUMBER_TYPES:
            return request_type(self._next_number())
        if request_type is str:
            return self._create_string(name)
        if request_type is bytes or request_type is bytearray:
            return request_type(os.urandom(self.config.repeat_count))
        if request_type is uuid.UUID:
            return uuid.uuid4()
        if request_type in _CLOCK_TYPES:
            return self._create_clock_value(request_type)
        if issubclass(request_type, PurePath):
            return request_type(self._create_string(name))

        return self._create_object(request_type, name)

    def _create_object(self, request_type: type, name: str | None) -> Any:
        if getattr(request_type, "_is_protocol", False):
            raise SpecimenCreationError(
                f"Cannot create an instance of protocol {describe_type(request_type)}",
                self._path(request_type),
            )
        if inspect.isabstract(request_type):
            raise SpecimenCreationError(
                f"Cannot create an instance of abstract class {describe_type(request_type)}",
                self._path(request_type),
            )

        stack = self._stack()
        if request_type in stack:
            if self.config.recursion_behavior == "omit":
                logger.debug(
                    f"Omitting recursive request for {describe_type(request_type)}"
                )
                return None
            raise RecursionDetectedError(
                f"Recursion detected while creating {describe_type(request_type)}",
                self._path(request_type),
            )

        stack.append(request_type)
        try:
            arguments = {
                arg_name: self._resolve(hint, arg_name)
                for arg_name, hint in self._constructor_hints(request_type).items()
            }
            try:
                return request_type(**arguments)
            except Exception as e:
                raise SpecimenCreationError(
                    f"Constructing {describe_type(request_type)} failed: {e}",
                    self._path(),
                ) from e
        finally:
            stack.pop()

    def _constructor_hints(self, request_type: type) -> dict[str, Any]:
        """Map constructor argument names to the type hints to create them from."""
        try:
            if dataclasses.is_dataclass(request_type):
                hints = typing.get_type_hints(request_type, include_extras=True)
                return {
                    field.name: hints.get(field.name, Any)
                    for field in dataclasses.fields(request_type)
                    if field.init
                }
            if issubclass(request_type, BaseModel):
                return {
                    field.alias or field_name: field.annotation
                    for field_name, field in request_type.model_fields.items()
                }
            if issubclass(request_type, tuple) and hasattr(request_type, "_fields"):
                hints = typing.get_type_hints(request_type)
                return {field: hints.get(field, Any) for field in request_type._fields}

            signature = inspect.signature(request_type)
            hints = typing.get_type_hints(request_type.__init__, include_extras=True)
        except (NameError, TypeError, ValueError) as e:
            raise SpecimenCreationError(
                f"Cannot inspect constructor of {describe_type(request_type)}: {e}",
                self._path(),
            ) from e

        result: dict[str, Any] = {}
        for parameter in signature.parameters.values():
            if parameter.kind in (
                inspect.Parameter.VAR_POSITIONAL,
                inspect.Parameter.VAR_KEYWORD,
            ):
                continue
            if parameter.kind is inspect.Parameter.POSITIONAL_ONLY:
                raise SpecimenCreationError(
                    f"{describe_type(request_type)} takes positional-only arguments",
                    self._path(),
                )
            if parameter.name not in hints and parameter.default is not parameter.empty:
                continue
            result[parameter.name] = hints.get(parameter.name, Any)
        return result

    # ------------------------------------------------------------------
    # Sequences
    # ------------------------------------------------------------------

    def _next_number(self) -> int:
        with self._lock:
            return next(self._numbers)

    def _cycle(self, key: Any, options: Any) -> Any:
        with self._lock:
            if key not in self._cycles:
                self._cycles[key] = itertools.cycle(list(options))
            return next(self._cycles[key])

    def _create_string(self, name: str | None) -> str:
        if not name:
            return str(uuid.uuid4())
        return f"{name}{self.config.string_separator}{uuid.uuid4()}"

    def _create_clock_value(self, request_type: type) -> Any:
        offset = self._next_number()
        if request_type is timedelta:
            return timedelta(seconds=offset)
        moment = self._epoch + timedelta(days=offset)
        if request_type is date:
            return moment.date()
        if request_type is time:
            return (datetime.min + timedelta(seconds=offset)).time()
        return moment

    # ------------------------------------------------------------------
    # Request chain
    # ------------------------------------------------------------------

    def _stack(self) -> list[type]:
        stack = getattr(self._local, "stack", None)
        if stack is None:
            stack = self._local.stack = []
        return stack

    def _path(self, *extra: Any) -> tuple[str, ...]:
        return tuple(describe_type(t) for t in (*self._stack(), *extra))
