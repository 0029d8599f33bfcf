"""Resolvers: the callables a container stores for each identifier.

A resolver is built from a `Kind`, a user definition and the container it is
registered on. Calling it with the container `get` was invoked on produces the
dependency's current value:

- VALUE resolvers return the stored payload verbatim.
- FACTORY resolvers call the definition on every resolution, against the
  container the lookup started from.
- SINGLETON resolvers call the definition once, against the container they
  were registered on, and cache the result.

Extension resolvers receive the previous resolver as `original` and pass its
value to the definition as the first argument: `definition(original, container)`.
Without an original the definition is called as `definition(container)`.
"""

from __future__ import annotations

import threading
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, cast


if TYPE_CHECKING:
    from collections.abc import Callable

    from ._container import Container

    Definition = Callable[..., Any]


class Kind(Enum):
    VALUE = "value"
    FACTORY = "factory"
    SINGLETON = "singleton"


class Resolver:
    kind: ClassVar[Kind]

    __slots__ = ()

    def __call__(self, context: Container) -> object:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} kind={self.kind.value}>"


class ValueResolver(Resolver):
    kind = Kind.VALUE

    __slots__ = ("_value",)

    def __init__(self, value: object) -> None:
        self._value = value

    def __call__(self, context: Container) -> object:
        return self._value


class FactoryResolver(Resolver):
    kind = Kind.FACTORY

    __slots__ = ("_definition", "_original")

    def __init__(self, definition: Definition, original: Resolver | None = None) -> None:
        self._definition = definition
        self._original = original

    def __call__(self, context: Container) -> object:
        if self._original is None:
            return self._definition(context)
        return self._definition(self._original(context), context)


class SingletonResolver(Resolver):
    """Computes its value at most once, against the container it belongs to.

    A failed computation is not cached: the definition and the original
    resolver are kept so the next call retries both from scratch. After a
    successful computation both references are released.
    """

    kind = Kind.SINGLETON

    __slots__ = ("_computed", "_container", "_definition", "_lock", "_original", "_value")

    def __init__(self, definition: Definition, container: Container, original: Resolver | None = None) -> None:
        self._definition: Definition | None = definition
        self._container = container
        self._original = original
        self._computed = False
        self._value: object = None
        self._lock = threading.RLock()

    @property
    def computed(self) -> bool:
        return self._computed

    def __call__(self, context: Container) -> object:
        if self._computed:
            return self._value

        with self._lock:
            if not self._computed:
                container = self._container
                definition = cast("Definition", self._definition)
                if self._original is None:
                    value = definition(container)
                else:
                    value = definition(self._original(container), container)

                self._value = value
                self._computed = True
                self._definition = None
                self._original = None

        return self._value


def create_resolver(
    kind: Kind,
    definition: Any,
    container: Container,
    original: Resolver | None = None,
) -> Resolver:
    """Build the resolver for `kind`.

    `definition` must already be validated as callable for FACTORY and SINGLETON.
    VALUE resolvers ignore `container` and `original`.
    """
    if kind is Kind.VALUE:
        return ValueResolver(definition)
    if kind is Kind.FACTORY:
        return FactoryResolver(definition, original)
    if kind is Kind.SINGLETON:
        return SingletonResolver(definition, container, original)

    msg = f"Unknown dependency kind: {kind!r}"
    raise ValueError(msg)
