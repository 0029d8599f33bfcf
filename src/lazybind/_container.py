from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

from ._errors import (
    InvalidDefinitionError,
    InvalidIdentifierError,
    InvalidProviderError,
    UnregisteredDependencyError,
    UnregisteredExtendedDependencyError,
)
from ._wrappers import Kind, Resolver, create_resolver


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    Definition = Callable[..., Any]


class Container:
    """Lazy dependency container keyed by string identifiers.

    - register values, factories and singletons
    - extend a registration while keeping access to its previous value
    - child scopes that inherit and may shadow entries.
    """

    VALUE = Kind.VALUE
    FACTORY = Kind.FACTORY
    SINGLETON = Kind.SINGLETON

    def __init__(self) -> None:
        self._resolvers: dict[str, Resolver] = {}
        self._lock = threading.RLock()

    def has(self, identifier: str) -> bool:
        """Whether `identifier` is registered here or in any parent."""
        self._validate_identifier(identifier)
        return self._lookup(identifier) is not None

    def keys(self) -> list[str]:
        """Local identifiers in insertion order, then inherited ones."""
        with self._lock:
            return list(self._resolvers)

    def get(self, identifier: str) -> object:
        """Resolve the dependency registered for `identifier`.

        Factories are evaluated against this container, so a factory inherited
        from a parent sees the entries this container shadows.
        """
        self._validate_identifier(identifier)
        resolver = self._lookup(identifier)
        if resolver is None:
            raise UnregisteredDependencyError(identifier)
        return resolver(self)

    def pick(self, *identifiers: str) -> dict[str, object]:
        return {identifier: self.get(identifier) for identifier in identifiers}

    def value(self, identifier: str, value: object) -> Container:
        return self.set(identifier, value, Kind.VALUE)

    def factory(self, identifier: str, definition: Definition) -> Container:
        return self.set(identifier, definition, Kind.FACTORY)

    def singleton(self, identifier: str, definition: Definition) -> Container:
        return self.set(identifier, definition, Kind.SINGLETON)

    service = singleton

    def set(self, identifier: str, definition: Any, kind: Kind | str | None = None) -> Container:
        """Register `definition` under `identifier` with the given kind.

        Example:
          container.set("host", "example.com")              # VALUE
          container.set("client", lambda c: Client(c.get("host")))  # SINGLETON
          container.set("request", make_request, Container.FACTORY)

        Without a kind, callables are registered as singletons and anything
        else as a value. Registering an existing identifier overwrites it.
        """
        self._validate_identifier(identifier)

        if kind is None:
            kind = Kind.SINGLETON if callable(definition) else Kind.VALUE
        else:
            kind = Kind(kind)

        if kind is not Kind.VALUE:
            self._validate_definition(identifier, definition)

        self._store(identifier, create_resolver(kind, definition, self))
        logger.debug("Registered %s dependency %r", kind.value, identifier)
        return self

    def extend(self, identifier: str, definition: Definition) -> Container:
        """Replace `identifier` with `definition(original, container)`.

        The extension keeps the kind of the registration it wraps, except that
        extending a value produces a singleton. On a scope the extension is
        stored locally and shadows the parent's entry.
        """
        self._validate_identifier(identifier)

        with self._lock:
            original = self._lookup(identifier)
            if original is None:
                raise UnregisteredExtendedDependencyError(identifier)

            kind = Kind.SINGLETON if original.kind is Kind.VALUE else original.kind
            self._validate_definition(identifier, definition)

            self._store(identifier, create_resolver(kind, definition, self, original))

        logger.debug("Extended %s dependency %r as %s", original.kind.value, identifier, kind.value)
        return self

    def register(self, provider: Callable[[Container], object] | Any) -> Container:
        """Let a service provider register its dependencies.

        A callable provider is called with the container; otherwise the
        provider's `register` method is.
        """
        if callable(provider):
            provider(self)
        elif callable(getattr(provider, "register", None)):
            provider.register(self)
        else:
            raise InvalidProviderError(provider)

        return self

    def create_scope(self) -> Scope:
        """Create a scope that prefers its own registrations, falls back to this container."""
        scope = Scope(self, _from_parent=True)
        logger.debug("Created scope %r of %r", scope, self)
        return scope

    def with_scope(self, values: Mapping[str, object]) -> Scope:
        """Create a scope with each of `values` registered as a value."""
        scope = self.create_scope()
        for identifier, value in values.items():
            scope.value(identifier, value)
        return scope

    def _lookup(self, identifier: str) -> Resolver | None:
        with self._lock:
            return self._resolvers.get(identifier)

    def _store(self, identifier: str, resolver: Resolver) -> None:
        with self._lock:
            self._resolvers[identifier] = resolver

    def _validate_identifier(self, identifier: object) -> None:
        if not isinstance(identifier, str) or not identifier:
            raise InvalidIdentifierError(identifier)

    def _validate_definition(self, identifier: str, definition: object) -> None:
        if not callable(definition):
            raise InvalidDefinitionError(identifier, definition)


class Scope(Container):
    """A scoped container that looks up in itself first, then falls back to a parent container.

    Fallback is a live lookup: entries the parent registers after the scope
    was created are visible too.
    """

    def __init__(self, parent: Container, *, _from_parent: bool = False) -> None:
        if not _from_parent:
            msg = "Scope instances must be created via Container.create_scope()"
            raise RuntimeError(msg)
        super().__init__()
        self._parent = parent

    @property
    def parent(self) -> Container:
        return self._parent

    def keys(self) -> list[str]:
        local = super().keys()
        seen = set(local)
        return local + [identifier for identifier in self._parent.keys() if identifier not in seen]

    def _lookup(self, identifier: str) -> Resolver | None:
        resolver = super()._lookup(identifier)
        if resolver is None:
            # Fallback to parent
            return self._parent._lookup(identifier)  # noqa: SLF001
        return resolver
