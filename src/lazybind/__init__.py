"""Lazy dependency container.

This package provides a lightweight dependency container for Python, mapping
string identifiers to lazily produced values, with extension of existing
registrations and hierarchical scoping.

Exports:
- `Container`: Main container supporting value/factory/singleton registration,
  extension, service providers and resolution.
- `Kind`: Enum of the production strategies (value, factory, singleton).
- `Scope`: Scoped container that resolves within itself first, then falls back
  to a parent container. Useful for per-request or per-test overrides.
- The `ContainerError` hierarchy raised on contract violations.
"""

from ._container import Container, Scope
from ._errors import (
    ContainerError,
    InvalidDefinitionError,
    InvalidIdentifierError,
    InvalidProviderError,
    UnregisteredDependencyError,
    UnregisteredExtendedDependencyError,
)
from ._wrappers import Kind


__all__ = [
    "Container",
    "ContainerError",
    "InvalidDefinitionError",
    "InvalidIdentifierError",
    "InvalidProviderError",
    "Kind",
    "Scope",
    "UnregisteredDependencyError",
    "UnregisteredExtendedDependencyError",
]
