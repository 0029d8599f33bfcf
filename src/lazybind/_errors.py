from __future__ import annotations


class ContainerError(Exception):
    """Base class for every error raised by a container."""


class InvalidIdentifierError(ContainerError, TypeError):
    def __init__(self, identifier: object) -> None:
        self.identifier = identifier
        msg = f"The dependency identifier must be a non-empty string: {identifier!r}"
        super().__init__(msg)


class InvalidDefinitionError(ContainerError, TypeError):
    def __init__(self, identifier: str, definition: object) -> None:
        self.identifier = identifier
        self.definition = definition
        msg = f"The definition of {identifier!r} must be callable: {definition!r}"
        super().__init__(msg)


class InvalidProviderError(ContainerError, TypeError):
    def __init__(self, provider: object) -> None:
        self.provider = provider
        msg = f"A service provider must be callable or expose a callable `register`: {provider!r}"
        super().__init__(msg)


class _MissingIdentifierError(ContainerError, KeyError):
    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class UnregisteredDependencyError(_MissingIdentifierError):
    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        msg = f"No dependency registered for identifier: {identifier!r}"
        super().__init__(msg)


class UnregisteredExtendedDependencyError(_MissingIdentifierError):
    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        msg = f"Cannot extend a dependency not previously registered: {identifier!r}"
        super().__init__(msg)
