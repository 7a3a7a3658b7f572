# resreg/errors.py
"""
Error types raised by the registry's collaborators.

The registry itself never raises or wraps these; they come from data
collections, data services and the serializer and reach the caller unchanged.
"""


class RegistryError(Exception):
    """Base class for all resreg errors."""


class StoreError(RegistryError):
    """A data collection or data service operation failed."""


class NotFoundError(StoreError, KeyError):
    """The requested object or collection does not exist."""

    def __init__(self, kind: str, key: str):
        self.kind = kind
        self.key = key
        super().__init__(f"{kind} with ID '{key}' does not exist")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class AlreadyExistsError(StoreError):
    """An object or collection with the given ID already exists."""

    def __init__(self, kind: str, key: str):
        self.kind = kind
        self.key = key
        super().__init__(f"{kind} with ID '{key}' already exists")


class SerializationError(RegistryError, ValueError):
    """An object could not be converted to or from a resource."""
