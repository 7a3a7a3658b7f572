# resreg/resource.py
"""
Domain types stored in registries.

A Resource is identified by its namespace, type and identifier. A
Relationship is a typed pointer to a resource, written as a URI:

    resource:org.acme.Vehicle#VIN-1
"""

from dataclasses import dataclass, field
from typing import Any, Dict

from .errors import SerializationError

RELATIONSHIP_SCHEME = "resource:"


@dataclass(frozen=True)
class Relationship:
    """A reference to a resource by type and identifier."""
    namespace: str
    type: str
    identifier: str

    def get_identifier(self) -> str:
        return self.identifier

    def get_fully_qualified_type(self) -> str:
        return f"{self.namespace}.{self.type}"

    def to_uri(self) -> str:
        return f"{RELATIONSHIP_SCHEME}{self.get_fully_qualified_type()}#{self.identifier}"

    @classmethod
    def from_uri(cls, uri: str) -> "Relationship":
        """
        Parse a relationship URI.

        Raises:
            SerializationError: If the URI is not of the form
                resource:<namespace>.<type>#<identifier>
        """
        if not uri.startswith(RELATIONSHIP_SCHEME):
            raise SerializationError(f"Invalid relationship URI: {uri}")
        fqn, sep, identifier = uri[len(RELATIONSHIP_SCHEME):].partition("#")
        if not sep or not identifier:
            raise SerializationError(f"Relationship URI has no identifier: {uri}")
        namespace, type_name = split_fully_qualified_type(fqn)
        return cls(namespace=namespace, type=type_name, identifier=identifier)

    def __str__(self) -> str:
        return self.to_uri()


@dataclass
class Resource:
    """
    An identifiable domain entity.

    Attributes:
        namespace: Dotted namespace of the type (e.g. "org.acme")
        type: Type name within the namespace (e.g. "Vehicle")
        identifier: Unique identifier within a registry
        data: Field values; may hold scalars, lists, dicts, nested
            Relationships and (when serialized with relationship
            conversion) nested Resources
    """
    namespace: str
    type: str
    identifier: str
    data: Dict[str, Any] = field(default_factory=dict)

    def get_identifier(self) -> str:
        return self.identifier

    def get_fully_qualified_type(self) -> str:
        return f"{self.namespace}.{self.type}"

    def to_relationship(self) -> Relationship:
        return Relationship(
            namespace=self.namespace,
            type=self.type,
            identifier=self.identifier,
        )

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    def __str__(self) -> str:
        return f"Resource {{id={self.get_fully_qualified_type()}#{self.identifier}}}"


def split_fully_qualified_type(fqn: str):
    """Split "org.acme.Vehicle" into ("org.acme", "Vehicle")."""
    namespace, sep, type_name = fqn.rpartition(".")
    if not sep or not namespace or not type_name:
        raise SerializationError(f"Type '{fqn}' is not fully qualified")
    return namespace, type_name
