# resreg/serializer.py
"""
Conversion between stored JSON objects and Resources.

Serialized form:

    {
        "$class": "org.acme.Vehicle",
        "$identifier": "VIN-1",
        "owner": {"$ref": "resource:org.acme.Person#alice"},
        "colour": "red"
    }

Relationships are wrapped in a {"$ref": uri} object so that plain strings
are stored and read back verbatim. Field and nested keys starting with
"$" are reserved.
"""

from typing import Any, Dict

from .errors import SerializationError
from .resource import Relationship, Resource, split_fully_qualified_type


CLASS_KEY = "$class"
IDENTIFIER_KEY = "$identifier"
REF_KEY = "$ref"
RESERVED_PREFIX = "$"


class Serializer:
    """
    Maps Resources to plain JSON objects and back.

    Nested Resources are only accepted where a Relationship would be
    when convert_resources_to_relationships is set; they are then stored
    as relationships.
    """

    def to_json(
        self,
        resource: Resource,
        convert_resources_to_relationships: bool = False,
    ) -> Dict[str, Any]:
        """
        Serialize a resource.

        Args:
            resource: The resource to serialize
            convert_resources_to_relationships: Permit nested resources in
                place of relationships

        Returns:
            A JSON-compatible dict

        Raises:
            SerializationError: If the resource has no identifier, holds a
                nested resource without conversion enabled, uses a reserved
                key, or holds a value that is not JSON
        """
        if not isinstance(resource, Resource):
            raise SerializationError(f"Expected a Resource, got {type(resource).__name__}")

        fqn = resource.get_fully_qualified_type()
        identifier = resource.get_identifier()
        if not isinstance(identifier, str) or not identifier:
            raise SerializationError(f"Object of class {fqn} is missing '{IDENTIFIER_KEY}'")

        obj = {
            CLASS_KEY: fqn,
            IDENTIFIER_KEY: identifier,
        }
        for key, value in resource.data.items():
            self._check_key(key, key)
            obj[key] = self._encode(value, key, convert_resources_to_relationships)
        return obj

    def _check_key(self, key: Any, path: str):
        if not isinstance(key, str):
            raise SerializationError(f"Field '{path}' has non-string key {key!r}")
        if key.startswith(RESERVED_PREFIX):
            raise SerializationError(f"Field name '{path}' is reserved")

    def _encode(self, value: Any, path: str, convert: bool) -> Any:
        if isinstance(value, Relationship):
            return {REF_KEY: value.to_uri()}
        if isinstance(value, Resource):
            if not convert:
                raise SerializationError(
                    f"Did not find a relationship for field '{path}', "
                    f"found resource {value}"
                )
            return {REF_KEY: value.to_relationship().to_uri()}
        if isinstance(value, (list, tuple)):
            return [self._encode(v, f"{path}[{i}]", convert) for i, v in enumerate(value)]
        if isinstance(value, dict):
            encoded = {}
            for k, v in value.items():
                self._check_key(k, f"{path}.{k}")
                encoded[k] = self._encode(v, f"{path}.{k}", convert)
            return encoded
        if value is None or isinstance(value, (str, int, float, bool)):
            return value
        raise SerializationError(
            f"Field '{path}' has unsupported type {type(value).__name__}"
        )

    def from_json(self, obj: Dict[str, Any]) -> Resource:
        """
        Deserialize a stored object.

        Raises:
            SerializationError: If the object is missing $class or
                $identifier, or holds a malformed relationship
        """
        if not isinstance(obj, dict):
            raise SerializationError(f"Expected an object, got {type(obj).__name__}")
        fqn = obj.get(CLASS_KEY)
        if not isinstance(fqn, str):
            raise SerializationError(f"Object is missing '{CLASS_KEY}'")
        identifier = obj.get(IDENTIFIER_KEY)
        if not isinstance(identifier, str) or not identifier:
            raise SerializationError(f"Object of class {fqn} is missing '{IDENTIFIER_KEY}'")

        namespace, type_name = split_fully_qualified_type(fqn)
        data = {
            key: self._decode(value)
            for key, value in obj.items()
            if key not in (CLASS_KEY, IDENTIFIER_KEY)
        }
        return Resource(namespace=namespace, type=type_name, identifier=identifier, data=data)

    def _decode(self, value: Any) -> Any:
        if isinstance(value, list):
            return [self._decode(v) for v in value]
        if isinstance(value, dict):
            if REF_KEY in value:
                uri = value[REF_KEY]
                if len(value) != 1 or not isinstance(uri, str):
                    raise SerializationError(f"Malformed relationship: {value!r}")
                return Relationship.from_uri(uri)
            return {k: self._decode(v) for k, v in value.items()}
        return value
