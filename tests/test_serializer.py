# tests/test_serializer.py
"""Tests for resource serialization."""

import pytest

from resreg import Relationship, Resource, SerializationError, Serializer


@pytest.fixture
def serializer():
    return Serializer()


class TestRelationship:
    """Tests for relationship URIs."""

    def test_to_uri(self):
        rel = Relationship("org.acme", "Person", "alice")
        assert rel.to_uri() == "resource:org.acme.Person#alice"

    def test_from_uri(self):
        rel = Relationship.from_uri("resource:org.acme.hr.Person#a#b")
        assert rel.namespace == "org.acme.hr"
        assert rel.type == "Person"
        assert rel.identifier == "a#b"

    @pytest.mark.parametrize("uri", [
        "org.acme.Person#alice",
        "resource:org.acme.Person",
        "resource:org.acme.Person#",
        "resource:Person#alice",
    ])
    def test_from_uri_rejects_malformed(self, uri):
        with pytest.raises(SerializationError):
            Relationship.from_uri(uri)

    def test_resource_to_relationship(self):
        resource = Resource("org.acme", "Person", "alice", {"name": "Alice"})
        assert resource.to_relationship() == Relationship("org.acme", "Person", "alice")


class TestToJson:
    """Tests for Serializer.to_json."""

    def test_scalar_fields(self, serializer):
        resource = Resource("org.acme", "Car", "VIN-1", {"colour": "red", "seats": 4, "electric": False})
        assert serializer.to_json(resource) == {
            "$class": "org.acme.Car",
            "$identifier": "VIN-1",
            "colour": "red",
            "seats": 4,
            "electric": False,
        }

    def test_relationship_fields(self, serializer):
        owner = Relationship("org.acme", "Person", "alice")
        resource = Resource("org.acme", "Car", "VIN-1", {"owner": owner, "drivers": [owner]})

        obj = serializer.to_json(resource)

        assert obj["owner"] == {"$ref": "resource:org.acme.Person#alice"}
        assert obj["drivers"] == [{"$ref": "resource:org.acme.Person#alice"}]

    def test_nested_resource_rejected_by_default(self, serializer):
        owner = Resource("org.acme", "Person", "alice")
        resource = Resource("org.acme", "Car", "VIN-1", {"owner": owner})

        with pytest.raises(SerializationError, match="owner"):
            serializer.to_json(resource)

    def test_nested_resource_in_list_rejected(self, serializer):
        owner = Resource("org.acme", "Person", "alice")
        resource = Resource("org.acme", "Car", "VIN-1", {"drivers": [owner]})

        with pytest.raises(SerializationError, match=r"drivers\[0\]"):
            serializer.to_json(resource)

    def test_nested_resource_converted(self, serializer):
        owner = Resource("org.acme", "Person", "alice", {"name": "Alice"})
        resource = Resource("org.acme", "Car", "VIN-1", {"owner": owner, "meta": {"previous": [owner]}})

        obj = serializer.to_json(resource, convert_resources_to_relationships=True)

        assert obj["owner"] == {"$ref": "resource:org.acme.Person#alice"}
        assert obj["meta"] == {"previous": [{"$ref": "resource:org.acme.Person#alice"}]}

    def test_reserved_field_rejected(self, serializer):
        resource = Resource("org.acme", "Car", "VIN-1", {"$class": "other"})
        with pytest.raises(SerializationError):
            serializer.to_json(resource)

    def test_unsupported_value_rejected(self, serializer):
        resource = Resource("org.acme", "Car", "VIN-1", {"built": object()})
        with pytest.raises(SerializationError, match="built"):
            serializer.to_json(resource)

    def test_empty_identifier_rejected(self, serializer):
        with pytest.raises(SerializationError, match=r"\$identifier"):
            serializer.to_json(Resource("org.acme", "Car", "", {}))

    def test_reserved_nested_key_rejected(self, serializer):
        resource = Resource("org.acme", "Car", "VIN-1", {"meta": {"$ref": "resource:org.acme.Person#alice"}})
        with pytest.raises(SerializationError, match=r"meta\.\$ref"):
            serializer.to_json(resource)

    def test_non_resource_rejected(self, serializer):
        with pytest.raises(SerializationError):
            serializer.to_json({"$class": "org.acme.Car"})


class TestFromJson:
    """Tests for Serializer.from_json."""

    def test_decodes_relationships(self, serializer):
        resource = serializer.from_json({
            "$class": "org.acme.Car",
            "$identifier": "VIN-1",
            "owner": {"$ref": "resource:org.acme.Person#alice"},
            "tags": ["fast", {"$ref": "resource:org.acme.Tag#t1"}],
            "colour": "red",
        })

        assert resource.namespace == "org.acme"
        assert resource.type == "Car"
        assert resource.get_identifier() == "VIN-1"
        assert resource["owner"] == Relationship("org.acme", "Person", "alice")
        assert resource["tags"] == ["fast", Relationship("org.acme", "Tag", "t1")]
        assert resource["colour"] == "red"

    def test_round_trip_with_relationships(self, serializer):
        resource = Resource("org.acme", "Car", "VIN-1", {
            "owner": Relationship("org.acme", "Person", "alice"),
            "specs": {"seats": 4},
        })
        assert serializer.from_json(serializer.to_json(resource)) == resource

    @pytest.mark.parametrize("text", [
        "resource:org.acme.Person#alice",
        "resource: see manual",
        "$ref",
    ])
    def test_plain_strings_round_trip(self, serializer, text):
        resource = Resource("org.acme", "Car", "VIN-1", {"note": text, "history": [text]})

        restored = serializer.from_json(serializer.to_json(resource))

        assert restored == resource
        assert restored["note"] == text

    @pytest.mark.parametrize("value", [
        {"$ref": 5},
        {"$ref": "resource:org.acme.Person#alice", "extra": 1},
        {"$ref": "resource: see manual"},
    ])
    def test_rejects_malformed_relationship(self, serializer, value):
        with pytest.raises(SerializationError):
            serializer.from_json({"$class": "org.acme.Car", "$identifier": "VIN-1", "owner": value})

    @pytest.mark.parametrize("obj", [
        {"$identifier": "VIN-1"},
        {"$class": "org.acme.Car"},
        {"$class": "org.acme.Car", "$identifier": ""},
        {"$class": "Car", "$identifier": "VIN-1"},
        ["not", "an", "object"],
    ])
    def test_rejects_malformed(self, serializer, obj):
        with pytest.raises(SerializationError):
            serializer.from_json(obj)

    def test_serialization_error_is_value_error(self, serializer):
        with pytest.raises(ValueError):
            serializer.from_json({})
