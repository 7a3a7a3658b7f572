# resreg/registry/__init__.py
"""
Resource registry.

A registry is a CRUD facade over a data collection. It stores Resources
in serialized form and publishes an event for every change.

Example:
    registry = Registry(InMemoryDataCollection("cars"), Serializer(),
                        "Asset", "org.acme.Car", "Cars")
    await registry.add(Resource("org.acme", "Car", "VIN-1", {"colour": "red"}))

    car = await registry.get("VIN-1")
    await registry.remove(ByResource(car))
"""

from .registry import Registry, ByIdentifier, ByResource, RemoveTarget, as_remove_target

__all__ = ["Registry", "ByIdentifier", "ByResource", "RemoveTarget", "as_remove_target"]
