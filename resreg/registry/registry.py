# resreg/registry/registry.py
"""
The resource registry.

A registry binds a data collection and a serializer to a named, typed
set of resources:
- Reads deserialize stored objects into Resources
- Writes serialize Resources and store them by identifier
- Every write publishes one lifecycle event per resource

Events are published before the store write is awaited, so listeners
see changes that are not yet confirmed and may still fail.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Union

from ..collection import DataCollection
from ..events import EventBus, EventSink, ResourceAdded, ResourceRemoved, ResourceUpdated
from ..resource import Resource
from ..serializer import Serializer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ByIdentifier:
    """Remove the resource stored under this identifier."""
    identifier: str

    def resolve(self) -> str:
        return self.identifier


@dataclass(frozen=True)
class ByResource:
    """Remove the stored copy of this resource."""
    resource: Resource

    def resolve(self) -> str:
        return self.resource.get_identifier()


RemoveTarget = Union[ByIdentifier, ByResource]


def as_remove_target(value: Union[RemoveTarget, Resource, str]) -> RemoveTarget:
    """Coerce a bare identifier or Resource into a RemoveTarget."""
    if isinstance(value, (ByIdentifier, ByResource)):
        return value
    if isinstance(value, Resource):
        return ByResource(value)
    if isinstance(value, str):
        return ByIdentifier(value)
    raise TypeError(f"Cannot remove {type(value).__name__}; expected a Resource or identifier")


class Registry:
    """
    A typed, named set of resources over a data collection.

    Attributes:
        type: Kind of registry (e.g. "Asset", "Participant")
        id: Registry ID, usually the fully qualified resource type
        name: Human readable name
        events: The EventBus used when no sink was given, else None
    """

    def __init__(
        self,
        data_collection: DataCollection,
        serializer: Serializer,
        type: str,
        id: str,
        name: str,
        sink: Optional[EventSink] = None,
    ):
        """
        Initialize the registry.

        Args:
            data_collection: Where serialized resources are stored
            serializer: Converts between resources and stored objects
            type: Kind of registry
            id: Registry ID
            name: Human readable name
            sink: Callable receiving each lifecycle event. Defaults to a
                private EventBus exposed as `events`.
        """
        self.data_collection = data_collection
        self.serializer = serializer
        self._type = type
        self._id = id
        self._name = name
        self.events: Optional[EventBus] = None
        if sink is None:
            self.events = EventBus()
            sink = self.events
        self._sink = sink

    @property
    def type(self) -> str:
        return self._type

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    async def get_all(self) -> List[Resource]:
        """Get every resource in this registry, in store order."""
        objects = await self.data_collection.get_all()
        return [self.serializer.from_json(obj) for obj in objects]

    async def get(self, id: str) -> Resource:
        """
        Get a resource by identifier.

        Raises whatever the data collection raises for a missing ID.
        """
        obj = await self.data_collection.get(id)
        return self.serializer.from_json(obj)

    async def exists(self, id: str) -> bool:
        """Check whether a resource is stored under id."""
        return await self.data_collection.exists(id)

    async def add(
        self,
        resource: Resource,
        convert_resources_to_relationships: bool = False,
    ) -> None:
        """
        Add a resource to this registry.

        Args:
            resource: The resource to add
            convert_resources_to_relationships: Permit resources in place
                of relationships
        """
        id = resource.get_identifier()
        obj = self.serializer.to_json(
            resource,
            convert_resources_to_relationships=convert_resources_to_relationships,
        )
        logger.debug(f"{self._type}:{self._id} add {id}")
        self._sink(ResourceAdded(registry=self, resource=resource))
        await self.data_collection.add(id, obj)

    async def add_all(
        self,
        resources: Iterable[Resource],
        convert_resources_to_relationships: bool = False,
    ) -> None:
        """
        Add resources one at a time.

        Stops at the first failure; resources added before it stay added.
        """
        for resource in resources:
            await self.add(
                resource,
                convert_resources_to_relationships=convert_resources_to_relationships,
            )

    async def update(
        self,
        resource: Resource,
        convert_resources_to_relationships: bool = False,
    ) -> None:
        """
        Replace a stored resource.

        The current stored value is fetched first and published as
        old_resource alongside the new one.
        """
        id = resource.get_identifier()
        obj = self.serializer.to_json(
            resource,
            convert_resources_to_relationships=convert_resources_to_relationships,
        )
        old_resource = await self.get(id)
        logger.debug(f"{self._type}:{self._id} update {id}")
        self._sink(ResourceUpdated(registry=self, old_resource=old_resource, new_resource=resource))
        await self.data_collection.update(id, obj)

    async def update_all(
        self,
        resources: Iterable[Resource],
        convert_resources_to_relationships: bool = False,
    ) -> None:
        """Update resources one at a time, stopping at the first failure."""
        for resource in resources:
            await self.update(
                resource,
                convert_resources_to_relationships=convert_resources_to_relationships,
            )

    async def remove(self, target: Union[RemoveTarget, Resource, str]) -> None:
        """
        Remove a resource.

        Args:
            target: ByIdentifier/ByResource, or a bare identifier or
                Resource which is wrapped accordingly
        """
        id = as_remove_target(target).resolve()
        logger.debug(f"{self._type}:{self._id} remove {id}")
        self._sink(ResourceRemoved(registry=self, resource_id=id))
        await self.data_collection.remove(id)

    async def remove_all(self, targets: Iterable[Union[RemoveTarget, Resource, str]]) -> None:
        """Remove resources one at a time, stopping at the first failure."""
        for target in targets:
            await self.remove(target)

    def to_json(self) -> Dict[str, Any]:
        """Describe this registry (not its contents)."""
        return {
            "type": self._type,
            "id": self._id,
            "name": self._name,
        }

    def __repr__(self) -> str:
        return f"Registry(type={self._type!r}, id={self._id!r}, name={self._name!r})"
