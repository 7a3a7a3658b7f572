# resreg - Resource registries over pluggable data collections
#
# A registry is a CRUD facade that stores typed resources in a key-value
# data collection and publishes an event for every change.
#
# Core concepts:
# - Resource: An identifiable entity with a namespace, type and data
# - Serializer: Converts resources to stored JSON objects and back
# - DataCollection: Async key-value store of JSON objects
# - Registry: Binds a collection and serializer to a named resource set
# - RegistryManager: Creates registries, one collection per registry

from .errors import RegistryError, StoreError, NotFoundError, AlreadyExistsError, SerializationError
from .resource import Resource, Relationship
from .serializer import Serializer
from .collection import DataCollection, InMemoryDataCollection, JsonFileDataCollection
from .service import DataService, InMemoryDataService, FileDataService
from .events import EventBus, ResourceAdded, ResourceUpdated, ResourceRemoved, ALL_EVENTS
from .registry import Registry, ByIdentifier, ByResource, RemoveTarget
from .manager import RegistryManager

__all__ = [
    # Errors
    "RegistryError",
    "StoreError",
    "NotFoundError",
    "AlreadyExistsError",
    "SerializationError",
    # Model
    "Resource",
    "Relationship",
    "Serializer",
    # Storage
    "DataCollection",
    "InMemoryDataCollection",
    "JsonFileDataCollection",
    "DataService",
    "InMemoryDataService",
    "FileDataService",
    # Events
    "EventBus",
    "ResourceAdded",
    "ResourceUpdated",
    "ResourceRemoved",
    "ALL_EVENTS",
    # Registries
    "Registry",
    "ByIdentifier",
    "ByResource",
    "RemoveTarget",
    "RegistryManager",
]

__version__ = "0.1.0"
