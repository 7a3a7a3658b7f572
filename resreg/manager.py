# resreg/manager.py
"""
Registry manager: creates and tracks registries.

Registry descriptors ({type, id, name}) are kept in the system
collection "$sysregistries", keyed "<type>:<id>". Each registry's
resources live in their own collection with the same key.
"""

import logging
from typing import Dict, Iterable, List, Optional

from .config import RegistryConfigEntry
from .events import EventSink
from .registry import Registry
from .serializer import Serializer
from .service import DataService

logger = logging.getLogger(__name__)

SYSTEM_COLLECTION = "$sysregistries"


def registry_key(type: str, id: str) -> str:
    return f"{type}:{id}"


class RegistryManager:
    """
    Factory and directory of registries.

    All registries created by one manager share its serializer and, when
    given, its sink. Without a sink each registry gets its own EventBus.
    Each registry is opened once and the same instance is returned by
    every later lookup, so listeners on its EventBus see all writes.
    """

    def __init__(
        self,
        data_service: DataService,
        serializer: Optional[Serializer] = None,
        sink: Optional[EventSink] = None,
    ):
        self.data_service = data_service
        self.serializer = serializer or Serializer()
        self.sink = sink
        self._registries: Dict[str, Registry] = {}

    async def _system_collection(self):
        return await self.data_service.ensure_collection(SYSTEM_COLLECTION)

    async def _open(self, type: str, id: str, name: str) -> Registry:
        key = registry_key(type, id)
        registry = self._registries.get(key)
        if registry is None:
            collection = await self.data_service.get_collection(key)
            registry = Registry(collection, self.serializer, type, id, name, sink=self.sink)
            self._registries[key] = registry
        return registry

    async def get_all(self, type: str) -> List[Registry]:
        """Get every registry of the given type."""
        system = await self._system_collection()
        registries = []
        for descriptor in await system.get_all():
            if descriptor["type"] == type:
                registries.append(await self._open(descriptor["type"], descriptor["id"], descriptor["name"]))
        return registries

    async def get(self, type: str, id: str) -> Registry:
        """
        Get a registry.

        Raises:
            NotFoundError: If the registry does not exist
        """
        system = await self._system_collection()
        descriptor = await system.get(registry_key(type, id))
        return await self._open(descriptor["type"], descriptor["id"], descriptor["name"])

    async def exists(self, type: str, id: str) -> bool:
        system = await self._system_collection()
        return await system.exists(registry_key(type, id))

    async def add(self, type: str, id: str, name: str) -> Registry:
        """
        Create a registry.

        Raises:
            AlreadyExistsError: If the registry already exists
        """
        key = registry_key(type, id)
        system = await self._system_collection()
        collection = await self.data_service.create_collection(key)
        registry = Registry(collection, self.serializer, type, id, name, sink=self.sink)
        await system.add(key, registry.to_json())
        self._registries[key] = registry
        logger.debug(f"Added registry {key} ({name})")
        return registry

    async def ensure(self, type: str, id: str, name: str) -> Registry:
        """Get a registry, creating it first if needed."""
        if await self.exists(type, id):
            return await self.get(type, id)
        return await self.add(type, id, name)

    async def remove(self, type: str, id: str) -> None:
        """
        Delete a registry and its contents.

        Raises:
            NotFoundError: If the registry does not exist
        """
        key = registry_key(type, id)
        system = await self._system_collection()
        await system.remove(key)
        self._registries.pop(key, None)
        await self.data_service.delete_collection(key)
        logger.debug(f"Removed registry {key}")

    async def create_defaults(self, entries: Iterable[RegistryConfigEntry]) -> List[Registry]:
        """Ensure every configured registry exists."""
        return [await self.ensure(entry.type, entry.id, entry.name) for entry in entries]
