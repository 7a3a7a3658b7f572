# resreg/service.py
"""
Data services own named data collections.

A registry manager asks the data service for one collection per
registry; the service decides where that collection lives.
"""

import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict

from .collection import DataCollection, InMemoryDataCollection, JsonFileDataCollection
from .errors import AlreadyExistsError, NotFoundError

logger = logging.getLogger(__name__)


class DataService(ABC):
    """Base class for data services."""

    @abstractmethod
    async def create_collection(self, collection_id: str) -> DataCollection:
        """
        Create a new, empty collection.

        Raises:
            AlreadyExistsError: If the collection exists
        """

    @abstractmethod
    async def get_collection(self, collection_id: str) -> DataCollection:
        """
        Get an existing collection.

        Raises:
            NotFoundError: If the collection does not exist
        """

    @abstractmethod
    async def delete_collection(self, collection_id: str) -> None:
        """
        Delete a collection and everything in it.

        Raises:
            NotFoundError: If the collection does not exist
        """

    @abstractmethod
    async def exists_collection(self, collection_id: str) -> bool:
        pass

    async def ensure_collection(self, collection_id: str) -> DataCollection:
        """Get a collection, creating it first if needed."""
        if await self.exists_collection(collection_id):
            return await self.get_collection(collection_id)
        return await self.create_collection(collection_id)


class InMemoryDataService(DataService):
    """Keeps all collections in process memory."""

    def __init__(self):
        self._collections: Dict[str, InMemoryDataCollection] = {}

    async def create_collection(self, collection_id: str) -> DataCollection:
        if collection_id in self._collections:
            raise AlreadyExistsError("Collection", collection_id)
        collection = InMemoryDataCollection(collection_id)
        self._collections[collection_id] = collection
        logger.info(f"Created collection {collection_id}")
        return collection

    async def get_collection(self, collection_id: str) -> DataCollection:
        try:
            return self._collections[collection_id]
        except KeyError:
            raise NotFoundError("Collection", collection_id) from None

    async def delete_collection(self, collection_id: str) -> None:
        if collection_id not in self._collections:
            raise NotFoundError("Collection", collection_id)
        del self._collections[collection_id]
        logger.info(f"Deleted collection {collection_id}")

    async def exists_collection(self, collection_id: str) -> bool:
        return collection_id in self._collections


def _collection_filename(collection_id: str) -> str:
    # Collection IDs contain ':' and '$', which are unsafe on some filesystems
    return re.sub(r"[^A-Za-z0-9_.-]", lambda m: f"%{ord(m.group()):02X}", collection_id) + ".json"


class FileDataService(DataService):
    """
    Stores each collection as a JSON file under root_dir.

    Structure:
        root_dir/
            <escaped collection id>.json
    """

    def __init__(self, root_dir: Path | str):
        self.root_dir = Path(root_dir)
        self.root_dir.mkdir(parents=True, exist_ok=True)
        self._open: Dict[str, JsonFileDataCollection] = {}

    def _path(self, collection_id: str) -> Path:
        return self.root_dir / _collection_filename(collection_id)

    async def create_collection(self, collection_id: str) -> DataCollection:
        path = self._path(collection_id)
        if collection_id in self._open or path.exists():
            raise AlreadyExistsError("Collection", collection_id)
        collection = JsonFileDataCollection(collection_id, path)
        collection._save()
        self._open[collection_id] = collection
        logger.info(f"Created collection {collection_id} at {path}")
        return collection

    async def get_collection(self, collection_id: str) -> DataCollection:
        collection = self._open.get(collection_id)
        if collection is not None:
            return collection
        path = self._path(collection_id)
        if not path.exists():
            raise NotFoundError("Collection", collection_id)
        collection = JsonFileDataCollection(collection_id, path)
        self._open[collection_id] = collection
        return collection

    async def delete_collection(self, collection_id: str) -> None:
        collection = await self.get_collection(collection_id)
        collection.delete_file()
        del self._open[collection_id]
        logger.info(f"Deleted collection {collection_id}")

    async def exists_collection(self, collection_id: str) -> bool:
        return collection_id in self._open or self._path(collection_id).exists()
