# resreg/collection.py
"""
Key-value data collections backing registries.

A data collection stores JSON objects by string ID. The contract is
asynchronous so that implementations can sit on network stores; the
bundled implementations keep everything in memory, optionally mirrored
to a JSON file:

    collection_dir/
        <collection_id>.json    # {"version": "1.0", "objects": {...}}
"""

import copy
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

from .errors import AlreadyExistsError, NotFoundError

logger = logging.getLogger(__name__)


class DataCollection(ABC):
    """
    Base class for data collections.

    Subclasses implement storage of JSON objects keyed by ID. Objects
    returned from get()/get_all() must not alias stored state.
    """

    def __init__(self, collection_id: str):
        self.id = collection_id

    @abstractmethod
    async def get_all(self) -> List[Dict[str, Any]]:
        """Return every stored object, in store order."""

    @abstractmethod
    async def get(self, key: str) -> Dict[str, Any]:
        """
        Return the object stored under key.

        Raises:
            NotFoundError: If no object is stored under key
        """

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Return True if an object is stored under key."""

    @abstractmethod
    async def add(self, key: str, obj: Dict[str, Any]) -> None:
        """
        Store a new object.

        Raises:
            AlreadyExistsError: If an object is already stored under key
        """

    @abstractmethod
    async def update(self, key: str, obj: Dict[str, Any]) -> None:
        """
        Replace an existing object.

        Raises:
            NotFoundError: If no object is stored under key
        """

    @abstractmethod
    async def remove(self, key: str) -> None:
        """
        Delete an object.

        Raises:
            NotFoundError: If no object is stored under key
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"


class InMemoryDataCollection(DataCollection):
    """Dict-backed collection. Iteration follows insertion order."""

    def __init__(self, collection_id: str):
        super().__init__(collection_id)
        self._objects: Dict[str, Dict[str, Any]] = {}

    async def get_all(self) -> List[Dict[str, Any]]:
        return [copy.deepcopy(obj) for obj in self._objects.values()]

    async def get(self, key: str) -> Dict[str, Any]:
        if key not in self._objects:
            raise NotFoundError("Object", key)
        return copy.deepcopy(self._objects[key])

    async def exists(self, key: str) -> bool:
        return key in self._objects

    async def add(self, key: str, obj: Dict[str, Any]) -> None:
        if key in self._objects:
            raise AlreadyExistsError("Object", key)
        objects = dict(self._objects)
        objects[key] = copy.deepcopy(obj)
        self._commit(objects)

    async def update(self, key: str, obj: Dict[str, Any]) -> None:
        if key not in self._objects:
            raise NotFoundError("Object", key)
        objects = dict(self._objects)
        objects[key] = copy.deepcopy(obj)
        self._commit(objects)

    async def remove(self, key: str) -> None:
        if key not in self._objects:
            raise NotFoundError("Object", key)
        objects = dict(self._objects)
        del objects[key]
        self._commit(objects)

    def _commit(self, objects: Dict[str, Dict[str, Any]]):
        """Replace the stored mapping. Subclasses persist it first."""
        self._objects = objects

    def __len__(self) -> int:
        return len(self._objects)


class JsonFileDataCollection(InMemoryDataCollection):
    """
    Collection persisted to a single JSON file.

    The whole file is rewritten after each mutation. A mutation only
    becomes visible once the file has been written.
    """

    def __init__(self, collection_id: str, path: Path | str):
        super().__init__(collection_id)
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._load()

    def _load(self):
        """Load objects from disk."""
        if self.path.exists():
            with open(self.path) as f:
                data = json.load(f)
            self._objects = dict(data.get("objects", {}))
            logger.debug(f"Loaded {len(self._objects)} objects from {self.path}")

    def _save(self, objects: Optional[Dict[str, Dict[str, Any]]] = None):
        """Save objects (default: the current ones) to disk."""
        data = {
            "version": "1.0",
            "objects": self._objects if objects is None else objects,
        }
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w") as f:
            json.dump(data, f, indent=2)
        tmp_path.replace(self.path)

    def _commit(self, objects: Dict[str, Dict[str, Any]]):
        self._save(objects)
        self._objects = objects

    def delete_file(self):
        """Remove the backing file."""
        if self.path.exists():
            self.path.unlink()
