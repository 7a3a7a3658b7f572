# resreg/config.py
"""
Configuration loading.

Configuration is read from YAML. Precedence:

1. Environment variable ``RESREG_CONFIG`` pointing to a YAML file.
2. ``resreg.yaml`` in the current working directory.
3. Built-in defaults (in-memory storage, no default registries).

Example file:

    storage:
      backend: file
      path: ./data
    logging:
      level: DEBUG
    registries:
      - type: Asset
        id: org.acme.Vehicle
        name: Vehicles
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .service import DataService, FileDataService, InMemoryDataService

__all__ = [
    "Config",
    "RegistryConfigEntry",
    "StorageConfig",
    "get_config",
    "load_config",
    "parse_config",
    "reset_config",
]

ENV_VAR = "RESREG_CONFIG"
CWD_FILENAME = "resreg.yaml"
BACKENDS = ("memory", "file")


@dataclass
class StorageConfig:
    backend: str = "memory"
    path: Optional[Path] = None

    def create_data_service(self) -> DataService:
        if self.backend == "file":
            return FileDataService(self.path)
        return InMemoryDataService()


@dataclass
class RegistryConfigEntry:
    type: str
    id: str
    name: str


@dataclass
class Config:
    storage: StorageConfig = field(default_factory=StorageConfig)
    log_level: int = logging.WARNING
    registries: List[RegistryConfigEntry] = field(default_factory=list)


_config: Optional[Config] = None


def _resolve_config_path() -> Optional[Path]:
    env_path = os.environ.get(ENV_VAR)
    if env_path:
        candidate = Path(env_path).expanduser()
        if candidate.is_file():
            return candidate

    cwd_file = Path.cwd() / CWD_FILENAME
    if cwd_file.is_file():
        return cwd_file
    return None


def _parse_storage(node: Any) -> StorageConfig:
    if not isinstance(node, dict):
        raise ValueError("'storage' section must be a mapping")
    backend = str(node.get("backend", "memory")).strip().lower()
    if backend not in BACKENDS:
        raise ValueError(f"Unknown storage backend '{backend}'. Expected one of: {', '.join(BACKENDS)}")
    path = node.get("path")
    if backend == "file" and not path:
        raise ValueError("File storage requires 'storage.path'")
    return StorageConfig(backend=backend, path=Path(path).expanduser() if path else None)


def _parse_log_level(node: Any) -> int:
    if not isinstance(node, dict):
        raise ValueError("'logging' section must be a mapping")
    level = node.get("level", "WARNING")
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level '{level}'")
    return value


def _parse_registry_entry(raw: Any) -> RegistryConfigEntry:
    if not isinstance(raw, dict):
        raise ValueError("Each registry definition must be a mapping")
    values = {}
    for key in ("type", "id"):
        value = str(raw.get(key, "")).strip()
        if not value:
            raise ValueError(f"Registry entry requires a non-empty '{key}'")
        values[key] = value
    name = str(raw.get("name") or values["id"]).strip()
    return RegistryConfigEntry(type=values["type"], id=values["id"], name=name)


def parse_config(data: Dict[str, Any]) -> Config:
    """Build a Config from a parsed YAML mapping."""
    if not isinstance(data, dict):
        raise ValueError("Configuration must be a mapping")

    storage = _parse_storage(data.get("storage", {}))
    log_level = _parse_log_level(data.get("logging", {}))

    raw_entries = data.get("registries", [])
    if raw_entries and not isinstance(raw_entries, list):
        raise ValueError("'registries' must be a list of mappings")
    registries = [_parse_registry_entry(item) for item in raw_entries or []]

    return Config(storage=storage, log_level=log_level, registries=registries)


def load_config(path: Optional[Path | str] = None) -> Config:
    """Load configuration from path, or from the default locations."""
    path = Path(path) if path else _resolve_config_path()
    if path is None:
        return Config()
    with path.open("r", encoding="utf-8") as fh:
        return parse_config(yaml.safe_load(fh) or {})


def get_config() -> Config:
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset cached configuration (intended for tests)."""
    global _config
    _config = None
