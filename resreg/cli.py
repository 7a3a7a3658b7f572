#!/usr/bin/env python3
"""
resreg CLI

Command-line access to registries held by the configured data service:
  resreg registries - List registries of a type
  resreg create-registry - Create a registry
  resreg list - List resources in a registry
  resreg get - Show one resource
  resreg add / update - Store resources from a JSON file
  resreg remove - Remove resources by identifier

Usage:
  resreg [--config FILE] [-v] registries <type>
  resreg create-registry <type> <id> <name>
  resreg list <type> <id>
  resreg get <type> <id> <resource-id>
  resreg add <type> <id> <file.json>
  resreg update <type> <id> <file.json>
  resreg remove <type> <id> <resource-id>...

Resource files hold one serialized resource or a list of them:
  {"$class": "org.acme.Vehicle", "$identifier": "VIN-1", "colour": "red"}
Relationships are written as {"$ref": "resource:org.acme.Person#alice"}.
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from .config import Config, load_config
from .errors import RegistryError, SerializationError
from .log import configure_logging
from .manager import RegistryManager
from .resource import Resource


def read_resources(path: Path, manager: RegistryManager) -> List[Resource]:
    """Load serialized resources from a JSON file."""
    with open(path) as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise SerializationError(
            f"{path}: expected a resource object or a list of them, got {type(data).__name__}"
        )
    return [manager.serializer.from_json(obj) for obj in data]


def print_json(data) -> None:
    print(json.dumps(data, indent=2))


async def cmd_registries(args, manager: RegistryManager):
    """List registries of a type."""
    registries = await manager.get_all(args.type)
    print_json([registry.to_json() for registry in registries])


async def cmd_create_registry(args, manager: RegistryManager):
    """Create a registry."""
    registry = await manager.add(args.type, args.id, args.name)
    print_json(registry.to_json())


async def cmd_list(args, manager: RegistryManager):
    """List resources in a registry."""
    registry = await manager.get(args.type, args.id)
    resources = await registry.get_all()
    print_json([manager.serializer.to_json(resource) for resource in resources])


async def cmd_get(args, manager: RegistryManager):
    """Show one resource."""
    registry = await manager.get(args.type, args.id)
    resource = await registry.get(args.resource_id)
    print_json(manager.serializer.to_json(resource))


async def cmd_add(args, manager: RegistryManager):
    """Add resources from a file."""
    registry = await manager.get(args.type, args.id)
    resources = read_resources(Path(args.file), manager)
    await registry.add_all(resources)
    print(f"Added {len(resources)} resource(s) to {args.type}:{args.id}")


async def cmd_update(args, manager: RegistryManager):
    """Update resources from a file."""
    registry = await manager.get(args.type, args.id)
    resources = read_resources(Path(args.file), manager)
    await registry.update_all(resources)
    print(f"Updated {len(resources)} resource(s) in {args.type}:{args.id}")


async def cmd_remove(args, manager: RegistryManager):
    """Remove resources by identifier."""
    registry = await manager.get(args.type, args.id)
    await registry.remove_all(args.resource_id)
    print(f"Removed {len(args.resource_id)} resource(s) from {args.type}:{args.id}")


COMMANDS = {
    "registries": cmd_registries,
    "create-registry": cmd_create_registry,
    "list": cmd_list,
    "get": cmd_get,
    "add": cmd_add,
    "update": cmd_update,
    "remove": cmd_remove,
}


async def run(args, config: Config) -> None:
    manager = RegistryManager(config.storage.create_data_service())
    await manager.create_defaults(config.registries)
    await COMMANDS[args.command](args, manager)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resreg",
        description="resreg - Resource registries over pluggable data collections",
    )
    parser.add_argument("--config", help="Configuration YAML file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    registries_parser = subparsers.add_parser("registries", help="List registries of a type")
    registries_parser.add_argument("type", help="Registry type (e.g. Asset)")

    create_parser = subparsers.add_parser("create-registry", help="Create a registry")
    create_parser.add_argument("type", help="Registry type")
    create_parser.add_argument("id", help="Registry ID")
    create_parser.add_argument("name", help="Registry name")

    list_parser = subparsers.add_parser("list", help="List resources in a registry")
    list_parser.add_argument("type", help="Registry type")
    list_parser.add_argument("id", help="Registry ID")

    get_parser = subparsers.add_parser("get", help="Show one resource")
    get_parser.add_argument("type", help="Registry type")
    get_parser.add_argument("id", help="Registry ID")
    get_parser.add_argument("resource_id", help="Resource identifier")

    for command, help_text in (("add", "Add resources from a JSON file"),
                               ("update", "Update resources from a JSON file")):
        write_parser = subparsers.add_parser(command, help=help_text)
        write_parser.add_argument("type", help="Registry type")
        write_parser.add_argument("id", help="Registry ID")
        write_parser.add_argument("file", help="JSON file with one resource or a list")

    remove_parser = subparsers.add_parser("remove", help="Remove resources")
    remove_parser.add_argument("type", help="Registry type")
    remove_parser.add_argument("id", help="Registry ID")
    remove_parser.add_argument("resource_id", nargs="+", help="Resource identifier(s)")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        config = load_config(args.config)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return 1

    configure_logging(logging.DEBUG if args.verbose else config.log_level)

    try:
        asyncio.run(run(args, config))
    except (RegistryError, OSError, json.JSONDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
