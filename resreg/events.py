# resreg/events.py
"""
Registry lifecycle notifications.

Registries publish to a sink: any callable taking one event. EventBus is
the default sink and fans events out to subscribed listeners.

Usage:
    bus = EventBus()

    @bus.listener(ResourceAdded.event_name)
    def on_added(event):
        print(event.resource)

    registry = Registry(collection, serializer, "Asset", "org.acme.Car", "Cars", sink=bus)
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Dict, List, Union

from .resource import Resource

if TYPE_CHECKING:
    from .registry import Registry

logger = logging.getLogger(__name__)

ALL_EVENTS = "*"


@dataclass(frozen=True)
class ResourceAdded:
    """A resource is being added to a registry."""
    event_name: ClassVar[str] = "resourceadded"
    registry: "Registry"
    resource: Resource


@dataclass(frozen=True)
class ResourceUpdated:
    """A resource in a registry is being replaced."""
    event_name: ClassVar[str] = "resourceupdated"
    registry: "Registry"
    old_resource: Resource
    new_resource: Resource


@dataclass(frozen=True)
class ResourceRemoved:
    """A resource is being removed from a registry."""
    event_name: ClassVar[str] = "resourceremoved"
    registry: "Registry"
    resource_id: str


RegistryEvent = Union[ResourceAdded, ResourceUpdated, ResourceRemoved]
EventSink = Callable[[RegistryEvent], Any]


class EventBus:
    """
    Synchronous publish/subscribe dispatcher.

    Listeners run in subscription order inside the emitting call.
    Exceptions raised by a listener propagate to the emitter.
    """

    def __init__(self):
        self._listeners: Dict[str, List[EventSink]] = {}

    def subscribe(self, event_name: str, listener: EventSink) -> None:
        """Subscribe to one event name, or ALL_EVENTS."""
        self._listeners.setdefault(event_name, []).append(listener)

    def unsubscribe(self, event_name: str, listener: EventSink) -> bool:
        """Remove a listener. Returns False if it was not subscribed."""
        listeners = self._listeners.get(event_name, [])
        if listener not in listeners:
            return False
        listeners.remove(listener)
        return True

    def listener(self, event_name: str) -> Callable:
        """Decorator form of subscribe()."""
        def decorator(fn: EventSink) -> EventSink:
            self.subscribe(event_name, fn)
            return fn
        return decorator

    def listener_count(self, event_name: str) -> int:
        return len(self._listeners.get(event_name, []))

    def __call__(self, event: RegistryEvent) -> None:
        listeners = self._listeners.get(event.event_name, []) + self._listeners.get(ALL_EVENTS, [])
        logger.debug(f"Dispatching {event.event_name} to {len(listeners)} listener(s)")
        for listener in listeners:
            listener(event)
