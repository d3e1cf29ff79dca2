"""Notifications published by a registry after a state change has been committed."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Literal, Optional, Tuple, Type, Union

from .phases import Phase
from .properties.descriptor import Property
from .stores.base import PropertyStore

logger = logging.getLogger("phased_config.hooks")
logger.addHandler(logging.NullHandler())


@dataclass(frozen=True)
class PropertyAssigned:
    prop: Property[Any, Any]
    value: Any
    storage_value: Any
    # storage value the target store held before the write, None if it held none
    previous: Optional[Any]
    store: PropertyStore


@dataclass(frozen=True)
class PhaseChanged:
    previous: Phase
    current: Phase


RegistryEvent = Union[PropertyAssigned, PhaseChanged]
Listener = Callable[[RegistryEvent], None]
FailureMode = Literal["ignore", "log", "raise"]


class EventBus:
    """Ordered listeners, optionally filtered by event class.

    ``failure_mode`` decides what a raising listener does: ``"raise"``
    propagates to the caller of the registry operation, ``"log"`` logs at
    ERROR and ``"ignore"`` logs at DEBUG. Later listeners still run unless
    the mode is ``"raise"``.
    """

    def __init__(self, failure_mode: FailureMode = "log") -> None:
        if failure_mode not in ("ignore", "log", "raise"):
            raise ValueError("failure_mode must be one of 'ignore', 'log', 'raise'")
        self._failure_mode = failure_mode
        self._listeners: List[Tuple[Listener, Optional[Type[Any]]]] = []

    def subscribe(self, func: Listener, event_type: Optional[Type[Any]] = None) -> None:
        if not callable(func):
            raise TypeError("Listener must be callable")
        if event_type is not None and event_type not in (PropertyAssigned, PhaseChanged):
            raise ValueError(f"Unknown event type {event_type!r}")
        self._listeners.append((func, event_type))

    def publish(self, event: RegistryEvent) -> None:
        for func, event_type in self._listeners:
            if event_type is not None and not isinstance(event, event_type):
                continue
            try:
                func(event)
            except Exception as exc:
                if self._failure_mode == "raise":
                    raise
                elif self._failure_mode == "log":
                    logger.error("Listener %r failed on %s: %s", func, type(event).__name__, exc)
                else:
                    logger.debug("Listener %r failed but ignored: %s", func, exc)

    def clear(self) -> None:
        self._listeners.clear()

    def __len__(self) -> int:
        return len(self._listeners)
