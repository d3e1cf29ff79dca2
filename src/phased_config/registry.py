from __future__ import annotations

import logging
import threading
from copy import deepcopy
from functools import partial
from types import TracebackType
from typing import Any, Callable, Dict, List, Optional, Tuple, Type, TypeVar, Union

from .bootstrap import discover_default_store
from .exceptions import (
    DescriptorExistsError,
    DescriptorMissingError,
    PropertyEmptyError,
    PropertyFormatError,
    UnsupportedWriteError,
    ValueExistsError,
)
from .hooks import EventBus, FailureMode, Listener, PhaseChanged, PropertyAssigned
from .phases import Phase, PhaseGuard
from .properties.descriptor import Property
from .stores.base import PropertyStore, WritablePropertyStore
from .utils import _redact_for_log, _store_label
from .validation import to_checked_storage, validate_all

logger = logging.getLogger("phased_config.registry")
logger.addHandler(logging.NullHandler())

S = TypeVar("S")
D = TypeVar("D")

PropOrName = Union[Property[Any, Any], str]
Bootstrap = Callable[[], Optional[PropertyStore]]


def _name_of(prop_or_name: PropOrName) -> str:
    if isinstance(prop_or_name, Property):
        return prop_or_name.name
    if isinstance(prop_or_name, str):
        return prop_or_name
    raise TypeError(f"Expected a Property or a property name, got {type(prop_or_name).__name__}")


class PropertyRegistry:
    """
    Phase-gated registry of typed properties resolved through a stack of stores.

    Lifecycle: properties are declared with register() during Phase.REGISTER,
    stores are pushed with add_store() during Phase.CONFIG (last pushed wins),
    and values are read with resolve() and written with assign() once in
    Phase.USE. Entering Phase.USE resolves every registered property once and
    re-raises the first failure; the phase is committed before that check runs.

    Every operation runs under one re-entrant lock, including store I/O.
    """

    def __init__(
        self,
        *,
        bootstrap: Optional[Bootstrap] = discover_default_store,
        resource_package: Optional[str] = None,
        listener_failure_mode: FailureMode = "log",
    ) -> None:
        self._lock = threading.RLock()
        self._phases = PhaseGuard()
        self._properties: Dict[str, Property[Any, Any]] = {}
        self._stores: List[PropertyStore] = []
        self._events = EventBus(listener_failure_mode)
        if bootstrap is discover_default_store:
            bootstrap = partial(discover_default_store, resource_package=resource_package)
        self._bootstrap = bootstrap

    @property
    def phase(self) -> Phase:
        with self._lock:
            return self._phases.current

    # declaration
    def register(self, prop: Property[S, D]) -> Property[S, D]:
        """
        Declare ``prop`` and return it; keep the returned object as the typed handle.
        """
        if not isinstance(prop, Property):
            raise TypeError(f"Expected a Property, got {type(prop).__name__}")
        with self._lock:
            self._phases.ensure(Phase.REGISTER, prop.name)
            if prop.name in self._properties:
                logger.error("Register failed: %r already registered", prop.name)
                raise DescriptorExistsError(prop.name)
            self._properties[prop.name] = prop
            logger.debug("Registered property %r (count=%d)", prop.name, len(self._properties))
        return prop

    def registered(self) -> Tuple[Property[Any, Any], ...]:
        with self._lock:
            return tuple(self._properties.values())

    def names(self) -> Tuple[str, ...]:
        with self._lock:
            return tuple(sorted(self._properties))

    def get_descriptor(self, name: str) -> Property[Any, Any]:
        with self._lock:
            try:
                return self._properties[name]
            except KeyError:
                logger.error("Unknown property %r", name)
                raise DescriptorMissingError(name) from None

    def _lookup(self, prop_or_name: PropOrName) -> Property[Any, Any]:
        name = _name_of(prop_or_name)
        prop = self._properties.get(name)
        if prop is None or (isinstance(prop_or_name, Property) and prop is not prop_or_name):
            logger.error("Property %r is not registered with this registry", name)
            raise DescriptorMissingError(name)
        return prop

    # stores
    def add_store(self, store: PropertyStore) -> None:
        """
        Initialize ``store`` and push it on top of the stack.
        """
        if not isinstance(store, PropertyStore):
            raise TypeError("store must provide init() and get()")
        with self._lock:
            self._phases.ensure(Phase.CONFIG)
            logger.info("Adding property store %s", _store_label(store))
            store.init()
            self._stores.append(store)

    def stores(self) -> Tuple[PropertyStore, ...]:
        """Snapshot of the stack, lowest priority first."""
        with self._lock:
            return tuple(self._stores)

    # phases
    def advance(self, target: Phase) -> None:
        with self._lock:
            target = Phase(target)
            previous = self._phases.advance(target)
            logger.info("Leaving phase %s, entering phase %s", previous, target)
            if target is Phase.CONFIG:
                self._run_bootstrap()
            elif target is Phase.USE:
                validate_all(self._properties.values(), self._resolve_unlocked)
            logger.debug("Transition to phase %s complete", target)
            self._events.publish(PhaseChanged(previous, target))

    def configure(self) -> None:
        self.advance(Phase.CONFIG)

    def use(self) -> None:
        self.advance(Phase.USE)

    def _run_bootstrap(self) -> None:
        if self._bootstrap is None:
            return
        store = self._bootstrap()
        if store is not None:
            self.add_store(store)

    # reads
    def resolve(self, prop_or_name: "Property[Any, D] | str") -> D:
        """
        Return the value from the highest-priority store holding one, else the default.
        """
        with self._lock:
            self._phases.ensure(Phase.USE, _name_of(prop_or_name))
            return self._resolve_unlocked(self._lookup(prop_or_name))

    def _resolve_unlocked(self, prop: Property[Any, D]) -> D:
        for store in reversed(self._stores):
            raw = store.get(prop)
            if raw is None:
                continue
            try:
                value = prop.from_storage(raw)
            except (TypeError, ValueError) as exc:
                logger.error("Cannot convert stored value for %r: %s", prop.name, exc)
                raise PropertyFormatError(prop.name, raw, _store_label(store)) from exc
            logger.debug(
                "Found value for %r in store %s, value is %s",
                prop.name,
                _store_label(store),
                _redact_for_log(prop.name, value),
            )
            return value
        if prop.has_default():
            logger.debug(
                "Using default for %r, value is %s",
                prop.name,
                _redact_for_log(prop.name, prop.default),
            )
            return deepcopy(prop.default)
        logger.error("No value and no default for property %r", prop.name)
        raise PropertyEmptyError(prop.name)

    # writes
    def assign(
        self, prop_or_name: "Property[Any, D] | str", value: D, overwrite_if_exists: bool = True
    ) -> None:
        """
        Write ``value`` to the top-of-stack store, which must be writable.

        With ``overwrite_if_exists=False`` the write is refused when that store
        already holds a value; lower stores are not consulted.
        """
        with self._lock:
            self._phases.ensure(Phase.USE, _name_of(prop_or_name))
            prop = self._lookup(prop_or_name)
            storage_value = to_checked_storage(prop, value)
            store = self._stores[-1] if self._stores else None
            if not isinstance(store, WritablePropertyStore):
                logger.error("Cannot set %r: top store %s is not writable", prop.name, store)
                raise UnsupportedWriteError(store)
            previous = store.get(prop)
            if not overwrite_if_exists and previous is not None:
                logger.error("Refusing to overwrite %r in %s", prop.name, _store_label(store))
                raise ValueExistsError(prop.name)
            store.put(prop, storage_value)
            logger.info(
                "Property %r set to %s in %s",
                prop.name,
                _redact_for_log(prop.name, value),
                _store_label(store),
            )
            self._events.publish(PropertyAssigned(prop, value, storage_value, previous, store))

    def subscribe(self, func: Listener, event_type: Optional[Type[Any]] = None) -> None:
        """
        Call ``func`` with each PropertyAssigned / PhaseChanged event, or only with
        events of ``event_type``. Listeners run under the registry lock, after the
        change is committed.
        """
        with self._lock:
            self._events.subscribe(func, event_type)

    # lifecycle
    def reset(self) -> None:
        """
        Drop all properties, stores and listeners and return to Phase.REGISTER.

        Only for sequential use (tests); do not call while other threads use the registry.
        """
        with self._lock:
            self._properties.clear()
            self._stores.clear()
            self._events.clear()
            self._phases.reset()
            logger.info("PropertyRegistry reset.")

    def __enter__(self) -> "PropertyRegistry":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        self.reset()

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, (str, Property)):
            return False
        with self._lock:
            prop = self._properties.get(_name_of(item))
            return prop is not None and (isinstance(item, str) or prop is item)

    def __getitem__(self, prop_or_name: PropOrName) -> Any:
        return self.resolve(prop_or_name)

    def __len__(self) -> int:
        with self._lock:
            return len(self._properties)

    def __repr__(self) -> str:
        with self._lock:
            return (
                f"<PropertyRegistry phase={self._phases.current} "
                f"properties={len(self._properties)} stores={len(self._stores)}>"
            )
