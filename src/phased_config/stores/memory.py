from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from phased_config.properties.descriptor import Property

logger = logging.getLogger("phased_config.stores")
logger.addHandler(logging.NullHandler())


class MemoryStore:
    """Writable store backed by a plain dict, keyed by property name."""

    def __init__(self, values: Optional[Mapping[str, Any]] = None, label: str = "memory") -> None:
        self._values: Dict[str, Any] = dict(values or {})
        self._label = label
        self._initialized = False

    def init(self) -> None:
        self._initialized = True
        logger.debug("MemoryStore %r initialized with %d values", self._label, len(self._values))

    @property
    def initialized(self) -> bool:
        return self._initialized

    def get(self, prop: Property[Any, Any]) -> Optional[Any]:
        return self._values.get(prop.name)

    def put(self, prop: Property[Any, Any], value: Any) -> None:
        self._values[prop.name] = value

    def snapshot(self) -> MappingProxyType[str, Any]:
        return MappingProxyType(dict(self._values))

    def __repr__(self) -> str:
        return f"<MemoryStore {self._label!r} values={len(self._values)}>"
