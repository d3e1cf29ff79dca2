from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

logger = logging.getLogger("phased_config.properties")
logger.addHandler(logging.NullHandler())

S = TypeVar("S")
D = TypeVar("D")


class _NoDefault:
    _instance: Optional["_NoDefault"] = None

    def __new__(cls) -> "_NoDefault":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_DEFAULT"

    def __bool__(self) -> bool:
        return False


NO_DEFAULT: Any = _NoDefault()


def _accept_all(_: Any) -> bool:
    return True


@dataclass(frozen=True, eq=False)
class Property(Generic[S, D]):
    """Definition of one named configuration property.

    ``S`` is the storage format a store holds, ``D`` the value callers see.
    ``to_storage``/``from_storage`` convert between the two and ``constraint``
    is evaluated on storage-format values before anything is written.
    Descriptors compare by identity: the object returned from
    ``PropertyRegistry.register`` is the handle callers keep.
    """

    name: str
    to_storage: Callable[[D], S]
    from_storage: Callable[[S], D]
    default: Any = NO_DEFAULT
    constraint: Callable[[S], bool] = field(default=_accept_all)
    description: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("Property name must be a non-empty string")
        for attr in ("to_storage", "from_storage", "constraint"):
            if not callable(getattr(self, attr)):
                raise TypeError(f"Property {self.name!r}: {attr} must be callable")

    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT

    def check(self, storage_value: S) -> bool:
        """Evaluate the constraint; a constraint that raises counts as violated."""
        try:
            return bool(self.constraint(storage_value))
        except Exception as exc:
            logger.debug("Constraint for %r raised on %r: %s", self.name, storage_value, exc)
            return False

    def to_mapping(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"name": self.name}
        if self.has_default():
            d["default"] = self.default
        if self.description:
            d["description"] = self.description
        return d

    def __repr__(self) -> str:
        return f"<Property {self.name!r} default={self.default!r}>"
