from __future__ import annotations

from typing import Any, Optional


class ConfigError(Exception):
    """Base config exception."""


class PropertyError(ConfigError):
    """Base for errors tied to a single named property."""

    def __init__(self, name: str, message: Optional[str] = None) -> None:
        self.name = name
        super().__init__(message or f"{self.__class__.__name__}: {name}")


class DescriptorExistsError(PropertyError):
    """Raised when a property name is registered twice."""

    def __init__(self, name: str) -> None:
        super().__init__(name, f"Property {name!r} is already registered.")


class DescriptorMissingError(PropertyError):
    """Raised when a property is used without being registered."""

    def __init__(self, name: str) -> None:
        super().__init__(name, f"Property {name!r} is not registered.")


class PropertyEmptyError(PropertyError):
    """Raised when no store holds a value and the property has no default."""

    def __init__(self, name: str) -> None:
        super().__init__(
            name, f"Property {name!r} has no value in any store and no default."
        )


class PropertyFormatError(PropertyError):
    """Raised when a stored value cannot be converted to the property's value type."""

    def __init__(self, name: str, raw: Any, store: str) -> None:
        self.raw = raw
        self.store = store
        super().__init__(name, f"Property {name!r} holds unparseable value {raw!r} in {store}.")


class ConstraintViolationError(PropertyError):
    """Raised when a storage-format value fails the property's constraint."""

    def __init__(self, name: str, value: Any = None) -> None:
        self.value = value
        super().__init__(name, f"Value {value!r} violates the constraint of property {name!r}.")


class ValueExistsError(PropertyError):
    """Raised on a non-overwriting write when the target store already holds a value."""

    def __init__(self, name: str) -> None:
        super().__init__(name, f"Property {name!r} already has a value in the target store.")


class PhaseError(ConfigError):
    """Raised when an operation is attempted in the wrong lifecycle phase."""

    def __init__(self, required: Any, current: Any, name: Optional[str] = None) -> None:
        self.required = required
        self.current = current
        self.name = name
        msg = f"Operation requires phase {required!s} but current phase is {current!s}"
        if name is not None:
            msg += f" (property: {name})"
        super().__init__(msg)


class PhaseOrderError(PhaseError):
    """Raised when a phase transition does not move strictly forward."""

    def __init__(self, target: Any, current: Any) -> None:
        self.required = target
        self.current = current
        self.name = None
        ConfigError.__init__(
            self, f"Cannot transition from phase {current!s} to phase {target!s}"
        )


class UnsupportedWriteError(ConfigError):
    """Raised when the top-of-stack store cannot accept writes."""

    def __init__(self, store: Optional[object]) -> None:
        self.store = store
        label = type(store).__name__ if store is not None else "None"
        super().__init__(f"Property store {label} does not support setting property values.")


class StoreInitError(ConfigError):
    """Raised by a store that fails its one-time initialization."""


class StoreWriteError(ConfigError):
    """Raised by a writable store that fails to persist a value."""
