"""
phased_config: a phase-gated registry of typed configuration properties.

- Properties are declared once, by name, before any store is consulted.
- Stores are stacked in the config phase; the most recently added wins.
- Entering the use phase proves every property resolves (value or default).
- Writes go only to the top store and are checked against the property's constraint.
"""

from __future__ import annotations

from phased_config.bootstrap import discover_default_store
from phased_config.exceptions import (
    ConfigError,
    ConstraintViolationError,
    DescriptorExistsError,
    DescriptorMissingError,
    PhaseError,
    PhaseOrderError,
    PropertyEmptyError,
    PropertyError,
    PropertyFormatError,
    StoreInitError,
    StoreWriteError,
    UnsupportedWriteError,
    ValueExistsError,
)
from phased_config.hooks import PhaseChanged, PropertyAssigned
from phased_config.phases import Phase
from phased_config.properties import (
    NO_DEFAULT,
    Property,
    bool_property,
    choice_property,
    float_property,
    int_property,
    list_property,
    string_property,
)
from phased_config.registry import PropertyRegistry
from phased_config.stores import (
    EnvironmentStore,
    FileLocation,
    MemoryStore,
    PropertiesFileStore,
    PropertyStore,
    WritablePropertiesFileStore,
    WritablePropertyStore,
)

__all__ = [
    "PropertyRegistry",
    "Phase",
    "PhaseChanged",
    "PropertyAssigned",
    "Property",
    "NO_DEFAULT",
    "string_property",
    "int_property",
    "float_property",
    "bool_property",
    "list_property",
    "choice_property",
    "PropertyStore",
    "WritablePropertyStore",
    "MemoryStore",
    "EnvironmentStore",
    "PropertiesFileStore",
    "WritablePropertiesFileStore",
    "FileLocation",
    "discover_default_store",
    "ConfigError",
    "PropertyError",
    "DescriptorExistsError",
    "DescriptorMissingError",
    "PropertyEmptyError",
    "PropertyFormatError",
    "ConstraintViolationError",
    "ValueExistsError",
    "PhaseError",
    "PhaseOrderError",
    "UnsupportedWriteError",
    "StoreInitError",
    "StoreWriteError",
]
