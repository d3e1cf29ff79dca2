from __future__ import annotations

from .base import PropertyStore, WritablePropertyStore
from .env import EnvironmentStore
from .file import (
    FileLocation,
    PropertiesFileStore,
    WritablePropertiesFileStore,
    format_properties,
    parse_properties,
)
from .memory import MemoryStore

__all__ = [
    "PropertyStore",
    "WritablePropertyStore",
    "MemoryStore",
    "EnvironmentStore",
    "PropertiesFileStore",
    "WritablePropertiesFileStore",
    "format_properties",
    "FileLocation",
    "parse_properties",
]
