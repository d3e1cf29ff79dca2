from __future__ import annotations

from .descriptor import NO_DEFAULT, Property
from .types import (
    bool_property,
    choice_property,
    float_property,
    int_property,
    list_property,
    parse_bool,
    string_property,
)

__all__ = [
    "NO_DEFAULT",
    "Property",
    "string_property",
    "int_property",
    "float_property",
    "bool_property",
    "list_property",
    "choice_property",
    "parse_bool",
]
