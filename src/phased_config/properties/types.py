"""Ready-made descriptors for values kept as text in property stores.

File and environment stores only ever hold strings, so each factory here
pairs a parser with a serializer and folds its keyword constraints
(``bounds``, ``min_length``/``max_length``, ``choices``, ``validator``) into
one predicate over the stored text.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple, Type, Union

from .descriptor import NO_DEFAULT, Property

__all__ = [
    "string_property",
    "int_property",
    "float_property",
    "bool_property",
    "list_property",
    "choice_property",
    "parse_bool",
]

Number = Union[int, float]

_TRUE = ("true", "yes", "on", "1")
_FALSE = ("false", "no", "off", "0")


def _require_text(raw: Any) -> str:
    if not isinstance(raw, str):
        raise TypeError(f"expected stored text, got {type(raw).__name__}")
    return raw


def _parse(kind: Callable[[str], Any]) -> Callable[[Any], Any]:
    def parse(raw: Any) -> Any:
        return kind(_require_text(raw).strip())

    return parse


def parse_bool(raw: str) -> bool:
    lowered = _require_text(raw).strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"invalid boolean: {raw!r}")


def _format_bool(value: bool) -> str:
    if not isinstance(value, bool):
        raise TypeError("expected bool")
    return "true" if value else "false"


def _expect(kind: Union[Type, Tuple[Type, ...]], label: str) -> Callable[[Any], str]:
    def serialize(value: Any) -> str:
        # bool is an int subclass but never a valid number here
        if isinstance(value, bool) or not isinstance(value, kind):
            raise TypeError(f"expected {label}, got {type(value).__name__}")
        return str(value)

    return serialize


def _split(raw: str) -> List[str]:
    return [p.strip() for p in _require_text(raw).split(",") if p.strip()]


def _join(value: Sequence[str]) -> str:
    if isinstance(value, str) or not all(isinstance(p, str) for p in value):
        raise TypeError("expected a sequence of str")
    if any("," in p for p in value):
        raise ValueError("list items may not contain ','")
    return ", ".join(value)


def _check_bounds(bounds: Optional[Tuple[Number, Number]]) -> None:
    if bounds is not None and not (isinstance(bounds, tuple) and len(bounds) == 2):
        raise ValueError("bounds must be a tuple of (min, max)")


def _constraint(
    parse: Callable[[str], Any],
    *checks: Optional[Callable[[Any], bool]],
) -> Callable[[str], bool]:
    active = [c for c in checks if c is not None]

    def constraint(raw: str) -> bool:
        if not isinstance(raw, str):
            return False
        try:
            value = parse(raw)
        except (TypeError, ValueError):
            return False
        return all(c(value) for c in active)

    return constraint


def _in_bounds(bounds: Optional[Tuple[Number, Number]]) -> Optional[Callable[[Any], bool]]:
    if bounds is None:
        return None
    lo, hi = bounds
    return lambda v: lo <= v <= hi


def _length_between(
    min_length: Optional[int], max_length: Optional[int]
) -> Optional[Callable[[Any], bool]]:
    if min_length is None and max_length is None:
        return None
    lo = min_length or 0
    return lambda v: lo <= len(v) and (max_length is None or len(v) <= max_length)


def string_property(
    name: str,
    default: Any = NO_DEFAULT,
    *,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
    validator: Optional[Callable[[str], bool]] = None,
    description: Optional[str] = None,
) -> Property[str, str]:
    return Property(
        name=name,
        to_storage=_expect(str, "str"),
        from_storage=_require_text,
        default=default,
        constraint=_constraint(_require_text, _length_between(min_length, max_length), validator),
        description=description,
    )


def int_property(
    name: str,
    default: Any = NO_DEFAULT,
    *,
    bounds: Optional[Tuple[int, int]] = None,
    validator: Optional[Callable[[int], bool]] = None,
    description: Optional[str] = None,
) -> Property[str, int]:
    _check_bounds(bounds)
    return Property(
        name=name,
        to_storage=_expect(int, "int"),
        from_storage=_parse(int),
        default=default,
        constraint=_constraint(_parse(int), _in_bounds(bounds), validator),
        description=description,
    )


def float_property(
    name: str,
    default: Any = NO_DEFAULT,
    *,
    bounds: Optional[Tuple[Number, Number]] = None,
    validator: Optional[Callable[[float], bool]] = None,
    description: Optional[str] = None,
) -> Property[str, float]:
    _check_bounds(bounds)
    return Property(
        name=name,
        to_storage=_expect((int, float), "float"),
        from_storage=_parse(float),
        default=default,
        constraint=_constraint(_parse(float), _in_bounds(bounds), validator),
        description=description,
    )


def bool_property(
    name: str,
    default: Any = NO_DEFAULT,
    *,
    description: Optional[str] = None,
) -> Property[str, bool]:
    return Property(
        name=name,
        to_storage=_format_bool,
        from_storage=parse_bool,
        default=default,
        constraint=_constraint(parse_bool),
        description=description,
    )


def list_property(
    name: str,
    default: Any = NO_DEFAULT,
    *,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
    validator: Optional[Callable[[List[str]], bool]] = None,
    description: Optional[str] = None,
) -> Property[str, List[str]]:
    """Comma separated list of strings, e.g. ``hosts = a.example, b.example``."""
    return Property(
        name=name,
        to_storage=_join,
        from_storage=_split,
        default=default,
        constraint=_constraint(_split, _length_between(min_length, max_length), validator),
        description=description,
    )


def choice_property(
    name: str,
    choices: Iterable[str],
    default: Any = NO_DEFAULT,
    *,
    description: Optional[str] = None,
) -> Property[str, str]:
    allowed = tuple(choices)
    if not allowed:
        raise ValueError("choices must not be empty")
    return Property(
        name=name,
        to_storage=_expect(str, "str"),
        from_storage=_require_text,
        default=default,
        constraint=_constraint(_require_text, lambda v: v in allowed),
        description=description,
    )
