from __future__ import annotations

import logging
from typing import Any, Callable, Iterable

from .exceptions import ConstraintViolationError
from .properties.descriptor import Property

logger = logging.getLogger("phased_config.validation")
logger.addHandler(logging.NullHandler())


def to_checked_storage(prop: Property[Any, Any], value: Any) -> Any:
    """Convert ``value`` to storage format and enforce the constraint."""
    try:
        storage_value = prop.to_storage(value)
    except (TypeError, ValueError) as exc:
        logger.error("Cannot convert %r for property %r: %s", value, prop.name, exc)
        raise ConstraintViolationError(prop.name, value) from exc
    if not prop.check(storage_value):
        logger.error("Constraint violated for property %r", prop.name)
        raise ConstraintViolationError(prop.name, storage_value)
    return storage_value


def validate_all(
    props: Iterable[Property[Any, Any]], resolve: Callable[[Property[Any, Any]], Any]
) -> None:
    """Resolve every property once, re-raising the first failure unchanged."""
    for prop in sorted(props, key=lambda p: p.name):
        try:
            resolve(prop)
        except Exception as exc:
            logger.critical(
                "Not all properties have a configured value or a default: %r failed (%s). "
                "Check the configuration for typos.",
                prop.name,
                exc,
            )
            raise
