from __future__ import annotations

import re
from typing import Any, List

__all__ = ["_redact_for_log", "_store_label", "_name_segments"]

_SECRET_SEGMENTS = frozenset(
    ("secret", "password", "passwd", "pwd", "token", "key", "apikey", "credential", "credentials")
)
_SEGMENT = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|\d+")


def _name_segments(name: str) -> List[str]:
    """``"db.apiKey_v2"`` -> ``["db", "api", "key", "v", "2"]``."""
    return [s.lower() for s in _SEGMENT.findall(name)]


def _redact_for_log(name: str, value: Any) -> str:
    if any(s in _SECRET_SEGMENTS for s in _name_segments(name)):
        return "***"
    try:
        return repr(value)
    except Exception:
        return "<unreprable>"


def _store_label(store: object) -> str:
    try:
        return repr(store)
    except Exception:
        return f"<{type(store).__name__}>"
