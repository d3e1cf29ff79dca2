from __future__ import annotations

import logging
import os
import re
from typing import Any, Mapping, Optional

from phased_config.properties.descriptor import Property

logger = logging.getLogger("phased_config.stores")
logger.addHandler(logging.NullHandler())

_SEPARATORS = re.compile(r"[.\-\s]+")


def env_key(prefix: str, name: str) -> str:
    """``("APP_", "db.host-name")`` -> ``"APP_DB_HOST_NAME"``."""
    return prefix + _SEPARATORS.sub("_", name.strip()).upper()


class EnvironmentStore:
    """Read-only store over prefixed environment variables.

    The environment is captured at ``init()``; later changes to the process
    environment are not seen.
    """

    def __init__(self, prefix: str = "", environ: Optional[Mapping[str, str]] = None) -> None:
        self._prefix = prefix
        self._source = environ
        self._values: Mapping[str, str] = {}

    def init(self) -> None:
        source = os.environ if self._source is None else self._source
        self._values = {k: v for k, v in source.items() if k.startswith(self._prefix)}
        logger.debug(
            "EnvironmentStore prefix=%r captured %d variables", self._prefix, len(self._values)
        )

    def get(self, prop: Property[Any, Any]) -> Optional[str]:
        return self._values.get(env_key(self._prefix, prop.name))

    def __repr__(self) -> str:
        return f"<EnvironmentStore prefix={self._prefix!r}>"
