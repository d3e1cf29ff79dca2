"""Default store discovery, run when a registry enters the config phase.

Lookup order:

1. ``PHASED_CONFIG_FILE`` in the environment names a local properties file.
2. Otherwise ``phased-config.properties`` shipped inside ``resource_package``
   is loaded as a packaged resource. Without an explicit package the package
   of the running ``__main__`` module is searched.

Nothing found means no store is pushed.
"""

from __future__ import annotations

import logging
import os
import sys
from importlib import resources
from typing import Mapping, Optional

from .stores.file import FileLocation, PropertiesFileStore

logger = logging.getLogger("phased_config.bootstrap")
logger.addHandler(logging.NullHandler())

ENV_VAR = "PHASED_CONFIG_FILE"
DEFAULT_RESOURCE = "phased-config.properties"


def main_package() -> Optional[str]:
    """Package of the ``__main__`` module, None for plain scripts."""
    main = sys.modules.get("__main__")
    package = getattr(main, "__package__", None)
    return package or None


def _resource_exists(package: str, name: str) -> bool:
    try:
        return resources.files(package).joinpath(name).is_file()
    except (ModuleNotFoundError, TypeError) as exc:
        logger.debug("Resource package %r not usable: %s", package, exc)
        return False


def discover_default_store(
    environ: Optional[Mapping[str, str]] = None,
    resource_package: Optional[str] = None,
    resource_name: str = DEFAULT_RESOURCE,
) -> Optional[PropertiesFileStore]:
    env = os.environ if environ is None else environ
    path = env.get(ENV_VAR)
    if path:
        logger.info("Using properties file from %s=%r", ENV_VAR, path)
        return PropertiesFileStore(path, FileLocation.LOCAL)
    package = resource_package or main_package()
    if package and _resource_exists(package, resource_name):
        logger.info("Using packaged properties %s/%s", package, resource_name)
        return PropertiesFileStore((package, resource_name), FileLocation.RESOURCE)
    logger.debug("No default properties file discovered (package=%r)", package)
    return None
