from __future__ import annotations

import configparser
import enum
import logging
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Optional, Union

from phased_config.exceptions import StoreInitError, StoreWriteError
from phased_config.properties.descriptor import Property

logger = logging.getLogger("phased_config.stores")
logger.addHandler(logging.NullHandler())

_SECTION = "properties"
_COMMENT_PREFIXES = ("#", "!", ";")
_KEY_RESERVED = ("=", ":", "\n", "\r")


class FileLocation(enum.Enum):
    LOCAL = "local"  # a path on the filesystem
    RESOURCE = "resource"  # a data file shipped inside an importable package


def parse_properties(text: str, source: str = "<string>") -> Dict[str, str]:
    """Parse ``key = value`` / ``key: value`` lines into a dict.

    Keys keep their case and ``#``, ``!`` and ``;`` start comments. Leading
    whitespace is ignored, so every line stands on its own. Section headers
    are rejected rather than silently hiding the keys that follow them.
    """
    lines = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        stripped = line.lstrip()
        if stripped.startswith("["):
            raise StoreInitError(
                f"Cannot parse properties from {source}: section header on line {lineno}"
            )
        lines.append(stripped)
    parser = configparser.ConfigParser(
        delimiters=("=", ":"),
        comment_prefixes=_COMMENT_PREFIXES,
        interpolation=None,
        strict=True,
        default_section="__defaults__",
    )
    parser.optionxform = str  # type: ignore[assignment,method-assign]
    try:
        parser.read_string("\n".join([f"[{_SECTION}]", *lines]), source=source)
    except configparser.Error as exc:
        raise StoreInitError(f"Cannot parse properties from {source}: {exc}") from exc
    return dict(parser.items(_SECTION))


def _check_writable(name: str, value: Any) -> None:
    if any(c in name for c in _KEY_RESERVED) or name != name.strip() or not name:
        raise StoreWriteError(f"Property name {name!r} cannot be stored as a properties key")
    if name[0] in _COMMENT_PREFIXES or name[0] == "[":
        raise StoreWriteError(f"Property name {name!r} would not be read back as a key")
    if not isinstance(value, str) or "\n" in value or "\r" in value or value != value.strip():
        raise StoreWriteError(
            f"Property {name!r}: file stores hold single-line text without surrounding blanks"
        )


class PropertiesFileStore:
    """Read-only store loaded from a properties file at ``init()``.

    ``location`` is a filesystem path for ``FileLocation.LOCAL`` and a
    ``(package, resource_name)`` pair for ``FileLocation.RESOURCE``.
    """

    def __init__(
        self,
        location: Union[str, Path, tuple],
        location_type: FileLocation = FileLocation.LOCAL,
        encoding: str = "utf-8",
    ) -> None:
        if location_type is FileLocation.RESOURCE:
            if not (isinstance(location, tuple) and len(location) == 2):
                raise ValueError("resource locations must be a (package, resource_name) tuple")
        self._location = location
        self._location_type = location_type
        self._encoding = encoding
        self._values: Optional[Dict[str, str]] = None

    @property
    def location(self) -> Union[str, Path, tuple]:
        return self._location

    @property
    def location_type(self) -> FileLocation:
        return self._location_type

    def _read(self) -> str:
        if self._location_type is FileLocation.LOCAL:
            return Path(self._location).read_text(encoding=self._encoding)  # type: ignore[arg-type]
        package, name = self._location  # type: ignore[misc]
        return resources.files(package).joinpath(name).read_text(encoding=self._encoding)

    def init(self) -> None:
        try:
            text = self._read()
        except (OSError, ModuleNotFoundError, UnicodeDecodeError) as exc:
            logger.error("Cannot read properties from %r: %s", self._location, exc)
            raise StoreInitError(f"Cannot read properties from {self._location!r}: {exc}") from exc
        self._values = parse_properties(text, source=str(self._location))
        logger.info(
            "Loaded %d properties from %s file %r",
            len(self._values),
            self._location_type.value,
            self._location,
        )

    def get(self, prop: Property[Any, Any]) -> Optional[str]:
        if self._values is None:
            return None
        return self._values.get(prop.name)

    def __repr__(self) -> str:
        return f"<PropertiesFileStore {self._location_type.value}:{self._location!r}>"


def format_properties(values: Dict[str, str]) -> str:
    return "".join(f"{key} = {value}\n" for key, value in sorted(values.items()))


class WritablePropertiesFileStore(PropertiesFileStore):
    """Local properties file that is rewritten on every ``put``.

    A missing file is treated as empty and created on the first write.
    Comments in an existing file are not preserved.
    """

    def __init__(self, location: Union[str, Path], encoding: str = "utf-8") -> None:
        super().__init__(location, FileLocation.LOCAL, encoding)

    def init(self) -> None:
        if not Path(self._location).exists():  # type: ignore[arg-type]
            self._values = {}
            logger.info("Properties file %r does not exist yet; starting empty", self._location)
            return
        super().init()

    def put(self, prop: Property[Any, Any], value: Any) -> None:
        if self._values is None:
            raise StoreWriteError(f"{self!r} was written before init()")
        _check_writable(prop.name, value)
        updated = dict(self._values)
        updated[prop.name] = value
        try:
            Path(self._location).write_text(  # type: ignore[arg-type]
                format_properties(updated), encoding=self._encoding
            )
        except OSError as exc:
            logger.error("Cannot write properties to %r: %s", self._location, exc)
            raise StoreWriteError(f"Cannot write properties to {self._location!r}: {exc}") from exc
        self._values = updated
