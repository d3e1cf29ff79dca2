from typing import Any, Optional, Protocol

from typing_extensions import runtime_checkable

from phased_config.properties.descriptor import Property


@runtime_checkable
class PropertyStore(Protocol):
    def init(self) -> None: ...

    def get(self, prop: Property[Any, Any]) -> Optional[Any]: ...


@runtime_checkable
class WritablePropertyStore(PropertyStore, Protocol):
    def put(self, prop: Property[Any, Any], value: Any) -> None: ...
