from typing import Any, Protocol


class OptionStore(Protocol):
    def get(self, name: str, default: Any = None) -> Any: ...

    def set(self, name: str, value: Any) -> None: ...

    def delete(self, name: str) -> bool: ...
