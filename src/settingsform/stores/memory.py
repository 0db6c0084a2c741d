import copy
import logging
from typing import Any

logger = logging.getLogger(__name__)


class MemoryOptionStore:
    """Option store kept in a process-local dict, used by tests and embedding hosts."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._options: dict[str, Any] = dict(initial or {})

    def get(self, name: str, default: Any = None) -> Any:
        if name not in self._options:
            return default
        return copy.deepcopy(self._options[name])

    def set(self, name: str, value: Any) -> None:
        self._options[name] = copy.deepcopy(value)

    def delete(self, name: str) -> bool:
        if name not in self._options:
            return False
        del self._options[name]
        return True
