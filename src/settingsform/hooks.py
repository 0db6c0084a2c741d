"""Named extension points: value filters and markup-emitting actions."""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Callable

Filter = Callable[..., Any]
Action = Callable[..., "str | None"]


class HookBus:
    """Ordered registry of filters and actions.

    Filters transform a value and must return it (possibly modified); they run
    in registration order, each receiving the previous one's result. Actions
    are side-effect listeners; any string they return is treated as markup
    and collected in order.
    """

    def __init__(self) -> None:
        self._filters: dict[str, list[Filter]] = defaultdict(list)
        self._actions: dict[str, list[Action]] = defaultdict(list)

    def add_filter(self, name: str, fn: Filter) -> Filter:
        self._filters[name].append(fn)
        return fn

    def has_filter(self, name: str) -> bool:
        return bool(self._filters.get(name))

    def apply_filters(self, name: str, value: Any, *args: Any) -> Any:
        for fn in list(self._filters.get(name, ())):
            value = fn(value, *args)
        return value

    def add_action(self, name: str, fn: Action) -> Action:
        self._actions[name].append(fn)
        return fn

    def remove_action(self, name: str, fn: Action) -> bool:
        try:
            self._actions[name].remove(fn)
        except ValueError:
            return False
        return True

    def do_action(self, name: str, *args: Any) -> str:
        """Run every listener for ``name`` and join the markup they return."""
        output = []
        for fn in list(self._actions.get(name, ())):
            result = fn(*args)
            if result:
                output.append(str(result))
        return "".join(output)

