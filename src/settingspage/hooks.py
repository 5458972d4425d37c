"""Named filter and action hooks for extending the settings page."""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Callable, Dict, List, Tuple

__all__ = ["HookRegistry"]

FilterCallback = Callable[..., Any]
ActionCallback = Callable[..., None]


class HookRegistry:
    """Ordered filter/action callbacks keyed by hook name.

    Filters receive the value being processed (plus any context arguments) and
    return the replacement value. Actions are called for their side effects.
    Callbacks with a lower priority run first; equal priorities keep
    registration order.
    """

    def __init__(self) -> None:
        self._filters: Dict[str, List[Tuple[int, int, FilterCallback]]] = defaultdict(list)
        self._actions: Dict[str, List[Tuple[int, int, ActionCallback]]] = defaultdict(list)
        self._counter = 0

    def _next(self) -> int:
        self._counter += 1
        return self._counter

    def add_filter(self, name: str, callback: FilterCallback, priority: int = 10) -> None:
        self._filters[name].append((priority, self._next(), callback))
        self._filters[name].sort(key=lambda item: (item[0], item[1]))

    def add_action(self, name: str, callback: ActionCallback, priority: int = 10) -> None:
        self._actions[name].append((priority, self._next(), callback))
        self._actions[name].sort(key=lambda item: (item[0], item[1]))

    def remove_filter(self, name: str, callback: FilterCallback) -> None:
        self._filters[name] = [item for item in self._filters[name] if item[2] is not callback]

    def has_filter(self, name: str) -> bool:
        return bool(self._filters.get(name))

    def apply_filters(self, name: str, value: Any, *args: Any) -> Any:
        """Run ``value`` through every filter registered under ``name``."""

        for _, _, callback in self._filters.get(name, ()):
            value = callback(value, *args)
        return value

    def do_action(self, name: str, *args: Any) -> None:
        for _, _, callback in self._actions.get(name, ()):
            callback(*args)

    def filter(self, name: str, priority: int = 10) -> Callable[[FilterCallback], FilterCallback]:
        """Decorator form of :meth:`add_filter`."""

        def decorator(callback: FilterCallback) -> FilterCallback:
            self.add_filter(name, callback, priority)
            return callback

        return decorator

    def action(self, name: str, priority: int = 10) -> Callable[[ActionCallback], ActionCallback]:
        """Decorator form of :meth:`add_action`."""

        def decorator(callback: ActionCallback) -> ActionCallback:
            self.add_action(name, callback, priority)
            return callback

        return decorator
