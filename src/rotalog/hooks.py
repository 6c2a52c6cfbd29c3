"""
Per-level hook registry.
"""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING, Callable, Iterable, Protocol, runtime_checkable

from .diagnostics import record_failure
from .levels import Level

if TYPE_CHECKING:
    from .entry import Entry

ALL_LEVELS: tuple[Level, ...] = tuple(Level)


@runtime_checkable
class Hook(Protocol):
    """Observer fired with every stamped entry at one of its levels."""

    def levels(self) -> Iterable[Level]:
        ...

    def fire(self, entry: "Entry") -> None:
        ...


class FuncHook:
    """Wrap a callable as a hook subscribed to ``levels``."""

    def __init__(self, func: Callable[["Entry"], object], levels: Iterable[Level] = ALL_LEVELS):
        self._func = func
        self._levels = tuple(Level(level) for level in levels)

    def levels(self) -> tuple[Level, ...]:
        return self._levels

    def fire(self, entry: "Entry") -> None:
        self._func(entry)


class LevelHooks:
    """Hooks keyed by level, kept in registration order."""

    def __init__(self) -> None:
        self._hooks: dict[Level, list[Hook]] = defaultdict(list)

    def add(self, hook: Hook) -> None:
        for level in dict.fromkeys(Level(level) for level in hook.levels()):
            self._hooks[level].append(hook)

    def __getitem__(self, level: Level) -> tuple[Hook, ...]:
        return tuple(self._hooks.get(Level(level), ()))

    def __len__(self) -> int:
        return sum(len(hooks) for hooks in self._hooks.values())

    def fire(self, level: Level, entry: "Entry") -> list[Exception]:
        """Fire every hook for ``level``; a failing hook does not stop the rest."""
        errors: list[Exception] = []
        for hook in self[level]:
            try:
                hook.fire(entry)
            except Exception as exc:
                errors.append(exc)
                record_failure("hook_failures", "hook failed", hook=repr(hook), entry_level=level.label, error=repr(exc))
        return errors
