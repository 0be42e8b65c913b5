"""Key-token to action tables used by the dispatcher."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

KeyAction = Callable[[], None]


@dataclass(frozen=True)
class KeyComboBinding:
    """Mapping from one or more key tokens to a single action."""

    combos: tuple[str, ...]
    handler: KeyAction


class KeyComboRegistry:
    """Exact-match dispatch table for key tokens."""

    def __init__(self) -> None:
        self._handlers: dict[str, KeyAction] = {}

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        """Register one binding, overwriting existing handlers for same combos."""
        for combo in binding.combos:
            self._handlers[combo] = binding.handler
        return self

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        """Register multiple bindings and return ``self`` for fluent usage."""
        for binding in bindings:
            self.register_binding(binding)
        return self

    def handles(self, key: str) -> bool:
        return key in self._handlers

    def dispatch(self, key: str) -> bool:
        """Run the action bound to ``key``; ``False`` when nothing is bound."""
        handler = self._handlers.get(key)
        if handler is None:
            return False
        handler()
        return True
