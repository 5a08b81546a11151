"""Key-binding registry primitives."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class KeyBinding:
    """Mapping from one or more key tokens to a single picker action.

    ``edits_query`` marks actions whose ``True`` result means the query text
    changed and the candidates must be re-ranked.
    """

    keys: tuple[str, ...]
    action: Callable[[], bool | None]
    edits_query: bool = False


class KeyRegistry:
    """Small key-dispatch table with optional key normalization strategy."""

    def __init__(self, normalize: Callable[[str], str] | None = None) -> None:
        self._normalize = normalize if normalize is not None else self._identity
        self._bindings: dict[str, KeyBinding] = {}

    @staticmethod
    def _identity(key: str) -> str:
        return key

    def register_binding(self, binding: KeyBinding) -> KeyRegistry:
        """Register one binding, overwriting existing bindings for the same keys."""
        for key in binding.keys:
            self._bindings[self._normalize(key)] = binding
        return self

    def register_bindings(self, *bindings: KeyBinding) -> KeyRegistry:
        for binding in bindings:
            self.register_binding(binding)
        return self

    def lookup(self, key: str) -> KeyBinding | None:
        return self._bindings.get(self._normalize(key))

    def dispatch(self, key: str) -> tuple[bool, bool]:
        """Run the action bound to ``key``.

        Returns ``(handled, query_changed)``; unbound keys report
        ``(False, False)``.
        """
        binding = self.lookup(key)
        if binding is None:
            return False, False
        result = binding.action()
        return True, bool(result) and binding.edits_query
