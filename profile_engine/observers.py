"""
Minimal observer registry.

The engine stays free of Qt. Stores publish changes through ``Listeners`` and
the GUI adapter re-emits them as Qt signals.
"""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class Listeners(Generic[T]):
    """An ordered set of callbacks that receive one value per emission."""

    def __init__(self) -> None:
        self._callbacks: list[Callable[[T], None]] = []

    def connect(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """
        Register callback and return a function that unregisters it.

        Registering the same callback twice has no effect.
        """
        if callback not in self._callbacks:
            self._callbacks.append(callback)
        return lambda: self.disconnect(callback)

    def disconnect(self, callback: Callable[[T], None]) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def emit(self, value: T) -> None:
        """Call every registered callback in registration order."""
        for callback in list(self._callbacks):
            callback(value)

    def __len__(self) -> int:
        return len(self._callbacks)
