"""Deferred computation handles for preview content and probes.

Two invocation contracts are needed:

- ``Deferred``: a factory re-run on every ``__call__`` (preview content is
  rebuilt for each render attempt so renders never share widget state).
- ``Lazy``: computed at most once, result memoized (the color-scheme probe,
  which must not be mistaken for a real render).

Neither handle invokes its function at construction time.
"""

from __future__ import annotations

from threading import RLock
from typing import Callable, Generic, TypeVar

__all__ = ["Deferred", "Lazy"]

T = TypeVar("T")

_UNSET = object()


class Deferred(Generic[T]):
    def __init__(self, factory: Callable[[], T]) -> None:
        self._factory = factory
        self.calls = 0

    def __call__(self) -> T:
        self.calls += 1
        return self._factory()

    def probe(self) -> T:
        """Invoke the factory without counting it as a render attempt."""
        return self._factory()

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"Deferred({getattr(self._factory, '__qualname__', self._factory)!r}, calls={self.calls})"


class Lazy(Generic[T]):
    def __init__(self, factory: Callable[[], T]) -> None:
        self._factory = factory
        self._value: object = _UNSET
        self._lock = RLock()

    @property
    def evaluated(self) -> bool:
        return self._value is not _UNSET

    def __call__(self) -> T:
        with self._lock:
            if self._value is _UNSET:
                self._value = self._factory()
            return self._value  # type: ignore[return-value]
