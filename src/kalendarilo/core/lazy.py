"""Thread-safe compute-once cell for lazily loaded tables."""

from __future__ import annotations

from threading import Lock
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class LazyCell(Generic[T]):
    """
    Compute-once holder for process-wide read-only tables.

    The first ``get()`` runs the factory under a lock; concurrent first
    callers wait for that single build, later reads skip the lock.
    A factory that raises leaves the cell empty and the error propagates.
    """

    def __init__(self, factory: Callable[[], T]):
        self._factory = factory
        self._value: Optional[T] = None
        self._ready = False
        self._lock = Lock()

    def get(self) -> T:
        if self._ready:
            return self._value  # type: ignore[return-value]
        with self._lock:
            if not self._ready:
                self._value = self._factory()
                self._ready = True
        return self._value  # type: ignore[return-value]

    def set(self, value: T) -> None:
        """Install a value directly, replacing any built one."""
        with self._lock:
            self._value = value
            self._ready = True

    def reset(self) -> None:
        with self._lock:
            self._value = None
            self._ready = False
