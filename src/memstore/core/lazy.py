from __future__ import annotations

import threading
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class LazyInstance(Generic[T]):
    """Build a value on first access, exactly once, from any number of threads.

    The fast path reads the published value without locking. Callers that race
    the first access serialize on a private lock and re-check before building,
    so ``factory`` runs at most once and nobody sees a half-built value.
    """

    def __init__(self, factory: Callable[[], T]) -> None:
        self._factory = factory
        self._lock = threading.Lock()
        self._value: T | None = None

    def get(self) -> T:
        value = self._value
        if value is None:
            with self._lock:
                value = self._value
                if value is None:
                    value = self._factory()
                    # Publish only after construction finished.
                    self._value = value
        return value

    def initialized(self) -> bool:
        return self._value is not None

    def reset(self) -> None:
        with self._lock:
            self._value = None
