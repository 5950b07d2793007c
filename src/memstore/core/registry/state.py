from __future__ import annotations

"""Lock-striped text map backing the registry.

Keys hash onto a fixed number of stripes. Each stripe owns its own lock and
dict, so every single-key operation takes exactly one lock and operations on
keys in different stripes never contend.
"""

import threading
from dataclasses import dataclass, field

DEFAULT_STRIPES = 16


@dataclass
class _Stripe:
    lock: threading.Lock = field(default_factory=threading.Lock)
    data: dict[str, str] = field(default_factory=dict)
    writes: int = 0


class StripedMap:
    def __init__(self, stripes: int = DEFAULT_STRIPES) -> None:
        n = int(stripes)
        if n <= 0:
            raise ValueError("stripes must be a positive integer")
        self._stripes: tuple[_Stripe, ...] = tuple(_Stripe() for _ in range(n))

    @property
    def stripe_count(self) -> int:
        return len(self._stripes)

    def _stripe_for(self, key: str) -> _Stripe:
        return self._stripes[hash(key) % len(self._stripes)]

    def put(self, key: str, value: str) -> None:
        stripe = self._stripe_for(key)
        with stripe.lock:
            stripe.data[key] = value
            stripe.writes += 1

    def get(self, key: str) -> str | None:
        stripe = self._stripe_for(key)
        with stripe.lock:
            return stripe.data.get(key)

    def contains(self, key: str) -> bool:
        stripe = self._stripe_for(key)
        with stripe.lock:
            return key in stripe.data

    def size(self) -> int:
        total = 0
        for stripe in self._stripes:
            with stripe.lock:
                total += len(stripe.data)
        return total

    def write_count(self) -> int:
        total = 0
        for stripe in self._stripes:
            with stripe.lock:
                total += stripe.writes
        return total

    def items(self) -> list[tuple[str, str]]:
        # Consistent per stripe only; never holds more than one lock.
        out: list[tuple[str, str]] = []
        for stripe in self._stripes:
            with stripe.lock:
                out.extend(stripe.data.items())
        return out

    def clear(self) -> None:
        for stripe in self._stripes:
            with stripe.lock:
                stripe.data.clear()
