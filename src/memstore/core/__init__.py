from __future__ import annotations

from .errors import (
    BarrierTimeoutError,
    CancellationError,
    InvalidTransitionError,
    MemstoreError,
    PartitionError,
)
from .latch import CountDownLatch
from .lazy import LazyInstance
from .registry import Registry, StripedMap, instance

__all__ = [
    "MemstoreError",
    "CancellationError",
    "BarrierTimeoutError",
    "PartitionError",
    "InvalidTransitionError",
    "CountDownLatch",
    "LazyInstance",
    "Registry",
    "StripedMap",
    "instance",
]
