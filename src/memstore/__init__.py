from __future__ import annotations

from .core.errors import (
    BarrierTimeoutError,
    CancellationError,
    InvalidTransitionError,
    MemstoreError,
    PartitionError,
)
from .core.registry import Registry, instance
from .runtime import Coordinator, KeyRange, RunReport, RunState, run, split_evenly

__all__ = [
    "instance",
    "Registry",
    "Coordinator",
    "KeyRange",
    "RunReport",
    "RunState",
    "run",
    "split_evenly",
    "MemstoreError",
    "CancellationError",
    "BarrierTimeoutError",
    "PartitionError",
    "InvalidTransitionError",
]
