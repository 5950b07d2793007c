from __future__ import annotations

from .coordinator import Coordinator, RunReport, RunState, key_for, value_for
from .partition import KeyRange, split_evenly, validate_partition
from .runner import run

__all__ = [
    "Coordinator",
    "RunReport",
    "RunState",
    "key_for",
    "value_for",
    "KeyRange",
    "split_evenly",
    "validate_partition",
    "run",
]
