from __future__ import annotations

from typing import Callable

from ..config import Settings
from ..core.registry import Registry
from .coordinator import Coordinator, RunReport
from .partition import split_evenly


def run(
    producer_count: int = 20,
    groups: int = 2,
    *,
    registry: Registry | None = None,
    settings: Settings | None = None,
    max_workers: int | None = None,
    barrier_timeout: float | None = None,
    emit: Callable[[str | None], None] | None = None,
) -> RunReport:
    """Populate the registry and read it back with a single call.

    Behavior:
    - Keys ``0..producer_count-1`` are split evenly across ``groups`` consumers.
    - Explicit ``max_workers``/``barrier_timeout`` win over ``settings``, which
      default to the ``MEMSTORE_*`` environment.
    - Uses the process-wide registry unless ``registry`` is given.
    """

    if settings is None:
        settings = Settings.from_env()
    coordinator = Coordinator(
        registry,
        max_workers=max_workers if max_workers is not None else settings.max_workers,
        barrier_timeout=barrier_timeout if barrier_timeout is not None else settings.barrier_timeout,
        emit=emit,
    )
    return coordinator.run(producer_count, split_evenly(producer_count, groups))
