from __future__ import annotations


class MemstoreError(Exception):
    """Base class for every error raised by memstore."""


class CancellationError(MemstoreError):
    """A blocking wait was interrupted before it could complete.

    Raised by the countdown latch and surfaced by the coordinator when a run is
    cancelled. If a producer failure triggered the cancellation, the producer's
    exception is chained as ``__cause__``.
    """


class BarrierTimeoutError(CancellationError):
    """The barrier did not release within the configured timeout."""


class PartitionError(MemstoreError, ValueError):
    """Consumer key ranges do not exactly cover the producer key range."""


class InvalidTransitionError(MemstoreError, RuntimeError):
    def __init__(self, current: object, target: object) -> None:
        super().__init__(f"Invalid run state transition: {current} -> {target}")
        self.current = current
        self.target = target
