from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable

from ..core.errors import CancellationError, InvalidTransitionError
from ..core.latch import CountDownLatch
from ..core.registry import Registry, instance
from .partition import KeyRange, RangeLike, validate_partition

logger = logging.getLogger(__name__)


class RunState(str, Enum):
    IDLE = "idle"
    PRODUCERS_RUNNING = "producers-running"
    BARRIER_SATISFIED = "barrier-satisfied"
    CONSUMERS_RUNNING = "consumers-running"
    DONE = "done"
    CANCELLED = "cancelled"

    @property
    def terminal(self) -> bool:
        return self in (RunState.DONE, RunState.CANCELLED)


_TRANSITIONS: dict[RunState, frozenset[RunState]] = {
    RunState.IDLE: frozenset({RunState.PRODUCERS_RUNNING}),
    RunState.PRODUCERS_RUNNING: frozenset({RunState.BARRIER_SATISFIED, RunState.CANCELLED}),
    RunState.BARRIER_SATISFIED: frozenset({RunState.CONSUMERS_RUNNING, RunState.CANCELLED}),
    RunState.CONSUMERS_RUNNING: frozenset({RunState.DONE, RunState.CANCELLED}),
    RunState.DONE: frozenset({RunState.IDLE}),
    RunState.CANCELLED: frozenset({RunState.IDLE}),
}


def key_for(index: int) -> str:
    return str(index)


def value_for(index: int) -> str:
    return f"value of key: {index}"


@dataclass(frozen=True)
class RunReport:
    state: RunState
    producer_count: int
    groups: tuple[KeyRange, ...]
    # One tuple per group, values in index order.
    values: tuple[tuple[str | None, ...], ...]

    def flat_values(self) -> list[str | None]:
        return [v for group in self.values for v in group]


class Coordinator:
    """Run producers into the registry, wait for all of them, then run consumers.

    Producer ``i`` writes ``key_fn(i) -> value_fn(i)`` exactly once. The
    orchestrating thread (the caller of :meth:`run`) blocks on a countdown latch
    until every producer has finished; consumer groups are only submitted after
    that. Tasks share a single worker pool whose size does not depend on the
    task count.

    Notes:
    - The coordinator does not lock registry data; the registry protects itself.
    - A cancelled, timed-out or failed producer phase raises ``CancellationError``
      and no consumer ever runs.
    - Producers already running when a run is cancelled are not joined; their
      writes can still land in the registry after ``run`` has raised.
    """

    def __init__(
        self,
        registry: Registry | None = None,
        *,
        max_workers: int | None = None,
        barrier_timeout: float | None = None,
        key_fn: Callable[[int], str] = key_for,
        value_fn: Callable[[int], str] = value_for,
        emit: Callable[[str | None], None] | None = None,
    ) -> None:
        if max_workers is not None and int(max_workers) <= 0:
            raise ValueError("max_workers must be > 0")
        if barrier_timeout is not None and not barrier_timeout > 0:
            raise ValueError("barrier_timeout must be > 0")
        self._registry = registry
        self._max_workers = max_workers
        self._barrier_timeout = barrier_timeout
        self._key_fn = key_fn
        self._value_fn = value_fn
        self._emit = emit

        self._state_lock = threading.Lock()
        self._state = RunState.IDLE
        self._history: list[RunState] = [RunState.IDLE]
        self._latch: CountDownLatch | None = None

    @property
    def registry(self) -> Registry:
        return self._registry if self._registry is not None else instance()

    @property
    def state(self) -> RunState:
        with self._state_lock:
            return self._state

    def history(self) -> list[RunState]:
        """States visited by the current (or last) run, starting at IDLE."""
        with self._state_lock:
            return list(self._history)

    def _set_state_locked(self, target: RunState) -> None:
        if target not in _TRANSITIONS[self._state]:
            raise InvalidTransitionError(self._state, target)
        logger.debug("run state %s -> %s", self._state.value, target.value)
        self._state = target
        if target is RunState.IDLE:
            self._history = [RunState.IDLE]
        else:
            self._history.append(target)

    def _transition(self, target: RunState) -> None:
        with self._state_lock:
            self._set_state_locked(target)

    def cancel(self, reason: str = "run cancelled by caller") -> bool:
        """Interrupt the barrier wait of an in-flight run.

        Returns False when there is no producer phase to cancel (not started,
        already past the barrier, or already cancelled).
        """

        with self._state_lock:
            latch = self._latch if self._state is RunState.PRODUCERS_RUNNING else None
        if latch is None:
            return False
        return latch.cancel(reason)

    def _produce(self, registry: Registry, latch: CountDownLatch, index: int) -> None:
        try:
            registry.set(self._key_fn(index), self._value_fn(index))
        except BaseException as exc:
            logger.error("producer %d failed", index, exc_info=True)
            latch.cancel(f"producer {index} failed: {exc}", cause=exc)
            raise
        latch.count_down()

    def _consume(self, registry: Registry, key_range: KeyRange) -> tuple[str | None, ...]:
        values: list[str | None] = []
        for index in key_range:
            value = registry.get(self._key_fn(index))
            values.append(value)
            if self._emit is not None:
                self._emit(value)
        return tuple(values)

    def _await_producers(self, latch: CountDownLatch) -> None:
        try:
            latch.wait(self._barrier_timeout)
        except CancellationError as exc:
            latch.cancel(str(exc))
            self._transition(RunState.CANCELLED)
            logger.warning("run cancelled before barrier: %s", exc)
            raise
        except KeyboardInterrupt as exc:
            reason = "interrupted while waiting on producer barrier"
            latch.cancel(reason)
            self._transition(RunState.CANCELLED)
            logger.warning("run cancelled before barrier: %s", reason)
            raise CancellationError(reason) from exc

    def run(self, producer_count: int, consumer_groups: Iterable[RangeLike]) -> RunReport:
        groups = validate_partition(producer_count, consumer_groups)
        n = int(producer_count)
        registry = self.registry
        latch = CountDownLatch(n)

        with self._state_lock:
            if not (self._state is RunState.IDLE or self._state.terminal):
                raise RuntimeError(f"a run is already in progress (state={self._state.value})")
            if self._state is not RunState.IDLE:
                self._set_state_locked(RunState.IDLE)
            self._latch = latch
            self._set_state_locked(RunState.PRODUCERS_RUNNING)

        pool = ThreadPoolExecutor(max_workers=self._max_workers, thread_name_prefix="memstore-task")
        completed = False
        try:
            for index in range(n):
                pool.submit(self._produce, registry, latch, index)

            self._await_producers(latch)
            self._transition(RunState.BARRIER_SATISFIED)
            logger.debug("barrier satisfied after %d producers", n)

            self._transition(RunState.CONSUMERS_RUNNING)
            futures = [pool.submit(self._consume, registry, r) for r in groups]
            try:
                values = tuple(f.result() for f in futures)
            except BaseException:
                logger.error("consumer task failed", exc_info=True)
                self._transition(RunState.CANCELLED)
                raise

            self._transition(RunState.DONE)
            completed = True
            return RunReport(state=RunState.DONE, producer_count=n, groups=groups, values=values)
        finally:
            # Stuck producers must not hold the caller hostage after a cancel.
            pool.shutdown(wait=completed, cancel_futures=not completed)
            if not completed:
                latch.cancel("run aborted")
            with self._state_lock:
                self._latch = None
                # Interrupts outside the guarded waits still end the run.
                if not completed and not self._state.terminal:
                    logger.warning("run aborted in state %s", self._state.value)
                    self._set_state_locked(RunState.CANCELLED)
