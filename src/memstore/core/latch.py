from __future__ import annotations

import logging
import threading

from .errors import BarrierTimeoutError, CancellationError

logger = logging.getLogger(__name__)


class CountDownLatch:
    """Release waiters once ``count`` completions have been signalled.

    Waiting can be cancelled from any thread; a cancelled latch never releases
    successfully, even if the count later reaches zero.
    """

    def __init__(self, count: int) -> None:
        if int(count) < 0:
            raise ValueError("count must be >= 0")
        self._cond = threading.Condition(threading.Lock())
        self._count = int(count)
        self._cancel_reason: str | None = None
        self._cancel_cause: BaseException | None = None

    @property
    def count(self) -> int:
        with self._cond:
            return self._count

    @property
    def cancelled(self) -> bool:
        with self._cond:
            return self._cancel_reason is not None

    def count_down(self) -> None:
        with self._cond:
            if self._count == 0:
                return
            self._count -= 1
            if self._count == 0:
                self._cond.notify_all()

    def cancel(self, reason: str = "cancelled", *, cause: BaseException | None = None) -> bool:
        """Wake every waiter with a ``CancellationError``.

        Returns False if the latch was already cancelled or already released.
        """

        with self._cond:
            if self._cancel_reason is not None or self._count == 0:
                return False
            self._cancel_reason = reason
            self._cancel_cause = cause
            self._cond.notify_all()
            return True

    def wait(self, timeout: float | None = None) -> None:
        """Block until the count reaches zero.

        Raises ``CancellationError`` if the latch was cancelled, and
        ``BarrierTimeoutError`` if ``timeout`` seconds passed first.
        """

        with self._cond:
            released = self._cond.wait_for(
                lambda: self._count == 0 or self._cancel_reason is not None,
                timeout=timeout,
            )
            if self._cancel_reason is not None:
                raise CancellationError(self._cancel_reason) from self._cancel_cause
            if not released:
                logger.debug("latch wait timed out with %d outstanding", self._count)
                raise BarrierTimeoutError(
                    f"barrier not satisfied after {timeout}s ({self._count} completions outstanding)"
                )
