from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from memstore.core.errors import BarrierTimeoutError, CancellationError
from memstore.core.latch import CountDownLatch


def test_zero_count_releases_immediately() -> None:
    latch = CountDownLatch(0)
    latch.wait(timeout=0.01)
    assert latch.count == 0


def test_negative_count_rejected() -> None:
    with pytest.raises(ValueError):
        CountDownLatch(-1)


def test_wait_releases_after_all_count_downs() -> None:
    latch = CountDownLatch(50)
    with ThreadPoolExecutor(max_workers=8) as pool:
        for _ in range(50):
            pool.submit(latch.count_down)
        latch.wait(timeout=5)
    assert latch.count == 0

    # Extra count downs are ignored.
    latch.count_down()
    assert latch.count == 0


def test_wait_times_out() -> None:
    latch = CountDownLatch(2)
    latch.count_down()
    with pytest.raises(BarrierTimeoutError) as exc_info:
        latch.wait(timeout=0.01)
    assert "1 completions outstanding" in str(exc_info.value)
    assert isinstance(exc_info.value, CancellationError)


def test_cancel_wakes_waiter_with_cancellation() -> None:
    latch = CountDownLatch(3)
    waiting = threading.Event()
    errors: list[BaseException] = []

    def waiter() -> None:
        waiting.set()
        try:
            latch.wait()
        except CancellationError as exc:
            errors.append(exc)

    t = threading.Thread(target=waiter)
    t.start()
    waiting.wait(timeout=5)
    assert latch.cancel("stop now")
    t.join(timeout=5)

    assert not t.is_alive()
    assert len(errors) == 1
    assert str(errors[0]) == "stop now"
    assert latch.cancelled


def test_cancelled_latch_never_passes_even_if_count_reaches_zero() -> None:
    latch = CountDownLatch(1)
    latch.cancel("gone")
    latch.count_down()
    with pytest.raises(CancellationError):
        latch.wait(timeout=0.01)
    assert not latch.cancel("again")


def test_cancel_after_release_is_refused() -> None:
    latch = CountDownLatch(1)
    latch.count_down()
    assert not latch.cancel()
    latch.wait(timeout=0.01)


def test_cancel_cause_is_chained() -> None:
    latch = CountDownLatch(1)
    boom = RuntimeError("boom")
    latch.cancel("producer failed", cause=boom)
    with pytest.raises(CancellationError) as exc_info:
        latch.wait()
    assert exc_info.value.__cause__ is boom
