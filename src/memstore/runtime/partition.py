from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence, Union

from ..core.errors import PartitionError


@dataclass(frozen=True)
class KeyRange:
    """Half-open range ``[start, stop)`` of producer indices."""

    start: int
    stop: int

    def __post_init__(self) -> None:
        if self.start < 0:
            raise PartitionError(f"range start must be >= 0, got {self.start}")
        if self.stop <= self.start:
            raise PartitionError(f"range [{self.start}, {self.stop}) is empty")

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.start, self.stop))

    def __len__(self) -> int:
        return self.stop - self.start

    def __str__(self) -> str:
        return f"[{self.start}, {self.stop})"


RangeLike = Union[KeyRange, Sequence[int]]


def as_key_range(value: RangeLike) -> KeyRange:
    if isinstance(value, KeyRange):
        return value
    try:
        start, stop = value
    except (TypeError, ValueError):
        raise PartitionError(f"expected a (start, stop) pair, got {value!r}") from None
    return KeyRange(int(start), int(stop))


def validate_partition(producer_count: int, groups: Iterable[RangeLike]) -> tuple[KeyRange, ...]:
    """Check that ``groups`` tile ``[0, producer_count)`` with no gaps or overlaps.

    Groups keep the caller's order; only the coverage check sorts them.
    """

    if int(producer_count) <= 0:
        raise PartitionError(f"producer_count must be > 0, got {producer_count}")
    ranges = tuple(as_key_range(g) for g in groups)
    if not ranges:
        raise PartitionError("at least one consumer group is required")

    expected = 0
    for r in sorted(ranges, key=lambda kr: kr.start):
        if r.start < expected:
            raise PartitionError(f"range {r} overlaps keys below {expected}")
        if r.start > expected:
            raise PartitionError(f"keys [{expected}, {r.start}) are not covered by any group")
        expected = r.stop
    if expected != producer_count:
        if expected > producer_count:
            raise PartitionError(f"groups reach key {expected - 1} but only {producer_count} producers exist")
        raise PartitionError(f"keys [{expected}, {producer_count}) are not covered by any group")
    return ranges


def split_evenly(producer_count: int, group_count: int) -> tuple[KeyRange, ...]:
    """Split ``[0, producer_count)`` into ``group_count`` contiguous ranges.

    Earlier groups take the remainder, so sizes differ by at most one.
    """

    n = int(producer_count)
    g = int(group_count)
    if n <= 0:
        raise PartitionError(f"producer_count must be > 0, got {producer_count}")
    if g <= 0 or g > n:
        raise PartitionError(f"group_count must be in [1, {n}], got {group_count}")
    size, extra = divmod(n, g)
    out: list[KeyRange] = []
    start = 0
    for i in range(g):
        stop = start + size + (1 if i < extra else 0)
        out.append(KeyRange(start, stop))
        start = stop
    return tuple(out)
