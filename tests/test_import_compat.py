from __future__ import annotations


def test_top_level_exports() -> None:
    import memstore

    assert memstore.instance is not None
    assert memstore.Registry is not None
    assert memstore.Coordinator is not None
    assert memstore.run is not None
    assert issubclass(memstore.BarrierTimeoutError, memstore.CancellationError)
    assert issubclass(memstore.PartitionError, ValueError)


def test_package_paths_work() -> None:
    from memstore.config import Settings
    from memstore.core import CountDownLatch, LazyInstance
    from memstore.core.registry import DEFAULT_STRIPES
    from memstore.core.registry import Registry, StripedMap, instance
    from memstore.log import configure_logging
    from memstore.runtime import Coordinator, KeyRange, RunState, split_evenly, validate_partition

    assert Settings is not None
    assert CountDownLatch is not None
    assert LazyInstance is not None
    assert Registry is not None
    assert StripedMap is not None
    assert DEFAULT_STRIPES > 0
    assert instance is not None
    assert configure_logging is not None
    assert Coordinator is not None
    assert KeyRange is not None
    assert RunState is not None
    assert split_evenly is not None
    assert validate_partition is not None
