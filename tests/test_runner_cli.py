from __future__ import annotations

import pytest

import memstore
from memstore.__main__ import main
from memstore.config import Settings
from memstore.core.registry import Registry
from memstore.runtime.coordinator import RunState, value_for


def test_run_splits_keys_evenly() -> None:
    reg = Registry()
    report = memstore.run(20, 2, registry=reg, settings=Settings())

    assert report.state is RunState.DONE
    assert [len(g) for g in report.groups] == [10, 10]
    assert report.flat_values() == [value_for(i) for i in range(20)]


def test_run_uses_settings_when_not_overridden() -> None:
    reg = Registry()
    report = memstore.run(9, 3, registry=reg, settings=Settings(max_workers=2, barrier_timeout=5.0))
    assert [len(g) for g in report.groups] == [3, 3, 3]


def test_cli_prints_twenty_values_in_order(fresh_instance, capsys) -> None:
    assert main(["--fresh", "--workers", "4"]) == 0

    out = capsys.readouterr().out.splitlines()
    assert out == [f"value of key: {i}" for i in range(20)]


def test_cli_custom_producers_and_groups(fresh_instance, capsys) -> None:
    assert main(["--producers", "7", "--groups", "3", "--fresh"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == [f"value of key: {i}" for i in range(7)]


@pytest.mark.parametrize(
    "argv",
    [
        ["--producers", "0"],
        ["--producers", "3", "--groups", "4"],
        ["--workers", "0"],
        ["--barrier-timeout", "0"],
        ["--log-level", "chatty"],
    ],
)
def test_cli_rejects_bad_arguments(argv: list[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    assert exc_info.value.code == 2


def test_cli_reports_cancellation(monkeypatch, capsys) -> None:
    from memstore import __main__ as cli
    from memstore.core.errors import CancellationError

    def cancelled_run(*_a: object, **_k: object):
        raise CancellationError("barrier not satisfied")

    monkeypatch.setattr(cli, "run", cancelled_run)
    assert main([]) == 1
    assert "run cancelled: barrier not satisfied" in capsys.readouterr().err
