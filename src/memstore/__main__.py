from __future__ import annotations

import argparse
import sys
from typing import Sequence

from .config import Settings
from .core.errors import CancellationError
from .core.registry import instance
from .log import configure_logging
from .runtime.runner import run


def main(argv: Sequence[str] | None = None) -> int:
    settings = Settings.from_env()

    p = argparse.ArgumentParser(prog="memstore", description="memstore: fill the shared registry, then read it back")
    p.add_argument("--producers", type=int, default=20, help="number of producer tasks (keys 0..N-1)")
    p.add_argument("--groups", type=int, default=2, help="number of consumer groups, split evenly")
    p.add_argument("--workers", type=int, default=settings.max_workers, help="worker pool size")
    p.add_argument("--barrier-timeout", type=float, default=settings.barrier_timeout, help="seconds to wait for producers")
    p.add_argument("--log-level", default=settings.log_level)
    p.add_argument("--fresh", action="store_true", help="clear the registry before running")
    args = p.parse_args(argv)

    if args.producers <= 0:
        p.error("--producers must be > 0")
    if not 0 < args.groups <= args.producers:
        p.error("--groups must be between 1 and --producers")
    if args.workers is not None and args.workers <= 0:
        p.error("--workers must be > 0")
    if args.barrier_timeout is not None and not args.barrier_timeout > 0:
        p.error("--barrier-timeout must be > 0")

    try:
        configure_logging(args.log_level)
    except ValueError as exc:
        p.error(str(exc))

    if args.fresh:
        instance().clear()

    try:
        report = run(
            args.producers,
            args.groups,
            settings=settings,
            max_workers=args.workers,
            barrier_timeout=args.barrier_timeout,
        )
    except CancellationError as exc:
        print(f"memstore: run cancelled: {exc}", file=sys.stderr)
        return 1

    for value in report.flat_values():
        print(value)
    return 0


if __name__ == "__main__":
    sys.exit(main())
