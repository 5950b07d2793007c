import threading

import memstore
from memstore.log import configure_logging


def main() -> None:
    configure_logging("DEBUG")

    print_lock = threading.Lock()

    def emit(value: str | None) -> None:
        # Two consumer groups print concurrently; keep lines whole.
        with print_lock:
            print(value)

    report = memstore.run(20, 2, max_workers=8, emit=emit)
    print(f"run finished in state {report.state.value}; registry holds {len(memstore.instance())} entries")


if __name__ == "__main__":
    main()
