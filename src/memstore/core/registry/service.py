from __future__ import annotations

import logging

from ..lazy import LazyInstance
from .state import DEFAULT_STRIPES, StripedMap

logger = logging.getLogger(__name__)


def _require_text(name: str, value: object) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be str, got {type(value).__name__}")
    return value


class Registry:
    """Thread-safe text key-value store.

    ``get``/``set`` on a single key are linearizable and callers never take a
    lock themselves. Use :func:`instance` for the process-wide registry; build a
    ``Registry`` directly only for isolated tests.
    """

    def __init__(self, *, stripes: int = DEFAULT_STRIPES) -> None:
        self._map = StripedMap(stripes)

    def set(self, key: str, value: str) -> None:
        self._map.put(_require_text("key", key), _require_text("value", value))

    def get(self, key: str) -> str | None:
        """Return the value for ``key``, or None if it was never written."""
        return self._map.get(_require_text("key", key))

    def contains(self, key: str) -> bool:
        return self._map.contains(_require_text("key", key))

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._map.contains(key)

    def __len__(self) -> int:
        return self._map.size()

    def keys(self) -> list[str]:
        return [k for k, _ in self._map.items()]

    def snapshot(self) -> dict[str, str]:
        return dict(self._map.items())

    def revision(self) -> int:
        """Number of ``set`` calls completed so far."""
        return self._map.write_count()

    def clear(self) -> None:
        self._map.clear()

    def __repr__(self) -> str:
        return f"Registry(entries={len(self)}, stripes={self._map.stripe_count})"


def _build_default_registry() -> Registry:
    from ...config import Settings

    settings = Settings.from_env()
    reg = Registry(stripes=settings.stripes)
    logger.info("registry constructed (stripes=%d)", settings.stripes)
    return reg


_INSTANCE: LazyInstance[Registry] = LazyInstance(_build_default_registry)


def instance() -> Registry:
    """Return the process-wide registry, constructing it on first use."""
    return _INSTANCE.get()


def _reset_instance_for_tests() -> None:
    _INSTANCE.reset()
