from __future__ import annotations

from .service import Registry, instance
from .state import DEFAULT_STRIPES, StripedMap

__all__ = ["Registry", "instance", "StripedMap", "DEFAULT_STRIPES"]
