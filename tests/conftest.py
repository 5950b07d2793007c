from __future__ import annotations

import logging

import pytest

from memstore.core.registry.service import _reset_instance_for_tests
from memstore.log import _HANDLER_ATTR


@pytest.fixture
def fresh_instance():
    """Drop the process-wide registry so the next ``instance()`` builds it again."""
    _reset_instance_for_tests()
    yield
    _reset_instance_for_tests()


@pytest.fixture(autouse=True)
def _drop_cli_log_handlers():
    yield
    logger = logging.getLogger("memstore")
    for h in list(logger.handlers):
        if getattr(h, _HANDLER_ATTR, False):
            logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)
