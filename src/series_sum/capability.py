# src/series_sum/capability.py
from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def _probe():
    yield 1


def has_generator_support() -> bool:
    """
    Probe whether generator functions can be created and resumed here.
    The result selects the cooperative term source over the direct one.
    """
    try:
        return next(_probe()) == 1
    except (TypeError, StopIteration):
        return False


# resolved once per process
GENERATORS_SUPPORTED = has_generator_support()
logger.debug("generator support: %s", GENERATORS_SUPPORTED)
