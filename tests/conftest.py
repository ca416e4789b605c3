from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest


@pytest.fixture(autouse=True)
def _reset_cachemanifest_logger() -> Iterator[None]:
    """The CLI attaches a stderr handler; drop it so it can't outlive a test's capture."""
    yield
    logger = logging.getLogger("cachemanifest")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
