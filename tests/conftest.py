from __future__ import annotations

import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    logger = logging.getLogger("parse_tle")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
