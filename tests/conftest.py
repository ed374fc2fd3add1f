"""Shared pytest fixtures."""

from __future__ import annotations

import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_refguard_logging():
    """Drop handlers installed by configure_logging so streams do not leak between tests."""
    yield
    logger = logging.getLogger("refguard")
    for handler in list(logger.handlers):
        if getattr(handler, "_refguard", False):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
