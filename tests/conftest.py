from __future__ import annotations

import logging

import pytest

from node_launch.config import reset_settings


@pytest.fixture(autouse=True)
def _default_settings():
    """Every test starts and ends with default resolver settings."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture(autouse=True)
def _restore_root_log_level():
    # the CLI entry point adjusts the root logger
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)
