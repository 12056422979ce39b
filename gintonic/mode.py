"""Global run mode: debug, release or test."""

from __future__ import annotations

import os

ENV_GIN_MODE = "GIN_MODE"

DEBUG_MODE = "debug"
RELEASE_MODE = "release"
TEST_MODE = "test"

_MODES = (DEBUG_MODE, RELEASE_MODE, TEST_MODE)

_mode_name = DEBUG_MODE


def _running_under_test() -> bool:
    return "PYTEST_CURRENT_TEST" in os.environ


def set_mode(value: str) -> None:
    """Set the run mode; an empty value picks test mode under tests, else debug."""
    global _mode_name
    if not value:
        value = TEST_MODE if _running_under_test() else DEBUG_MODE
    if value not in _MODES:
        raise ValueError(
            f"mode unknown: {value} (available mode: debug release test)"
        )
    _mode_name = value


def mode() -> str:
    """Return the current run mode."""
    return _mode_name


set_mode(os.environ.get(ENV_GIN_MODE, ""))