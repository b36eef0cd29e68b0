"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Every test runs with QUILT_* variables removed and HOME pointed at a
temporary directory, so a developer's real credentials or settings file
can never leak into a run.
"""

import logging
from collections.abc import Generator

import pytest


# =============================================================================
# Environment Isolation
# =============================================================================


QUILT_ENV_VARS = (
    "QUILT_API_URL",
    "QUILT_TOKEN",
    "QUILT_API_KEY",
    "QUILT_CONFIG",
)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Remove QUILT_* variables and use an empty home directory."""
    for name in QUILT_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))


@pytest.fixture(autouse=True)
def reset_root_logger() -> Generator[None, None, None]:
    """
    Drop handlers installed by setup_logging().

    CliRunner closes its captured streams after each invocation; a handler
    left behind would write to a closed stream in the next test.
    """
    yield
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
