"""Pytest configuration and fixtures for optuple tests."""

from __future__ import annotations

import os
from collections.abc import Generator

import pytest

# Set a fixed terminal width to prevent line wrapping issues in CI
# This must be set before any Rich imports
os.environ.setdefault("COLUMNS", "200")
os.environ.setdefault("LINES", "50")
# Disable Rich's terminal detection to ensure consistent output
os.environ.setdefault("TERM", "dumb")


@pytest.fixture(autouse=True)
def clear_optuple_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Remove OPTUPLE_* variables so the host environment cannot leak in."""
    for name in list(os.environ):
        if name.startswith("OPTUPLE_"):
            monkeypatch.delenv(name)
    yield
