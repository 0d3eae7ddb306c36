"""Shared test fixtures for staticcache."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from staticcache.output import reset_output


@pytest.fixture(autouse=True)
def _reset_output_between_tests():
    """Reset the global OutputManager and the package logger after every test.

    The CLI binds a Rich log handler to whatever stderr the CliRunner
    installed; once the test finishes that stream is closed.
    """
    yield
    reset_output()
    logger = logging.getLogger("staticcache")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def cache_root(tmp_path: Path) -> Path:
    """An existing, empty cache root directory."""
    root = tmp_path / "cache"
    root.mkdir()
    return root


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
