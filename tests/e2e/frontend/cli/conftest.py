"""Fixtures for end-to-end CLI tests.

Provides a CliRunner, an isolated filesystem per test, a fresh process-wide
registry (modules imported by ``tally run`` register into it), and a helper
that writes test-case modules into the isolated directory.
"""

import textwrap
from pathlib import Path

import pytest
from click.testing import CliRunner

# pylint: disable=redefined-outer-name,unused-argument


@pytest.fixture
def runner():
    """Return a Click CliRunner for invoking CLI commands in tests."""
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Run the test inside an isolated working directory."""
    with runner.isolated_filesystem():
        yield


@pytest.fixture(autouse=True)
def _isolated_registry(fresh_default_registry):
    """Every CLI test starts with an empty process-wide registry."""
    return fresh_default_registry


@pytest.fixture
def write_cases(fs):
    """Write a dedented test module into the working directory and return its path."""

    def write(name: str, source: str) -> str:
        path = Path(name)
        path.write_text(textwrap.dedent(source), encoding="utf-8")
        return str(path)

    return write
