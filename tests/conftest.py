"""Global pytest fixtures for TALLY."""

from __future__ import annotations

import io

import pytest

from tally import registry as registry_module
from tally.driver import Driver
from tally.registry import Registry
from tally.reporting import Reporter

# pylint: disable=redefined-outer-name


@pytest.fixture
def registry() -> Registry:
    """A private registry so cases declared by one test never leak into another."""
    return Registry()


@pytest.fixture
def display() -> io.StringIO:
    """In-memory display stream capturing everything the reporter prints."""
    return io.StringIO()


@pytest.fixture
def reporter(display: io.StringIO) -> Reporter:
    """Reporter writing to the in-memory display."""
    return Reporter(display)


@pytest.fixture
def driver(registry: Registry, reporter: Reporter) -> Driver:
    """Driver over the private registry and in-memory display."""
    return Driver(registry, reporter=reporter)


@pytest.fixture
def fresh_default_registry(monkeypatch: pytest.MonkeyPatch) -> Registry:
    """Replace the process-wide registry for the duration of a test.

    Needed wherever modules are imported for real (loader and CLI tests),
    since their cases register into the process-wide registry.
    """
    monkeypatch.setattr(registry_module, "_default", None)
    return registry_module.default_registry()
