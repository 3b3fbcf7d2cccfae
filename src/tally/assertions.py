"""Assertion functions for test bodies.

Each function finds the running test case, captures its own call site (file,
line and the literal text of its arguments) and forwards to the matching
:class:`~tally.testcase.TestCase` method. They can be called from helper
functions as well as directly from a test body, as long as a case is running.

Example:
    ```py
    from tally import case, check, check_equal, check_within

    @case
    def Arithmetic():
        check(1 + 1 == 2)
        check_equal(sum([1, 2, 3]), 6)
        check_within(0.1 + 0.2, 0.3, 1e-9)
    ```
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .callsite import capture
from .current import current_case
from .testcase import ExceptionTypes


def check(condition: Any) -> None:
    """Check that ``condition`` is true."""
    site = capture()
    current_case(site.location).check(condition, site.argument(0), site.location)


def check_message(condition: Any, message: str | Callable[[], str]) -> None:
    """Check that ``condition`` is true, reporting ``message`` when it is not.

    Pass a callable (e.g. a ``lambda``) to build an expensive message only
    when the check fails.
    """
    site = capture()
    current_case(site.location).check_message(condition, message, site.location)


def check_equal(actual: Any, expected: Any) -> None:
    """Check that ``actual == expected``."""
    site = capture()
    current_case(site.location).check_equal(
        actual,
        expected,
        site.argument(0, "actual"),
        site.argument(1, "expected"),
        site.location,
    )


def check_within(actual: Any, expected: Any, tolerance: Any) -> None:
    """Check that ``actual`` is within ``abs(tolerance)`` of ``expected``."""
    site = capture()
    current_case(site.location).check_within(
        actual,
        expected,
        tolerance,
        site.argument(0, "actual"),
        site.argument(1, "expected"),
        site.argument(2, "tolerance"),
        site.location,
    )


def check_throws(
    expected: ExceptionTypes, operation: Callable[..., Any], /, *args: Any, **kwargs: Any
) -> None:
    """Check that calling ``operation(*args, **kwargs)`` raises ``expected``.

    Raising a different exception is reported but, by default, still counted
    as a pass; run with strict exception checks to count it as a failure.
    """
    site = capture()
    current_case(site.location).check_throws(
        expected,
        operation,
        args,
        kwargs,
        expected_text=site.argument(0),
        location=site.location,
    )


def fail(message: str) -> None:
    """Record a failure and stop the rest of the running test body."""
    site = capture()
    current_case(site.location).fail(message, site.location)
