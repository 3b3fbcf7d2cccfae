"""The "current test case" slot.

Assertion functions are free functions, so they need a way to reach the case
the driver is running. The driver marks a case active for exactly the span of
its ``execute()`` call with :func:`active`; assertions read it back with
:func:`current_case`. Only one case can be active at a time.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from .errors import CaseAlreadyActiveError, NoCurrentCaseError

if TYPE_CHECKING:
    from .location import SourceLocation
    from .testcase import TestCase

logger = logging.getLogger(__name__)

_current: TestCase | None = None


def current_case(location: SourceLocation | None = None) -> TestCase:
    """Return the test case the driver is executing.

    Args:
        location: Call site of the assertion, used only to report misuse.

    Returns:
        The active test case.

    Raises:
        NoCurrentCaseError: If no case is running. Counters of unrelated
            cases must never be touched, so this is not recoverable.
    """
    if _current is None:
        logger.error("Assertion outside a running test case at %s", location)
        raise NoCurrentCaseError(location)
    return _current


@contextmanager
def active(case: TestCase) -> Iterator[TestCase]:
    """Mark ``case`` as current for the duration of the ``with`` block.

    Raises:
        CaseAlreadyActiveError: If another case is already current.
    """
    global _current  # pylint: disable=global-statement
    if _current is not None:
        raise CaseAlreadyActiveError(_current.name, case.name)
    _current = case
    try:
        yield case
    finally:
        _current = None
