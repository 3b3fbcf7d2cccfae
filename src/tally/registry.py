"""Process-wide registry of declared test cases.

Test cases add themselves here from their constructors, which run when the
module declaring them is imported. The shared instance is created on first
access rather than at import of this module, so it exists no matter which
declaring module happens to be imported first.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .testcase import TestCase

logger = logging.getLogger(__name__)


class Registry:
    """Append-only, ordered collection of test cases.

    Holds each case object at most once; cases with equal names are distinct
    entries. Nothing is ever removed.
    """

    def __init__(self) -> None:
        self._cases: list[TestCase] = []
        self._ids: set[int] = set()

    def register(self, case: TestCase) -> None:
        """Append ``case`` unless this very object is already registered.

        Args:
            case: The test case to add.
        """
        if id(case) in self._ids:
            logger.debug("Test case %r is already registered", case.name)
            return
        self._ids.add(id(case))
        self._cases.append(case)
        logger.debug("Registered test case %r (%d total)", case.name, len(self._cases))

    def all(self) -> list[TestCase]:
        """Return every registered case, in registration order."""
        return list(self._cases)

    def __len__(self) -> int:
        return len(self._cases)

    def __iter__(self) -> Iterator[TestCase]:
        return iter(self.all())


_default: Registry | None = None


def default_registry() -> Registry:
    """Return the process-wide registry, creating it on first use."""
    global _default  # pylint: disable=global-statement
    if _default is None:
        _default = Registry()
    return _default
