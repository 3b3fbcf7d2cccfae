"""Base class for test cases and their check primitives."""

from __future__ import annotations

import abc
import functools
import logging
import math
import numbers
from collections.abc import Callable
from typing import Any

from .callsite import CallSite, capture
from .config import DEFAULT_WEIGHT
from .errors import CaseAborted, InvalidCaseError
from .location import SourceLocation
from .registry import Registry, default_registry
from .reporting import Reporter, one_line

logger = logging.getLogger(__name__)

ExceptionTypes = type[BaseException] | tuple[type[BaseException], ...]


def _magnitude(value: Any) -> str:
    """Render a computed difference or limit; floats use ``%g``."""
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def _exception_names(expected: ExceptionTypes) -> str:
    if isinstance(expected, tuple):
        return ", ".join(e.__name__ for e in expected)
    return expected.__name__


def _text(given: str | None, site: CallSite | None, index: int, keyword: str) -> str | None:
    if given is not None:
        return given
    if site is None:
        return None
    return site.argument(index, keyword)


@functools.total_ordering
class TestCase(abc.ABC):
    """One independently identified and executed unit of checks.

    Constructing a case registers it, so declaring a case at module level is
    enough for the driver to find it. Concrete cases implement
    :meth:`execute`; :func:`tally.case` builds one from a plain function.

    Cases compare, sort and hash by ``name`` only.

    Args:
        name: Identifier of the case; also decides its position in the run.
        weight: Positive weight of the case in the aggregate score.
        registry: Registry to join. Defaults to the process-wide registry.

    Raises:
        InvalidCaseError: If ``name`` is empty or not a string, or ``weight``
            is not a positive finite number.
    """

    __test__ = False  # not a pytest test class

    def __init__(
        self, name: str, weight: float = DEFAULT_WEIGHT, *, registry: Registry | None = None
    ) -> None:
        if not isinstance(name, str) or not name:
            raise InvalidCaseError(f"Test case name must be a non-empty string, got {name!r}")
        if (
            isinstance(weight, bool)
            or not isinstance(weight, numbers.Real)
            or not math.isfinite(weight)
            or weight <= 0
        ):
            raise InvalidCaseError(
                f"Test case '{name}' needs a positive finite weight, got {weight!r}"
            )
        self._name = name
        self.weight = float(weight)
        self.checked_count = 0
        self.passed_count = 0
        self.crashed = False
        self.strict_throws = False
        self.reporter = Reporter()
        (registry if registry is not None else default_registry()).register(self)

    @property
    def name(self) -> str:
        """Identifier of the case."""
        return self._name

    # --- Test body ---

    @abc.abstractmethod
    def execute(self) -> None:
        """Run the body of the test case."""

    # --- Counters ---

    def record_checked(self) -> None:
        """Count one evaluated check."""
        self.checked_count += 1

    def record_passed(self) -> None:
        """Count one successful check."""
        self.passed_count += 1

    def reset_counters(self) -> None:
        """Zero the counters and the crash marker before a fresh execution."""
        self.checked_count = 0
        self.passed_count = 0
        self.crashed = False

    def _report(self, location: SourceLocation, text: str) -> None:
        logger.debug("Check failed in %r at %s", self._name, location)
        self.reporter.diagnostic(location, text)

    # --- Check services ---

    def check(
        self,
        condition: Any,
        expression_text: str | None = None,
        location: SourceLocation | None = None,
    ) -> None:
        """Check that ``condition`` is true.

        On failure emits ``<file>(<line>): "<expression_text>" failed``.
        When ``location`` is omitted, it and the expression text are taken
        from the caller's source.
        """
        site = capture() if location is None else None
        location = location or site.location
        self.record_checked()
        if condition:
            self.record_passed()
            return
        text = _text(expression_text, site, 0, "condition") or repr(condition)
        self._report(location, f'"{text}" failed')

    def check_message(
        self,
        condition: Any,
        message: str | Callable[[], str],
        location: SourceLocation | None = None,
    ) -> None:
        """Check that ``condition`` is true, reporting ``message`` if it is not.

        Args:
            condition: Value that must be truthy.
            message: Failure text, or a zero-argument callable producing it.
                A callable is only invoked when the check fails.
            location: Call site; captured from the caller when omitted.
        """
        location = location or capture().location
        self.record_checked()
        if condition:
            self.record_passed()
            return
        self._report(location, message() if callable(message) else str(message))

    def check_equal(
        self,
        lhs: Any,
        rhs: Any,
        lhs_text: str | None = None,
        rhs_text: str | None = None,
        location: SourceLocation | None = None,
    ) -> None:
        """Check ``lhs == rhs`` using the operands' own equality.

        On failure emits ``"<lhs_text>" [<lhs>] != "<rhs_text>" [<rhs>]``.
        """
        site = capture() if location is None else None
        location = location or site.location
        self.record_checked()
        if lhs == rhs:
            self.record_passed()
            return
        lhs_text = _text(lhs_text, site, 0, "lhs") or repr(lhs)
        rhs_text = _text(rhs_text, site, 1, "rhs") or repr(rhs)
        self._report(location, one_line(f'"{lhs_text}" [{lhs}] != "{rhs_text}" [{rhs}]'))

    def check_within(  # pylint: disable=too-many-arguments, too-many-positional-arguments
        self,
        lhs: Any,
        rhs: Any,
        minimum: Any,
        lhs_text: str | None = None,
        rhs_text: str | None = None,
        minimum_text: str | None = None,
        location: SourceLocation | None = None,
    ) -> None:
        """Check that ``lhs`` and ``rhs`` differ by no more than ``abs(minimum)``.

        ``minimum`` may be negative; only its magnitude matters. On failure
        the diagnostic shows the operand texts, the values, the absolute
        difference and the allowed difference.
        """
        site = capture() if location is None else None
        location = location or site.location
        difference = abs(lhs - rhs)
        limit = abs(minimum)
        self.record_checked()
        if difference <= limit:
            self.record_passed()
            return
        lhs_text = _text(lhs_text, site, 0, "lhs") or repr(lhs)
        rhs_text = _text(rhs_text, site, 1, "rhs") or repr(rhs)
        minimum_text = _text(minimum_text, site, 2, "minimum") or repr(minimum)
        self._report(
            location,
            f"difference({lhs_text}, {rhs_text}) > {minimum_text} ==> "
            f"|{lhs} - {rhs}| = {_magnitude(difference)} > {_magnitude(limit)}",
        )

    def check_throws(  # pylint: disable=too-many-arguments, too-many-positional-arguments
        self,
        expected: ExceptionTypes,
        operation: Callable[..., Any],
        args: tuple[Any, ...] = (),
        kwargs: dict[str, Any] | None = None,
        expected_text: str | None = None,
        location: SourceLocation | None = None,
    ) -> None:
        """Check that ``operation(*args, **kwargs)`` raises ``expected``.

        The call arguments are passed as a tuple and a dict so that any
        keyword, including ``location``, reaches ``operation`` untouched.

        - ``expected`` raised: pass.
        - Nothing raised: failure, reported as such.
        - A different ``Exception`` raised: reported as a mismatch. It still
          counts as a pass unless :attr:`strict_throws` is set.
        """
        site = capture() if location is None else None
        location = location or site.location
        expected_text = _text(expected_text, site, 0, "expected") or _exception_names(expected)
        self.record_checked()
        try:
            operation(*args, **(kwargs or {}))
        except expected:
            self.record_passed()
            return
        except Exception as e:  # pylint: disable=broad-except
            self._report(
                location,
                one_line(
                    f'expected exception "{expected_text}" not thrown, '
                    f'caught "{type(e).__name__}: {e}" instead'
                ),
            )
            if not self.strict_throws:
                self.record_passed()
            return
        self._report(location, f'no exception thrown, expecting "{expected_text}"')

    def fail(self, message: str, location: SourceLocation | None = None) -> None:
        """Record a failed check and stop the rest of the test body.

        Raises:
            CaseAborted: Always; the driver catches it and continues with the
                next case.
        """
        location = location or capture().location
        self.record_checked()
        self._report(location, str(message))
        raise CaseAborted(message)

    # --- Identity ---

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TestCase):
            return NotImplemented
        return self._name == other._name

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, TestCase):
            return NotImplemented
        return self._name < other._name

    def __hash__(self) -> int:
        return hash(self._name)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self._name!r}, weight={self.weight:g}, "
            f"passed={self.passed_count}/{self.checked_count})"
        )
