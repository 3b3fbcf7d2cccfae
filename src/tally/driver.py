"""Test driver: runs registered cases in name order and scores the run."""

from __future__ import annotations

import logging
import sysconfig
import traceback
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from . import current
from .errors import CaseAborted
from .location import SourceLocation
from .logging import close_results_log, config_results_log
from .registry import Registry, default_registry
from .reporting import Reporter, one_line

if TYPE_CHECKING:
    from .testcase import TestCase

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CaseResult:
    """Outcome of one executed test case."""

    name: str
    weight: float
    checked: int
    passed: int
    crashed: bool = False

    @classmethod
    def of(cls, case: TestCase) -> CaseResult:
        """Snapshot the counters of ``case``."""
        return cls(case.name, case.weight, case.checked_count, case.passed_count, case.crashed)

    @property
    def ratio(self) -> float:
        """Fraction of checks that passed; 0.0 when nothing was checked."""
        return self.passed / self.checked if self.checked else 0.0

    @property
    def succeeded(self) -> bool:
        """True if no check failed and the body did not crash."""
        return self.passed == self.checked and not self.crashed


@dataclass(frozen=True)
class RunSummary:
    """Results of a full run, in execution order."""

    results: tuple[CaseResult, ...]

    @property
    def checked(self) -> int:
        """Checks evaluated across all cases."""
        return sum(r.checked for r in self.results)

    @property
    def passed(self) -> int:
        """Checks passed across all cases."""
        return sum(r.passed for r in self.results)

    @property
    def weighted_score(self) -> float:
        """Weight-averaged pass ratio over the cases that checked anything.

        Cases without checks contribute neither score nor weight. A run in
        which nothing was checked scores 0.0.
        """
        scored = [r for r in self.results if r.checked]
        total_weight = sum(r.weight for r in scored)
        if not total_weight:
            return 0.0
        return sum(r.weight * r.ratio for r in scored) / total_weight

    @property
    def succeeded(self) -> bool:
        """True if every case succeeded."""
        return all(r.succeeded for r in self.results)

    @property
    def exit_status(self) -> int:
        """Process exit status: 0 on success, 1 otherwise."""
        return 0 if self.succeeded else 1


_PACKAGE_DIR = Path(__file__).resolve().parent
_LIBRARY_DIRS = tuple(
    Path(path).resolve()
    for path in {
        sysconfig.get_path(name) for name in ("stdlib", "platstdlib", "purelib", "platlib")
    }
    if path
)


def _is_user_code(filename: str) -> bool:
    if filename.startswith("<"):
        return False
    path = Path(filename).resolve()
    return not any(path.is_relative_to(d) for d in (_PACKAGE_DIR, *_LIBRARY_DIRS))


def _crash_location(error: BaseException) -> SourceLocation | None:
    """Locate a crash at the innermost frame of test code, not library code."""
    frames = traceback.extract_tb(error.__traceback__)
    if not frames:
        return None
    frame = next((f for f in reversed(frames) if _is_user_code(f.filename)), frames[-1])
    return SourceLocation(frame.filename, frame.lineno or 0)


class Driver:
    """Runs every registered test case once, in lexicographic name order.

    Execution order depends only on case names, never on declaration or import
    order, so runs are reproducible.

    Args:
        registry: Registry to run. Defaults to the process-wide registry.
        reporter: Output router for diagnostics and summaries.
        strict_throws: Count a ``check_throws`` that caught the wrong exception
            type as a failure instead of a pass.
    """

    def __init__(
        self,
        registry: Registry | None = None,
        *,
        reporter: Reporter | None = None,
        strict_throws: bool = False,
    ) -> None:
        self.registry = registry if registry is not None else default_registry()
        self.reporter = reporter or Reporter()
        self.strict_throws = strict_throws
        self._log_handler: logging.Handler | None = None

    def setup(self, log_path: Path | None = None) -> None:
        """Prepare output sinks.

        Args:
            log_path: File the results are appended to. ``None`` disables the
                results log. A file that cannot be opened is reported as a
                warning; the run still goes ahead on the console.
        """
        if log_path is not None:
            self._log_handler = config_results_log(log_path)

    def teardown(self) -> None:
        """Close the results log, if one was opened."""
        if self._log_handler is not None:
            close_results_log(self._log_handler)
            self._log_handler = None

    def _run_case(self, case: TestCase) -> CaseResult:
        case.reset_counters()
        case.reporter = self.reporter
        case.strict_throws = self.strict_throws
        logger.debug("Running test case %r", case.name)
        with current.active(case):
            try:
                case.execute()
            except CaseAborted:
                logger.debug("Test case %r stopped by fail()", case.name)
            except Exception as e:  # pylint: disable=broad-except
                logger.debug("Unexpected exception in test case %r", case.name, exc_info=True)
                case.record_checked()
                case.crashed = True
                location = _crash_location(e)
                text = one_line(
                    f'unexpected exception {type(e).__name__}("{e}") '
                    f'escaped test case "{case.name}"'
                )
                if location is not None:
                    self.reporter.diagnostic(location, text)
                else:
                    self.reporter.emit(text)
        result = CaseResult.of(case)
        logger.info(
            "Test case %r: %d/%d checks passed", result.name, result.passed, result.checked
        )
        return result

    def run(self, cases: Sequence[TestCase] | None = None) -> RunSummary:
        """Execute cases in name order and collect their results.

        Args:
            cases: Cases to run instead of the registry's content.

        Returns:
            The results of every case, in execution order.
        """
        ordered = sorted(cases if cases is not None else self.registry.all())
        logger.info("Running %d test cases", len(ordered))
        return RunSummary(tuple(self._run_case(case) for case in ordered))

    def execute(self) -> int:
        """Run all cases, print the summary and return the process exit status."""
        summary = self.run()
        self.reporter.run_summary(summary)
        return summary.exit_status
