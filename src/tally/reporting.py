"""Rendering and routing of harness output.

The reporter writes human-readable lines to the display stream (stdout unless
one is given) and mirrors every line to the ``tally.results`` logger, which is
the optional results log sink. Whether that logger has a working file handler
attached is irrelevant here: log writes never affect the display.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TextIO

import click

from .config import RESULTS_LOGGER

if TYPE_CHECKING:
    from .driver import CaseResult, RunSummary
    from .location import SourceLocation

results_log = logging.getLogger(RESULTS_LOGGER)
results_log.addHandler(logging.NullHandler())
results_log.setLevel(logging.INFO)
results_log.propagate = False


def _percent(ratio: float) -> str:
    return f"{ratio * 100:.2f}%"


def one_line(text: str) -> str:
    """Escape line breaks so that a diagnostic stays on a single line."""
    return text.replace("\r", "\\r").replace("\n", "\\n")


class Reporter:
    """Writes diagnostics and summaries to the display and the results log.

    Args:
        display: Text stream for console output. Defaults to stdout, resolved
            at write time so that stream redirection (e.g. by test runners)
            is honored.
    """

    def __init__(self, display: TextIO | None = None) -> None:
        self._display = display

    def emit(self, line: str) -> None:
        """Write one line to the display and mirror it to the results log."""
        click.echo(line, file=self._display)
        results_log.info(line)

    def diagnostic(self, location: SourceLocation, text: str) -> None:
        """Emit a failure line prefixed with the ``file(line): `` tag."""
        self.emit(f"{location.tag()}{text}")

    def case_summary(self, result: CaseResult) -> None:
        """Emit the one-line outcome of a single test case."""
        line = (
            f'"{result.name}" passed {result.passed} of {result.checked} checks '
            f"({_percent(result.ratio)}, weight {result.weight:g})"
        )
        if result.crashed:
            line += " - aborted by an unexpected exception"
        self.emit(line)

    def run_summary(self, summary: RunSummary) -> None:
        """Emit per-case lines followed by the aggregate line."""
        for result in summary.results:
            self.case_summary(result)
        self.emit(
            f"Total: {summary.passed} of {summary.checked} checks passed "
            f"in {len(summary.results)} test cases, "
            f"weighted score {_percent(summary.weighted_score)}"
        )
