"""Error definitions for the harness."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .location import SourceLocation

# ============================================================================
#                           General harness errors
# ============================================================================


class TallyError(Exception):
    """Base class for harness errors."""


class InvalidCaseError(TallyError, ValueError):
    """Raised when a test case is constructed with an unusable name or weight."""


# ============================================================================
#                       Current-case (locator) errors
# ============================================================================


class NoCurrentCaseError(TallyError, RuntimeError):
    """Raised when an assertion runs while no test case is executing."""

    def __init__(self, location: SourceLocation | None = None) -> None:
        where = f"{location.tag()}" if location is not None else ""
        super().__init__(
            f"{where}check called outside of a running test case; "
            "assertions may only run while the driver executes a case."
        )
        self.location = location


class CaseAlreadyActiveError(TallyError, RuntimeError):
    """Raised when a case is activated while another one is still current."""

    def __init__(self, active: str, requested: str) -> None:
        super().__init__(
            f"Cannot activate test case '{requested}' while '{active}' is running."
        )
        self.active = active
        self.requested = requested


# ============================================================================
#                               Loading errors
# ============================================================================


class ModuleLoadError(TallyError):
    """Raised when a test module named on the command line cannot be imported."""

    def __init__(self, target: str, reason: str) -> None:
        super().__init__(f"Cannot load test module '{target}': {reason}")
        self.target = target
        self.reason = reason


# ============================================================================
#                               Control flow
# ============================================================================


class CaseAborted(BaseException):
    """Raised by ``fail`` to stop the rest of the running test body.

    Derives from ``BaseException`` so that ``except Exception`` blocks in test
    code do not swallow it. The driver catches it and moves to the next case.
    """
