"""Source locations and the ``file(line): `` diagnostic tag.

Every failure line printed by the harness starts with this tag so editors and
IDEs can jump straight to the failing check.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


def _display_path(filename: str) -> str:
    """Show ``filename`` relative to the working directory when it lies beneath it."""
    path = Path(filename)
    if not path.is_absolute():
        return filename
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return os.fspath(path)


def format_location(filename: str, lineno: int) -> str:
    """Render the diagnostic tag for a source location.

    Args:
        filename: Source file the check was written in.
        lineno: 1-based line number of the check.

    Returns:
        The tag ``"<file>(<line>): "``.

    Example:
        ```py
        >>> format_location("tests/test_math.py", 12)
        'tests/test_math.py(12): '
        ```
    """
    return f"{_display_path(filename)}({lineno}): "


@dataclass(frozen=True)
class SourceLocation:
    """File and line of a check call."""

    filename: str
    lineno: int

    def tag(self) -> str:
        """Return the ``file(line): `` prefix for this location."""
        return format_location(self.filename, self.lineno)

    def __str__(self) -> str:
        return f"{_display_path(self.filename)}({self.lineno})"
