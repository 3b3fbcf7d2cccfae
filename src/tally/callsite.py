"""Call-site capture for assertion diagnostics.

Assertions report the file and line they were written on together with the
literal source text of their arguments (``"x + 1" [3] != "4" [4]``). This
module recovers both from the calling frame: the location comes from the
frame itself, and the argument text from the ``ast`` node of the call being
executed, matched by the exact source positions the interpreter records for
the current instruction.

When the source is unavailable (interactive sessions, ``exec`` of strings,
stripped deployments) only the location is returned and callers fall back to
``repr`` of the values.
"""

from __future__ import annotations

import ast
import functools
import inspect
import linecache
import logging
import sys
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .location import SourceLocation

if TYPE_CHECKING:
    from types import FrameType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CallSite:
    """Where a check was called from and the source text of its arguments."""

    location: SourceLocation
    arguments: tuple[str, ...] = ()
    keywords: dict[str, str] = field(default_factory=dict)

    def argument(self, index: int, keyword: str | None = None) -> str | None:
        """Return the source text of a positional (or keyword) argument, if known.

        Args:
            index: Position of the argument in the call.
            keyword: Name the argument may have been passed by instead.

        Returns:
            The literal source text, or ``None`` when it could not be recovered.
        """
        if index < len(self.arguments):
            return self.arguments[index]
        if keyword is not None:
            return self.keywords.get(keyword)
        return None


Position = tuple[int, int | None, int | None, int | None]


@dataclass(frozen=True)
class _CallIndex:
    by_position: dict[Position, ast.Call]
    by_line: dict[int, list[ast.Call]]


@functools.lru_cache(maxsize=128)
def _index(source: str) -> _CallIndex | None:
    """Parse ``source`` once and index its call expressions by position."""
    try:
        tree = ast.parse(source)
    except SyntaxError:
        return None
    by_position: dict[Position, ast.Call] = {}
    by_line: dict[int, list[ast.Call]] = {}
    for node in ast.walk(tree):
        if isinstance(node, ast.Call):
            key = (node.lineno, node.end_lineno, node.col_offset, node.end_col_offset)
            by_position[key] = node
            by_line.setdefault(node.lineno, []).append(node)
    return _CallIndex(by_position, by_line)


def _find_call(index: _CallIndex, frame: FrameType) -> ast.Call | None:
    positions = inspect.getframeinfo(frame, context=0).positions
    if positions is not None:
        key = (
            positions.lineno,
            positions.end_lineno,
            positions.col_offset,
            positions.end_col_offset,
        )
        if (call := index.by_position.get(key)) is not None:
            return call
    # Without exact positions only an unambiguous line is trusted.
    same_line = index.by_line.get(frame.f_lineno, [])
    if len(same_line) == 1:
        return same_line[0]
    return None


def _argument_texts(frame: FrameType) -> tuple[tuple[str, ...], dict[str, str]]:
    filename = frame.f_code.co_filename
    source = "".join(linecache.getlines(filename, frame.f_globals))
    if not source or (index := _index(source)) is None:
        return (), {}
    if (call := _find_call(index, frame)) is None:
        logger.debug("No call expression found at %s:%s", filename, frame.f_lineno)
        return (), {}
    arguments = tuple(
        ast.get_source_segment(source, arg) or ast.unparse(arg) for arg in call.args
    )
    keywords = {
        kw.arg: ast.get_source_segment(source, kw.value) or ast.unparse(kw.value)
        for kw in call.keywords
        if kw.arg is not None
    }
    return arguments, keywords


def capture(stacklevel: int = 1) -> CallSite:
    """Capture the call site of the function that calls ``capture``.

    Args:
        stacklevel: How many frames above the caller of ``capture`` to look.
            ``1`` (default) describes the code that called the function which
            is calling ``capture``.

    Returns:
        The caller's location and, when the source is readable, the literal
        text of each argument it passed.
    """
    frame = sys._getframe(stacklevel + 1)  # pylint: disable=protected-access
    try:
        location = SourceLocation(frame.f_code.co_filename, frame.f_lineno)
        arguments, keywords = _argument_texts(frame)
        return CallSite(location, arguments, keywords)
    finally:
        del frame
