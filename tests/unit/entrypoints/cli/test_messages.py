"""Unit tests for :mod:`tally.entrypoints.cli.helpers.messages`.

Glyphs follow the stderr encoding reported by ``click.get_text_stream``, and
the status lines are styled and written to stderr only.
"""

import io
import sys

import click
import pytest

from tally.entrypoints.cli.helpers.messages import _supports_character, error, success, warn

SET_YELLOW = "\x1b[33m"
SET_GREEN = "\x1b[32m"
SET_RED = "\x1b[31m"
SET_BOLD = "\x1b[1m"
RESET = "\x1b[0m"


class FakeTTY(io.StringIO):
    """A text stream that claims to be a TTY with a chosen encoding."""

    def __init__(self, encoding: str):
        super().__init__()
        self._encoding = encoding

    @property
    def encoding(self) -> str:
        """Declared character encoding."""
        return self._encoding

    def isatty(self) -> bool:
        """Report a TTY so Click keeps ANSI styling."""
        return True


def test_supports_character_follows_encoding(monkeypatch):
    """Emoji are supported on UTF-8 streams only."""
    monkeypatch.setattr(click, "get_text_stream", lambda name: FakeTTY("ascii"))
    assert _supports_character("✅") is False
    monkeypatch.setattr(click, "get_text_stream", lambda name: FakeTTY("utf-8"))
    assert _supports_character("✅") is True


@pytest.mark.parametrize(
    ("encoding", "glyph", "color_code", "func"),
    [
        ("ascii", "[!]", SET_YELLOW, warn),
        ("utf-8", "⚠️", SET_YELLOW, warn),
        ("ascii", "[OK]", SET_GREEN, success),
        ("utf-8", "✅", SET_GREEN, success),
        ("ascii", "[X]", SET_RED, error),
        ("utf-8", "❌", SET_RED, error),
    ],
)
def test_messages_emit_styled_stderr(monkeypatch, encoding, glyph, color_code, func):
    """warn/success/error write bold, colored lines with the right glyph."""
    stream = FakeTTY(encoding)
    monkeypatch.setattr(click, "get_text_stream", lambda name: stream)
    monkeypatch.setattr(sys, "stderr", stream, raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.setenv("CLICOLOR", "1")

    func("status")

    out = stream.getvalue()
    assert glyph in out
    assert SET_BOLD in out
    assert color_code in out
    assert RESET in out


def test_success_writes_to_stderr_only(monkeypatch, capsys):
    """Status lines leave stdout untouched for the report."""
    monkeypatch.setattr(click, "get_text_stream", lambda name: FakeTTY("utf-8"))
    success("done")
    captured = capsys.readouterr()
    assert "done" in captured.err
    assert captured.out == ""
