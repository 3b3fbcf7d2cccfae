"""Unit tests for :mod:`tally.callsite`."""

import inspect

from tally.callsite import CallSite, capture
from tally.location import SourceLocation


def site_of(*args, **kwargs):  # pylint: disable=unused-argument
    """Stand-in for an assertion function: captures its own call site."""
    return capture()


def test_capture_reports_caller_file_and_line():
    """The location is that of the line calling site_of."""
    line = inspect.currentframe().f_lineno + 1
    site = site_of(1)
    assert site.location.filename == __file__
    assert site.location.lineno == line


def test_capture_recovers_argument_text():
    """Positional and keyword arguments keep their literal source text."""
    values = [1, 2, 3]
    site = site_of(len(values) + 1, values[0], label="x")
    assert site.arguments == ("len(values) + 1", "values[0]")
    assert site.keywords == {"label": '"x"'}


def test_capture_picks_the_right_call_on_a_busy_line():
    """With several calls on one line the one being executed is matched."""
    first, second = site_of(10 * 2), site_of("b" * 3)
    assert first.arguments == ("10 * 2",)
    assert second.arguments == ('"b" * 3',)


def test_capture_handles_multiline_calls():
    """Arguments spread over several lines are recovered."""
    site = site_of(
        sum([1, 2]),
        "tail",
    )
    assert site.arguments == ("sum([1, 2])", '"tail"')


def test_capture_without_source_falls_back_to_location_only():
    """Code compiled from a string has no readable source; texts are empty."""
    namespace = {"site_of": site_of}
    exec(compile("site = site_of(1 + 1)", "<generated>", "exec"), namespace)  # pylint: disable=exec-used
    site = namespace["site"]
    assert site.location == SourceLocation("<generated>", 1)
    assert site.arguments == ()


def test_argument_lookup():
    """argument() prefers position, then keyword, then gives up."""
    site = CallSite(SourceLocation("f.py", 1), ("a",), {"tolerance": "0.1"})
    assert site.argument(0) == "a"
    assert site.argument(2, "tolerance") == "0.1"
    assert site.argument(1) is None
