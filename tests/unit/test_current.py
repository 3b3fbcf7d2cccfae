"""Unit tests for the current-case slot in :mod:`tally.current`."""

import pytest

from tally import current
from tally.errors import CaseAlreadyActiveError, NoCurrentCaseError
from tally.location import SourceLocation
from tally.testcase import TestCase


class Empty(TestCase):
    """Case with an empty body."""

    def execute(self) -> None:
        pass


def test_no_current_case_outside_execution():
    """Asking for the current case outside a run fails fast with the call site."""
    with pytest.raises(NoCurrentCaseError) as excinfo:
        current.current_case(SourceLocation("/tmp/stray.py", 12))
    assert "stray.py(12): " in str(excinfo.value)


def test_active_sets_and_clears_slot(registry):
    """The case is current inside the block and cleared afterwards."""
    case = Empty("Active", registry=registry)
    with current.active(case):
        assert current.current_case() is case
    with pytest.raises(NoCurrentCaseError):
        current.current_case()


def test_active_clears_slot_on_error(registry):
    """An exception inside the block still clears the slot."""
    case = Empty("Broken", registry=registry)
    with pytest.raises(RuntimeError):
        with current.active(case):
            raise RuntimeError("boom")
    with pytest.raises(NoCurrentCaseError):
        current.current_case()


def test_only_one_case_may_be_active(registry):
    """Activating a second case while one is running is refused."""
    outer = Empty("Outer", registry=registry)
    inner = Empty("Inner", registry=registry)
    with current.active(outer):
        with pytest.raises(CaseAlreadyActiveError):
            with current.active(inner):
                pass
        assert current.current_case() is outer
