"""TALLY

A small unit-testing harness. Test cases register themselves when they are
declared, a driver runs them in name order, and assertion primitives record
pass/fail counts and print IDE-friendly ``file(line): ...`` diagnostics.
"""

from .assertions import (
    check,
    check_equal,
    check_message,
    check_throws,
    check_within,
    fail,
)
from .declare import FunctionCase, case
from .driver import CaseResult, Driver, RunSummary
from .registry import Registry, default_registry
from .testcase import TestCase

__all__ = [
    "__version__",
    "CaseResult",
    "Driver",
    "FunctionCase",
    "Registry",
    "RunSummary",
    "TestCase",
    "case",
    "check",
    "check_equal",
    "check_message",
    "check_throws",
    "check_within",
    "default_registry",
    "fail",
]
__version__ = "0.1.0"
