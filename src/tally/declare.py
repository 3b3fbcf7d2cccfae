"""Declaring test cases from plain functions.

``@case`` turns a function into a registered :class:`FunctionCase` at import
time, so a test module only needs to be imported for its cases to run:

```py
from tally import case, check_equal

@case
def Parsing():
    check_equal(int("42"), 42)

@case(weight=2.0)
def Rounding(this):          # optional handle to the running case
    this.check(round(2.5) == 2)
```

The case name defaults to the function name and decides execution order.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any, overload

from .config import DEFAULT_WEIGHT
from .registry import Registry
from .testcase import TestCase

Body = Callable[..., Any]


class FunctionCase(TestCase):
    """A test case whose body is a plain function.

    The body takes either no arguments or exactly one, which receives the
    case itself for explicit access to the check methods.
    """

    def __init__(
        self,
        body: Body,
        name: str | None = None,
        weight: float = DEFAULT_WEIGHT,
        *,
        registry: Registry | None = None,
    ) -> None:
        self.body = body
        self._pass_self = len(inspect.signature(body).parameters) == 1
        super().__init__(name or body.__name__, weight, registry=registry)
        self.__doc__ = body.__doc__

    def execute(self) -> None:
        if self._pass_self:
            self.body(self)
        else:
            self.body()


@overload
def case(body: Body, /) -> FunctionCase: ...


@overload
def case(
    name: str | None = None,
    /,
    *,
    weight: float = DEFAULT_WEIGHT,
    registry: Registry | None = None,
) -> Callable[[Body], FunctionCase]: ...


def case(
    name: str | Body | None = None,
    /,
    *,
    weight: float = DEFAULT_WEIGHT,
    registry: Registry | None = None,
) -> FunctionCase | Callable[[Body], FunctionCase]:
    """Declare a registered test case from a function.

    Usable bare (``@case``), with a name (``@case("Name")``) or with
    options (``@case(weight=2.0)``).

    Args:
        name: Case name; defaults to the decorated function's name.
        weight: Weight of the case in the aggregate score.
        registry: Registry to join; defaults to the process-wide one.

    Returns:
        The registered case (bare form) or a decorator producing it.
    """
    if callable(name):
        return FunctionCase(name, weight=weight, registry=registry)

    def decorator(body: Body) -> FunctionCase:
        return FunctionCase(body, name, weight, registry=registry)

    return decorator
