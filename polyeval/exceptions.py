"""Exception hierarchy for polynomial evaluation."""
from __future__ import annotations


class PolyevalError(Exception):
    """Base class for errors raised by polyeval."""


class DegreeError(PolyevalError, ValueError):
    """Raised when a coefficient list has no terms to unroll.

    The code generators have no expansion for an empty list, so this is
    raised while building, before anything is evaluated.
    """


class ArityError(PolyevalError, TypeError):
    """Raised when coefficients do not match a declared fixed arity."""

    def __init__(self, expected: int, actual: int):
        super().__init__(f"expected {expected} coefficients, got {actual}")
        self.expected = expected
        self.actual = actual
