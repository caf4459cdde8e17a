"""Fused multiply-add capability shared by the runtime and generated evaluators."""
from __future__ import annotations

import math
import numbers
from decimal import Decimal
from fractions import Fraction
from functools import singledispatch
from typing import Any, Protocol


class Arithmetic(Protocol):
    """Minimal capability every evaluator needs: ``+`` and ``*``."""

    def __add__(self, other: Any) -> Any: ...

    def __mul__(self, other: Any) -> Any: ...


class SupportsFma(Arithmetic, Protocol):
    """Types that can compute ``self * other + third`` in one step (e.g. ``Decimal``)."""

    def fma(self, other: Any, third: Any) -> Any: ...


def _zero_sign(value: numbers.Real) -> float:
    """A float carrying the sign of ``value``; magnitude does not matter once a zero is involved."""

    if isinstance(value, float):
        return value
    if value == 0:
        return 0.0
    return 1.0 if value > 0 else -1.0


def _fused_float(a: numbers.Real, b: numbers.Real, c: numbers.Real) -> float:
    """Round the exact value of ``a*b + c`` to float once."""

    try:
        product = Fraction(a) * Fraction(b)
        exact = product + Fraction(c)
    except (OverflowError, ValueError):
        # inf or nan among the operands
        return float(a) * float(b) + float(c)
    if exact == 0:
        if product == 0 and c == 0:
            # only the signs of the zeros are left to combine
            return _zero_sign(a) * _zero_sign(b) + _zero_sign(c)
        # a nonzero product cancelled exactly rounds to +0.0
        return 0.0
    try:
        return float(exact)
    except OverflowError:
        return math.inf if exact > 0 else -math.inf


@singledispatch
def fma(a: Any, b: Any, c: Any) -> Any:
    """Return ``a * b + c``, fused into a single rounding where the type allows it.

    Types without a fused operation fall back to an ordinary multiply and
    add. For exact types (``int``, ``Fraction``, flint integers) the two are
    identical. Register fusion for another type with ``fma.register``.
    """

    return a * b + c


@fma.register(numbers.Real)
def _fma_real(a, b, c):
    if isinstance(a, numbers.Integral) and (isinstance(b, Decimal) or isinstance(c, Decimal)):
        return Decimal(int(a)).fma(b, c)
    operands = (a, b, c)
    if any(isinstance(v, float) for v in operands) and all(
        isinstance(v, (numbers.Rational, float)) for v in operands
    ):
        return _fused_float(a, b, c)
    return a * b + c


@fma.register(Decimal)
def _fma_decimal(a: SupportsFma, b, c):
    return a.fma(b, c)
