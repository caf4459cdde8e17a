"""Exact Horner evaluation through python-flint polynomials."""
from __future__ import annotations

from fractions import Fraction
from typing import List, Sequence, Union

from flint import fmpq, fmpq_poly, fmpz_poly

Exact = Union[int, Fraction]


def is_exact(value: object) -> bool:
    """True for values flint can take without rounding: ``int`` and ``Fraction``."""

    return isinstance(value, (int, Fraction)) and not isinstance(value, bool)


def _to_fmpq(value: Exact) -> fmpq:
    q = Fraction(value)
    return fmpq(q.numerator, q.denominator)


def evaluate(x: Exact, coeffs: Sequence[Exact]) -> Exact:
    """Evaluate ``coeffs`` (lowest degree first) at ``x`` with flint.

    Integer inputs go through ``fmpz_poly`` and come back as ``int``; any
    ``Fraction`` switches to ``fmpq_poly`` and the result is a ``Fraction``.
    """

    coeff_list: List[Exact] = list(coeffs)
    if not all(is_exact(v) for v in [x, *coeff_list]):
        raise TypeError("flint backend requires int or Fraction coefficients and point")
    if all(isinstance(v, int) for v in [x, *coeff_list]):
        return int(fmpz_poly(coeff_list)(x))
    value = fmpq_poly([_to_fmpq(c) for c in coeff_list])(_to_fmpq(x))
    return Fraction(int(value.p), int(value.q))
