"""Runtime evaluators over coefficient sequences.

Coefficients are listed lowest degree first: ``coeffs[i]`` multiplies
``x**i``. Every evaluator here accepts an empty sequence and returns
``zero`` for it.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, List, Sequence

from . import _flint
from .exceptions import ArityError
from .fma import Arithmetic, fma

logger = logging.getLogger(__name__)

Backend = str

_BACKENDS = ("auto", "python", "flint")


# ---------------------------------------------------------------------------
# Horner
# ---------------------------------------------------------------------------

def _horner_loop(x: Any, coeffs: Sequence[Any], zero: Any) -> Any:
    acc = zero
    for c in reversed(coeffs):
        acc = acc * x + c
    return acc


def _is_int_zero(zero: Any) -> bool:
    return type(zero) is int and zero == 0


def horner(x: Arithmetic, coeffs: Sequence[Arithmetic], *, zero: Any = 0, backend: Backend = "auto") -> Any:
    """Evaluate ``c0 + x*(c1 + x*(c2 + ...))`` with Horner's method.

    The accumulator starts at ``zero`` (the additive identity) and absorbs
    coefficients from the highest index down, so ``horner(x, []) == zero``.

    ``backend="flint"`` evaluates exact ``int``/``Fraction`` inputs with
    python-flint and ignores ``zero``; ``"auto"`` does so only when every
    input is exact and ``zero`` is the default integer ``0``, and uses the
    plain loop otherwise; ``"python"`` always uses the plain loop.
    """

    if backend not in _BACKENDS:
        raise ValueError(f"Unknown backend: {backend}")
    coeff_list = list(coeffs)
    if not coeff_list:
        return zero
    if backend == "flint":
        return _flint.evaluate(x, coeff_list)
    if backend == "auto" and _is_int_zero(zero) and _flint.is_exact(x) and all(_flint.is_exact(c) for c in coeff_list):
        logger.debug("horner: exact inputs, using flint for %d coefficients", len(coeff_list))
        return _flint.evaluate(x, coeff_list)
    return _horner_loop(x, coeff_list, zero)


def horner_fma(x: Arithmetic, coeffs: Sequence[Arithmetic], *, zero: Any = 0) -> Any:
    """Horner's method with every step fused: ``acc = fma(acc, x, c)``."""

    acc = zero
    for c in reversed(list(coeffs)):
        acc = fma(acc, x, c)
    return acc


class FixedHorner:
    """Horner evaluator bound to a declared number of coefficients.

    The arity is fixed when the evaluator is created. A call with a
    different number of coefficients raises :class:`ArityError` before any
    arithmetic is done.

    >>> cubic = FixedHorner(4)
    >>> cubic(2, [1, 0, 0, 1])
    9
    """

    def __init__(self, arity: int):
        if arity < 0:
            raise ValueError("arity must be non-negative")
        self.arity = arity

    def check(self, coeffs: Sequence[Any]) -> List[Any]:
        coeff_list = list(coeffs)
        if len(coeff_list) != self.arity:
            raise ArityError(self.arity, len(coeff_list))
        return coeff_list

    def __call__(self, x: Any, coeffs: Sequence[Any], *, zero: Any = 0) -> Any:
        return _horner_loop(x, self.check(coeffs), zero)

    def __repr__(self) -> str:
        return f"FixedHorner(arity={self.arity})"


def horner_fixed(x: Any, coeffs: Sequence[Any], arity: int, *, zero: Any = 0) -> Any:
    """One-shot form of :class:`FixedHorner`."""

    return FixedHorner(arity)(x, coeffs, zero=zero)


# ---------------------------------------------------------------------------
# Estrin
# ---------------------------------------------------------------------------

def _estrin_reduce(x: Any, coeffs: Sequence[Any], zero: Any, combine: Callable[[Any, Any, Any], Any]) -> Any:
    """Pairwise reduction shared by :func:`estrin` and :func:`estrin_fma`.

    ``combine(x, hi, lo)`` computes ``lo + x*hi``. Each round folds
    ``(b0, b1), (b2, b3), ...`` from the low end, carries an odd tail
    unchanged and squares the point once.
    """

    terms = list(coeffs)
    if not terms:
        return zero
    while len(terms) > 2:
        paired = [combine(x, terms[i + 1], terms[i]) for i in range(0, len(terms) - 1, 2)]
        if len(terms) % 2:
            paired.append(terms[-1])
        terms = paired
        x = x * x
    if len(terms) == 1:
        return terms[0]
    return combine(x, terms[1], terms[0])


def estrin(x: Arithmetic, coeffs: Sequence[Arithmetic], *, zero: Any = 0) -> Any:
    """Evaluate with Estrin's scheme: shorter dependency chain, more multiplies."""

    return _estrin_reduce(x, coeffs, zero, lambda p, hi, lo: lo + p * hi)


def estrin_fma(x: Arithmetic, coeffs: Sequence[Arithmetic], *, zero: Any = 0) -> Any:
    """Estrin's scheme with each pair fused as ``fma(x, hi, lo)``."""

    return _estrin_reduce(x, coeffs, zero, fma)
