"""Horner code generator.

``expand_horner("x", "2, 3, 4")`` unrolls to the expression
``2 + x * (3 + x * 4)``: ``n - 1`` multiplications and ``n - 1`` additions
for ``n`` coefficients, each coefficient written exactly once.

The point expression is repeated at every multiplication site. When it is
costly or has side effects, pass ``once=True``; the expansion then evaluates
it a single time and reuses the value::

    (lambda x: 2 + x * (3 + x * 4))(next_point())
"""
from __future__ import annotations

import ast
from typing import List

from .expansion import Expansion, PointFactory, add, build, fma_call, mul
from .syntax import CoefficientSpec, Source


def horner_tree(point: PointFactory, coeffs: List[ast.expr], fused: bool) -> ast.expr:
    """Build ``a0 + x*(a1 + x*(... + x*an))``, or the ``fma(inner, x, a)`` chain when fused."""

    result = coeffs[-1]
    for a in reversed(coeffs[:-1]):
        if fused:
            result = fma_call(result, point(), a)
        else:
            result = add(a, mul(point(), result))
    return result


def expand_horner(point: Source, coeffs: CoefficientSpec, *, once: bool = False) -> Expansion:
    """Unroll ``coeffs`` at ``point`` with Horner's method.

    >>> expand_horner("x", "[2, 3, 4]").source
    '2 + x * (3 + x * 4)'
    >>> expand_horner("x", "2, 3, 4")(x=7)
    219
    """

    return build("horner", horner_tree, point, coeffs, fused=False, once=once)


def expand_horner_fma(point: Source, coeffs: CoefficientSpec, *, once: bool = False) -> Expansion:
    """Unroll ``coeffs`` at ``point`` with Horner's method, one FMA per step."""

    return build("horner", horner_tree, point, coeffs, fused=True, once=once)
