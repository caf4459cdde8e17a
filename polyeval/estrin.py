"""Estrin code generator.

Coefficients are combined pairwise from the low end, ``b_i = a_2i + x*a_2i+1``
(an odd tail carries through unchanged), and the shorter list is expanded
again at ``x*x``. The squared point is bound once per level, so the
expansion of ``a0, ..., a4`` at ``x`` reads::

    (lambda x2: (lambda x4: a0 + x * a1 + x2 * (a2 + x * a3) + x4 * a4)(x2 * x2))(x * x)

The dependency chain is ``O(log n)`` deep instead of Horner's ``O(n)``, at
the cost of the extra squarings.
"""
from __future__ import annotations

import ast
from typing import List

from .expansion import Expansion, PointFactory, add, bind, build, fma_call, mul, name_point, power_name
from .syntax import CoefficientSpec, Source


def _pair(point: PointFactory, lo: ast.expr, hi: ast.expr, fused: bool) -> ast.expr:
    if fused:
        return fma_call(point(), hi, lo)
    return add(lo, mul(point(), hi))


def _estrin(point: PointFactory, coeffs: List[ast.expr], fused: bool, power: int) -> ast.expr:
    n = len(coeffs)
    if n == 1:
        return coeffs[0]
    if n == 2:
        return _pair(point, coeffs[0], coeffs[1], fused)
    paired = [_pair(point, coeffs[i], coeffs[i + 1], fused) for i in range(0, n - 1, 2)]
    if n % 2:
        paired.append(coeffs[-1])
    squared = power_name(2 * power)
    body = _estrin(name_point(squared), paired, fused, 2 * power)
    return bind(squared, mul(point(), point()), body)


def estrin_tree(point: PointFactory, coeffs: List[ast.expr], fused: bool) -> ast.expr:
    return _estrin(point, coeffs, fused, 1)


def expand_estrin(point: Source, coeffs: CoefficientSpec, *, once: bool = False) -> Expansion:
    """Unroll ``coeffs`` at ``point`` with Estrin's scheme.

    >>> expand_estrin("x", "2, 3, 4")(x=7)
    219
    """

    return build("estrin", estrin_tree, point, coeffs, fused=False, once=once)


def expand_estrin_fma(point: Source, coeffs: CoefficientSpec, *, once: bool = False) -> Expansion:
    """Unroll ``coeffs`` at ``point`` with Estrin's scheme, each pair as ``fma(x, hi, lo)``."""

    return build("estrin", estrin_tree, point, coeffs, fused=True, once=once)
