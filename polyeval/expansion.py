"""Straight-line expansions of a literal polynomial and their evaluation.

The code generators in :mod:`polyeval.horner` and :mod:`polyeval.estrin`
turn a coefficient list into a single Python expression tree. This module
owns the pieces they share: the node helpers, the single-evaluation
binding, compilation with caching, and the :class:`Expansion` result.
"""
from __future__ import annotations

import ast
import copy
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from types import CodeType
from typing import Any, Callable, List, Mapping, Optional, Tuple

from .fma import fma
from .syntax import CoefficientSpec, Source, coefficient_nodes, point_node

logger = logging.getLogger(__name__)

FMA_NAME = "__polyeval_fma__"
POINT_NAME = "__polyeval_x__"

PointFactory = Callable[[], ast.expr]
TreeBuilder = Callable[[PointFactory, List[ast.expr], bool], ast.expr]


# ---------------------------------------------------------------------------
# Node helpers
# ---------------------------------------------------------------------------

def power_name(power: int) -> str:
    """Name bound to ``x**power`` inside an Estrin expansion."""

    return f"__polyeval_x{power}__"


def load(name: str) -> ast.Name:
    return ast.Name(id=name, ctx=ast.Load())


def name_point(name: str) -> PointFactory:
    return lambda: load(name)


def copied_point(point: ast.expr) -> PointFactory:
    """Every call yields a fresh copy of ``point``: the expression is repeated verbatim."""

    return lambda: copy.deepcopy(point)


def add(a: ast.expr, b: ast.expr) -> ast.expr:
    return ast.BinOp(left=a, op=ast.Add(), right=b)


def mul(a: ast.expr, b: ast.expr) -> ast.expr:
    return ast.BinOp(left=a, op=ast.Mult(), right=b)


def fma_call(a: ast.expr, b: ast.expr, c: ast.expr) -> ast.expr:
    """``fma(a, b, c)``, i.e. ``a*b + c`` with a single rounding."""

    return ast.Call(func=load(FMA_NAME), args=[a, b, c], keywords=[])


def lambda_of(name: str, body: ast.expr) -> ast.Lambda:
    params = ast.arguments(
        posonlyargs=[],
        args=[ast.arg(arg=name)],
        vararg=None,
        kwonlyargs=[],
        kw_defaults=[],
        kwarg=None,
        defaults=[],
    )
    return ast.Lambda(args=params, body=body)


def bind(name: str, value: ast.expr, body: ast.expr) -> ast.expr:
    """``(lambda name: body)(value)``: evaluate ``value`` once, use it as ``name`` in ``body``."""

    return ast.Call(func=lambda_of(name, body), args=[value], keywords=[])


# ---------------------------------------------------------------------------
# Expansion
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Expansion:
    """A compiled, unrolled polynomial expression.

    Attributes
    ----------
    scheme: str
        ``"horner"`` or ``"estrin"``.
    fused: bool
        Whether combination steps go through :func:`polyeval.fma.fma`.
    once: bool
        Whether the point expression is bound once before use.
    arity: int
        Number of coefficients unrolled.
    """

    scheme: str
    fused: bool
    once: bool
    arity: int
    tree: ast.Expression = field(repr=False, compare=False)
    code: CodeType = field(repr=False, compare=False)

    @property
    def source(self) -> str:
        """Python source of the generated expression."""

        return ast.unparse(self.tree.body)

    def evaluate(self, namespace: Optional[Mapping[str, Any]] = None, /, **names: Any) -> Any:
        """Evaluate the expansion with ``namespace`` and ``names`` in scope.

        Names used by the point and coefficient expressions are looked up
        here; the mapping is copied, never modified.
        """

        scope = dict(namespace) if namespace is not None else {}
        scope.update(names)
        scope[FMA_NAME] = fma
        return eval(self.code, scope)

    __call__ = evaluate


def build(
    scheme: str,
    builder: TreeBuilder,
    point: Source,
    coeffs: CoefficientSpec,
    *,
    fused: bool,
    once: bool,
) -> Expansion:
    """Unroll ``coeffs`` at ``point`` with ``builder`` and compile the result.

    Raises :class:`polyeval.exceptions.DegreeError` for an empty list,
    before anything is compiled.
    """

    coeff_sources = tuple(ast.unparse(node) for node in coefficient_nodes(coeffs))
    point_source = ast.unparse(point_node(point))
    return _build(scheme, builder, point_source, coeff_sources, fused, once)


@lru_cache(maxsize=512)
def _build(
    scheme: str,
    builder: TreeBuilder,
    point_source: str,
    coeff_sources: Tuple[str, ...],
    fused: bool,
    once: bool,
) -> Expansion:
    nodes = [ast.parse(src, mode="eval").body for src in coeff_sources]
    point = ast.parse(point_source, mode="eval").body
    if once:
        body = bind(POINT_NAME, point, builder(name_point(POINT_NAME), nodes, fused))
    else:
        body = builder(copied_point(point), nodes, fused)
    tree = ast.fix_missing_locations(ast.Expression(body=body))
    code = compile(tree, f"<polyeval {scheme}>", "eval")
    expansion = Expansion(scheme, fused, once, len(nodes), tree, code)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("expanded %s (fused=%s, once=%s): %s", scheme, fused, once, expansion.source)
    return expansion
