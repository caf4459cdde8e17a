"""Normalise literal coefficient lists and point expressions into ``ast`` nodes.

A coefficient list is written the way it would appear in Python source::

    "2, 3, 4"       "2, 3, 4,"       "[2, 3, 4]"       "[2, 3, 4,]"

or passed as a sequence whose items are source strings, numeric or
``True``/``False`` literals, or ready-made ``ast.expr`` nodes. Brackets are
sugar and are unwrapped once; a trailing comma is allowed.
"""
from __future__ import annotations

import ast
import cmath
import copy
from typing import List, Sequence, Union

from .exceptions import DegreeError

Source = Union[str, ast.expr]
CoefficientSpec = Union[str, Sequence[Union[str, int, float, complex, ast.expr]]]


def _parse(source: str) -> ast.expr:
    return ast.parse(source.strip(), mode="eval").body


def point_node(point: Source) -> ast.expr:
    """Return the evaluation-point expression as an ``ast.expr``."""

    if isinstance(point, ast.expr):
        return copy.deepcopy(point)
    if isinstance(point, str):
        return _parse(point)
    raise TypeError(f"point must be a source string or ast.expr, not {type(point).__name__}")


def _item_node(item: Union[str, int, float, complex, ast.expr]) -> ast.expr:
    if isinstance(item, ast.expr):
        return copy.deepcopy(item)
    if isinstance(item, str):
        return _parse(item)
    if isinstance(item, (int, float, complex)):
        # repr() round-trips finite values only; bool is an int
        if not isinstance(item, int) and not cmath.isfinite(item):
            raise ValueError(f"{item!r} has no literal form; pass it through a namespace name")
        return _parse(repr(item))
    raise TypeError(f"unsupported coefficient {item!r}")


def coefficient_nodes(coeffs: CoefficientSpec) -> List[ast.expr]:
    """Split a literal coefficient list into one ``ast.expr`` per coefficient.

    Raises :class:`DegreeError` when the list is empty.
    """

    if isinstance(coeffs, str):
        if not coeffs.strip():
            raise DegreeError("at least one coefficient is required")
        tree = _parse(coeffs)
        nodes = list(tree.elts) if isinstance(tree, (ast.List, ast.Tuple)) else [tree]
    else:
        nodes = [_item_node(item) for item in coeffs]
    if not nodes:
        raise DegreeError("at least one coefficient is required")
    return nodes
