"""Unroll a list of coefficient values into a one-argument Python function."""
from __future__ import annotations

import ast
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Sequence, Tuple

from .estrin import estrin_tree
from .exceptions import DegreeError
from .expansion import FMA_NAME, POINT_NAME, TreeBuilder, lambda_of, load, name_point
from .fma import fma
from .horner import horner_tree

logger = logging.getLogger(__name__)

_SCHEMES: Dict[str, TreeBuilder] = {
    "horner": horner_tree,
    "estrin": estrin_tree,
}


def _coeff_name(i: int) -> str:
    return f"__polyeval_c{i}__"


@dataclass(frozen=True)
class CompiledPolynomial:
    """Straight-line evaluator for a fixed coefficient list.

    The point is the function's only argument, so it is evaluated once no
    matter how often the unrolled body uses it.
    """

    scheme: str
    fused: bool
    coeffs: Tuple[Any, ...]
    source: str = field(repr=False)
    function: Callable[[Any], Any] = field(repr=False, compare=False)

    @property
    def arity(self) -> int:
        return len(self.coeffs)

    def __call__(self, x: Any) -> Any:
        return self.function(x)


def compile_polynomial(coeffs: Sequence[Any], *, scheme: str = "horner", fused: bool = False) -> CompiledPolynomial:
    """Unroll ``coeffs`` (values, lowest degree first) into ``f(x)``.

    Coefficients are referenced by name from the generated code, so any
    value type works, not just literals.

    >>> p = compile_polynomial([1, 2, 3, 4, 5], scheme="estrin")
    >>> p(7)
    13539
    """

    if scheme not in _SCHEMES:
        raise ValueError(f"Unknown scheme: {scheme}")
    values = tuple(coeffs)
    if not values:
        raise DegreeError("at least one coefficient is required")
    names = [_coeff_name(i) for i in range(len(values))]
    body = _SCHEMES[scheme](name_point(POINT_NAME), [load(n) for n in names], fused)
    func = lambda_of(POINT_NAME, body)
    tree = ast.fix_missing_locations(ast.Expression(body=func))
    source = ast.unparse(func)
    logger.debug("compiled %s polynomial of arity %d: %s", scheme, len(values), source)
    scope: Dict[str, Any] = dict(zip(names, values))
    scope[FMA_NAME] = fma
    function = eval(compile(tree, f"<polyeval {scheme}>", "eval"), scope)
    return CompiledPolynomial(scheme, fused, values, source, function)
