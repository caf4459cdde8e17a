"""Public API for polyeval."""
from .estrin import expand_estrin, expand_estrin_fma
from .exceptions import ArityError, DegreeError, PolyevalError
from .expansion import Expansion
from .fma import Arithmetic, SupportsFma, fma
from .horner import expand_horner, expand_horner_fma
from .runtime import FixedHorner, estrin, estrin_fma, horner, horner_fixed, horner_fma
from .unroll import CompiledPolynomial, compile_polynomial

__version__ = "0.1.0"

__all__ = [
    "horner",
    "horner_fma",
    "horner_fixed",
    "FixedHorner",
    "estrin",
    "estrin_fma",
    "expand_horner",
    "expand_horner_fma",
    "expand_estrin",
    "expand_estrin_fma",
    "Expansion",
    "compile_polynomial",
    "CompiledPolynomial",
    "fma",
    "Arithmetic",
    "SupportsFma",
    "PolyevalError",
    "DegreeError",
    "ArityError",
]
