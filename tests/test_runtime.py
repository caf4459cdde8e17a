import math
import random
import unittest
from fractions import Fraction

from flint import nmod

from polyeval import (
    ArityError,
    FixedHorner,
    PolyevalError,
    estrin,
    estrin_fma,
    horner,
    horner_fixed,
    horner_fma,
)

STRATEGIES = (horner, horner_fma, estrin, estrin_fma)


class HornerTests(unittest.TestCase):
    def test_concrete_values(self):
        self.assertEqual(horner(7, [2, 3, 4]), 2 + 7 * (3 + 7 * 4))
        self.assertEqual(horner(7, [2, 3, 4]), 219)
        self.assertEqual(horner(7, [1, 2, 3, 4, 5]), 13539)
        self.assertEqual(horner(7, [1, 2, 3, 4, 5], backend="python"), 13539)

    def test_empty_returns_zero(self):
        self.assertEqual(horner(7, []), 0)
        self.assertEqual(horner(2.5, [], zero=0.0), 0.0)
        sentinel = object()
        self.assertIs(horner(3, [], zero=sentinel), sentinel)

    def test_single_coefficient(self):
        for x in range(-5, 32):
            self.assertEqual(horner(x, [1]), 1)
            self.assertEqual(horner(float(x), [1.5], backend="python"), 1.5)
            self.assertEqual(horner(Fraction(x, 3), [Fraction(2, 7)]), Fraction(2, 7))

    def test_two_coefficients(self):
        for x in range(32):
            self.assertEqual(horner(x, [1, 2]), 1 + x * 2)
            xf = x / 3
            self.assertEqual(horner(xf, [0.25, 1.75]), 0.25 + xf * 1.75)

    def test_accepts_iterables(self):
        self.assertEqual(horner(7, (c for c in [2, 3, 4])), 219)
        self.assertEqual(horner(7, (2, 3, 4), backend="python"), 219)

    def test_backends_agree_on_exact_inputs(self):
        rng = random.Random(1234)
        for _ in range(50):
            coeffs = [rng.randint(-50, 50) for _ in range(rng.randint(1, 12))]
            x = rng.randint(-9, 9)
            self.assertEqual(horner(x, coeffs, backend="flint"), horner(x, coeffs, backend="python"))
            qs = [Fraction(c, rng.randint(1, 9)) for c in coeffs]
            qx = Fraction(x, 4)
            self.assertEqual(horner(qx, qs, backend="flint"), horner(qx, qs, backend="python"))

    def test_flint_result_types(self):
        self.assertIsInstance(horner(7, [2, 3, 4], backend="flint"), int)
        value = horner(Fraction(1, 2), [1, 1], backend="flint")
        self.assertIsInstance(value, Fraction)
        self.assertEqual(value, Fraction(3, 2))

    def test_flint_backend_rejects_floats(self):
        with self.assertRaises(TypeError):
            horner(0.5, [1, 2], backend="flint")

    def test_auto_backend_handles_floats(self):
        self.assertEqual(horner(0.5, [1, 2]), 2.0)

    def test_auto_backend_honours_float_zero(self):
        value = horner(7, [2, 3, 4], zero=0.0)
        self.assertEqual(value, 219.0)
        self.assertIsInstance(value, float)

    def test_auto_backend_honours_custom_zero(self):
        value = horner(Fraction(1, 2), [1, 1], zero=Fraction(0))
        self.assertEqual(value, Fraction(3, 2))
        self.assertIsInstance(horner(7, [2], zero=0.0), float)

    def test_unknown_backend(self):
        with self.assertRaises(ValueError):
            horner(1, [1], backend="numpy")


class FixedHornerTests(unittest.TestCase):
    def test_matching_arity(self):
        quadratic = FixedHorner(3)
        self.assertEqual(quadratic.arity, 3)
        self.assertEqual(quadratic(7, [2, 3, 4]), 219)
        self.assertEqual(horner_fixed(7, [1, 2, 3, 4, 5], 5), 13539)

    def test_same_result_as_dynamic(self):
        coeffs = [0.5, -1.25, 3.0, 0.125]
        for x in (-2.0, 0.3, 1.7):
            self.assertEqual(FixedHorner(4)(x, coeffs), horner(x, coeffs, backend="python"))

    def test_arity_mismatch(self):
        quadratic = FixedHorner(3)
        for coeffs in ([], [1, 2], [1, 2, 3, 4]):
            with self.assertRaises(ArityError) as ctx:
                quadratic(7, coeffs)
            self.assertEqual(ctx.exception.expected, 3)
            self.assertEqual(ctx.exception.actual, len(coeffs))
        self.assertTrue(issubclass(ArityError, TypeError))
        self.assertTrue(issubclass(ArityError, PolyevalError))

    def test_mismatch_is_rejected_before_arithmetic(self):
        class Exploding:
            def __mul__(self, other):
                raise AssertionError("arithmetic ran")

            __rmul__ = __mul__

        with self.assertRaises(ArityError):
            FixedHorner(2)(Exploding(), [1])

    def test_zero_arity(self):
        self.assertEqual(FixedHorner(0)(7, []), 0)

    def test_negative_arity(self):
        with self.assertRaises(ValueError):
            FixedHorner(-1)


class StrategyAgreementTests(unittest.TestCase):
    def test_concrete_scenarios(self):
        for evaluate in STRATEGIES:
            self.assertEqual(evaluate(7, [2, 3, 4]), 219)
            self.assertEqual(evaluate(7, [1, 2, 3, 4, 5]), 13539)
            self.assertEqual(evaluate(7, []), 0)

    def test_integers_agree(self):
        rng = random.Random(42)
        for n in range(1, 20):
            coeffs = [rng.randint(-100, 100) for _ in range(n)]
            for x in range(-6, 7):
                expected = sum(c * x**i for i, c in enumerate(coeffs))
                for evaluate in STRATEGIES:
                    self.assertEqual(evaluate(x, coeffs), expected, (evaluate.__name__, n, x))

    def test_fractions_agree(self):
        coeffs = [Fraction(1, 2), Fraction(-3, 4), Fraction(5, 6), Fraction(7, 8), Fraction(1, 9), Fraction(2)]
        x = Fraction(-2, 3)
        expected = sum(c * x**i for i, c in enumerate(coeffs))
        for evaluate in STRATEGIES:
            self.assertEqual(evaluate(x, coeffs), expected)

    def test_modular_ring_agrees(self):
        p = 10007
        coeffs = [nmod(c, p) for c in (3, 141, 5926, 535, 8979, 3238, 4626)]
        x = nmod(2718, p)
        zero = nmod(0, p)
        expected = horner(x, coeffs, zero=zero)
        for evaluate in STRATEGIES:
            self.assertEqual(evaluate(x, coeffs, zero=zero), expected)
        plain = sum((int(c) * 2718**i for i, c in enumerate([3, 141, 5926, 535, 8979, 3238, 4626]))) % p
        self.assertEqual(expected, nmod(plain, p))

    def test_floats_agree_within_rounding(self):
        rng = random.Random(7)
        for n in range(1, 16):
            coeffs = [rng.uniform(-1, 1) for _ in range(n)]
            x = rng.uniform(-1.5, 1.5)
            reference = float(sum(Fraction(c) * Fraction(x) ** i for i, c in enumerate(coeffs)))
            scale = sum(abs(c) * abs(x) ** i for i, c in enumerate(coeffs))
            for evaluate in STRATEGIES:
                self.assertLessEqual(abs(evaluate(x, coeffs) - reference), 1e-13 * scale)

    def test_fused_pair_cancels_exactly(self):
        self.assertEqual(estrin_fma(49.0, [-1.0, Fraction(1, 49)]), 0.0)
        self.assertEqual(estrin_fma(49.0, [-1.0, Fraction(1, 49), 0]), 0.0)

    def test_estrin_single_and_pair(self):
        self.assertEqual(estrin(3, [5]), 5)
        self.assertEqual(estrin(3, [5, 2]), 11)
        self.assertEqual(estrin_fma(0.5, [1.0, 2.0]), 2.0)

    def test_fused_is_single_rounding(self):
        # 0.1 * 10 is just above 1; only the fused step keeps the excess
        self.assertEqual(horner(10.0, [-1.0, 0.1], backend="python"), 0.0)
        self.assertEqual(horner_fma(10.0, [-1.0, 0.1]), 2.0**-54)
        self.assertEqual(estrin_fma(10.0, [-1.0, 0.1]), 2.0**-54)
        self.assertTrue(math.isclose(estrin(10.0, [-1.0, 0.1]), 0.0, abs_tol=1e-15))


if __name__ == "__main__":
    unittest.main()
