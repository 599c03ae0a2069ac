import math
import unittest

from graphwidgets.geometry import Point
from graphwidgets.regression import (EXPONENTIAL, LINEAR, QUADRATIC, ExponentialFit, LinearFit, fit_best,
                                     fit_exponential, fit_linear, fit_quadratic, r_squared)


def pts(*pairs):
    return [Point(x, y) for x, y in pairs]


class TestLinear(unittest.TestCase):

    def test_perfect_line(self):
        fit = fit_linear(pts((0, 1), (1, 3), (2, 5), (3, 7)))
        self.assertAlmostEqual(fit.slope, 2.0)
        self.assertAlmostEqual(fit.intercept, 1.0)
        self.assertEqual(fit.method, LINEAR)

    def test_noisy_line(self):
        fit = fit_linear(pts((1, 2), (2, 4), (3, 5), (4, 4), (5, 5)))
        self.assertAlmostEqual(fit.slope, 0.6)
        self.assertAlmostEqual(fit.intercept, 2.2)

    def test_too_few_points(self):
        self.assertIsNone(fit_linear([]))
        self.assertIsNone(fit_linear(pts((1, 1))))

    def test_vertical_point_set_has_no_fit(self):
        self.assertIsNone(fit_linear(pts((2, 1), (2, 5), (2, 9))))

    def test_is_deterministic(self):
        data = pts((140, 40), (155, 52), (163, 60), (171, 66), (190, 81))
        self.assertEqual(fit_linear(data), fit_linear(data))

    def test_large_x_offset_still_fits(self):
        fit = fit_linear([Point(1e8 + i, i) for i in range(5)])
        self.assertAlmostEqual(fit.slope, 1.0, places=6)
        self.assertAlmostEqual(fit.evaluate(1e8 + 2), 2.0, places=4)


class TestQuadratic(unittest.TestCase):

    def test_exact_parabola(self):
        data = [Point(x, 2 * x * x - 3 * x + 1) for x in range(-3, 4)]
        fit = fit_quadratic(data)
        self.assertAlmostEqual(fit.a, 2.0)
        self.assertAlmostEqual(fit.b, -3.0)
        self.assertAlmostEqual(fit.c, 1.0)

    def test_linear_data_gives_flat_curvature(self):
        fit = fit_quadratic(pts((0, 1), (1, 3), (2, 5), (3, 7)))
        self.assertAlmostEqual(fit.a, 0.0, places=9)
        self.assertAlmostEqual(fit.b, 2.0)

    def test_degenerate_inputs(self):
        self.assertIsNone(fit_quadratic(pts((0, 0), (1, 1))))
        self.assertIsNone(fit_quadratic(pts((1, 0), (1, 1), (1, 2))))

    def test_year_scale_x(self):
        data = [Point(x, 0.5 * (x - 2005) ** 2 + 10) for x in range(1990, 2021, 5)]
        fit = fit_quadratic(data)
        self.assertIsNotNone(fit)
        self.assertAlmostEqual(fit.a, 0.5, places=9)
        self.assertAlmostEqual(fit.b, -2005.0, places=5)
        self.assertAlmostEqual(fit.evaluate(2005), 10.0, places=4)
        self.assertAlmostEqual(fit.evaluate(1990), 122.5, places=4)
        self.assertEqual(fit_best(QUADRATIC, data).method, QUADRATIC)

    def test_two_distinct_x_values_have_no_fit(self):
        self.assertIsNone(fit_quadratic(pts((1, 0), (1, 1), (2, 2))))


class TestExponential(unittest.TestCase):

    def test_exact_exponential(self):
        data = [Point(x, 2 * math.exp(0.5 * x)) for x in range(5)]
        fit = fit_exponential(data)
        self.assertAlmostEqual(fit.a, 2.0)
        self.assertAlmostEqual(fit.b, 0.5)

    def test_non_positive_points_are_excluded(self):
        data = pts((0, 0), (1, -2), (2, 1))
        self.assertIsNone(fit_exponential(data))

    def test_overflow_evaluates_to_infinity(self):
        self.assertEqual(ExponentialFit(1.0, 1000.0).evaluate(10.0), math.inf)


class TestDispatchAndGoodness(unittest.TestCase):

    def test_fit_best_dispatches(self):
        data = pts((0, 1), (1, 2), (2, 4), (3, 8))
        self.assertEqual(fit_best(LINEAR, data).method, LINEAR)
        self.assertEqual(fit_best(QUADRATIC, data).method, QUADRATIC)
        self.assertEqual(fit_best(EXPONENTIAL, data).method, EXPONENTIAL)

    def test_fit_best_unknown_method(self):
        with self.assertRaises(ValueError):
            fit_best("cubic", pts((0, 0), (1, 1)))

    def test_fit_best_logs_missing_fit(self):
        with self.assertLogs("graphwidgets.regression", level="WARNING"):
            self.assertIsNone(fit_best(LINEAR, pts((1, 1))))

    def test_r_squared(self):
        data = pts((0, 1), (1, 3), (2, 5))
        self.assertAlmostEqual(r_squared(LinearFit(2.0, 1.0), data), 1.0)
        self.assertLess(r_squared(LinearFit(0.0, 0.0), data), 0.0)
        self.assertIsNone(r_squared(LinearFit(1.0, 0.0), data[:1]))


if __name__ == '__main__':
    unittest.main()
