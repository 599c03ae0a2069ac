import math
import unittest

from graphwidgets.errors import AxisConfigError, TickIntervalError
from graphwidgets.ticks import MAX_TICKS, build_category_ticks, build_ticks, format_fraction, format_pi_value
from fractions import Fraction


class TestBuildTicks(unittest.TestCase):

    def assertEvenlySpaced(self, ticks, min_val, interval):
        values = ticks.values
        self.assertEqual(values[0], min_val)
        for a, b in zip(values, values[1:]):
            self.assertGreater(b, a)
            self.assertAlmostEqual(b - a, interval, places=9)

    def test_integer_interval(self):
        ticks = build_ticks(0, 10, 2)
        self.assertEqual(ticks.values, (0.0, 2.0, 4.0, 6.0, 8.0, 10.0))
        self.assertEqual(ticks.labels, ("0", "2", "4", "6", "8", "10"))

    def test_count_is_floor_of_span_over_interval_plus_one(self):
        ticks = build_ticks(0, 9, 2)
        self.assertEqual(len(ticks), 5)
        self.assertEqual(ticks.values[-1], 8.0)
        self.assertEvenlySpaced(ticks, 0, 2)

    def test_decimal_interval_has_no_float_noise(self):
        ticks = build_ticks(0, 1, 0.1)
        self.assertEqual(len(ticks), 11)
        self.assertEqual(ticks.labels[3], "0.3")
        self.assertEqual(ticks.values[3], 0.3)
        self.assertEqual(ticks.labels[-1], "1")

    def test_negative_domain_labels(self):
        ticks = build_ticks(-1, 1, 0.5)
        self.assertEqual(ticks.labels, ("-1", "-0.5", "0", "0.5", "1"))

    def test_ticks_start_at_min_not_at_a_multiple(self):
        ticks = build_ticks(0.1, 0.7, 0.2)
        self.assertEqual(ticks.labels, ("0.1", "0.3", "0.5", "0.7"))
        self.assertEvenlySpaced(ticks, 0.1, 0.2)

    def test_scatter_domain(self):
        ticks = build_ticks(140, 200, 10)
        self.assertEqual(ticks.labels, ("140", "150", "160", "170", "180", "190", "200"))

    def test_thirds_get_fraction_labels(self):
        ticks = build_ticks(0, 1, 1 / 3)
        self.assertEqual(ticks.labels, ("0", "1/3", "2/3", "1"))

    def test_pi_multiples_get_pi_labels(self):
        ticks = build_ticks(0, 2 * math.pi, math.pi / 2)
        self.assertEqual(ticks.labels, ("0", "π/2", "π", "3π/2", "2π"))
        self.assertAlmostEqual(ticks.values[-1], 2 * math.pi)

    def test_symmetric_pi_domain(self):
        ticks = build_ticks(-math.pi, math.pi, math.pi)
        self.assertEqual(ticks.labels, ("-π", "0", "π"))

    def test_irrational_interval_raises(self):
        with self.assertRaises(TickIntervalError):
            build_ticks(0, 10, math.sqrt(2))

    def test_tick_interval_error_is_axis_config_error(self):
        self.assertTrue(issubclass(TickIntervalError, AxisConfigError))

    def test_invalid_domain_returns_empty(self):
        with self.assertLogs("graphwidgets.ticks", level="ERROR"):
            self.assertEqual(len(build_ticks(5, 1, 1)), 0)
        with self.assertLogs("graphwidgets.ticks", level="ERROR"):
            self.assertEqual(len(build_ticks(0, 1, 0)), 0)

    def test_tick_count_is_capped(self):
        with self.assertLogs("graphwidgets.ticks", level="WARNING"):
            ticks = build_ticks(0, 1_000_000, 1)
        self.assertEqual(len(ticks), MAX_TICKS)

    def test_category_ticks_pass_through(self):
        ticks = build_category_ticks(["35", "37", "Other"])
        self.assertEqual(ticks.values, (0.0, 1.0, 2.0))
        self.assertEqual(ticks.labels, ("35", "37", "Other"))

    def test_iteration_pairs_values_and_labels(self):
        self.assertEqual(list(build_ticks(0, 2, 1)), [(0.0, "0"), (1.0, "1"), (2.0, "2")])


class TestFormatting(unittest.TestCase):

    def test_format_fraction(self):
        self.assertEqual(format_fraction(Fraction(4, 1)), "4")
        self.assertEqual(format_fraction(Fraction(1, 4)), "0.25")
        self.assertEqual(format_fraction(Fraction(-5, 6)), "-5/6")

    def test_format_pi_value(self):
        self.assertEqual(format_pi_value(Fraction(0)), "0")
        self.assertEqual(format_pi_value(Fraction(1)), "π")
        self.assertEqual(format_pi_value(Fraction(-1)), "-π")
        self.assertEqual(format_pi_value(Fraction(-3, 2)), "-3π/2")


if __name__ == '__main__':
    unittest.main()
