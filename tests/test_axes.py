import unittest

from graphwidgets.axes import (POINT, CategoryAxis, NumericAxis, axis_ticks, compute_and_render_x_axis,
                               compute_and_render_y_axis, measure_y_axis_margin)
from graphwidgets.canvas import Canvas
from graphwidgets.errors import AxisConfigError
from graphwidgets.geometry import ChartArea
from tests.svg_helpers import parse_svg, texts


class TestAxisSpecs(unittest.TestCase):

    def test_numeric_validation(self):
        NumericAxis(0, 10, 2).validate("x")
        with self.assertRaises(AxisConfigError):
            NumericAxis(5, 5, 1).validate("x")
        with self.assertRaises(AxisConfigError):
            NumericAxis(0, 10, 0).validate("y")
        with self.assertRaises(ValueError):
            NumericAxis(0, float("nan"), 1).validate("y")

    def test_category_validation(self):
        with self.assertRaises(AxisConfigError):
            CategoryAxis(()).validate("x")
        with self.assertRaises(AxisConfigError):
            CategoryAxis(("a",), scale="ordinal").validate("x")
        self.assertEqual(CategoryAxis(("a", "b")).index_of("b"), 1)
        self.assertIsNone(CategoryAxis(("a", "b")).index_of("c"))

    def test_tick_labels(self):
        self.assertEqual(axis_ticks(CategoryAxis(("January", "February"))).labels, ("Jan", "Feb"))
        formatted = axis_ticks(NumericAxis(0, 1, 0.5, label_formatter=lambda v: f"{v:.0%}"))
        self.assertEqual(formatted.labels, ("0%", "50%", "100%"))

    def test_bare_axis_has_no_ticks(self):
        bare = NumericAxis(0, 7.3, 7.3, show_grid_lines=False, show_tick_labels=False, show_ticks=False)
        self.assertEqual(len(axis_ticks(bare)), 0)


class TestRenderAxes(unittest.TestCase):

    def setUp(self):
        self.chart = ChartArea(0, 0, 200, 100)
        self.canvas = Canvas(self.chart)

    def test_numeric_y_axis_maps_min_to_bottom(self):
        result = compute_and_render_y_axis(NumericAxis(0, 10, 2), self.chart, self.canvas)
        self.assertEqual(result.to_svg(0), 100)
        self.assertEqual(result.to_svg(10), 0)
        self.assertIsNone(result.band_width)
        self.assertEqual(len(result.ticks), 6)

    def test_y_title_sits_at_the_edge_of_the_measured_margin(self):
        spec = NumericAxis(0, 10, 2, label="Speed")
        margin = measure_y_axis_margin(spec, self.chart)
        # tick 5 + padding 8 + "10" at 7px/char + title padding 25 + one 16px line at 1.2
        self.assertAlmostEqual(margin.total, 5 + 8 + 14 + 25 + 19.2)

        compute_and_render_y_axis(spec, self.chart, self.canvas)
        self.assertAlmostEqual(self.canvas.extents[0], -margin.total)

    def test_band_x_axis(self):
        spec = CategoryAxis(("A", "B", "C", "D"), label="Group")
        result = compute_and_render_x_axis(spec, self.chart, self.canvas)
        self.assertEqual(result.band_width, 50)
        self.assertEqual(result.to_svg(0), 25)
        self.assertEqual(result.selected, frozenset({0, 1, 2, 3}))
        self.assertGreater(self.canvas.extents[3], self.chart.bottom)

        root = parse_svg(self.canvas.to_document(self.canvas.finalize(0)))
        self.assertEqual(texts(root), ["A", "B", "C", "D", "Group"])

    def test_point_x_axis(self):
        result = compute_and_render_x_axis(CategoryAxis(("A", "B", "C"), scale=POINT), self.chart, self.canvas)
        self.assertIsNone(result.band_width)
        self.assertEqual(result.to_svg(2), 200)

    def test_crowded_x_axis_thins_labels(self):
        spec = NumericAxis(0, 1000, 10, show_grid_lines=False)
        result = compute_and_render_x_axis(spec, self.chart, self.canvas)
        self.assertEqual(len(result.ticks), 101)
        self.assertIn(0, result.selected)
        self.assertLess(len(result.selected), 101)


if __name__ == '__main__':
    unittest.main()
