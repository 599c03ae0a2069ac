import unittest

from graphwidgets.axes import POINT, CategoryAxis, NumericAxis
from graphwidgets.coordinate_plane import (new_plane_canvas, setup_coordinate_plane_base,
                                           setup_coordinate_plane_quadrants)
from graphwidgets.errors import AxisConfigError
from tests.svg_helpers import find_all, parse_svg, texts


class TestSingleQuadrant(unittest.TestCase):

    def test_origin_bottom_left_and_round_trip(self):
        canvas = new_plane_canvas(400, 300)
        plane = setup_coordinate_plane_base(canvas, NumericAxis(0, 10, 1), NumericAxis(0, 100, 10))
        self.assertEqual((plane.to_svg_x(0), plane.to_svg_x(10)), (0, 400))
        self.assertEqual((plane.to_svg_y(0), plane.to_svg_y(100)), (300, 0))
        for value in (0.0, 2.5, 7.0, 10.0):
            self.assertAlmostEqual(plane.to_svg_x.invert(plane.to_svg_x(value)), value)
        self.assertAlmostEqual(plane.to_svg_y.invert(plane.to_svg_y(42.0)), 42.0)

    def test_title_is_drawn_above_the_chart(self):
        canvas = new_plane_canvas(400, 300)
        setup_coordinate_plane_base(canvas, NumericAxis(0, 10, 1), NumericAxis(0, 100, 10), title="Growth")
        # 18px bold title, one line at 1.2, 15px above the chart
        self.assertAlmostEqual(canvas.extents[2], -(15 + 21.6))
        root = parse_svg(canvas.to_document(canvas.finalize(0)))
        self.assertIn("Growth", texts(root))

    def test_chart_area_is_never_shrunk(self):
        canvas = new_plane_canvas(400, 300)
        plane = setup_coordinate_plane_base(canvas, NumericAxis(0, 10, 1, label="Time (s)"),
                                            NumericAxis(0, 100, 10, label="Distance (m)"))
        self.assertEqual((plane.chart_area.width, plane.chart_area.height), (400, 300))
        min_x, max_x, min_y, max_y = canvas.extents
        self.assertLess(min_x, 0)
        self.assertGreater(max_y, 300)

    def test_category_x_axis_reports_band_width(self):
        canvas = new_plane_canvas(400, 300)
        plane = setup_coordinate_plane_base(canvas, CategoryAxis(("a", "b")), NumericAxis(0, 1, 0.5))
        self.assertEqual(plane.band_width, 200)
        self.assertEqual(plane.to_svg_x(1), 300)

    def test_point_scale_x_axis_for_line_charts(self):
        canvas = new_plane_canvas(400, 300)
        plane = setup_coordinate_plane_base(canvas, CategoryAxis(("Q1", "Q2", "Q3"), scale=POINT),
                                            NumericAxis(0, 10, 5))
        self.assertIsNone(plane.band_width)
        self.assertEqual((plane.to_svg_x(0), plane.to_svg_x(1), plane.to_svg_x(2)), (0, 200, 400))


class TestFourQuadrants(unittest.TestCase):

    def test_axes_cross_at_zero_and_origin_is_unlabelled(self):
        canvas = new_plane_canvas(400, 400)
        plane = setup_coordinate_plane_quadrants(canvas, NumericAxis(-10, 10, 5), NumericAxis(-10, 10, 5),
                                                 show_quadrant_labels=True)
        self.assertEqual((plane.to_svg_x(0), plane.to_svg_y(0)), (200, 200))
        self.assertIsNone(plane.band_width)

        labels = texts(parse_svg(canvas.to_document(canvas.finalize(0))))
        self.assertNotIn("0", labels)
        self.assertEqual(labels.count("-10"), 2)
        for quadrant in ("I", "II", "III", "IV"):
            self.assertIn(quadrant, labels)

    def test_quadrant_labels_follow_the_domain(self):
        canvas = new_plane_canvas(400, 400)
        setup_coordinate_plane_quadrants(canvas, NumericAxis(0, 10, 5), NumericAxis(-5, 5, 5),
                                         show_quadrant_labels=True)
        labels = texts(parse_svg(canvas.to_document(canvas.finalize(0))))
        self.assertIn("I", labels)
        self.assertIn("IV", labels)
        self.assertNotIn("II", labels)
        self.assertNotIn("III", labels)

    def test_round_trip_with_zero_outside_the_domain(self):
        canvas = new_plane_canvas(400, 400)
        plane = setup_coordinate_plane_quadrants(canvas, NumericAxis(140, 200, 10), NumericAxis(-10, 10, 5))
        self.assertEqual((plane.to_svg_x(140), plane.to_svg_x(200)), (0, 400))
        for value in (140.0, 155.5, 200.0):
            self.assertAlmostEqual(plane.to_svg_x.invert(plane.to_svg_x(value)), value)
        for value in (-10.0, -2.5, 0.0, 7.0):
            self.assertAlmostEqual(plane.to_svg_y.invert(plane.to_svg_y(value)), value)

        # y-axis is clamped to the left edge
        root = parse_svg(canvas.to_document(canvas.finalize(0)))
        axis_stroke = canvas.theme.colors.axis
        vertical_axes = [el for el in find_all(root, "line") if el.get("stroke") == axis_stroke
                         and float(el.get("x1")) == float(el.get("x2")) == 0
                         and float(el.get("y1")) == 0 and float(el.get("y2")) == 400]
        self.assertEqual(len(vertical_axes), 1)

    def test_requires_numeric_axes(self):
        canvas = new_plane_canvas(400, 400)
        with self.assertRaises(AxisConfigError):
            setup_coordinate_plane_quadrants(canvas, CategoryAxis(("a",)), NumericAxis(0, 1, 1))

    def test_axis_titles_widen_the_drawing(self):
        canvas = new_plane_canvas(400, 400)
        setup_coordinate_plane_quadrants(canvas, NumericAxis(2, 10, 2, label="Month"),
                                         NumericAxis(1, 5, 1, label="Sales"))
        min_x, max_x, min_y, max_y = canvas.extents
        self.assertLess(min_x, 0)
        self.assertGreater(max_y, 400)


if __name__ == '__main__':
    unittest.main()
