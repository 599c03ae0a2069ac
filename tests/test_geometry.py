import math
import unittest

from graphwidgets.errors import CanvasError
from graphwidgets.geometry import ChartArea, Extents2D, Point, Transform
from graphwidgets.scales import BandScale, LinearScale, PointScale


class TestExtents(unittest.TestCase):

    def test_seeded_from_chart_area(self):
        ext = Extents2D.seeded(ChartArea(10, 20, 100, 50))
        self.assertEqual(ext.as_tuple(), (10, 110, 20, 70))

    def test_grows_and_ignores_non_finite(self):
        ext = Extents2D()
        self.assertTrue(ext.is_empty)
        ext.include_point(1, 2)
        ext.include_point(math.nan, 100)
        ext.include_point(-3, 5)
        self.assertEqual(ext.as_tuple(), (-3, 1, 2, 5))
        self.assertEqual(ext.width, 4)

    def test_point_from_dict(self):
        self.assertEqual(Point.from_dict({"x": "1.5", "y": 2}), Point(1.5, 2.0))

    def test_chart_area_contains(self):
        area = ChartArea(10, 20, 100, 50)
        self.assertTrue(area.contains(10, 20))
        self.assertTrue(area.contains(110, 70))
        self.assertFalse(area.contains(9.9, 30))
        self.assertFalse(area.contains(50, 70.5))


class TestTransform(unittest.TestCase):

    def assertPointAlmostEqual(self, actual, expected):
        self.assertAlmostEqual(actual[0], expected[0])
        self.assertAlmostEqual(actual[1], expected[1])

    def test_translate_then_scale(self):
        t = Transform.parse("translate(10, 20) scale(2)")
        self.assertPointAlmostEqual(t.apply([(1, 1)])[0], (12, 22))

    def test_rotate_about_centre(self):
        t = Transform.parse("rotate(-90, 5, 5)")
        self.assertPointAlmostEqual(t.apply([(5, 0)])[0], (0, 5))
        self.assertPointAlmostEqual(t.apply([(5, 5)])[0], (5, 5))

    def test_matrix(self):
        t = Transform.parse("matrix(1 0 0 1 3 4)")
        self.assertPointAlmostEqual(t.apply([(0, 0)])[0], (3, 4))

    def test_unparseable_input_raises(self):
        with self.assertRaises(CanvasError):
            Transform.parse("translate(1,2) bogus")
        with self.assertRaises(CanvasError):
            Transform.parse("rotate(1, 2)")

    def test_identity(self):
        self.assertTrue(Transform.parse("").is_identity)
        self.assertEqual(Transform.identity().apply([]), [])


class TestScales(unittest.TestCase):

    def test_linear_scale_flips_for_y(self):
        scale = LinearScale(0, 10, 100, 0)
        self.assertEqual(scale(0), 100)
        self.assertEqual(scale(10), 0)
        self.assertAlmostEqual(scale.invert(25), 7.5)
        self.assertEqual(scale.pixels_per_unit, -10)

    def test_band_scale_centres(self):
        scale = BandScale(4, 0, 200)
        self.assertEqual(scale.band_width, 50)
        self.assertEqual(scale(0), 25)
        self.assertEqual(scale(3), 175)
        self.assertEqual(scale.band_start(2), 100)
        self.assertAlmostEqual(scale.invert(125), 2)

    def test_point_scale_ends(self):
        scale = PointScale(3, 0, 100)
        self.assertEqual(scale(0), 0)
        self.assertEqual(scale(2), 100)
        self.assertEqual(PointScale(1, 0, 100)(0), 50)


if __name__ == '__main__':
    unittest.main()
