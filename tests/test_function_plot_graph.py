import unittest

from graphwidgets.errors import WidgetValidationError
from graphwidgets.widgets.function_plot_graph import FunctionPlotGraphProps, generate_function_plot_graph
from tests.svg_helpers import clipped_groups, find_all, parse_svg, texts


def plot_props(polylines=(), points=(), **overrides):
    data = {
        "type": "functionPlotGraph",
        "width": 400,
        "height": 400,
        "xAxis": {"min": -5, "max": 5, "tickInterval": 1, "label": "x"},
        "yAxis": {"min": -5, "max": 5, "tickInterval": 1, "label": "y"},
        "polylines": list(polylines),
        "points": list(points),
    }
    data.update(overrides)
    return FunctionPlotGraphProps.from_dict(data)


def polyline_point_count(el) -> int:
    return len(el.get("points").split())


class TestFunctionPlotGraph(unittest.TestCase):

    def test_polynomial_is_sampled_at_its_resolution(self):
        props = plot_props([{"id": "f", "type": "function", "coefficients": [1, 0, -3],
                             "xRange": {"min": -2, "max": 2}, "resolution": 50, "style": "dashed"}])
        root = parse_svg(generate_function_plot_graph(props))
        (polyline,) = find_all(clipped_groups(root)[0], "polyline")
        self.assertEqual(polyline_point_count(polyline), 50)
        self.assertEqual(polyline.get("stroke-dasharray"), "5 3")

    def test_expression_breaks_at_the_asymptote(self):
        props = plot_props([{"id": "recip", "type": "expression", "expression": "y = 1/x", "color": "#0055ff"}])
        root = parse_svg(generate_function_plot_graph(props))
        polylines = find_all(clipped_groups(root)[0], "polyline")
        self.assertEqual(len(polylines), 2)
        self.assertTrue(all(el.get("stroke") == "#0055ff" for el in polylines))

    def test_points_polyline_with_label_inside_chart(self):
        props = plot_props([{"id": "p", "type": "points", "label": "Path",
                             "points": [{"x": -5, "y": -5}, {"x": 0, "y": 4}, {"x": 5, "y": 5}]}])
        root = parse_svg(generate_function_plot_graph(props))
        labels = [el for el in find_all(root, "text") if el.text == "Path"]
        self.assertEqual(len(labels), 1)
        x, y = float(labels[0].get("x")), float(labels[0].get("y"))
        self.assertTrue(0 <= x <= 400)
        self.assertTrue(0 <= y <= 400)

    def test_bottom_endpoint_is_nudged_below_the_axis(self):
        props = plot_props([{"id": "p", "type": "points", "points": [{"x": -5, "y": -5}, {"x": 5, "y": 0}]}])
        root = parse_svg(generate_function_plot_graph(props))
        (polyline,) = find_all(clipped_groups(root)[0], "polyline")
        first_y = float(polyline.get("points").split()[0].split(",")[1])
        self.assertGreater(first_y, 400)

    def test_open_and_closed_points(self):
        props = plot_props(points=[{"id": "a", "x": 1, "y": 1, "style": "open", "label": "A"},
                                   {"id": "b", "x": 2, "y": 2}], showQuadrantLabels=True)
        root = parse_svg(generate_function_plot_graph(props))
        fills = sorted(el.get("fill") for el in find_all(root, "circle"))
        self.assertEqual(fills, ["#000000", "#ffffff"])
        labels = texts(root)
        self.assertIn("A", labels)
        self.assertIn("III", labels)

    def test_validation(self):
        cases = [
            plot_props([{"id": "a", "type": "points", "points": []}, {"id": "a", "type": "points", "points": []}]),
            plot_props([{"id": "a", "type": "points", "style": "dotted", "points": []}]),
            plot_props([{"id": "a", "type": "points", "points": [{"x": 9, "y": 0}]}]),
            plot_props([{"id": "f", "type": "function", "coefficients": [1], "xRange": {"min": 1, "max": 1}}]),
            plot_props([{"id": "f", "type": "function", "coefficients": [1], "xRange": {"min": 0, "max": 1},
                         "resolution": 5}]),
            plot_props([{"id": "f", "type": "function", "coefficients": [], "xRange": {"min": 0, "max": 1}}]),
            plot_props([{"id": "e", "type": "expression", "expression": "y = a x"}]),
            plot_props(points=[{"x": 0, "y": 0, "style": "hollow"}]),
            plot_props(points=[{"x": 0, "y": 7}]),
        ]
        for props in cases:
            with self.subTest(props=props):
                with self.assertRaises(WidgetValidationError):
                    generate_function_plot_graph(props)

    def test_unknown_polyline_type(self):
        with self.assertRaises(WidgetValidationError):
            plot_props([{"id": "s", "type": "spline"}])

    def test_resolution_must_be_a_whole_number(self):
        for resolution in ("fine", None, 20.5, True):
            with self.subTest(resolution=resolution):
                with self.assertRaises(WidgetValidationError):
                    plot_props([{"id": "f", "type": "function", "coefficients": [1],
                                 "xRange": {"min": 0, "max": 1}, "resolution": resolution}])
        with self.assertRaises(WidgetValidationError):
            plot_props([{"id": "e", "type": "expression", "expression": "x**2", "resolution": "many"}])
        props = plot_props([{"id": "f", "type": "function", "coefficients": [1],
                             "xRange": {"min": 0, "max": 1}, "resolution": 40.0}])
        self.assertEqual(props.polylines[0].resolution, 40)


if __name__ == '__main__':
    unittest.main()
