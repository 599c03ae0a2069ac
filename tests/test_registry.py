import unittest

from graphwidgets import GraphWidgetError, WidgetValidationError, generate_widget, parse_widget_props
from graphwidgets.widgets import WIDGET_TYPES, StickPlotProps
from tests.svg_helpers import SVG_NS, parse_svg

MINIMAL_PAYLOADS = {
    "scatterPlot": {
        "type": "scatterPlot", "width": 300, "height": 200,
        "xAxis": {"min": 0, "max": 10, "tickInterval": 2},
        "yAxis": {"min": 0, "max": 10, "tickInterval": 2},
    },
    "stickPlot": {
        "type": "stickPlot", "width": 300, "height": 200,
        "xAxis": {"categories": ["A", "B"]},
        "yAxis": {"min": 0, "max": 10, "tickInterval": 2},
    },
    "conceptualGraph": {"type": "conceptualGraph", "width": 300, "height": 200},
    "functionPlotGraph": {
        "type": "functionPlotGraph", "width": 300, "height": 300,
        "xAxis": {"min": -3, "max": 3, "tickInterval": 1},
        "yAxis": {"min": -3, "max": 3, "tickInterval": 1},
    },
}


class TestRegistry(unittest.TestCase):

    def test_every_widget_type_renders_an_empty_frame(self):
        self.assertEqual(set(MINIMAL_PAYLOADS), set(WIDGET_TYPES))
        for kind, payload in MINIMAL_PAYLOADS.items():
            with self.subTest(kind=kind):
                props = parse_widget_props(payload)
                self.assertEqual(props.type, kind)
                root = parse_svg(generate_widget(props))
                self.assertEqual(root.tag, f"{SVG_NS}svg")
                self.assertIsNotNone(root.get("viewBox"))

    def test_parse_returns_typed_props(self):
        self.assertIsInstance(parse_widget_props(MINIMAL_PAYLOADS["stickPlot"]), StickPlotProps)

    def test_unknown_type(self):
        with self.assertRaises(WidgetValidationError):
            parse_widget_props({"type": "pieChart"})

    def test_structural_errors_share_the_base_class(self):
        bad_width = dict(MINIMAL_PAYLOADS["scatterPlot"], width=True)
        missing_axis = {k: v for k, v in MINIMAL_PAYLOADS["scatterPlot"].items() if k != "yAxis"}
        bad_domain = dict(MINIMAL_PAYLOADS["scatterPlot"], xAxis={"min": 5, "max": 1, "tickInterval": 1})
        for payload in (bad_width, missing_axis):
            with self.assertRaises(WidgetValidationError):
                parse_widget_props(payload)
        with self.assertRaises(GraphWidgetError):
            generate_widget(parse_widget_props(bad_domain))


if __name__ == '__main__':
    unittest.main()
