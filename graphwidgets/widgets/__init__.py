"""
Widget generators and the registry that dispatches on a props object's ``type`` tag.

    svg = generate_widget(parse_widget_props({"type": "stickPlot", ...}))
"""
import logging
from typing import Any, Mapping, Union

from ..errors import WidgetValidationError
from ..theme import DEFAULT_THEME, Theme
from .conceptual_graph import ConceptualGraphProps, generate_conceptual_graph
from .function_plot_graph import FunctionPlotGraphProps, generate_function_plot_graph
from .scatter_plot import ScatterPlotProps, generate_scatter_plot
from .stick_plot import StickPlotProps, generate_stick_plot

LOGGER = logging.getLogger(__name__)

WidgetProps = Union[ScatterPlotProps, StickPlotProps, ConceptualGraphProps, FunctionPlotGraphProps]

WIDGET_TYPES = ("scatterPlot", "stickPlot", "conceptualGraph", "functionPlotGraph")


def _unknown(kind: Any):
    message = f"unknown widget type {kind!r} (expected one of {', '.join(WIDGET_TYPES)})"
    LOGGER.error(message)
    raise WidgetValidationError(message)


def parse_widget_props(data: Mapping[str, Any]) -> WidgetProps:
    """Builds typed props from a camelCase mapping such as a decoded JSON payload."""
    kind = data.get("type")
    if kind == "scatterPlot":
        return ScatterPlotProps.from_dict(data)
    if kind == "stickPlot":
        return StickPlotProps.from_dict(data)
    if kind == "conceptualGraph":
        return ConceptualGraphProps.from_dict(data)
    if kind == "functionPlotGraph":
        return FunctionPlotGraphProps.from_dict(data)
    _unknown(kind)


def generate_widget(props: WidgetProps, theme: Theme = DEFAULT_THEME) -> str:
    """Renders ``props`` to a standalone SVG document."""
    if props.type == "scatterPlot":
        return generate_scatter_plot(props, theme)
    if props.type == "stickPlot":
        return generate_stick_plot(props, theme)
    if props.type == "conceptualGraph":
        return generate_conceptual_graph(props, theme)
    if props.type == "functionPlotGraph":
        return generate_function_plot_graph(props, theme)
    _unknown(props.type)


__all__ = [
    "WIDGET_TYPES",
    "WidgetProps",
    "generate_widget",
    "parse_widget_props",
    "ScatterPlotProps",
    "StickPlotProps",
    "ConceptualGraphProps",
    "FunctionPlotGraphProps",
    "generate_scatter_plot",
    "generate_stick_plot",
    "generate_conceptual_graph",
    "generate_function_plot_graph",
]
