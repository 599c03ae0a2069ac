"""
Layout and rendering engine for parameterised maths and statistics diagrams.

Every widget is rendered to a standalone SVG document whose size is derived from
what was actually drawn, not from a fixed pixel layout.
"""
from .canvas import Canvas, FinalizedMarkup
from .errors import (AxisConfigError, CanvasError, GraphWidgetError, LabelSelectionError, TickIntervalError,
                     WidgetValidationError)
from .theme import DEFAULT_THEME, Theme
from .widgets import generate_widget, parse_widget_props

__version__ = "1.0.0"

__all__ = [
    "Canvas",
    "FinalizedMarkup",
    "Theme",
    "DEFAULT_THEME",
    "generate_widget",
    "parse_widget_props",
    "GraphWidgetError",
    "AxisConfigError",
    "TickIntervalError",
    "LabelSelectionError",
    "CanvasError",
    "WidgetValidationError",
]
