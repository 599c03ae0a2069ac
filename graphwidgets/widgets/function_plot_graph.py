import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from ..axes import NumericAxis
from ..canvas import Canvas
from ..coordinate_plane import PlaneLayout, new_plane_canvas, setup_coordinate_plane_quadrants
from ..expressions import DEFAULT_SAMPLES, Expression, evaluate_polynomial
from ..geometry import Point
from ..labels import abbreviate_month
from ..theme import DEFAULT_THEME, Theme
from .common import (DASHED, LINE_STYLES, SOLID, as_number, as_positive, check_dimensions,
                     check_points_in_domain, invalid, optional_label, parse_numeric_axis, parse_point,
                     polyline_midpoint, render_document, require)

LOGGER = logging.getLogger(__name__)

WIDGET_TYPE = "functionPlotGraph"

# Polyline kinds
POINTS = "points"
FUNCTION = "function"
EXPRESSION = "expression"

# Point styles
OPEN = "open"
CLOSED = "closed"

POLYLINE_DASH = "5 3"
MIN_RESOLUTION = 10
DEFAULT_RESOLUTION = 100
POINT_LABEL_OFFSET = 6.0
CURVE_LABEL_OFFSET = 14.0
BOTTOM_EDGE_NUDGE = 0.05
BOTTOM_EDGE_TOLERANCE = 1e-6


# --- PROPS ---
@dataclass(frozen=True)
class PointsPolyline:
    id: str
    points: Tuple[Point, ...]
    color: str = "#000000"
    style: str = SOLID
    label: Optional[str] = None
    type: str = POINTS


@dataclass(frozen=True)
class FunctionPolyline:
    """Polynomial with coefficients in descending order of power, e.g. (1, 0, -3) is x^2 - 3."""
    id: str
    coefficients: Tuple[float, ...]
    x_range: Tuple[float, float]
    resolution: int = DEFAULT_RESOLUTION
    color: str = "#000000"
    style: str = SOLID
    label: Optional[str] = None
    type: str = FUNCTION


@dataclass(frozen=True)
class ExpressionPolyline:
    """Curve given as text such as ``"y = x^2 - 3"``; sampled across ``x_range`` or the whole x axis."""
    id: str
    expression: str
    x_range: Optional[Tuple[float, float]] = None
    resolution: int = DEFAULT_SAMPLES
    color: str = "#000000"
    style: str = SOLID
    label: Optional[str] = None
    type: str = EXPRESSION


Polyline = Union[PointsPolyline, FunctionPolyline, ExpressionPolyline]


@dataclass(frozen=True)
class PlotPoint:
    id: str
    x: float
    y: float
    label: Optional[str] = None
    style: str = CLOSED


@dataclass(frozen=True)
class FunctionPlotGraphProps:
    width: float
    height: float
    x_axis: NumericAxis
    y_axis: NumericAxis
    title: Optional[str] = None
    show_quadrant_labels: bool = False
    polylines: Tuple[Polyline, ...] = ()
    points: Tuple[PlotPoint, ...] = ()
    type: str = WIDGET_TYPE

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FunctionPlotGraphProps":
        points = []
        for i, raw in enumerate(data.get("points", [])):
            p = parse_point(raw, "point", WIDGET_TYPE)
            points.append(PlotPoint(str(raw.get("id", f"point_{i}")), p.x, p.y, optional_label(raw.get("label")),
                                    str(raw.get("style", CLOSED))))
        return cls(
            width=as_positive(require(data, "width", WIDGET_TYPE), "width", WIDGET_TYPE),
            height=as_positive(require(data, "height", WIDGET_TYPE), "height", WIDGET_TYPE),
            title=optional_label(data.get("title")),
            x_axis=parse_numeric_axis(require(data, "xAxis", WIDGET_TYPE), WIDGET_TYPE),
            y_axis=parse_numeric_axis(require(data, "yAxis", WIDGET_TYPE), WIDGET_TYPE),
            show_quadrant_labels=bool(data.get("showQuadrantLabels", False)),
            polylines=tuple(_parse_polyline(raw, i) for i, raw in enumerate(data.get("polylines", []))),
            points=tuple(points),
        )


def _parse_range(raw: Mapping[str, Any]) -> Tuple[float, float]:
    return (as_number(require(raw, "min", WIDGET_TYPE), "xRange.min", WIDGET_TYPE),
            as_number(require(raw, "max", WIDGET_TYPE), "xRange.max", WIDGET_TYPE))


def _parse_resolution(raw: Mapping[str, Any], default: int) -> int:
    value = as_number(raw.get("resolution", default), "resolution", WIDGET_TYPE)
    if not value.is_integer():
        invalid(WIDGET_TYPE, f"resolution must be a whole number, got {value!r}")
    return int(value)


def _parse_polyline(raw: Mapping[str, Any], index: int) -> Polyline:
    kind = require(raw, "type", WIDGET_TYPE)
    common = dict(id=str(raw.get("id", f"polyline_{index}")), color=str(raw.get("color", "#000000")),
                  style=str(raw.get("style", SOLID)), label=optional_label(raw.get("label")))
    if kind == POINTS:
        points = tuple(parse_point(p, "polyline point", WIDGET_TYPE) for p in require(raw, "points", WIDGET_TYPE))
        return PointsPolyline(points=points, **common)
    if kind == FUNCTION:
        coefficients = tuple(as_number(c, "coefficient", WIDGET_TYPE)
                             for c in require(raw, "coefficients", WIDGET_TYPE))
        return FunctionPolyline(coefficients=coefficients, x_range=_parse_range(require(raw, "xRange", WIDGET_TYPE)),
                                resolution=_parse_resolution(raw, DEFAULT_RESOLUTION), **common)
    if kind == EXPRESSION:
        x_range = _parse_range(raw["xRange"]) if raw.get("xRange") else None
        return ExpressionPolyline(expression=str(require(raw, "expression", WIDGET_TYPE)), x_range=x_range,
                                  resolution=_parse_resolution(raw, DEFAULT_SAMPLES), **common)
    invalid(WIDGET_TYPE, f"unknown polyline type {kind!r} (expected '{POINTS}', '{FUNCTION}' or '{EXPRESSION}')")


# ==========================================
# VALIDATION
# ==========================================
def validate_function_plot_graph(props: FunctionPlotGraphProps) -> Dict[str, Expression]:
    """Checks every precondition and returns the parsed expression of each expression polyline, by id."""
    check_dimensions(props.width, props.height, WIDGET_TYPE)
    props.x_axis.validate("x")
    props.y_axis.validate("y")

    ids = [pl.id for pl in props.polylines]
    duplicates = sorted({i for i in ids if ids.count(i) > 1})
    if duplicates:
        invalid(WIDGET_TYPE, f"polyline ids must be unique, repeated: {', '.join(duplicates)}")

    expressions: Dict[str, Expression] = {}
    for pl in props.polylines:
        if pl.style not in LINE_STYLES:
            invalid(WIDGET_TYPE, f"polyline {pl.id!r} style must be '{SOLID}' or '{DASHED}', got {pl.style!r}")
        if pl.type == POINTS:
            check_points_in_domain(pl.points, props.x_axis, props.y_axis, WIDGET_TYPE, f"points of {pl.id!r}")
            continue
        if pl.x_range is not None and not pl.x_range[0] < pl.x_range[1]:
            invalid(WIDGET_TYPE, f"polyline {pl.id!r} xRange min must be less than max, got {pl.x_range}")
        if pl.resolution < MIN_RESOLUTION:
            invalid(WIDGET_TYPE, f"polyline {pl.id!r} resolution must be at least {MIN_RESOLUTION}")
        if pl.type == FUNCTION:
            if not pl.coefficients:
                invalid(WIDGET_TYPE, f"polyline {pl.id!r} must have at least one coefficient")
        elif pl.type == EXPRESSION:
            expressions[pl.id] = Expression(pl.expression)

    for p in props.points:
        if p.style not in (OPEN, CLOSED):
            invalid(WIDGET_TYPE, f"point {p.id!r} style must be '{OPEN}' or '{CLOSED}', got {p.style!r}")
    check_points_in_domain((Point(p.x, p.y) for p in props.points), props.x_axis, props.y_axis, WIDGET_TYPE)
    return expressions


# ==========================================
# RENDERING
# ==========================================
def _nudge_bottom_endpoints(points: Sequence[Point], y_min: float) -> List[Point]:
    """Endpoints resting on the bottom edge are moved just below it so the clipped stroke meets the axis."""
    nudged = list(points)
    for i in {0, len(points) - 1}:
        if points and abs(points[i].y - y_min) <= BOTTOM_EDGE_TOLERANCE:
            nudged[i] = Point(points[i].x, y_min - BOTTOM_EDGE_NUDGE)
    return nudged


def _polyline_runs(pl: Polyline, props: FunctionPlotGraphProps,
                   expressions: Mapping[str, Expression]) -> List[List[Tuple[float, float]]]:
    """Data-space runs of points for one polyline; expression curves break at discontinuities."""
    x_axis, y_axis = props.x_axis, props.y_axis
    if pl.type == POINTS:
        return [[(p.x, p.y) for p in _nudge_bottom_endpoints(pl.points, y_axis.min)]]
    if pl.type == FUNCTION:
        xs = np.linspace(pl.x_range[0], pl.x_range[1], pl.resolution)
        ys = evaluate_polynomial(pl.coefficients, xs)
        return [[(float(x), float(y)) for x, y in zip(xs, ys)]]
    x_lo, x_hi = pl.x_range if pl.x_range is not None else (x_axis.min, x_axis.max)
    return expressions[pl.id].sample(x_lo, x_hi, pl.resolution, y_limit=(y_axis.min, y_axis.max))


def _draw_curve_label(canvas: Canvas, plane: PlaneLayout, pixels: Sequence[Tuple[float, float]],
                      text: str, color: str):
    text = abbreviate_month(text)
    font_px = canvas.theme.font_sizes.medium
    mx, my, tx, ty = polyline_midpoint(pixels)
    nx, ny = -ty, tx
    if ny > 0:
        nx, ny = -nx, -ny

    size = canvas.metrics.measure(text, font_px=font_px)
    half_w, half_h = size.width / 2.0, size.height / 2.0
    chart = plane.chart_area
    x = min(max(mx + nx * CURVE_LABEL_OFFSET, chart.left + half_w), chart.right - half_w)
    y = min(max(my + ny * CURVE_LABEL_OFFSET, chart.top + half_h), chart.bottom - half_h)
    canvas.draw_text(x, y, text, anchor="middle", dominant_baseline="middle",
                     font_px=font_px, fill=color)


def generate_function_plot_graph(props: FunctionPlotGraphProps, theme: Theme = DEFAULT_THEME) -> str:
    expressions = validate_function_plot_graph(props)

    canvas = new_plane_canvas(props.width, props.height, theme)
    plane = setup_coordinate_plane_quadrants(canvas, props.x_axis, props.y_axis,
                                             show_quadrant_labels=props.show_quadrant_labels,
                                             title=props.title)

    drawn: List[Tuple[Polyline, List[Tuple[float, float]]]] = []
    for pl in props.polylines:
        runs = [[(plane.to_svg_x(x), plane.to_svg_y(y)) for x, y in run]
                for run in _polyline_runs(pl, props, expressions)]
        runs = [run for run in runs if run]
        if not runs:
            LOGGER.warning("Polyline %r produced no drawable points", pl.id)
            continue
        drawn.append((pl, runs))

    def draw_polylines(c: Canvas):
        for pl, runs in drawn:
            dash = POLYLINE_DASH if pl.style == DASHED else None
            for run in runs:
                c.draw_polyline(run, stroke=pl.color, stroke_width=theme.stroke_widths.thick, dash=dash)

    if drawn:
        canvas.draw_in_clipped_region(draw_polylines)

    for pl, runs in drawn:
        if pl.label:
            _draw_curve_label(canvas, plane, max(runs, key=len), pl.label, pl.color)

    # --- Points ---
    colors = theme.colors
    for p in props.points:
        px, py = plane.to_svg_x(p.x), plane.to_svg_y(p.y)
        fill = colors.white if p.style == OPEN else colors.black
        canvas.draw_circle(px, py, theme.point_radius.base, fill=fill, stroke=colors.black,
                           stroke_width=theme.stroke_widths.base)
        if p.label:
            canvas.draw_text(px + POINT_LABEL_OFFSET, py - POINT_LABEL_OFFSET, abbreviate_month(p.label),
                             fill=colors.text)

    LOGGER.debug("Function plot: %d polylines drawn, %d points", len(drawn), len(props.points))
    return render_document(canvas)
