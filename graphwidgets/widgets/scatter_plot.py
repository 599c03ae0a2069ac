import logging
import math
from dataclasses import dataclass, field
from typing import Any, Callable, List, Mapping, Optional, Tuple, Union

from ..axes import NumericAxis
from ..canvas import Canvas, LegendRow
from ..coordinate_plane import PlaneLayout, new_plane_canvas, setup_coordinate_plane_quadrants
from ..geometry import Point
from ..labels import abbreviate_month
from ..path_builder import PathBuilder
from ..regression import EXPONENTIAL, FIT_METHODS, LINEAR, MIN_POINTS, LinearFit, RegressionResult, fit_best
from ..theme import DEFAULT_THEME, Theme
from .common import (LineStyle, as_positive, check_dimensions, check_points_in_domain, invalid,
                     optional_label, parse_numeric_axis, parse_point, render_document, require)

LOGGER = logging.getLogger(__name__)

WIDGET_TYPE = "scatterPlot"
TWO_POINTS = "twoPoints"
BEST_FIT = "bestFit"

CURVE_STEPS = 100
POINT_LABEL_OFFSET = 5.0
LEGEND_OFFSET_X = 15.0
LEGEND_OFFSET_Y = 4.0


# --- PROPS ---
@dataclass(frozen=True)
class ScatterPoint:
    x: float
    y: float
    label: Optional[str] = None

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)


@dataclass(frozen=True)
class TwoPointsLine:
    """Infinite line through ``a`` and ``b``, cropped to the chart."""
    a: Point
    b: Point
    label: Optional[str] = None
    style: LineStyle = field(default_factory=LineStyle)
    type: str = TWO_POINTS


@dataclass(frozen=True)
class BestFitLine:
    method: str = LINEAR
    label: Optional[str] = None
    style: LineStyle = field(default_factory=LineStyle)
    type: str = BEST_FIT


LineOverlay = Union[TwoPointsLine, BestFitLine]


@dataclass(frozen=True)
class ScatterPlotProps:
    width: float
    height: float
    x_axis: NumericAxis
    y_axis: NumericAxis
    title: Optional[str] = None
    points: Tuple[ScatterPoint, ...] = ()
    lines: Tuple[LineOverlay, ...] = ()
    type: str = WIDGET_TYPE

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ScatterPlotProps":
        points = []
        for raw in data.get("points", []):
            p = parse_point(raw, "point", WIDGET_TYPE)
            points.append(ScatterPoint(p.x, p.y, optional_label(raw.get("label"))))
        return cls(
            width=as_positive(require(data, "width", WIDGET_TYPE), "width", WIDGET_TYPE),
            height=as_positive(require(data, "height", WIDGET_TYPE), "height", WIDGET_TYPE),
            title=optional_label(data.get("title")),
            x_axis=parse_numeric_axis(require(data, "xAxis", WIDGET_TYPE), WIDGET_TYPE, grid_key="gridLines"),
            y_axis=parse_numeric_axis(require(data, "yAxis", WIDGET_TYPE), WIDGET_TYPE, grid_key="gridLines"),
            points=tuple(points),
            lines=tuple(_parse_line(raw) for raw in data.get("lines", [])),
        )


def _parse_line(raw: Mapping[str, Any]) -> LineOverlay:
    kind = require(raw, "type", WIDGET_TYPE)
    style = LineStyle.from_dict(raw.get("style", {}), WIDGET_TYPE)
    label = optional_label(raw.get("label"))
    if kind == TWO_POINTS:
        return TwoPointsLine(parse_point(require(raw, "a", WIDGET_TYPE), "line.a", WIDGET_TYPE),
                             parse_point(require(raw, "b", WIDGET_TYPE), "line.b", WIDGET_TYPE), label, style)
    if kind == BEST_FIT:
        return BestFitLine(str(require(raw, "method", WIDGET_TYPE)), label, style)
    invalid(WIDGET_TYPE, f"unknown line type {kind!r} (expected '{TWO_POINTS}' or '{BEST_FIT}')")


# ==========================================
# VALIDATION
# ==========================================
def validate_scatter_plot(props: ScatterPlotProps):
    check_dimensions(props.width, props.height, WIDGET_TYPE)
    props.x_axis.validate("x")
    props.y_axis.validate("y")

    count = len(props.points)
    for line in props.lines:
        if line.type == BEST_FIT:
            if line.method not in FIT_METHODS:
                invalid(WIDGET_TYPE, f"unknown best fit method {line.method!r}")
            needed = MIN_POINTS[line.method]
            if count < needed:
                invalid(WIDGET_TYPE, f"{line.method} best fit requires at least {needed} points, got {count}")
            if line.method == EXPONENTIAL:
                non_positive = [p for p in props.points if p.y <= 0]
                if non_positive:
                    invalid(WIDGET_TYPE, "exponential regression requires all y-values to be positive, "
                                         f"got {len(non_positive)} point(s) with y <= 0")
        elif line.type == TWO_POINTS:
            if line.a == line.b:
                invalid(WIDGET_TYPE, f"line endpoints must differ, both are ({line.a.x:g}, {line.a.y:g})")

    check_points_in_domain((p.point for p in props.points), props.x_axis, props.y_axis, WIDGET_TYPE)


# ==========================================
# RENDERING
# ==========================================
def _curve_path(fit: RegressionResult, x_axis: NumericAxis, plane: PlaneLayout) -> PathBuilder:
    path = PathBuilder()
    pen_down = False
    for i in range(CURVE_STEPS + 1):
        x_val = x_axis.min + (i / CURVE_STEPS) * (x_axis.max - x_axis.min)
        y_val = fit.evaluate(x_val)
        if not math.isfinite(y_val):
            pen_down = False
            continue
        px, py = plane.to_svg_x(x_val), plane.to_svg_y(y_val)
        if pen_down:
            path.line_to(px, py)
        else:
            path.move_to(px, py)
            pen_down = True
    return path


def generate_scatter_plot(props: ScatterPlotProps, theme: Theme = DEFAULT_THEME) -> str:
    """
    Scatter plot of labelled points with optional reference and best-fit lines.

    Straight lines that exactly span the x domain are drawn directly; curves and
    two-point lines, which may leave the chart, are drawn in the clipped region.
    """
    validate_scatter_plot(props)
    x_axis, y_axis = props.x_axis, props.y_axis
    data_points = [p.point for p in props.points]

    canvas = new_plane_canvas(props.width, props.height, theme)
    plane = setup_coordinate_plane_quadrants(canvas, x_axis, y_axis, show_quadrant_labels=False,
                                             title=props.title)

    clipped: List[Callable[[Canvas], None]] = []
    legend_rows: List[LegendRow] = []

    def stroke_kwargs(style: LineStyle) -> dict:
        return {"stroke": style.color, "stroke_width": style.stroke_width, "dash": style.dash_array}

    for line in props.lines:
        if line.type == BEST_FIT:
            fit = fit_best(line.method, data_points)
            if fit is None:
                continue
            if isinstance(fit, LinearFit):
                canvas.draw_line(plane.to_svg_x(x_axis.min), plane.to_svg_y(fit.evaluate(x_axis.min)),
                                 plane.to_svg_x(x_axis.max), plane.to_svg_y(fit.evaluate(x_axis.max)),
                                 **stroke_kwargs(line.style))
            else:
                path = _curve_path(fit, x_axis, plane)
                clipped.append(lambda c, path=path, style=line.style: c.draw_path(path, fill="none",
                                                                                  **stroke_kwargs(style)))
        elif line.type == TWO_POINTS:
            a, b = line.a, line.b
            if a.x == b.x:
                x = plane.to_svg_x(a.x)
                canvas.draw_line(x, plane.to_svg_y(y_axis.min), x, plane.to_svg_y(y_axis.max),
                                 **stroke_kwargs(line.style))
            else:
                slope = (b.y - a.y) / (b.x - a.x)
                intercept = a.y - slope * a.x
                coords = (plane.to_svg_x(x_axis.min), plane.to_svg_y(slope * x_axis.min + intercept),
                          plane.to_svg_x(x_axis.max), plane.to_svg_y(slope * x_axis.max + intercept))
                clipped.append(lambda c, coords=coords, style=line.style: c.draw_line(*coords,
                                                                                      **stroke_kwargs(style)))
        if line.label:
            legend_rows.append(LegendRow(abbreviate_month(line.label), line.style.color,
                                         line.style.stroke_width, line.style.dash_array))

    if clipped:
        def draw_clipped(c: Canvas):
            for draw in clipped:
                draw(c)
        canvas.draw_in_clipped_region(draw_clipped)

    # --- Points ---
    for p in props.points:
        px, py = plane.to_svg_x(p.x), plane.to_svg_y(p.y)
        canvas.draw_circle(px, py, theme.point_radius.large, fill=theme.colors.black,
                           fill_opacity=theme.overlay_high_opacity)
        if p.label:
            canvas.draw_text(px + POINT_LABEL_OFFSET, py - POINT_LABEL_OFFSET, abbreviate_month(p.label),
                             fill=theme.colors.text, font_px=theme.font_sizes.small)

    # --- Legend ---
    if legend_rows:
        chart = plane.chart_area
        canvas.draw_legend_block(chart.right + LEGEND_OFFSET_X, chart.top + LEGEND_OFFSET_Y, legend_rows)

    LOGGER.debug("Scatter plot: %d points, %d lines, %d legend rows",
                 len(props.points), len(props.lines), len(legend_rows))
    return render_document(canvas, theme.layout.axis_viewbox_padding)
