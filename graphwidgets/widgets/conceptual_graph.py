import bisect
import logging
import math
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from ..axes import NumericAxis
from ..canvas import Canvas
from ..coordinate_plane import new_plane_canvas, setup_coordinate_plane_base
from ..geometry import Point
from ..theme import DEFAULT_THEME, Theme
from .common import (as_number, as_positive, check_dimensions, invalid, optional_label, parse_point,
                     render_document, require)

LOGGER = logging.getLogger(__name__)

WIDGET_TYPE = "conceptualGraph"
ARROW_MARKER_ID = "graph-arrow"
ARROW_SIZE = 6.0
HIGHLIGHT_LABEL_GAP = 5.0
DEFAULT_DOMAIN = (0.0, 1.0)


@dataclass(frozen=True)
class HighlightPoint:
    t: float
    label: Optional[str] = None


@dataclass(frozen=True)
class ConceptualGraphProps:
    width: float
    height: float
    x_axis_label: Optional[str] = None
    y_axis_label: Optional[str] = None
    curve_points: Tuple[Point, ...] = ()
    curve_color: str = "#000000"
    highlight_points: Tuple[HighlightPoint, ...] = ()
    highlight_point_color: str = "#000000"
    highlight_point_radius: float = 5.0
    type: str = WIDGET_TYPE

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ConceptualGraphProps":
        return cls(
            width=as_positive(require(data, "width", WIDGET_TYPE), "width", WIDGET_TYPE),
            height=as_positive(require(data, "height", WIDGET_TYPE), "height", WIDGET_TYPE),
            x_axis_label=optional_label(data.get("xAxisLabel")),
            y_axis_label=optional_label(data.get("yAxisLabel")),
            curve_points=tuple(parse_point(p, "curve point", WIDGET_TYPE) for p in data.get("curvePoints", [])),
            curve_color=str(data.get("curveColor", "#000000")),
            highlight_points=tuple(
                HighlightPoint(as_number(require(h, "t", WIDGET_TYPE), "highlight t", WIDGET_TYPE),
                               optional_label(h.get("label")))
                for h in data.get("highlightPoints", [])
            ),
            highlight_point_color=str(data.get("highlightPointColor", "#000000")),
            highlight_point_radius=as_positive(data.get("highlightPointRadius", 5.0),
                                               "highlightPointRadius", WIDGET_TYPE),
        )


def validate_conceptual_graph(props: ConceptualGraphProps):
    check_dimensions(props.width, props.height, WIDGET_TYPE)
    for hp in props.highlight_points:
        if not 0.0 <= hp.t <= 1.0:
            invalid(WIDGET_TYPE, f"highlight point t must be within [0, 1], got {hp.t!r}")
    if props.highlight_points and not props.curve_points:
        invalid(WIDGET_TYPE, "highlight points need a curve to sit on")
    if not props.highlight_point_radius > 0:
        invalid(WIDGET_TYPE, f"highlight point radius must be positive, got {props.highlight_point_radius!r}")


# --- Curve geometry ---
def _domain(values: Sequence[float]) -> Tuple[float, float]:
    if not values:
        return DEFAULT_DOMAIN
    lo, hi = min(values), max(values)
    if lo == hi:
        return lo - 1.0, hi + 1.0
    return lo, hi


def cumulative_lengths(points: Sequence[Point]) -> List[float]:
    lengths = [0.0]
    for prev, curr in zip(points, points[1:]):
        lengths.append(lengths[-1] + math.hypot(curr.x - prev.x, curr.y - prev.y))
    return lengths


def point_at_fraction(points: Sequence[Point], t: float) -> Point:
    """Point a fraction ``t`` of the way along the polyline, measured by arc length in data space."""
    if len(points) == 1:
        return points[0]
    lengths = cumulative_lengths(points)
    total = lengths[-1]
    if total == 0 or t <= 0:
        return points[0]
    if t >= 1:
        return points[-1]

    target = t * total
    idx = min(max(bisect.bisect_left(lengths, target) - 1, 0), len(points) - 2)
    seg = lengths[idx + 1] - lengths[idx]
    local_t = 0.0 if seg == 0 else (target - lengths[idx]) / seg
    p0, p1 = points[idx], points[idx + 1]
    return Point(p0.x + (p1.x - p0.x) * local_t, p0.y + (p1.y - p0.y) * local_t)


def generate_conceptual_graph(props: ConceptualGraphProps, theme: Theme = DEFAULT_THEME) -> str:
    """
    Unnumbered graph for qualitative relationships: arrowed axes with titles only, a thick curve,
    and labelled highlight points placed by arc length along it.
    """
    validate_conceptual_graph(props)
    points = props.curve_points

    x_min, x_max = _domain([p.x for p in points])
    y_min, y_max = _domain([p.y for p in points])
    bare = dict(show_grid_lines=False, show_tick_labels=False, show_ticks=False)
    x_axis = NumericAxis(x_min, x_max, x_max - x_min, label=props.x_axis_label, **bare)
    y_axis = NumericAxis(y_min, y_max, y_max - y_min, label=props.y_axis_label, **bare)

    canvas = new_plane_canvas(props.width, props.height, theme)
    plane = setup_coordinate_plane_base(canvas, x_axis, y_axis)
    chart = plane.chart_area

    # --- Arrowed axes ---
    arrow = canvas.add_arrow_marker(ARROW_MARKER_ID, theme.colors.black, ARROW_SIZE)
    canvas.draw_line(chart.left, chart.bottom, chart.left, chart.top, stroke=theme.colors.axis,
                     stroke_width=theme.stroke_widths.thick, marker_end=arrow)
    canvas.draw_line(chart.left, chart.bottom, chart.right, chart.bottom, stroke=theme.colors.axis,
                     stroke_width=theme.stroke_widths.thick, marker_end=arrow)

    if not points:
        LOGGER.debug("Conceptual graph with an empty curve: drawing the bare frame")
        return render_document(canvas, theme.layout.axis_viewbox_padding)

    pixel_points = [(plane.to_svg_x(p.x), plane.to_svg_y(p.y)) for p in points]

    def draw_curve(c: Canvas):
        c.draw_polyline(pixel_points, stroke=props.curve_color, stroke_width=theme.stroke_widths.xxthick,
                        linejoin="round", linecap="round")

    canvas.draw_in_clipped_region(draw_curve)

    # Highlights stay unclipped so points on the chart edge are not cut in half.
    r = props.highlight_point_radius
    for hp in props.highlight_points:
        pt = point_at_fraction(points, hp.t)
        cx, cy = plane.to_svg_x(pt.x), plane.to_svg_y(pt.y)
        canvas.draw_circle(cx, cy, r, fill=props.highlight_point_color)
        if hp.label:
            canvas.draw_text(cx - r - HIGHLIGHT_LABEL_GAP, cy, hp.label, anchor="end", dominant_baseline="middle",
                             font_weight="bold", font_px=theme.font_sizes.medium)

    return render_document(canvas, theme.layout.axis_viewbox_padding)
