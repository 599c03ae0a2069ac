import logging
from dataclasses import dataclass
from typing import Optional

from .axes import (NUMERIC, AxisSpec, NumericAxis, axis_ticks, compute_and_render_x_axis,
                   compute_and_render_y_axis)
from .canvas import Canvas
from .errors import AxisConfigError
from .geometry import ChartArea
from .labels import HORIZONTAL, VERTICAL, abbreviate_month, select_axis_labels
from .scales import LinearScale, Scale
from .text_metrics import estimate_label_width
from .theme import DEFAULT_THEME, Theme
from .ticks import TickSet

LOGGER = logging.getLogger(__name__)

# Four-quadrant frame: ticks straddle the axes and labels sit next to them.
QUADRANT_TICK_HALF_LENGTH = 4.0
QUADRANT_TICK_LABEL_PADDING = 8.0
QUADRANT_AXIS_TITLE_PADDING = 12.0
QUADRANT_X_LABEL_OFFSET = 15.0
QUADRANT_Y_LABEL_BASELINE_OFFSET = 4.0
ORIGIN_EPSILON = 1e-9


@dataclass(frozen=True)
class PlaneLayout:
    to_svg_x: Scale
    to_svg_y: Scale
    chart_area: ChartArea
    band_width: Optional[float]
    x_ticks: TickSet
    y_ticks: TickSet


def new_plane_canvas(width: float, height: float, theme: Theme = DEFAULT_THEME) -> Canvas:
    """Canvas whose chart rectangle is the full requested widget size."""
    return Canvas(ChartArea(0.0, 0.0, float(width), float(height)), theme=theme)


def draw_chart_title(canvas: Canvas, chart_area: ChartArea, title: str) -> float:
    """Draws a wrapped title entirely above the chart rectangle. Returns the title block height."""
    layout = canvas.theme.layout
    measured = canvas.metrics.measure(title, chart_area.width, layout.chart_title_font)
    if measured.line_count == 0:
        return 0.0
    title_top = chart_area.top - layout.chart_title_bottom_padding - measured.height
    canvas.draw_wrapped_text(chart_area.left + chart_area.width / 2.0, title_top, title,
                             max_width_px=chart_area.width, anchor="middle", dominant_baseline="hanging",
                             font_px=layout.chart_title_font, font_weight="bold",
                             fill=canvas.theme.colors.title)
    return measured.height


# ==========================================
# SINGLE QUADRANT
# ==========================================
def setup_coordinate_plane_base(canvas: Canvas, x_axis: AxisSpec, y_axis: AxisSpec,
                                title: Optional[str] = None) -> PlaneLayout:
    """
    Frame with the origin at the chart's bottom-left and axes along its edges.

    Title, tick labels and axis titles are laid out in the negative space around
    the chart rectangle, which itself never shrinks.
    """
    x_axis.validate("x")
    y_axis.validate("y")
    chart = canvas.chart_area

    if title:
        draw_chart_title(canvas, chart, title)

    y_result = compute_and_render_y_axis(y_axis, chart, canvas)
    x_result = compute_and_render_x_axis(x_axis, chart, canvas)
    canvas.register_clip_rect(chart)

    LOGGER.debug("Single-quadrant plane: chart=%s, y margin %.1f, x margin %.1f",
                 chart, y_result.margin.total, x_result.margin.total)
    return PlaneLayout(x_result.to_svg, y_result.to_svg, chart, x_result.band_width,
                       x_result.ticks, y_result.ticks)


# ==========================================
# FOUR QUADRANT
# ==========================================
def _clamp(value: float, lo: float, hi: float) -> float:
    return min(max(value, lo), hi)


def setup_coordinate_plane_quadrants(canvas: Canvas, x_axis: NumericAxis, y_axis: NumericAxis,
                                     show_quadrant_labels: bool = False,
                                     title: Optional[str] = None) -> PlaneLayout:
    """
    Cartesian frame with both axes drawn through zero, clamped to the chart edges
    when zero is outside the domain. Tick marks and labels skip the origin.
    """
    for name, axis in (("x", x_axis), ("y", y_axis)):
        if axis.kind != NUMERIC:
            message = f"four-quadrant plane requires a numeric {name}-axis"
            LOGGER.error(message)
            raise AxisConfigError(message)
        axis.validate(name)

    theme = canvas.theme
    layout, colors = theme.layout, theme.colors
    chart = canvas.chart_area

    to_x = LinearScale(x_axis.min, x_axis.max, chart.left, chart.right)
    to_y = LinearScale(y_axis.min, y_axis.max, chart.bottom, chart.top)
    x_ticks = axis_ticks(x_axis)
    y_ticks = axis_ticks(y_axis)

    if title:
        draw_chart_title(canvas, chart, title)
    canvas.register_clip_rect(chart)

    zero_x = _clamp(to_x(0.0), chart.left, chart.right)
    zero_y = _clamp(to_y(0.0), chart.top, chart.bottom)

    # --- Grid ---
    if x_axis.show_grid_lines:
        for v in x_ticks.values:
            if abs(v) < ORIGIN_EPSILON:
                continue
            canvas.draw_line(to_x(v), chart.top, to_x(v), chart.bottom,
                             stroke=colors.grid_major, stroke_width=layout.grid_stroke_width)
    if y_axis.show_grid_lines:
        for v in y_ticks.values:
            if abs(v) < ORIGIN_EPSILON:
                continue
            canvas.draw_line(chart.left, to_y(v), chart.right, to_y(v),
                             stroke=colors.grid_major, stroke_width=layout.grid_stroke_width)

    # --- Axes ---
    canvas.draw_line(chart.left, zero_y, chart.right, zero_y, stroke=colors.axis,
                     stroke_width=layout.axis_stroke_width)
    canvas.draw_line(zero_x, chart.top, zero_x, chart.bottom, stroke=colors.axis,
                     stroke_width=layout.axis_stroke_width)

    # --- X ticks and labels ---
    x_positions = [to_x(v) for v in x_ticks.values]
    x_selected = select_axis_labels(x_ticks.labels, x_positions, chart.width, HORIZONTAL,
                                    layout.tick_label_font, layout.x_axis_min_label_gap,
                                    layout.label_avg_char_width)
    for i, (v, x) in enumerate(zip(x_ticks.values, x_positions)):
        if abs(v) < ORIGIN_EPSILON:
            continue
        if x_axis.show_ticks:
            canvas.draw_line(x, zero_y - QUADRANT_TICK_HALF_LENGTH, x, zero_y + QUADRANT_TICK_HALF_LENGTH,
                             stroke=colors.axis, stroke_width=theme.stroke_widths.thin)
        if x_axis.show_tick_labels and i in x_selected:
            canvas.draw_text(x, zero_y + QUADRANT_X_LABEL_OFFSET, x_ticks.labels[i], anchor="middle",
                             font_px=layout.tick_label_font, fill=colors.axis_label)

    # --- Y ticks and labels ---
    y_positions = [to_y(v) for v in y_ticks.values]
    y_selected = select_axis_labels(y_ticks.labels, y_positions, chart.height, VERTICAL,
                                    layout.tick_label_font, layout.y_axis_min_label_gap,
                                    layout.label_avg_char_width)
    for i, (v, y) in enumerate(zip(y_ticks.values, y_positions)):
        if abs(v) < ORIGIN_EPSILON:
            continue
        if y_axis.show_ticks:
            canvas.draw_line(zero_x - QUADRANT_TICK_HALF_LENGTH, y, zero_x + QUADRANT_TICK_HALF_LENGTH, y,
                             stroke=colors.axis, stroke_width=theme.stroke_widths.thin)
        if y_axis.show_tick_labels and i in y_selected:
            canvas.draw_text(zero_x - QUADRANT_TICK_LABEL_PADDING, y + QUADRANT_Y_LABEL_BASELINE_OFFSET,
                             y_ticks.labels[i], anchor="end", font_px=layout.tick_label_font,
                             fill=colors.axis_label)

    # --- Axis titles ---
    title_font = theme.font_sizes.medium
    if x_axis.label:
        title_y = (chart.bottom + layout.tick_length + layout.tick_label_padding + layout.tick_label_font
                   + layout.x_axis_title_padding)
        canvas.draw_wrapped_text(chart.left + chart.width / 2.0, title_y, abbreviate_month(x_axis.label),
                                 max_width_px=chart.width, anchor="middle", font_px=title_font,
                                 fill=colors.axis_label)
    if y_axis.label:
        max_label_w = 0.0
        if y_axis.show_tick_labels:
            max_label_w = max((estimate_label_width(label, layout.label_avg_char_width)
                               for label in y_ticks.labels), default=0.0)
        title_h = canvas.metrics.measure(y_axis.label, chart.height, title_font).height
        title_x = chart.left - (QUADRANT_TICK_HALF_LENGTH + QUADRANT_TICK_LABEL_PADDING + max_label_w
                                + QUADRANT_AXIS_TITLE_PADDING + title_h / 2.0)
        title_y = chart.top + chart.height / 2.0
        canvas.draw_wrapped_text(title_x, title_y, abbreviate_month(y_axis.label), max_width_px=chart.height,
                                 anchor="middle", dominant_baseline="middle", font_px=title_font,
                                 fill=colors.axis_label, rotate=(-90, title_x, title_y))

    if show_quadrant_labels:
        _draw_quadrant_labels(canvas, x_axis, y_axis, zero_x, zero_y)

    return PlaneLayout(to_x, to_y, chart, None, x_ticks, y_ticks)


def _draw_quadrant_labels(canvas: Canvas, x_axis: NumericAxis, y_axis: NumericAxis,
                          anchor_x: float, anchor_y: float):
    chart = canvas.chart_area
    dx, dy = chart.width / 4.0, chart.height / 4.0
    has_pos_x, has_neg_x = x_axis.max > 0, x_axis.min < 0
    has_pos_y, has_neg_y = y_axis.max > 0, y_axis.min < 0

    quadrants = [
        ("I", has_pos_x and has_pos_y, anchor_x + dx, anchor_y - dy),
        ("II", has_neg_x and has_pos_y, anchor_x - dx, anchor_y - dy),
        ("III", has_neg_x and has_neg_y, anchor_x - dx, anchor_y + dy),
        ("IV", has_pos_x and has_neg_y, anchor_x + dx, anchor_y + dy),
    ]
    for text, visible, x, y in quadrants:
        if visible:
            canvas.draw_text(x, y, text, anchor="middle", dominant_baseline="middle",
                             font_px=canvas.theme.font_sizes.xlarge, fill=canvas.theme.colors.quadrant_label)
