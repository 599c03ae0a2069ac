import logging
import math
from dataclasses import dataclass
from typing import Callable, FrozenSet, Optional, Tuple, Union

from .canvas import Canvas
from .errors import AxisConfigError
from .geometry import ChartArea
from .labels import HORIZONTAL, VERTICAL, abbreviate_month, select_axis_labels
from .scales import BandScale, LinearScale, PointScale, Scale
from .text_metrics import DEFAULT_TEXT_METRICS, TextMetrics, estimate_label_width
from .theme import DEFAULT_THEME, Theme
from .ticks import EMPTY_TICKS, TickSet, build_category_ticks, build_ticks

LOGGER = logging.getLogger(__name__)

NUMERIC = "numeric"
CATEGORICAL = "categorical"
BAND = "band"
POINT = "point"

# Tick labels on a vertical axis sit this far below the tick so they read as centred.
Y_LABEL_BASELINE_OFFSET = 4.0


def _invalid(message: str):
    LOGGER.error(message)
    raise AxisConfigError(message)


# --- AXIS SPECS ---
@dataclass(frozen=True)
class NumericAxis:
    min: float
    max: float
    tick_interval: float
    label: Optional[str] = None
    show_grid_lines: bool = True
    show_tick_labels: bool = True
    show_ticks: bool = True
    label_formatter: Optional[Callable[[float], str]] = None
    kind: str = NUMERIC

    def validate(self, name: str = "axis"):
        if not (math.isfinite(self.min) and math.isfinite(self.max)) or self.min >= self.max:
            _invalid(f"{name}-axis min {self.min} must be less than max {self.max}")
        if not (math.isfinite(self.tick_interval) and self.tick_interval > 0):
            _invalid(f"{name}-axis tick_interval must be positive, got {self.tick_interval}")

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max


@dataclass(frozen=True)
class CategoryAxis:
    categories: Tuple[str, ...]
    label: Optional[str] = None
    show_grid_lines: bool = False
    scale: str = BAND
    show_tick_labels: bool = True
    show_ticks: bool = True
    kind: str = CATEGORICAL

    def validate(self, name: str = "axis"):
        if not self.categories:
            _invalid(f"{name}-axis categories cannot be empty")
        if self.scale not in (BAND, POINT):
            _invalid(f"{name}-axis category scale must be '{BAND}' or '{POINT}', got {self.scale!r}")

    def index_of(self, category: str) -> Optional[int]:
        try:
            return self.categories.index(category)
        except ValueError:
            return None


AxisSpec = Union[NumericAxis, CategoryAxis]


@dataclass(frozen=True)
class AxisMargin:
    tick_length: float
    label_extent: float
    title_extent: float
    total: float


@dataclass(frozen=True)
class AxisResult:
    to_svg: Scale
    band_width: Optional[float]
    ticks: TickSet
    selected: FrozenSet[int]
    margin: AxisMargin


# ==========================================
# SHARED HELPERS
# ==========================================
def axis_ticks(spec: AxisSpec) -> TickSet:
    if spec.kind == NUMERIC:
        # Bare axes (conceptual graphs) never need an exact tick interval.
        if not (spec.show_ticks or spec.show_tick_labels or spec.show_grid_lines):
            return EMPTY_TICKS
        ticks = build_ticks(spec.min, spec.max, spec.tick_interval)
        if spec.label_formatter is not None:
            return TickSet(ticks.values, tuple(spec.label_formatter(v) for v in ticks.values))
        return ticks
    ticks = build_category_ticks(spec.categories)
    return TickSet(ticks.values, tuple(abbreviate_month(c) for c in ticks.labels))


def make_scale(spec: AxisSpec, range_start: float, range_end: float) -> Scale:
    if spec.kind == NUMERIC:
        return LinearScale(spec.min, spec.max, range_start, range_end)
    if spec.scale == POINT:
        return PointScale(len(spec.categories), range_start, range_end)
    return BandScale(len(spec.categories), range_start, range_end)


def tick_length(spec: AxisSpec, theme: Theme = DEFAULT_THEME) -> float:
    return theme.layout.tick_length if spec.show_ticks else 0.0


def measure_y_axis_margin(spec: AxisSpec, chart_area: ChartArea, theme: Theme = DEFAULT_THEME,
                          metrics: Optional[TextMetrics] = None) -> AxisMargin:
    """Horizontal space needed left of the chart for ticks, tick labels and the rotated title."""
    layout = theme.layout
    metrics = metrics or DEFAULT_TEXT_METRICS
    tick = tick_length(spec, theme)

    label_w = 0.0
    if spec.show_tick_labels:
        label_w = max((estimate_label_width(label, layout.label_avg_char_width)
                       for label in axis_ticks(spec).labels), default=0.0)
    # Rotated title: its line stack is laid out horizontally, wrapping against the chart height.
    title_h = metrics.measure(spec.label or "", chart_area.height, layout.axis_title_font).height

    total = tick + layout.tick_label_padding + label_w + layout.axis_title_padding + title_h
    return AxisMargin(tick, label_w, title_h, total)


def measure_x_axis_margin(spec: AxisSpec, chart_area: ChartArea, theme: Theme = DEFAULT_THEME,
                          metrics: Optional[TextMetrics] = None) -> AxisMargin:
    """Vertical space needed below the chart for ticks, tick labels and the title."""
    layout = theme.layout
    metrics = metrics or DEFAULT_TEXT_METRICS
    tick = tick_length(spec, theme)

    label_h = layout.tick_label_font if spec.show_tick_labels else 0.0
    title_h = metrics.measure(spec.label or "", chart_area.width, layout.axis_title_font).height

    total = tick + layout.tick_label_padding + label_h + layout.x_axis_title_padding + title_h
    return AxisMargin(tick, label_h, title_h, total)


# ==========================================
# Y AXIS
# ==========================================
def compute_and_render_y_axis(spec: AxisSpec, chart_area: ChartArea, canvas: Canvas,
                              y_axis_label_x: Optional[float] = None) -> AxisResult:
    """
    Draws a y axis along the chart's left edge and returns the value -> pixel mapping.

    Numeric axes put ``min`` at the chart bottom; categorical axes lay bands out
    from the top in declared order.
    """
    spec.validate("y")
    theme = canvas.theme
    layout, colors = theme.layout, theme.colors
    margin = measure_y_axis_margin(spec, chart_area, theme, canvas.metrics)

    if spec.kind == NUMERIC:
        scale = make_scale(spec, chart_area.bottom, chart_area.top)
    else:
        scale = make_scale(spec, chart_area.top, chart_area.bottom)
    band_width = scale.band_width if isinstance(scale, BandScale) else None

    ticks = axis_ticks(spec)
    positions = [scale(v) for v in ticks.values]
    selected = select_axis_labels(ticks.labels, positions, chart_area.height, VERTICAL,
                                  layout.tick_label_font, layout.y_axis_min_label_gap,
                                  layout.label_avg_char_width)

    # --- Grid ---
    if spec.kind == NUMERIC and spec.show_grid_lines:
        for y in positions:
            canvas.draw_line(chart_area.left, y, chart_area.right, y,
                             stroke=colors.grid_major, stroke_width=layout.grid_stroke_width)

    # --- Axis, ticks, labels ---
    axis_x = chart_area.left
    canvas.draw_line(axis_x, chart_area.top, axis_x, chart_area.bottom,
                     stroke=colors.axis, stroke_width=layout.axis_stroke_width)

    tick = margin.tick_length
    for i, y in enumerate(positions):
        if tick > 0:
            canvas.draw_line(axis_x - tick, y, axis_x, y, stroke=colors.axis, stroke_width=layout.axis_stroke_width)
        if spec.show_tick_labels and i in selected:
            canvas.draw_text(axis_x - tick - layout.tick_label_padding, y + Y_LABEL_BASELINE_OFFSET,
                             ticks.labels[i], anchor="end", font_px=layout.tick_label_font,
                             fill=colors.axis_label)

    # --- Title ---
    if spec.label:
        if y_axis_label_x is None:
            y_axis_label_x = chart_area.left - (margin.total - margin.title_extent / 2.0)
        label_y = chart_area.top + chart_area.height / 2.0
        canvas.draw_wrapped_text(y_axis_label_x, label_y, spec.label, max_width_px=chart_area.height,
                                 rotate=(-90, y_axis_label_x, label_y), font_px=layout.axis_title_font,
                                 anchor="middle", dominant_baseline="middle", fill=colors.axis_label)

    LOGGER.debug("y-axis: %d ticks, %d labels, margin %.1f", len(ticks), len(selected), margin.total)
    return AxisResult(scale, band_width, ticks, frozenset(selected), margin)


# ==========================================
# X AXIS
# ==========================================
def compute_and_render_x_axis(spec: AxisSpec, chart_area: ChartArea, canvas: Canvas) -> AxisResult:
    """
    Draws an x axis along the chart's bottom edge and returns the value -> pixel mapping.

    Band scales also return the band width so callers can centre bars or sticks.
    """
    spec.validate("x")
    theme = canvas.theme
    layout, colors = theme.layout, theme.colors
    margin = measure_x_axis_margin(spec, chart_area, theme, canvas.metrics)

    scale = make_scale(spec, chart_area.left, chart_area.right)
    band_width = scale.band_width if isinstance(scale, BandScale) else None

    ticks = axis_ticks(spec)
    positions = [scale(v) for v in ticks.values]
    selected = select_axis_labels(ticks.labels, positions, chart_area.width, HORIZONTAL,
                                  layout.tick_label_font, layout.x_axis_min_label_gap,
                                  layout.label_avg_char_width)

    # --- Grid (numeric only) ---
    if spec.kind == NUMERIC and spec.show_grid_lines:
        for x in positions:
            canvas.draw_line(x, chart_area.top, x, chart_area.bottom,
                             stroke=colors.grid_major, stroke_width=layout.grid_stroke_width)

    # --- Axis, ticks, labels ---
    axis_y = chart_area.bottom
    canvas.draw_line(chart_area.left, axis_y, chart_area.right, axis_y,
                     stroke=colors.axis, stroke_width=layout.axis_stroke_width)

    tick = margin.tick_length
    for i, x in enumerate(positions):
        if tick > 0:
            canvas.draw_line(x, axis_y, x, axis_y + tick, stroke=colors.axis, stroke_width=layout.axis_stroke_width)
        if spec.show_tick_labels and i in selected:
            canvas.draw_text(x, axis_y + tick + layout.tick_label_padding, ticks.labels[i], anchor="middle",
                             dominant_baseline="hanging", font_px=layout.tick_label_font, fill=colors.axis_label)

    # --- Title ---
    if spec.label:
        title_y = (axis_y + layout.tick_length + layout.tick_label_padding + layout.tick_label_font
                   + layout.x_axis_title_padding)
        canvas.draw_wrapped_text(chart_area.left + chart_area.width / 2.0, title_y, spec.label,
                                 max_width_px=chart_area.width, anchor="middle",
                                 font_px=layout.axis_title_font, fill=colors.axis_label)

    LOGGER.debug("x-axis: %d ticks, %d labels, margin %.1f", len(ticks), len(selected), margin.total)
    return AxisResult(scale, band_width, ticks, frozenset(selected), margin)
