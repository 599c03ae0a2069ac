import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from ..axes import BAND, CategoryAxis, NumericAxis
from ..canvas import Canvas
from ..coordinate_plane import new_plane_canvas, setup_coordinate_plane_base
from ..labels import abbreviate_month
from ..theme import DEFAULT_THEME, Theme
from .common import (as_number, as_positive, check_dimensions, invalid, optional_label, parse_numeric_axis,
                     render_document, require)

LOGGER = logging.getLogger(__name__)

WIDGET_TYPE = "stickPlot"

# Caps are at most this share of the band so neighbouring sticks never touch.
CAP_BAND_SHARE = 0.9
REFERENCE_LABEL_OFFSET_X = 4.0
REFERENCE_LABEL_OFFSET_Y = 12.0


@dataclass(frozen=True)
class Stick:
    x_label: str
    y_value: float
    color: str = "#000000"


@dataclass(frozen=True)
class ReferenceLine:
    x_label: str
    label: Optional[str] = None
    color: str = "#000000"


@dataclass(frozen=True)
class StickPlotProps:
    width: float
    height: float
    x_axis: CategoryAxis
    y_axis: NumericAxis
    title: Optional[str] = None
    sticks: Tuple[Stick, ...] = ()
    stick_width_px: float = 3.0
    references: Tuple[ReferenceLine, ...] = ()
    type: str = WIDGET_TYPE

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StickPlotProps":
        x_raw = require(data, "xAxis", WIDGET_TYPE)
        x_axis = CategoryAxis(
            categories=tuple(str(c) for c in require(x_raw, "categories", WIDGET_TYPE)),
            label=optional_label(x_raw.get("label")),
            show_grid_lines=bool(x_raw.get("showGridLines", False)),
            scale=BAND,
        )
        sticks = tuple(
            Stick(str(require(s, "xLabel", WIDGET_TYPE)),
                  as_number(require(s, "yValue", WIDGET_TYPE), "stick yValue", WIDGET_TYPE),
                  str(s.get("color", "#000000")))
            for s in data.get("sticks", [])
        )
        references = tuple(
            ReferenceLine(str(require(r, "xLabel", WIDGET_TYPE)), optional_label(r.get("label")),
                          str(r.get("color", "#000000")))
            for r in data.get("references", [])
        )
        return cls(
            width=as_positive(require(data, "width", WIDGET_TYPE), "width", WIDGET_TYPE),
            height=as_positive(require(data, "height", WIDGET_TYPE), "height", WIDGET_TYPE),
            title=optional_label(data.get("title")),
            x_axis=x_axis,
            y_axis=parse_numeric_axis(require(data, "yAxis", WIDGET_TYPE), WIDGET_TYPE),
            sticks=sticks,
            stick_width_px=as_positive(data.get("stickWidthPx", 3.0), "stickWidthPx", WIDGET_TYPE),
            references=references,
        )


def validate_stick_plot(props: StickPlotProps):
    check_dimensions(props.width, props.height, WIDGET_TYPE)
    props.x_axis.validate("x")
    props.y_axis.validate("y")
    if not props.stick_width_px > 0:
        invalid(WIDGET_TYPE, f"stick width must be positive, got {props.stick_width_px!r}")

    categories = set(props.x_axis.categories)
    y_axis = props.y_axis
    for stick in props.sticks:
        if stick.x_label not in categories:
            invalid(WIDGET_TYPE, f"stick xLabel {stick.x_label!r} must exist in xAxis.categories")
        if not y_axis.contains(stick.y_value):
            invalid(WIDGET_TYPE, f"stick yValue {stick.y_value:g} is outside the y-axis bounds "
                                 f"[{y_axis.min:g}, {y_axis.max:g}]")
    for ref in props.references:
        if ref.x_label not in categories:
            invalid(WIDGET_TYPE, f"reference xLabel {ref.x_label!r} must exist in xAxis.categories")


def generate_stick_plot(props: StickPlotProps, theme: Theme = DEFAULT_THEME) -> str:
    """Vertical sticks centred in categorical bands, with optional reference lines."""
    validate_stick_plot(props)
    x_axis, y_axis = props.x_axis, props.y_axis

    canvas = new_plane_canvas(props.width, props.height, theme)
    plane = setup_coordinate_plane_base(canvas, x_axis, y_axis, title=props.title)
    chart = plane.chart_area

    stick_width = props.stick_width_px
    half_cap = min(stick_width, max(1.0, plane.band_width * CAP_BAND_SHARE)) / 2.0
    baseline_y = plane.to_svg_y(max(y_axis.min, 0.0))

    def draw_sticks(c: Canvas):
        for stick in props.sticks:
            cx = plane.to_svg_x(x_axis.index_of(stick.x_label))
            top_y = plane.to_svg_y(stick.y_value)
            c.draw_line(cx, baseline_y, cx, top_y, stroke=stick.color, stroke_width=stick_width)
            c.draw_line(cx - half_cap, top_y, cx + half_cap, top_y, stroke=stick.color,
                        stroke_width=max(1.0, stick_width - 1.0))

    canvas.draw_in_clipped_region(draw_sticks)

    # --- References ---
    for ref in props.references:
        x = plane.to_svg_x(x_axis.index_of(ref.x_label))
        canvas.draw_line(x, chart.top, x, chart.bottom, stroke=ref.color, stroke_width=theme.stroke_widths.thin)
        if ref.label:
            canvas.draw_text(x + REFERENCE_LABEL_OFFSET_X, chart.top + REFERENCE_LABEL_OFFSET_Y,
                             abbreviate_month(ref.label), fill=ref.color)

    LOGGER.debug("Stick plot: %d categories, %d sticks, %d references",
                 len(x_axis.categories), len(props.sticks), len(props.references))
    return render_document(canvas, theme.layout.axis_viewbox_padding)
