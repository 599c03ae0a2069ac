import logging
import math
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Sequence, Tuple

from ..axes import NumericAxis
from ..canvas import Canvas
from ..errors import WidgetValidationError
from ..geometry import Point

LOGGER = logging.getLogger(__name__)

SOLID = "solid"
DASHED = "dashed"
LINE_STYLES = (SOLID, DASHED)


def invalid(widget: str, message: str):
    """Logs and raises a validation failure for ``widget``."""
    LOGGER.error("%s: %s", widget, message)
    raise WidgetValidationError(f"{widget}: {message}")


# ==========================================
# PROPS PARSING
# ==========================================
def require(data: Mapping[str, Any], key: str, widget: str) -> Any:
    if key not in data:
        invalid(widget, f"missing required field {key!r}")
    return data[key]


def as_number(value: Any, field: str, widget: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        invalid(widget, f"{field} must be a number, got {value!r}")
    value = float(value)
    if not math.isfinite(value):
        invalid(widget, f"{field} must be finite, got {value!r}")
    return value


def as_positive(value: Any, field: str, widget: str) -> float:
    value = as_number(value, field, widget)
    if value <= 0:
        invalid(widget, f"{field} must be positive, got {value!r}")
    return value


def optional_label(value: Optional[str]) -> Optional[str]:
    """Blank or literal 'null' labels mean no label."""
    if value is None:
        return None
    text = str(value).strip()
    if text == "" or text.lower() == "null":
        return None
    return text


def parse_point(data: Mapping[str, Any], field: str, widget: str) -> Point:
    return Point(as_number(require(data, "x", widget), f"{field}.x", widget),
                 as_number(require(data, "y", widget), f"{field}.y", widget))


def parse_numeric_axis(data: Mapping[str, Any], widget: str, grid_key: str = "showGridLines") -> NumericAxis:
    return NumericAxis(
        min=as_number(require(data, "min", widget), "axis min", widget),
        max=as_number(require(data, "max", widget), "axis max", widget),
        tick_interval=as_number(require(data, "tickInterval", widget), "axis tickInterval", widget),
        label=optional_label(data.get("label")),
        show_grid_lines=bool(data.get(grid_key, True)),
        show_tick_labels=bool(data.get("showTickLabels", True)),
    )


@dataclass(frozen=True)
class LineStyle:
    color: str = "#000000"
    stroke_width: float = 2.0
    dash: bool = False

    @property
    def dash_array(self) -> Optional[str]:
        return "5 5" if self.dash else None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], widget: str) -> "LineStyle":
        return cls(color=str(data.get("color", "#000000")),
                   stroke_width=as_positive(data.get("strokeWidth", 2.0), "style.strokeWidth", widget),
                   dash=bool(data.get("dash", False)))


# ==========================================
# VALIDATION
# ==========================================
def check_dimensions(width: float, height: float, widget: str):
    if not (math.isfinite(width) and width > 0 and math.isfinite(height) and height > 0):
        invalid(widget, f"width and height must be positive, got {width!r} x {height!r}")


def check_points_in_domain(points: Iterable[Point], x_axis: NumericAxis, y_axis: NumericAxis,
                           widget: str, what: str = "points"):
    outside = [p for p in points if not (x_axis.contains(p.x) and y_axis.contains(p.y))]
    if outside:
        sample = ", ".join(f"({p.x:g}, {p.y:g})" for p in outside[:5])
        invalid(widget, f"{len(outside)} {what} outside the axis domain "
                        f"x:[{x_axis.min:g}, {x_axis.max:g}] y:[{y_axis.min:g}, {y_axis.max:g}]: {sample}")


# ==========================================
# OUTPUT
# ==========================================
def render_document(canvas: Canvas, pad_px: Optional[float] = None) -> str:
    """Finalizes ``canvas`` and wraps its body in a root <svg> sized to the drawn extents."""
    pad_px = canvas.theme.layout.padding if pad_px is None else pad_px
    finalized = canvas.finalize(pad_px)
    return canvas.to_document(finalized)


def polyline_midpoint(points: Sequence[Tuple[float, float]]) -> Tuple[float, float, float, float]:
    """Point halfway along a pixel polyline, with the unit tangent there: (x, y, tx, ty)."""
    lengths = [math.hypot(b[0] - a[0], b[1] - a[1]) for a, b in zip(points, points[1:])]
    total = sum(lengths)
    if not lengths or total == 0:
        x, y = points[0]
        return x, y, 1.0, 0.0
    target = total / 2.0
    for (a, b), seg in zip(zip(points, points[1:]), lengths):
        if target <= seg and seg > 0:
            t = target / seg
            return (a[0] + (b[0] - a[0]) * t, a[1] + (b[1] - a[1]) * t,
                    (b[0] - a[0]) / seg, (b[1] - a[1]) / seg)
        target -= seg
    a, b = points[-2], points[-1]
    seg = lengths[-1] or 1.0
    return b[0], b[1], (b[0] - a[0]) / seg, (b[1] - a[1]) / seg
