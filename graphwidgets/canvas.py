import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple
from xml.etree import ElementTree

import svgwrite
from svgwrite.base import BaseElement

from .errors import CanvasError
from .geometry import ChartArea, Extents2D, Transform, rect_corners
from .path_builder import PathBuilder
from .text_metrics import DEFAULT_TEXT_METRICS, TextMetrics
from .theme import DEFAULT_THEME, Theme

LOGGER = logging.getLogger(__name__)

XHTML_NS = "http://www.w3.org/1999/xhtml"
ElementTree.register_namespace("xhtml", XHTML_NS)

# Share of the font size above the alphabetic baseline.
BASELINE_ASCENT = 0.8
LEGEND_LABEL_GAP = 8.0
LEGEND_MARKER_SIZE = 3.0


def _fail(message: str):
    LOGGER.error(message)
    raise CanvasError(message)


@dataclass(frozen=True)
class FinalizedMarkup:
    body: str
    vb_min_x: float
    vb_min_y: float
    width: float
    height: float

    @property
    def view_box(self) -> str:
        return f"{self.vb_min_x} {self.vb_min_y} {self.width} {self.height}"


@dataclass(frozen=True)
class LegendRow:
    label: str
    stroke: str
    stroke_width: float = 2.0
    dash: Optional[str] = None
    marker: Optional[str] = None  # 'circle', 'square' or None


class ForeignObject(BaseElement):
    """<foreignObject> holding a well-formed XHTML fragment."""
    elementname = "foreignObject"

    def __init__(self, insert, size, content: str, **extra):
        super().__init__(**extra)
        self["x"], self["y"] = insert
        self["width"], self["height"] = size
        try:
            self.content = ElementTree.fromstring(content)
        except ElementTree.ParseError as e:
            raise CanvasError(f"Foreign content is not well-formed XML: {e}") from e

    def get_xml(self):
        xml = super().get_xml()
        xml.append(self.content)
        return xml


# ==========================================
# CANVAS
# ==========================================
class Canvas:
    """
    Drawing surface that records the true footprint of every primitive.

    The extents start as the chart rectangle and grow with each draw call. ``finalize``
    sizes the output to those extents (plus padding), so content drawn outside the
    chart rectangle (titles, legends, rotated labels) is never cut off.
    """

    def __init__(self, chart_area: ChartArea, theme: Theme = DEFAULT_THEME,
                 metrics: Optional[TextMetrics] = None,
                 font_px_default: Optional[float] = None,
                 line_height_default: Optional[float] = None):
        self.theme = theme
        self.metrics = metrics if metrics is not None else DEFAULT_TEXT_METRICS
        self.font_px_default = theme.font_sizes.base if font_px_default is None else font_px_default
        self.line_height_default = self.metrics.line_height if line_height_default is None else line_height_default
        if not (math.isfinite(self.font_px_default) and self.font_px_default > 0):
            _fail(f"font_px_default must be finite and > 0, got {self.font_px_default!r}")
        if not (math.isfinite(self.line_height_default) and self.line_height_default > 0):
            _fail(f"line_height_default must be finite and > 0, got {self.line_height_default!r}")

        self.chart_area = chart_area
        self.dwg = svgwrite.Drawing(debug=False)
        self.clip_id = "clip-0"

        self._extents = Extents2D.seeded(chart_area)
        self._target = self.dwg
        self._transform = Transform.identity()
        self._clip_registered = False
        self._in_clip = False
        self._finalized: Optional[FinalizedMarkup] = None
        self._marker_sizes: Dict[str, float] = {}

    # --- STATE ---
    @property
    def extents(self) -> Tuple[float, float, float, float]:
        """(min_x, max_x, min_y, max_y) snapshot; the accumulator itself stays private."""
        return self._extents.as_tuple()

    @property
    def in_clipped_region(self) -> bool:
        return self._in_clip

    def _check_open(self):
        if self._finalized is not None:
            _fail("canvas has already been finalized")

    def _check_main(self, action: str):
        self._check_open()
        if self._in_clip:
            _fail(f"{action} must be done on the main canvas, not inside a clipped region")

    def _add(self, element):
        self._check_open()
        self._target.add(element)
        return element

    def _include_corners(self, corners: Sequence[Tuple[float, float]]):
        self._extents.include_points(self._transform.apply(corners))

    def _include_box(self, min_x: float, min_y: float, max_x: float, max_y: float, pad: float = 0.0):
        self._include_corners(rect_corners(min_x - pad, min_y - pad, max_x + pad, max_y + pad))

    # --- VALIDATION ---
    @staticmethod
    def _check_stroke_width(stroke_width: Optional[float]):
        if stroke_width is not None and not (math.isfinite(stroke_width) and stroke_width >= 0):
            _fail(f"stroke_width must be finite and >= 0, got {stroke_width!r}")

    @staticmethod
    def _check_opacity(name: str, value: Optional[float]):
        if value is not None and not (0.0 <= value <= 1.0):
            _fail(f"{name} must be within [0, 1], got {value!r}")

    @staticmethod
    def _check_font(font_px: Optional[float]):
        if font_px is not None and not (math.isfinite(font_px) and font_px > 0):
            _fail(f"font_px must be finite and > 0, got {font_px!r}")

    def _style(self, fill=None, stroke=None, stroke_width=None, dash=None, opacity=None,
               fill_opacity=None, stroke_opacity=None, linecap=None, linejoin=None, **extra) -> dict:
        self._check_stroke_width(stroke_width)
        self._check_opacity("opacity", opacity)
        self._check_opacity("fill_opacity", fill_opacity)
        self._check_opacity("stroke_opacity", stroke_opacity)
        attrs = {
            "fill": fill,
            "stroke": stroke,
            "stroke_width": stroke_width,
            "stroke_dasharray": dash,
            "opacity": opacity,
            "fill_opacity": fill_opacity,
            "stroke_opacity": stroke_opacity,
            "stroke_linecap": linecap,
            "stroke_linejoin": linejoin,
        }
        attrs.update(extra)
        return {k: v for k, v in attrs.items() if v is not None}

    def _stroke_pad(self, stroke, stroke_width) -> float:
        if stroke is None or stroke == "none":
            return 0.0
        return (1.0 if stroke_width is None else stroke_width) / 2.0

    # ==========================================
    # SHAPES
    # ==========================================
    def draw_line(self, x1: float, y1: float, x2: float, y2: float, stroke: str = "#000000",
                  stroke_width: float = 1.0, dash: Optional[str] = None, opacity: Optional[float] = None,
                  linecap: Optional[str] = None, marker_start: Optional[str] = None,
                  marker_end: Optional[str] = None):
        attrs = self._style(stroke=stroke, stroke_width=stroke_width, dash=dash, opacity=opacity,
                            linecap=linecap, marker_start=marker_start, marker_end=marker_end)
        self._add(self.dwg.line(start=(x1, y1), end=(x2, y2), **attrs))

        pad = stroke_width / 2.0
        if linecap == "square":
            pad *= math.sqrt(2)
        for marker in (marker_start, marker_end):
            pad = max(pad, self._marker_pad(marker, stroke_width))
        self._include_box(min(x1, x2), min(y1, y2), max(x1, x2), max(y1, y2), pad)

    def draw_circle(self, cx: float, cy: float, r: float, fill: Optional[str] = None,
                    stroke: Optional[str] = None, stroke_width: Optional[float] = None,
                    fill_opacity: Optional[float] = None, opacity: Optional[float] = None,
                    dash: Optional[str] = None):
        if not (math.isfinite(r) and r >= 0):
            _fail(f"circle radius must be finite and >= 0, got {r!r}")
        attrs = self._style(fill=fill, stroke=stroke, stroke_width=stroke_width, dash=dash,
                            fill_opacity=fill_opacity, opacity=opacity)
        self._add(self.dwg.circle(center=(cx, cy), r=r, **attrs))
        self._include_box(cx - r, cy - r, cx + r, cy + r, self._stroke_pad(stroke, stroke_width))

    def draw_rect(self, x: float, y: float, width: float, height: float, fill: Optional[str] = None,
                  stroke: Optional[str] = None, stroke_width: Optional[float] = None,
                  rx: Optional[float] = None, fill_opacity: Optional[float] = None,
                  opacity: Optional[float] = None, dash: Optional[str] = None):
        if width < 0 or height < 0:
            _fail(f"rect size must be non-negative, got {width!r} x {height!r}")
        attrs = self._style(fill=fill, stroke=stroke, stroke_width=stroke_width, dash=dash,
                            fill_opacity=fill_opacity, opacity=opacity)
        self._add(self.dwg.rect(insert=(x, y), size=(width, height), rx=rx, **attrs))
        self._include_box(x, y, x + width, y + height, self._stroke_pad(stroke, stroke_width))

    def draw_ellipse(self, cx: float, cy: float, rx: float, ry: float, fill: Optional[str] = None,
                     stroke: Optional[str] = None, stroke_width: Optional[float] = None,
                     fill_opacity: Optional[float] = None, opacity: Optional[float] = None):
        if rx < 0 or ry < 0:
            _fail(f"ellipse radii must be non-negative, got {rx!r}, {ry!r}")
        attrs = self._style(fill=fill, stroke=stroke, stroke_width=stroke_width,
                            fill_opacity=fill_opacity, opacity=opacity)
        self._add(self.dwg.ellipse(center=(cx, cy), r=(rx, ry), **attrs))
        self._include_box(cx - rx, cy - ry, cx + rx, cy + ry, self._stroke_pad(stroke, stroke_width))

    def draw_path(self, path: PathBuilder, fill: str = "none", stroke: Optional[str] = None,
                  stroke_width: Optional[float] = None, dash: Optional[str] = None,
                  opacity: Optional[float] = None, fill_opacity: Optional[float] = None,
                  linecap: Optional[str] = None, linejoin: Optional[str] = None,
                  marker_end: Optional[str] = None):
        if path.is_empty:
            return
        attrs = self._style(fill=fill, stroke=stroke, stroke_width=stroke_width, dash=dash, opacity=opacity,
                            fill_opacity=fill_opacity, linecap=linecap, linejoin=linejoin,
                            marker_end=marker_end)
        self._add(self.dwg.path(d=path.d, **attrs))
        ext = path.extents
        if ext is not None:
            pad = max(self._stroke_pad(stroke, stroke_width), self._marker_pad(marker_end, stroke_width))
            self._include_box(ext.min_x, ext.min_y, ext.max_x, ext.max_y, pad)

    def draw_polygon(self, points: Sequence[Tuple[float, float]], fill: Optional[str] = None,
                     stroke: Optional[str] = None, stroke_width: Optional[float] = None,
                     fill_opacity: Optional[float] = None, opacity: Optional[float] = None):
        if not points:
            return
        attrs = self._style(fill=fill, stroke=stroke, stroke_width=stroke_width,
                            fill_opacity=fill_opacity, opacity=opacity)
        self._add(self.dwg.polygon(points=[(float(x), float(y)) for x, y in points], **attrs))
        self._include_points_box(points, self._stroke_pad(stroke, stroke_width))

    def draw_polyline(self, points: Sequence[Tuple[float, float]], stroke: str = "#000000",
                      stroke_width: float = 1.0, fill: str = "none", dash: Optional[str] = None,
                      opacity: Optional[float] = None, linecap: Optional[str] = None,
                      linejoin: Optional[str] = None, marker_end: Optional[str] = None):
        if not points:
            return
        attrs = self._style(fill=fill, stroke=stroke, stroke_width=stroke_width, dash=dash, opacity=opacity,
                            linecap=linecap, linejoin=linejoin, marker_end=marker_end)
        self._add(self.dwg.polyline(points=[(float(x), float(y)) for x, y in points], **attrs))
        pad = max(self._stroke_pad(stroke, stroke_width), self._marker_pad(marker_end, stroke_width))
        self._include_points_box(points, pad)

    def _include_points_box(self, points: Sequence[Tuple[float, float]], pad: float):
        xs = [float(p[0]) for p in points]
        ys = [float(p[1]) for p in points]
        self._include_box(min(xs), min(ys), max(xs), max(ys), pad)

    def draw_image(self, x: float, y: float, width: float, height: float, href: str,
                   preserve_aspect_ratio: Optional[str] = None, opacity: Optional[float] = None):
        if width < 0 or height < 0:
            _fail(f"image size must be non-negative, got {width!r} x {height!r}")
        self._check_opacity("opacity", opacity)
        image = self.dwg.image(href, insert=(x, y), size=(width, height))
        if preserve_aspect_ratio is not None:
            image["preserveAspectRatio"] = preserve_aspect_ratio
        if opacity is not None:
            image["opacity"] = opacity
        self._add(image)
        self._include_box(x, y, x + width, y + height)

    def draw_foreign_object(self, x: float, y: float, width: float, height: float, content: str):
        if f'xmlns="{XHTML_NS}"' not in content:
            _fail("foreign content must declare the XHTML namespace on its root element")
        self._add(ForeignObject((x, y), (width, height), content, factory=self.dwg))
        self._include_box(x, y, x + width, y + height)

    # ==========================================
    # TEXT
    # ==========================================
    def _text_transform(self, rotate: Optional[Tuple[float, float, float]],
                        transform: Optional[str]) -> Tuple[Optional[str], Transform]:
        parts: List[str] = []
        local = Transform.identity()
        if rotate is not None:
            angle, cx, cy = rotate
            if not all(math.isfinite(v) for v in (angle, cx, cy)):
                _fail(f"rotate angle and centre must be finite, got {rotate!r}")
            parts.append(f"rotate({angle}, {cx}, {cy})")
            local = local.compose(Transform.rotate(angle, cx, cy))
        if transform:
            parts.append(transform)
            local = local.compose(Transform.parse(transform))
        return (" ".join(parts) if parts else None), local

    def _block_top(self, y: float, dominant_baseline: Optional[str], block_height: float, font_px: float) -> float:
        if dominant_baseline == "hanging":
            return y
        if dominant_baseline in ("middle", "central"):
            return y - block_height / 2.0
        return y - BASELINE_ASCENT * font_px

    def _include_text_block(self, x: float, top: float, width: float, height: float, anchor: str,
                            stroke_width: Optional[float], local: Transform):
        left = x
        if anchor == "middle":
            left -= width / 2.0
        elif anchor == "end":
            left -= width
        pad = (stroke_width or 0.0) / 2.0
        corners = rect_corners(left - pad, top - pad, left + width + pad, top + height + pad)
        self._include_corners(local.apply(corners))

    def draw_text(self, x: float, y: float, text: str, anchor: str = "start",
                  dominant_baseline: Optional[str] = None, font_px: Optional[float] = None,
                  font_weight: Optional[str] = None, fill: Optional[str] = None,
                  stroke: Optional[str] = None, stroke_width: Optional[float] = None,
                  paint_order: Optional[str] = None, opacity: Optional[float] = None,
                  rotate: Optional[Tuple[float, float, float]] = None, transform: Optional[str] = None):
        self._check_font(font_px)
        if paint_order is not None and paint_order != "stroke fill":
            _fail(f"paint_order must be 'stroke fill', got {paint_order!r}")
        font_px = self.font_px_default if font_px is None else font_px
        transform_attr, local = self._text_transform(rotate, transform)

        attrs = self._style(fill=fill, stroke=stroke, stroke_width=stroke_width, opacity=opacity,
                            font_size=font_px, font_weight=font_weight, paint_order=paint_order,
                            transform=transform_attr)
        if anchor != "start":
            attrs["text_anchor"] = anchor
        if dominant_baseline and dominant_baseline not in ("auto", "baseline", "alphabetic"):
            attrs["dominant_baseline"] = dominant_baseline
        self._add(self.dwg.text(text, insert=(x, y), **attrs))

        width = self.metrics.text_width(text, font_px)
        top = self._block_top(y, dominant_baseline, font_px, font_px)
        self._include_text_block(x, top, width, font_px, anchor, stroke_width, local)

    def draw_wrapped_text(self, x: float, y: float, text: str, max_width_px: float, anchor: str = "start",
                          dominant_baseline: Optional[str] = None, font_px: Optional[float] = None,
                          line_height: Optional[float] = None, font_weight: Optional[str] = None,
                          fill: Optional[str] = None, stroke: Optional[str] = None,
                          stroke_width: Optional[float] = None, paint_order: Optional[str] = None,
                          opacity: Optional[float] = None,
                          rotate: Optional[Tuple[float, float, float]] = None,
                          transform: Optional[str] = None) -> int:
        """Draws text wrapped with the metrics' wrapping rules. Returns the number of lines drawn."""
        self._check_font(font_px)
        if line_height is not None and not (math.isfinite(line_height) and line_height > 0):
            _fail(f"line_height must be finite and > 0, got {line_height!r}")
        font_px = self.font_px_default if font_px is None else font_px
        line_height = self.line_height_default if line_height is None else line_height

        lines = self.metrics.wrap_lines(text, max_width_px, font_px)
        if not lines:
            return 0
        transform_attr, local = self._text_transform(rotate, transform)

        attrs = self._style(fill=fill, stroke=stroke, stroke_width=stroke_width, opacity=opacity,
                            font_size=font_px, font_weight=font_weight, paint_order=paint_order,
                            transform=transform_attr)
        if anchor != "start":
            attrs["text_anchor"] = anchor
        if dominant_baseline and dominant_baseline not in ("auto", "baseline", "alphabetic"):
            attrs["dominant_baseline"] = dominant_baseline

        # Centre the whole block on y when the baseline is 'middle'.
        first_dy = 0.0
        if dominant_baseline == "middle" and len(lines) > 1:
            first_dy = -((len(lines) - 1) * line_height) / 2.0

        element = self.dwg.text("", insert=(x, y), **attrs)
        for i, line in enumerate(lines):
            dy = first_dy if i == 0 else line_height
            element.add(self.dwg.tspan(line, x=[x], dy=[f"{dy:g}em"]))
        self._add(element)

        block_height = len(lines) * font_px * line_height
        width = max(self.metrics.text_width(line, font_px) for line in lines)
        top = self._block_top(y, dominant_baseline, block_height, font_px)
        self._include_text_block(x, top, width, block_height, anchor, stroke_width, local)
        return len(lines)

    def draw_legend_block(self, start_x: float, start_y: float, rows: Sequence[LegendRow],
                          row_gap_px: float = 6.0, label_font_px: Optional[float] = None,
                          sample_length_px: float = 20.0):
        label_font_px = self.font_px_default if label_font_px is None else label_font_px
        self._check_font(label_font_px)

        current_y = start_y
        for row in rows:
            sample_end = start_x + sample_length_px
            sample_y = current_y + label_font_px / 2.0
            self.draw_line(start_x, sample_y, sample_end, sample_y, stroke=row.stroke,
                           stroke_width=row.stroke_width, dash=row.dash)
            if row.marker == "circle":
                self.draw_circle(sample_end, sample_y, LEGEND_MARKER_SIZE, fill=row.stroke,
                                 stroke=row.stroke, stroke_width=1.0)
            elif row.marker == "square":
                self.draw_rect(sample_end - LEGEND_MARKER_SIZE, sample_y - LEGEND_MARKER_SIZE,
                               2 * LEGEND_MARKER_SIZE, 2 * LEGEND_MARKER_SIZE,
                               fill=row.stroke, stroke=row.stroke, stroke_width=1.0)
            self.draw_text(sample_end + LEGEND_LABEL_GAP, sample_y, row.label, font_px=label_font_px,
                           dominant_baseline="middle", fill=self.theme.colors.text)
            current_y += label_font_px + row_gap_px

    # ==========================================
    # DEFS AND GROUPS
    # ==========================================
    def add_def(self, element):
        """Adds a raw svgwrite element (marker, gradient, pattern, filter...) to <defs>."""
        self._check_main("add_def")
        self.dwg.defs.add(element)
        return element

    def add_style(self, css: str):
        self._check_main("add_style")
        self.dwg.defs.add(self.dwg.style(css))

    def register_clip_rect(self, area: Optional[ChartArea] = None) -> str:
        """Registers the clip path used by ``draw_in_clipped_region``. Defaults to the chart rectangle."""
        self._check_main("register_clip_rect")
        if self._clip_registered:
            _fail(f"clip path {self.clip_id!r} is already registered")
        area = area or self.chart_area
        clip = self.dwg.clipPath(id=self.clip_id)
        clip.add(self.dwg.rect(insert=(area.left, area.top), size=(area.width, area.height)))
        self.dwg.defs.add(clip)
        self._clip_registered = True
        return self.clip_id

    def add_arrow_marker(self, marker_id: str, color: str, size: float = 8.0) -> str:
        marker = self.dwg.marker(id=marker_id, insert=(10, 5), size=(size, size), orient="auto-start-reverse")
        marker.viewbox(0, 0, 10, 10)
        marker.add(self.dwg.path(d="M 0 0 L 10 5 L 0 10 z", fill=color))
        self.add_def(marker)
        self._marker_sizes[marker_id] = size
        return f"url(#{marker_id})"

    def _marker_pad(self, marker: Optional[str], stroke_width: Optional[float]) -> float:
        if not marker:
            return 0.0
        marker_id = marker[len("url(#"):-1] if marker.startswith("url(#") else marker
        size = self._marker_sizes.get(marker_id, 0.0)
        # markerUnits default to strokeWidth
        return size * (1.0 if stroke_width is None else stroke_width)

    def add_hatch_pattern(self, pattern_id: str, color: str, spacing: float = 6.0, stroke_width: float = 1.0,
                          angle: float = 45.0, background: Optional[str] = None) -> str:
        self._check_stroke_width(stroke_width)
        pattern = self.dwg.pattern(id=pattern_id, size=(spacing, spacing), patternUnits="userSpaceOnUse",
                                   patternTransform=f"rotate({angle})")
        if background:
            pattern.add(self.dwg.rect(insert=(0, 0), size=(spacing, spacing), fill=background))
        pattern.add(self.dwg.line(start=(0, 0), end=(0, spacing), stroke=color, stroke_width=stroke_width))
        self.add_def(pattern)
        return f"url(#{pattern_id})"

    def add_linear_gradient(self, gradient_id: str, stops: Sequence[Tuple[float, str, float]],
                            start: Tuple[float, float] = (0.0, 0.0), end: Tuple[float, float] = (1.0, 0.0)) -> str:
        gradient = self.dwg.linearGradient(start=start, end=end, id=gradient_id)
        for offset, color, opacity in stops:
            self._check_opacity("stop opacity", opacity)
            gradient.add_stop_color(offset=offset, color=color, opacity=opacity)
        self.add_def(gradient)
        return f"url(#{gradient_id})"

    def add_radial_gradient(self, gradient_id: str, stops: Sequence[Tuple[float, str, float]],
                            center: Tuple[float, float] = (0.5, 0.5), r: float = 0.5) -> str:
        gradient = self.dwg.radialGradient(center=center, r=r, id=gradient_id)
        for offset, color, opacity in stops:
            self._check_opacity("stop opacity", opacity)
            gradient.add_stop_color(offset=offset, color=color, opacity=opacity)
        self.add_def(gradient)
        return f"url(#{gradient_id})"

    def with_transform(self, transform: str, render_fn: Callable[["Canvas"], None]):
        """Draws ``render_fn`` inside <g transform=...>; footprints are mapped through the transform."""
        self._check_main("with_transform")
        local = Transform.parse(transform)
        group = self.dwg.g(transform=transform)

        prev_target, prev_transform = self._target, self._transform
        self._target, self._transform = group, prev_transform.compose(local)
        try:
            render_fn(self)
        finally:
            self._target, self._transform = prev_target, prev_transform
        if group.elements:
            self._add(group)

    def draw_in_clipped_region(self, render_fn: Callable[["Canvas"], None]):
        """
        Draws ``render_fn`` inside <g clip-path="url(#clip-0)">.

        Clipped content never widens the extents: it is cropped to the chart rectangle,
        which the extents already cover.
        """
        self._check_main("draw_in_clipped_region")
        if not self._clip_registered:
            _fail("draw_in_clipped_region requires a registered clip path")

        group = self.dwg.g(clip_path=f"url(#{self.clip_id})")
        saved_extents = self._extents.copy()
        prev_target = self._target
        self._target, self._in_clip = group, True
        try:
            render_fn(self)
        finally:
            self._target, self._in_clip = prev_target, False
            self._extents = saved_extents
        if group.elements:
            self._add(group)

    # ==========================================
    # OUTPUT
    # ==========================================
    def finalize(self, pad_px: float) -> FinalizedMarkup:
        self._check_main("finalize")
        if not (math.isfinite(pad_px) and pad_px >= 0):
            _fail(f"pad_px must be finite and >= 0, got {pad_px!r}")

        ext = self._extents
        vb_min_x = math.floor(ext.min_x - pad_px)
        vb_min_y = math.floor(ext.min_y - pad_px)
        width = math.ceil(ext.max_x + pad_px) - vb_min_x
        height = math.ceil(ext.max_y + pad_px) - vb_min_y

        body = "".join(element.tostring() for element in self.dwg.elements)
        self._finalized = FinalizedMarkup(body, vb_min_x, vb_min_y, width, height)
        LOGGER.debug("Finalized canvas: viewBox=%s", self._finalized.view_box)
        return self._finalized

    def to_document(self, finalized: FinalizedMarkup) -> str:
        """Wraps finalized markup in the root <svg> element sized to the finalized extents."""
        if finalized is not self._finalized:
            _fail("to_document expects the markup returned by this canvas' finalize()")
        self.dwg["width"] = finalized.width
        self.dwg["height"] = finalized.height
        self.dwg["viewBox"] = finalized.view_box
        self.dwg["font-family"] = self.theme.font_family
        self.dwg["font-size"] = self.font_px_default
        return self.dwg.tostring()
