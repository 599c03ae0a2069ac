from dataclasses import dataclass, field


@dataclass(frozen=True)
class FontSizes:
    small: int = 11
    base: int = 12
    medium: int = 14
    large: int = 16
    xlarge: int = 18


@dataclass(frozen=True)
class Colors:
    text: str = "#333333"
    axis: str = "#333333"
    axis_label: str = "#333333"
    title: str = "#333333"
    grid_major: str = "#e0e0e0"
    quadrant_label: str = "#cccccc"
    black: str = "#000000"
    white: str = "#ffffff"


@dataclass(frozen=True)
class StrokeWidths:
    thin: float = 1.0
    base: float = 1.5
    thick: float = 2.0
    xxthick: float = 3.0


@dataclass(frozen=True)
class PointRadii:
    small: float = 3.0
    base: float = 4.0
    large: float = 5.0


@dataclass(frozen=True)
class LayoutConstants:
    # --- Outer padding ---
    padding: float = 20.0
    axis_viewbox_padding: float = 8.0

    # --- Axes ---
    tick_length: float = 5.0
    axis_stroke_width: float = 1.5
    grid_stroke_width: float = 1.0
    tick_label_padding: float = 8.0
    axis_title_padding: float = 25.0
    x_axis_title_padding: float = 22.0

    # --- Titles ---
    chart_title_top_padding: float = 20.0
    chart_title_bottom_padding: float = 15.0

    # --- Fonts ---
    chart_title_font: float = 18.0
    axis_title_font: float = 16.0
    tick_label_font: float = 12.0
    label_avg_char_width: float = 7.0

    # --- Label spacing ---
    x_axis_min_label_gap: float = 10.0
    y_axis_min_label_gap: float = 4.0


@dataclass(frozen=True)
class Theme:
    font_family: str = "sans-serif"
    font_sizes: FontSizes = field(default_factory=FontSizes)
    colors: Colors = field(default_factory=Colors)
    stroke_widths: StrokeWidths = field(default_factory=StrokeWidths)
    point_radius: PointRadii = field(default_factory=PointRadii)
    overlay_high_opacity: float = 0.9
    layout: LayoutConstants = field(default_factory=LayoutConstants)


DEFAULT_LAYOUT = LayoutConstants()
DEFAULT_THEME = Theme()
