import math
from typing import List, Optional

import numpy as np

from .geometry import Extents2D

ARC_SAMPLES = 32


def _fmt(value: float) -> str:
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


class PathBuilder:
    """Chainable builder for SVG path data that tracks the bounding box of what it draws."""

    def __init__(self):
        self._commands: List[str] = []
        self._extents = Extents2D()
        self._x = 0.0
        self._y = 0.0
        self._start_x = 0.0
        self._start_y = 0.0

    def _visit(self, x: float, y: float):
        self._extents.include_point(x, y)
        self._x, self._y = x, y

    def move_to(self, x: float, y: float) -> "PathBuilder":
        self._commands.append(f"M {_fmt(x)} {_fmt(y)}")
        self._visit(x, y)
        self._start_x, self._start_y = x, y
        return self

    def line_to(self, x: float, y: float) -> "PathBuilder":
        self._commands.append(f"L {_fmt(x)} {_fmt(y)}")
        self._visit(x, y)
        return self

    def quad_to(self, cpx: float, cpy: float, x: float, y: float) -> "PathBuilder":
        # Control points bound the curve, so including them is conservative.
        self._commands.append(f"Q {_fmt(cpx)} {_fmt(cpy)} {_fmt(x)} {_fmt(y)}")
        self._extents.include_point(cpx, cpy)
        self._visit(x, y)
        return self

    def cubic_to(self, cp1x: float, cp1y: float, cp2x: float, cp2y: float, x: float, y: float) -> "PathBuilder":
        self._commands.append(
            f"C {_fmt(cp1x)} {_fmt(cp1y)} {_fmt(cp2x)} {_fmt(cp2y)} {_fmt(x)} {_fmt(y)}"
        )
        self._extents.include_point(cp1x, cp1y)
        self._extents.include_point(cp2x, cp2y)
        self._visit(x, y)
        return self

    def arc_to(self, rx: float, ry: float, rotation: float, large_arc: bool, sweep: bool,
               x: float, y: float) -> "PathBuilder":
        self._commands.append(
            f"A {_fmt(rx)} {_fmt(ry)} {_fmt(rotation)} {int(bool(large_arc))} {int(bool(sweep))} {_fmt(x)} {_fmt(y)}"
        )
        for px, py in _sample_arc(self._x, self._y, rx, ry, rotation, large_arc, sweep, x, y):
            self._extents.include_point(px, py)
        self._visit(x, y)
        return self

    def close(self) -> "PathBuilder":
        self._commands.append("Z")
        self._x, self._y = self._start_x, self._start_y
        return self

    @property
    def d(self) -> str:
        return " ".join(self._commands)

    @property
    def is_empty(self) -> bool:
        return not self._commands

    @property
    def extents(self) -> Optional[Extents2D]:
        return None if self._extents.is_empty else self._extents.copy()


def _sample_arc(x1: float, y1: float, rx: float, ry: float, rotation: float, large_arc: bool, sweep: bool,
                x2: float, y2: float) -> np.ndarray:
    """Points along an SVG elliptical arc, using the SVG 1.1 implementation notes endpoint-to-center conversion."""
    if (x1 == x2 and y1 == y2) or rx == 0 or ry == 0:
        return np.array([[x1, y1], [x2, y2]])

    rx, ry = abs(rx), abs(ry)
    phi = math.radians(rotation)
    cos_p, sin_p = math.cos(phi), math.sin(phi)

    dx2, dy2 = (x1 - x2) / 2.0, (y1 - y2) / 2.0
    x1p = cos_p * dx2 + sin_p * dy2
    y1p = -sin_p * dx2 + cos_p * dy2

    # Scale radii up when they are too small to reach the end point.
    lam = (x1p ** 2) / (rx ** 2) + (y1p ** 2) / (ry ** 2)
    if lam > 1:
        rx *= math.sqrt(lam)
        ry *= math.sqrt(lam)

    num = rx ** 2 * ry ** 2 - rx ** 2 * y1p ** 2 - ry ** 2 * x1p ** 2
    den = rx ** 2 * y1p ** 2 + ry ** 2 * x1p ** 2
    coef = math.sqrt(max(0.0, num / den)) if den else 0.0
    if bool(large_arc) == bool(sweep):
        coef = -coef
    cxp = coef * rx * y1p / ry
    cyp = -coef * ry * x1p / rx

    cx = cos_p * cxp - sin_p * cyp + (x1 + x2) / 2.0
    cy = sin_p * cxp + cos_p * cyp + (y1 + y2) / 2.0

    theta1 = math.atan2((y1p - cyp) / ry, (x1p - cxp) / rx)
    theta2 = math.atan2((-y1p - cyp) / ry, (-x1p - cxp) / rx)
    delta = theta2 - theta1
    if sweep and delta < 0:
        delta += 2 * math.pi
    elif not sweep and delta > 0:
        delta -= 2 * math.pi

    t = np.linspace(theta1, theta1 + delta, ARC_SAMPLES + 1)
    xs = cx + rx * np.cos(t) * cos_p - ry * np.sin(t) * sin_p
    ys = cy + rx * np.cos(t) * sin_p + ry * np.sin(t) * cos_p
    return np.column_stack([xs, ys])
