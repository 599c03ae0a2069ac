import math
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .errors import CanvasError


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    @classmethod
    def from_dict(cls, data) -> "Point":
        return cls(float(data["x"]), float(data["y"]))


@dataclass(frozen=True)
class ChartArea:
    """Logical rectangle reserved for plotted content. Margins are laid out around it."""
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x <= self.right and self.top <= y <= self.bottom


class Extents2D:
    """Running bounding box of everything drawn on a canvas. It only ever grows."""

    def __init__(self):
        self.min_x = math.inf
        self.max_x = -math.inf
        self.min_y = math.inf
        self.max_y = -math.inf

    @classmethod
    def seeded(cls, area: ChartArea) -> "Extents2D":
        ext = cls()
        ext.include_rect(area.left, area.top, area.right, area.bottom)
        return ext

    @property
    def is_empty(self) -> bool:
        return self.min_x > self.max_x or self.min_y > self.max_y

    @property
    def width(self) -> float:
        return 0.0 if self.is_empty else self.max_x - self.min_x

    @property
    def height(self) -> float:
        return 0.0 if self.is_empty else self.max_y - self.min_y

    def include_point(self, x: float, y: float):
        if not (math.isfinite(x) and math.isfinite(y)):
            return
        self.min_x = min(self.min_x, x)
        self.max_x = max(self.max_x, x)
        self.min_y = min(self.min_y, y)
        self.max_y = max(self.max_y, y)

    def include_rect(self, min_x: float, min_y: float, max_x: float, max_y: float):
        self.include_point(min_x, min_y)
        self.include_point(max_x, max_y)

    def include_points(self, points: Iterable[Tuple[float, float]]):
        for x, y in points:
            self.include_point(x, y)

    def copy(self) -> "Extents2D":
        ext = Extents2D()
        ext.min_x, ext.max_x, ext.min_y, ext.max_y = self.min_x, self.max_x, self.min_y, self.max_y
        return ext

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return self.min_x, self.max_x, self.min_y, self.max_y


def rect_corners(min_x: float, min_y: float, max_x: float, max_y: float) -> List[Tuple[float, float]]:
    return [(min_x, min_y), (max_x, min_y), (max_x, max_y), (min_x, max_y)]


# ==========================================
# AFFINE TRANSFORMS
# ==========================================
_TRANSFORM_RE = re.compile(r"([a-zA-Z]+)\s*\(([^)]*)\)")
_ARG_SPLIT_RE = re.compile(r"[\s,]+")


class Transform:
    """2D affine transform stored as a 3x3 matrix in SVG column-vector form."""

    def __init__(self, matrix: Optional[np.ndarray] = None):
        self.matrix = np.identity(3) if matrix is None else np.asarray(matrix, dtype=float)

    @classmethod
    def identity(cls) -> "Transform":
        return cls()

    @classmethod
    def translate(cls, tx: float, ty: float = 0.0) -> "Transform":
        return cls(np.array([[1.0, 0.0, tx], [0.0, 1.0, ty], [0.0, 0.0, 1.0]]))

    @classmethod
    def scale(cls, sx: float, sy: Optional[float] = None) -> "Transform":
        sy = sx if sy is None else sy
        return cls(np.array([[sx, 0.0, 0.0], [0.0, sy, 0.0], [0.0, 0.0, 1.0]]))

    @classmethod
    def rotate(cls, degrees: float, cx: float = 0.0, cy: float = 0.0) -> "Transform":
        rad = math.radians(degrees)
        c, s = math.cos(rad), math.sin(rad)
        rot = cls(np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]]))
        if cx == 0.0 and cy == 0.0:
            return rot
        return cls.translate(cx, cy).compose(rot).compose(cls.translate(-cx, -cy))

    @classmethod
    def parse(cls, text: str) -> "Transform":
        """Parse an SVG transform list such as ``"translate(10,20) rotate(-90, 5, 5)"``."""
        result = cls()
        remainder = _TRANSFORM_RE.sub("", text).strip(" ,")
        if remainder:
            raise CanvasError(f"Unparseable transform: {text!r}")

        for name, raw_args in _TRANSFORM_RE.findall(text):
            args = [float(a) for a in _ARG_SPLIT_RE.split(raw_args.strip()) if a]
            result = result.compose(cls._from_call(name, args, text))
        return result

    @classmethod
    def _from_call(cls, name: str, args: Sequence[float], text: str) -> "Transform":
        n = len(args)
        if name == "translate" and n in (1, 2):
            return cls.translate(*args)
        if name == "scale" and n in (1, 2):
            return cls.scale(*args)
        if name == "rotate" and n in (1, 3):
            return cls.rotate(*args)
        if name == "skewX" and n == 1:
            return cls(np.array([[1.0, math.tan(math.radians(args[0])), 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]]))
        if name == "skewY" and n == 1:
            return cls(np.array([[1.0, 0.0, 0.0], [math.tan(math.radians(args[0])), 1.0, 0.0], [0.0, 0.0, 1.0]]))
        if name == "matrix" and n == 6:
            a, b, c, d, e, f = args
            return cls(np.array([[a, c, e], [b, d, f], [0.0, 0.0, 1.0]]))
        raise CanvasError(f"Unsupported transform {name}({', '.join(str(a) for a in args)}) in {text!r}")

    def compose(self, inner: "Transform") -> "Transform":
        """Transform that applies ``inner`` first, then ``self``."""
        return Transform(self.matrix @ inner.matrix)

    @property
    def is_identity(self) -> bool:
        return bool(np.allclose(self.matrix, np.identity(3)))

    def apply(self, points: Iterable[Tuple[float, float]]) -> List[Tuple[float, float]]:
        pts = list(points)
        if not pts:
            return []
        if self.is_identity:
            return [(float(x), float(y)) for x, y in pts]
        arr = np.ones((3, len(pts)))
        arr[0, :] = [p[0] for p in pts]
        arr[1, :] = [p[1] for p in pts]
        out = self.matrix @ arr
        return [(float(out[0, i]), float(out[1, i])) for i in range(len(pts))]
