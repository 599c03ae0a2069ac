import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

import numpy as np

from .geometry import Point

LOGGER = logging.getLogger(__name__)

LINEAR = "linear"
QUADRATIC = "quadratic"
EXPONENTIAL = "exponential"
FIT_METHODS = (LINEAR, QUADRATIC, EXPONENTIAL)

# Minimum number of usable points per method.
MIN_POINTS = {LINEAR: 2, QUADRATIC: 3, EXPONENTIAL: 2}

# Determinants smaller than this fraction of their scale are treated as zero.
_SINGULAR_TOLERANCE = 1e-12


# --- Data Classes ---
@dataclass(frozen=True)
class LinearFit:
    slope: float
    intercept: float
    method: str = LINEAR

    def evaluate(self, x: float) -> float:
        return self.slope * x + self.intercept


@dataclass(frozen=True)
class QuadraticFit:
    a: float
    b: float
    c: float
    method: str = QUADRATIC

    def evaluate(self, x: float) -> float:
        return self.a * x * x + self.b * x + self.c


@dataclass(frozen=True)
class ExponentialFit:
    """y = a * e^(b * x)"""
    a: float
    b: float
    method: str = EXPONENTIAL

    def evaluate(self, x: float) -> float:
        try:
            return self.a * math.exp(self.b * x)
        except OverflowError:
            return math.copysign(math.inf, self.a)


RegressionResult = Union[LinearFit, QuadraticFit, ExponentialFit]


def _as_arrays(points: Sequence[Point]) -> Tuple[np.ndarray, np.ndarray]:
    xs = np.array([p.x for p in points], dtype=float)
    ys = np.array([p.y for p in points], dtype=float)
    return xs, ys


def _is_singular(det: float, scale: float) -> bool:
    return abs(det) <= _SINGULAR_TOLERANCE * abs(scale)


def _det3(m) -> float:
    return (m[0][0] * (m[1][1] * m[2][2] - m[1][2] * m[2][1])
            - m[0][1] * (m[1][0] * m[2][2] - m[1][2] * m[2][0])
            + m[0][2] * (m[1][0] * m[2][1] - m[1][1] * m[2][0]))


def _normalised(xs: np.ndarray) -> Tuple[np.ndarray, float, float]:
    """Shifts x to its mean and scales it into [-1, 1] so the normal equations stay well conditioned."""
    centre = float(xs.mean())
    spread = float(np.abs(xs - centre).max())
    return (xs - centre) / spread, centre, spread


# ==========================================
# FITS
# ==========================================
def fit_linear(points: Sequence[Point]) -> Optional[LinearFit]:
    """Ordinary least squares line. None for fewer than 2 points or a vertical point set."""
    if len(points) < 2:
        return None
    xs, ys = _as_arrays(points)
    if np.ptp(xs) == 0:
        return None
    us, centre, spread = _normalised(xs)
    suu = float((us * us).sum())
    if suu == 0:
        return None
    mean_y = float(ys.mean())
    slope = float((us * (ys - mean_y)).sum()) / suu / spread
    return LinearFit(slope, mean_y - slope * centre)


def fit_quadratic(points: Sequence[Point]) -> Optional[QuadraticFit]:
    """
    Least squares parabola from the 3x3 normal equations, solved with Cramer's rule.
    The system is built on normalised x and the coefficients are expanded back afterwards.
    """
    if len(points) < 3:
        return None
    xs, ys = _as_arrays(points)
    if len(np.unique(xs)) < 3:
        return None
    us, centre, spread = _normalised(xs)
    u2 = us * us
    n = float(len(us))
    su, su2 = float(us.sum()), float(u2.sum())
    su3, su4 = float((u2 * us).sum()), float((u2 * u2).sum())
    sy, suy, su2y = float(ys.sum()), float((us * ys).sum()), float((u2 * ys).sum())

    m = [[su4, su3, su2],
         [su3, su2, su],
         [su2, su, n]]
    rhs = [su2y, suy, sy]

    det = _det3(m)
    if _is_singular(det, n ** 3):
        return None

    def replaced(col: int):
        return [[rhs[r] if c == col else m[r][c] for c in range(3)] for r in range(3)]

    # y = A*u^2 + B*u + C with u = (x - centre) / spread
    big_a = _det3(replaced(0)) / det
    big_b = _det3(replaced(1)) / det
    big_c = _det3(replaced(2)) / det
    a = big_a / (spread * spread)
    slope = big_b / spread
    return QuadraticFit(a, slope - 2 * a * centre, a * centre * centre - slope * centre + big_c)


def fit_exponential(points: Sequence[Point]) -> Optional[ExponentialFit]:
    """
    Fits y = a * e^(b * x) by linear regression on (x, ln y).
    Points with y <= 0 are excluded; rejecting such data outright is the caller's job.
    """
    usable = [Point(p.x, math.log(p.y)) for p in points if p.y > 0]
    if len(usable) < 2:
        return None
    line = fit_linear(usable)
    if line is None:
        return None
    return ExponentialFit(math.exp(line.intercept), line.slope)


def fit_best(method: str, points: Sequence[Point]) -> Optional[RegressionResult]:
    if method == LINEAR:
        result = fit_linear(points)
    elif method == QUADRATIC:
        result = fit_quadratic(points)
    elif method == EXPONENTIAL:
        result = fit_exponential(points)
    else:
        raise ValueError(f"Unknown regression method: {method!r} (expected one of {', '.join(FIT_METHODS)})")

    if result is None:
        LOGGER.warning("No %s fit for %d points", method, len(points))
    return result


def r_squared(fit: RegressionResult, points: Sequence[Point]) -> Optional[float]:
    """Coefficient of determination of ``fit`` over ``points``."""
    if len(points) < 2:
        return None
    xs, ys = _as_arrays(points)
    predicted = np.array([fit.evaluate(float(x)) for x in xs])
    ss_res = float(((ys - predicted) ** 2).sum())
    ss_tot = float(((ys - ys.mean()) ** 2).sum())
    if ss_tot == 0:
        return 1.0 if ss_res == 0 else 0.0
    return 1.0 - ss_res / ss_tot
