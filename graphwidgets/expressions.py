import logging
import math
from tokenize import TokenError
from typing import List, Optional, Sequence, Tuple

import numpy as np
import sympy as sp
from sympy.parsing.sympy_parser import (
    convert_xor,
    implicit_multiplication_application,
    parse_expr,
    standard_transformations,
)

from .errors import WidgetValidationError

LOGGER = logging.getLogger(__name__)

TRANSFORMATIONS = standard_transformations + (implicit_multiplication_application, convert_xor)
DEFAULT_SAMPLES = 400


class Expression:
    """
    A function of ``x`` parsed from text such as ``"y = 2x^2 - 3"`` or ``"sin(x)/x"``.

    Implicit multiplication and ``^`` for powers are accepted. The text must mention
    no symbol other than ``x``.
    """

    def __init__(self, expr_str: str):
        self.source = expr_str
        self.x = sp.symbols('x')

        if not expr_str or not expr_str.strip():
            self._invalid("expression cannot be empty")

        clean_str = expr_str.strip()
        if clean_str.lower().startswith("y") and "=" in clean_str:
            clean_str = clean_str.split("=", 1)[1]

        try:
            self.expr = parse_expr(clean_str, local_dict={"e": sp.E}, transformations=TRANSFORMATIONS)
        except (SyntaxError, TokenError, TypeError, ValueError, sp.SympifyError) as e:
            self._invalid(f"could not parse expression {expr_str!r}: {e}")

        extra = {str(s) for s in self.expr.free_symbols} - {"x"}
        if extra:
            self._invalid(f"expression {expr_str!r} uses unknown symbols: {', '.join(sorted(extra))}")
        self.f_lambda = sp.lambdify(self.x, self.expr, modules=['math'])

    def _invalid(self, message: str):
        LOGGER.error(message)
        raise WidgetValidationError(message)

    def __repr__(self) -> str:
        return f"Expression({self.source!r})"

    def evaluate(self, x_val: float) -> Optional[float]:
        """Value at ``x_val``, or None where the function is undefined or not real."""
        try:
            val = self.f_lambda(x_val)
        except (ValueError, ZeroDivisionError, OverflowError, TypeError):
            return None
        if isinstance(val, complex):
            return None
        val = float(val)
        if math.isfinite(val):
            return val
        return None

    def sample(self, x_min: float, x_max: float, samples: int = DEFAULT_SAMPLES,
               y_limit: Optional[Tuple[float, float]] = None) -> List[List[Tuple[float, float]]]:
        """
        Samples the function across ``[x_min, x_max]`` and returns continuous runs of points.

        A run breaks wherever the function is undefined, or leaves ``y_limit`` by more than the
        width of that range (asymptotes), so no segment ever joins two branches.
        """
        xs = np.linspace(x_min, x_max, samples + 1)
        lo = hi = None
        if y_limit is not None:
            span = y_limit[1] - y_limit[0]
            lo, hi = y_limit[0] - span, y_limit[1] + span

        runs: List[List[Tuple[float, float]]] = []
        current: List[Tuple[float, float]] = []
        undefined = 0
        for x_val in xs:
            y_val = self.evaluate(float(x_val))
            if y_val is None or (lo is not None and not (lo <= y_val <= hi)):
                if y_val is None:
                    undefined += 1
                if len(current) > 1:
                    runs.append(current)
                current = []
                continue
            current.append((float(x_val), y_val))
        if len(current) > 1:
            runs.append(current)

        if undefined:
            LOGGER.warning("Expression %r is undefined at %d of %d samples", self.source, undefined, len(xs))
        return runs


def evaluate_polynomial(coefficients: Sequence[float], x_values: Sequence[float]) -> np.ndarray:
    """Coefficients in descending order of power, as numpy.polyval expects."""
    return np.polyval(np.asarray(coefficients, dtype=float), np.asarray(x_values, dtype=float))
