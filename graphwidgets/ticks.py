import logging
import math
from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from typing import Iterator, List, Optional, Sequence, Tuple

from .errors import TickIntervalError

LOGGER = logging.getLogger(__name__)

MAX_TICKS = 10_000
MAX_DECIMALS = 9
PI_SYMBOL = "π"

# Denominators accepted for non-terminating intervals (thirds, sixths) and pi multiples.
RATIONAL_DENOMINATORS = (3, 6)
PI_MAX_DENOMINATOR = 12


@dataclass(frozen=True)
class TickSet:
    values: Tuple[float, ...]
    labels: Tuple[str, ...]

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[Tuple[float, str]]:
        return iter(zip(self.values, self.labels))


EMPTY_TICKS = TickSet((), ())


# --- NUMBER HELPERS ---
def _is_terminating(value: float) -> bool:
    return abs(value - round(value, MAX_DECIMALS)) < 1e-12 * max(1.0, abs(value))


def _decimal_places(value: float) -> int:
    exponent = Decimal(repr(round(value, MAX_DECIMALS))).normalize().as_tuple().exponent
    return max(0, -exponent)


def _scaled_int(value: float, digits: int) -> int:
    return int(Decimal(repr(round(value, MAX_DECIMALS))).scaleb(digits).to_integral_value())


def _format_scaled(n: int, digits: int) -> str:
    if n == 0:
        return "0"
    text = format(Decimal(n).scaleb(-digits), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _close_fraction(value: float, max_denominator: int) -> Optional[Fraction]:
    frac = Fraction(value).limit_denominator(max_denominator)
    if frac != 0 and abs(float(frac) - value) < 1e-9 * max(1.0, abs(value)):
        return frac
    return None


def _as_fraction(value: float) -> Fraction:
    frac = _close_fraction(value, 60)
    if frac is not None:
        return frac
    return Fraction(Decimal(repr(round(value, MAX_DECIMALS))))


def format_fraction(frac: Fraction) -> str:
    """Integers plainly, terminating decimals as decimals, everything else as ``p/q``."""
    if frac.denominator == 1:
        return str(frac.numerator)
    den = frac.denominator
    while den % 2 == 0:
        den //= 2
    while den % 5 == 0:
        den //= 5
    if den == 1:
        text = format(Decimal(frac.numerator) / Decimal(frac.denominator), "f")
        return text.rstrip("0").rstrip(".")
    return f"{frac.numerator}/{frac.denominator}"


def format_pi_value(coeff: Fraction) -> str:
    """Formats ``coeff * pi`` as plain text, e.g. Fraction(1, 2) -> "π/2", Fraction(-3, 2) -> "-3π/2"."""
    num, den = coeff.numerator, coeff.denominator
    if num == 0:
        return "0"
    if num == 1:
        base = PI_SYMBOL
    elif num == -1:
        base = "-" + PI_SYMBOL
    else:
        base = f"{num}{PI_SYMBOL}"
    if den == 1:
        return base
    return f"{base}/{den}"


def _format_plain(value: float, decimals: int = 2) -> str:
    if abs(value) < 1e-10:
        return "0"
    text = f"{value:.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def _capped(count: int, min_val: float, max_val: float, interval: float) -> int:
    if count > MAX_TICKS:
        LOGGER.warning("Tick count %d for [%s, %s] step %s exceeds cap, truncating to %d",
                       count, min_val, max_val, interval, MAX_TICKS)
        return MAX_TICKS
    return count


# ==========================================
# TICK BUILDERS
# ==========================================
def build_ticks(min_val: float, max_val: float, interval: float) -> TickSet:
    """
    Evenly spaced ticks from ``min_val`` to ``max_val`` (inclusive when it lands on a step).

    Terminating decimal intervals are stepped in scaled integer space, so labels never
    pick up float noise. Exact thirds/sixths get fraction labels and rational multiples
    of pi get pi labels. Other non-terminating intervals raise TickIntervalError.
    """
    if not (interval > 0) or not (min_val < max_val):
        LOGGER.error("build_ticks called with invalid domain [%s, %s] step %s", min_val, max_val, interval)
        return EMPTY_TICKS

    if _is_terminating(interval):
        return _build_decimal_ticks(min_val, max_val, interval)

    step = _close_fraction(interval, max(RATIONAL_DENOMINATORS))
    if step is not None and step.denominator in RATIONAL_DENOMINATORS:
        return _build_rational_ticks(min_val, max_val, step)

    pi_step = _close_fraction(interval / math.pi, PI_MAX_DENOMINATOR)
    if pi_step is not None:
        return _build_pi_ticks(min_val, max_val, interval, pi_step)

    raise TickIntervalError(
        f"Tick interval {interval!r} is neither a terminating decimal, a multiple of 1/3 or 1/6, nor a rational multiple of pi"
    )


def _build_decimal_ticks(min_val: float, max_val: float, interval: float) -> TickSet:
    digits = max(_decimal_places(min_val), _decimal_places(max_val), _decimal_places(interval))
    min_i = _scaled_int(min_val, digits)
    max_i = _scaled_int(max_val, digits)
    step_i = _scaled_int(interval, digits)
    if step_i == 0:
        raise TickIntervalError(f"Tick interval {interval!r} is below the supported precision")
    scale = 10 ** digits

    count = _capped((max_i - min_i) // step_i + 1, min_val, max_val, interval)
    ticks = [min_i + k * step_i for k in range(count)]
    return TickSet(
        tuple(n / scale for n in ticks),
        tuple(_format_scaled(n, digits) for n in ticks),
    )


def _build_rational_ticks(min_val: float, max_val: float, step: Fraction) -> TickSet:
    lo = _as_fraction(min_val)
    hi = _as_fraction(max_val)
    count = _capped(math.floor((hi - lo) / step) + 1, min_val, max_val, float(step))
    ticks = [lo + k * step for k in range(count)]
    return TickSet(tuple(float(t) for t in ticks), tuple(format_fraction(t) for t in ticks))


def _build_pi_ticks(min_val: float, max_val: float, interval: float, step: Fraction) -> TickSet:
    count = _capped(math.floor((max_val - min_val) / interval + 1e-9) + 1, min_val, max_val, interval)
    if abs(min_val) < 1e-12:
        start: Optional[Fraction] = Fraction(0)
    else:
        start = _close_fraction(min_val / math.pi, PI_MAX_DENOMINATOR)

    values: List[float] = []
    labels: List[str] = []
    for k in range(count):
        if start is not None:
            coeff = start + k * step
            values.append(float(coeff) * math.pi)
            labels.append(format_pi_value(coeff))
        else:
            value = min_val + k * interval
            values.append(value)
            labels.append(_format_plain(value))
    return TickSet(tuple(values), tuple(labels))


def build_category_ticks(categories: Sequence[str]) -> TickSet:
    return TickSet(tuple(float(i) for i in range(len(categories))), tuple(categories))
