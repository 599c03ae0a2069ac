import logging
import math
from typing import List, Sequence, Set

from .errors import LabelSelectionError

LOGGER = logging.getLogger(__name__)

HORIZONTAL = "horizontal"
VERTICAL = "vertical"
DEFAULT_AVG_CHAR_WIDTH = 7.0

MONTH_ABBREVIATIONS = {
    "january": "Jan",
    "february": "Feb",
    "march": "Mar",
    "april": "Apr",
    "may": "May",
    "june": "Jun",
    "july": "Jul",
    "august": "Aug",
    "september": "Sep",
    "october": "Oct",
    "november": "Nov",
    "december": "Dec",
}


def abbreviate_month(text: str) -> str:
    """Shortens a full month name to three letters, keeping the caller's casing style."""
    abbreviation = MONTH_ABBREVIATIONS.get(text.strip().lower())
    if abbreviation is None:
        return text
    if text == text.upper():
        return abbreviation.upper()
    if text == text.lower():
        return abbreviation.lower()
    return abbreviation


def select_axis_labels(labels: Sequence[str], positions: Sequence[float], axis_length_px: float,
                       orientation: str = HORIZONTAL, font_px: float = 12.0, min_gap_px: float = 10.0,
                       avg_char_width: float = DEFAULT_AVG_CHAR_WIDTH) -> Set[int]:
    """
    Picks the largest evenly spaced subset of label indices that fits along an axis.

    Horizontal labels occupy ``len(label) * avg_char_width`` pixels, vertical labels
    occupy ``font_px``. Empty labels are never selected. When not every label fits,
    every ``step``-th non-empty label is kept, starting with the first.
    """
    if len(labels) != len(positions):
        LOGGER.error("Label/position length mismatch: %d labels, %d positions", len(labels), len(positions))
        raise LabelSelectionError(
            f"labels and positions must have the same length (got {len(labels)} and {len(positions)})"
        )
    if orientation not in (HORIZONTAL, VERTICAL):
        raise LabelSelectionError(f"Unknown axis orientation: {orientation!r}")

    candidates: List[int] = [i for i, label in enumerate(labels) if label]
    if not candidates:
        return set()

    if orientation == HORIZONTAL:
        footprints = [len(labels[i]) * avg_char_width for i in candidates]
    else:
        footprints = [font_px for _ in candidates]
    avg_footprint = sum(footprints) / len(footprints)

    max_fit = math.floor(axis_length_px / (avg_footprint + min_gap_px)) if avg_footprint + min_gap_px > 0 else len(candidates)
    if len(candidates) <= max_fit:
        return set(candidates)

    # Too short for even one label: still show the first one.
    max_fit = max(1, max_fit)
    step = math.ceil(len(candidates) / max_fit)
    selected = set(candidates[::step])
    LOGGER.debug("Selected %d of %d %s labels (step %d)", len(selected), len(candidates), orientation, step)
    return selected
