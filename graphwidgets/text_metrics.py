import logging
import math
import re
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence, Tuple

LOGGER = logging.getLogger(__name__)

# Constants
DEFAULT_CHAR_WIDTH_RATIO = 0.6
DEFAULT_LINE_HEIGHT = 1.2
PARENTHETICAL_SPLIT_THRESHOLD = 36
PARENTHETICAL_RE = re.compile(r"^(.*\S)\s+(\(.+\))$")


@dataclass(frozen=True)
class TextMeasurement:
    width: float
    height: float
    line_count: int
    lines: Tuple[str, ...]


class TextMetrics(Protocol):
    """Text measurement strategy. Layout code depends only on this interface."""

    line_height: float

    def average_char_width(self, font_px: float) -> float: ...

    def text_width(self, text: str, font_px: float) -> float: ...

    def wrap_lines(self, text: str, max_width_px: float, font_px: float) -> List[str]: ...

    def measure(self, text: str, max_width_px: float, font_px: float,
                line_height: Optional[float] = None) -> TextMeasurement: ...


class HeuristicTextMetrics:
    """
    Estimates text size without glyph metrics: every character is assumed to be
    ``char_width_ratio * font_px`` wide, every line ``line_height * font_px`` tall.

    Wrapping rules, applied to each explicit line of the input:
      1. "Main title (parenthetical)" longer than 36 characters -> two lines, split before the parenthesis.
      2. Wider than ``max_width_px`` with more than one word -> two lines of roughly equal width.
      3. Otherwise one line. Single long words overflow rather than being broken.
    """

    def __init__(self, char_width_ratio: float = DEFAULT_CHAR_WIDTH_RATIO,
                 line_height: float = DEFAULT_LINE_HEIGHT):
        if char_width_ratio <= 0 or line_height <= 0:
            raise ValueError("char_width_ratio and line_height must be positive")
        self.char_width_ratio = char_width_ratio
        self.line_height = line_height

    def average_char_width(self, font_px: float) -> float:
        return font_px * self.char_width_ratio

    def text_width(self, text: str, font_px: float) -> float:
        return len(text) * self.average_char_width(font_px)

    def wrap_lines(self, text: str, max_width_px: float, font_px: float) -> List[str]:
        lines: List[str] = []
        for raw_line in text.split("\n"):
            lines.extend(self._wrap_single_line(raw_line, max_width_px, font_px))
        return [line for line in lines if line]

    def _wrap_single_line(self, text: str, max_width_px: float, font_px: float) -> List[str]:
        stripped = text.strip()
        if not stripped:
            return []

        match = PARENTHETICAL_RE.match(stripped)
        if match and len(stripped) > PARENTHETICAL_SPLIT_THRESHOLD:
            return [match.group(1).strip(), match.group(2)]

        words = stripped.split()
        if self.text_width(stripped, font_px) > max_width_px and len(words) > 1:
            return list(self._balanced_split(words, font_px))
        return [stripped]

    def _balanced_split(self, words: Sequence[str], font_px: float) -> Tuple[str, str]:
        # Pick the break that minimises the wider of the two lines; ties keep the earlier break.
        best: Optional[Tuple[str, str]] = None
        best_width = math.inf
        for i in range(1, len(words)):
            first, second = " ".join(words[:i]), " ".join(words[i:])
            widest = max(self.text_width(first, font_px), self.text_width(second, font_px))
            if widest < best_width:
                best, best_width = (first, second), widest
        return best

    def measure(self, text: str, max_width_px: float = math.inf, font_px: float = 12.0,
                line_height: Optional[float] = None) -> TextMeasurement:
        lh = self.line_height if line_height is None else line_height
        lines = self.wrap_lines(text, max_width_px, font_px)
        if not lines:
            return TextMeasurement(0.0, 0.0, 0, ())
        width = max(self.text_width(line, font_px) for line in lines)
        height = font_px * len(lines) * lh
        return TextMeasurement(width, height, len(lines), tuple(lines))


def estimate_label_width(text: str, avg_char_width: float) -> float:
    """Fixed per-character footprint used for tick labels."""
    return len(text) * avg_char_width


DEFAULT_TEXT_METRICS = HeuristicTextMetrics()
