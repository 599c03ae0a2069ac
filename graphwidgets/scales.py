from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class LinearScale:
    """Maps [domain_min, domain_max] linearly onto [range_start, range_end] (range_end may be smaller)."""
    domain_min: float
    domain_max: float
    range_start: float
    range_end: float

    @property
    def pixels_per_unit(self) -> float:
        return (self.range_end - self.range_start) / (self.domain_max - self.domain_min)

    def __call__(self, value: float) -> float:
        frac = (value - self.domain_min) / (self.domain_max - self.domain_min)
        return self.range_start + frac * (self.range_end - self.range_start)

    def invert(self, px: float) -> float:
        frac = (px - self.range_start) / (self.range_end - self.range_start)
        return self.domain_min + frac * (self.domain_max - self.domain_min)


@dataclass(frozen=True)
class BandScale:
    """Equal bands per category; a category index maps to its band centre."""
    count: int
    range_start: float
    range_end: float

    @property
    def band_width(self) -> float:
        return (self.range_end - self.range_start) / self.count

    def band_start(self, index: int) -> float:
        return self.range_start + index * self.band_width

    def __call__(self, index: float) -> float:
        return self.range_start + (index + 0.5) * self.band_width

    def invert(self, px: float) -> float:
        return (px - self.range_start) / self.band_width - 0.5


@dataclass(frozen=True)
class PointScale:
    """Categories as evenly spaced points with the first and last on the range ends."""
    count: int
    range_start: float
    range_end: float

    @property
    def step(self) -> float:
        return 0.0 if self.count <= 1 else (self.range_end - self.range_start) / (self.count - 1)

    def __call__(self, index: float) -> float:
        if self.count == 1:
            return (self.range_start + self.range_end) / 2.0
        return self.range_start + index * self.step

    def invert(self, px: float) -> float:
        if self.count == 1:
            return 0.0
        return (px - self.range_start) / self.step


Scale = Union[LinearScale, BandScale, PointScale]
