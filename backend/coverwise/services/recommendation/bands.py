"""Ordered band tables — first-match lookups keyed on an exclusive upper bound."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Band(Generic[T]):
    """Matches any value strictly below ``upper``."""
    upper: int
    value: T


@dataclass(frozen=True)
class BandTable(Generic[T]):
    """Bands are evaluated in order; ``default`` applies past the last bound."""
    bands: tuple[Band[T], ...]
    default: T

    def __post_init__(self):
        uppers = [b.upper for b in self.bands]
        if uppers != sorted(uppers) or len(set(uppers)) != len(uppers):
            raise ValueError(f"Band bounds must be strictly increasing, got {uppers}")

    def lookup(self, key: int) -> T:
        for band in self.bands:
            if key < band.upper:
                return band.value
        return self.default


def band_table(*pairs: tuple[int, T], default: T) -> BandTable[T]:
    """Build a table from ``(upper, value)`` pairs, e.g. ``band_table((30, 15), (40, 12), default=8)``."""
    return BandTable(bands=tuple(Band(upper, value) for upper, value in pairs), default=default)
