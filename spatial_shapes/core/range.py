"""Range - One-dimensional interval arithmetic.

Range is a plain linear interval. LongitudeRange adds circular semantics
for longitudes: an interval with min > max wraps across the antimeridian.

Used by ShapeCollection to compute the minimal X extent of its members.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from spatial_shapes.constants import GeoConfig

if TYPE_CHECKING:
    from spatial_shapes.context import SpatialContext
    from spatial_shapes.model.rectangle import Rectangle


@dataclass(frozen=True)
class Range:
    """Closed linear interval [min, max].

    Attributes:
        min: Lower bound
        max: Upper bound
    """

    min: float
    max: float

    @staticmethod
    def x_range(rect: "Rectangle", ctx: "SpatialContext") -> "Range":
        """X extent of a rectangle; a LongitudeRange in geo mode."""
        if ctx.is_geo:
            return LongitudeRange(rect.min_x, rect.max_x)
        return Range(rect.min_x, rect.max_x)

    @staticmethod
    def y_range(rect: "Rectangle") -> "Range":
        """Y extent of a rectangle."""
        return Range(rect.min_y, rect.max_y)

    @property
    def width(self) -> float:
        return self.max - self.min

    @property
    def center(self) -> float:
        return self.min + self.width / 2

    def contains(self, v: float) -> bool:
        return self.min <= v <= self.max

    def expand_to(self, other: "Range") -> "Range":
        """Smallest range covering both.

        Raises:
            TypeError: If other is a different kind of range
        """
        if type(other) is not type(self):
            raise TypeError(f"Cannot expand {type(self).__name__} to {type(other).__name__}")
        return Range(min(self.min, other.min), max(self.max, other.max))

    def delta_len(self, other: "Range") -> float:
        """Length of the overlap with other; negative when they are apart."""
        return min(self.max, other.max) - max(self.min, other.min)

    def __repr__(self) -> str:
        return f"Range{{{self.min} TO {self.max}}}"


@dataclass(frozen=True, repr=False)
class LongitudeRange(Range):
    """Longitude interval in degrees that may cross the antimeridian.

    When min > max the range wraps: it covers [min, 180] and [-180, max].
    """

    @property
    def crosses_dateline(self) -> bool:
        return self.min > self.max

    @property
    def width(self) -> float:
        w = self.max - self.min
        if w < 0:
            w += GeoConfig.LONGITUDE_SPAN
        return w

    @property
    def center(self) -> float:
        """Midpoint wrapped into (-180, 180]."""
        ctr = self.min + self.width / 2
        if ctr > GeoConfig.GEO_MAX_X:
            ctr -= GeoConfig.LONGITUDE_SPAN
        return ctr

    def contains(self, v: float) -> bool:
        if not self.crosses_dateline:
            return self.min <= v <= self.max
        return v >= self.min or v <= self.max

    def compare_to(self, other: "LongitudeRange") -> float:
        """Signed circular difference of centers, within [-180, 180]."""
        return _circular_diff(self.center, other.center)

    def expand_to(self, other: "Range") -> "LongitudeRange":
        """Smallest longitude range covering both, wrapping if that is shorter.

        Algorithm:
        1. Order the two ranges by center so that a is west of b
        2. The result starts at b's min if a's min falls inside b, else a's
        3. The result ends at a's max if b's max falls inside a, else b's
        4. If both flipped, the ranges wrap around each other: whole world

        Raises:
            TypeError: If other is not a LongitudeRange
        """
        if not isinstance(other, LongitudeRange):
            raise TypeError(f"Cannot expand LongitudeRange to {type(other).__name__}")
        if self.compare_to(other) <= 0:
            a, b = self, other
        else:
            a, b = other, self
        new_min = b if b.contains(a.min) else a
        new_max = a if a.contains(b.max) else b
        if new_min == new_max:
            return new_min
        if new_min is b and new_max is a:
            return WORLD_180E180W
        return LongitudeRange(new_min.min, new_max.max)

    def __repr__(self) -> str:
        return f"LongitudeRange{{{self.min} TO {self.max}}}"


def _circular_diff(a: float, b: float) -> float:
    diff = a - b
    if diff > 180:
        return diff - 360
    if diff < -180:
        return diff + 360
    return diff


WORLD_180E180W = LongitudeRange(GeoConfig.GEO_MIN_X, GeoConfig.GEO_MAX_X)
