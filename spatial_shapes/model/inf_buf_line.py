"""InfBufLine - Infinite line with a perpendicular buffer.

Building block of BufferedLine. The line is y = slope * x + intercept;
a vertical line has an infinite slope and stores its x intercept instead.

Relating a rectangle only tests two corners, chosen by quadrant:
- the corner nearest the line (opposite the rectangle center's quadrant)
- the corner farthest from it (in the center's quadrant)

Reference: math.ucsd.edu/~wgarner/math4c/derivations/distance/distptline.htm
"""

import math
from dataclasses import dataclass, field

from spatial_shapes.core.spatial_relation import SpatialRelation
from spatial_shapes.model.point import Point
from spatial_shapes.model.rectangle import Rectangle

# Quadrant of the corner facing quadrant i across the rectangle (index 0 unused)
OPPOSITE_QUADRANT = (-1, 3, 4, 1, 2)


@dataclass(frozen=True)
class InfBufLine:
    """Infinite line through a point, buffered by buf on both sides.

    Attributes:
        slope: Line slope; math.inf for a vertical line
        intercept: Y intercept, or X intercept when vertical
        buf: Perpendicular buffer distance
        dist_denom_inv: Cached 1 / sqrt(slope² + 1); NaN when vertical
    """

    slope: float
    intercept: float
    buf: float
    dist_denom_inv: float = field(repr=False)

    @classmethod
    def through(cls, slope: float, point: Point, buf: float) -> "InfBufLine":
        """Line with the given slope passing through point."""
        assert not math.isnan(slope), "slope must not be NaN"
        if math.isinf(slope):
            return cls(slope, point.x, buf, math.nan)
        return cls(slope, point.y - slope * point.x, buf, 1 / math.sqrt(slope * slope + 1))

    @property
    def is_vertical(self) -> bool:
        return math.isinf(self.slope)

    def relate(self, r: Rectangle, r_center: Point) -> SpatialRelation:
        """Relation of the buffered line to r, given r's center.

        Returns:
            CONTAINS if both tested corners are in the buffer, INTERSECTS if
            only the nearest is or the corners straddle the line, else DISJOINT.
        """
        c_quad = self.quadrant(r_center)
        nearest = corner_by_quadrant(r, OPPOSITE_QUADRANT[c_quad])
        if self.contains(nearest):
            farthest = corner_by_quadrant(r, c_quad)
            if self.contains(farthest):
                return SpatialRelation.CONTAINS
            return SpatialRelation.INTERSECTS
        if self.quadrant(nearest) == c_quad:
            # Out of the buffer on the same side as the center
            return SpatialRelation.DISJOINT
        # Nearest and farthest straddle the line
        return SpatialRelation.INTERSECTS

    def contains(self, p: Point) -> bool:
        return self.distance_unbuffered(p) <= self.buf

    def distance_unbuffered(self, p: Point) -> float:
        """Perpendicular distance from p to the line itself."""
        if self.is_vertical:
            return abs(p.x - self.intercept)
        num = abs(p.y - self.slope * p.x - self.intercept)
        return num * self.dist_denom_inv

    def quadrant(self, p: Point) -> int:
        """Which side of the line p lies on, as a corner quadrant number.

        Quadrants number rectangle corners counter-clockwise from the
        north-east: 1=NE, 2=NW, 3=SW, 4=SE. A rising line separates 2 from 4,
        a falling (or horizontal) line separates 1 from 3.
        """
        if self.is_vertical:
            return 1 if p.x > self.intercept else 2
        y_at_p_on_line = self.slope * p.x + self.intercept
        above = p.y >= y_at_p_on_line
        if self.slope > 0:
            return 2 if above else 4
        return 1 if above else 3


def corner_by_quadrant(r: Rectangle, corner_quad: int) -> Point:
    """Corner of r in the given quadrant (1=NE, 2=NW, 3=SW, 4=SE)."""
    x = r.max_x if corner_quad in (1, 4) else r.min_x
    y = r.max_y if corner_quad in (1, 2) else r.min_y
    return Point(x, y)
