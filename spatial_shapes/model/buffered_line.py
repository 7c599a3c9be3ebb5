"""BufferedLine - Line segment from A to B buffered by a distance.

The shape is the intersection of two buffered infinite lines:
- the primary line through A and B, buffered by buf
- the perpendicular line through the midpoint, buffered by |AB|/2 + buf

The result is a rectangle rotated to the segment's direction, with square
ends extending buf beyond A and B. Coordinates are treated as planar even in
geo mode; see expand_buf_for_longitude_skew.
"""

import math
from typing import TYPE_CHECKING, Optional

from spatial_shapes.core.distance_utils import DistanceUtils
from spatial_shapes.core.spatial_relation import SpatialRelation
from spatial_shapes.exceptions import InvalidShapeError, UnsupportedRelationError
from spatial_shapes.model.circle import Circle
from spatial_shapes.model.inf_buf_line import InfBufLine
from spatial_shapes.model.point import Point
from spatial_shapes.model.rectangle import Rectangle
from spatial_shapes.model.shape import Shape, coord_key

if TYPE_CHECKING:
    from spatial_shapes.context import SpatialContext


class BufferedLine(Shape):
    """Segment from a to b with a buffer of buf on every side.

    Attributes:
        a: First end point
        b: Second end point
        buf: Buffer distance, >= 0
        line_primary: Buffered line through a and b
        line_perp: Buffered perpendicular line through the midpoint

    Example:
        line = BufferedLine(ctx.make_point(0, 0), ctx.make_point(10, 0), 1.0, ctx)
    """

    def __init__(self, a: Point, b: Point, buf: float, ctx: "SpatialContext") -> None:
        """Build both buffered lines and the bounding box.

        Raises:
            InvalidShapeError: If buf is negative
        """
        if buf < 0:
            raise InvalidShapeError(f"buf must be >= 0; got {buf}")
        self.a = a
        self.b = b
        self.buf = buf

        delta_y = b.y - a.y
        delta_x = b.x - a.x
        center = Point(a.x + delta_x / 2, a.y + delta_y / 2)
        if delta_x == 0 and delta_y == 0:
            self.line_primary = InfBufLine.through(0.0, center, buf)
            self.line_perp = InfBufLine.through(math.inf, center, buf)
        else:
            self.line_primary = InfBufLine.through(_slope(delta_y, delta_x), center, buf)
            length = math.sqrt(delta_x * delta_x + delta_y * delta_y)
            self.line_perp = InfBufLine.through(_slope(-delta_x, delta_y), center, length / 2 + buf)

        if delta_x == 0:
            # Vertical, or a single point
            min_x = a.x - buf
            max_x = a.x + buf
            min_y = min(a.y, b.y) - buf
            max_y = max(a.y, b.y) + buf
        else:
            # Right triangle with hypotenuse buf: the legs sum to the bbox offset
            bbox_buf = buf * (1 + abs(self.line_primary.slope)) * self.line_primary.dist_denom_inv
            min_x = min(a.x, b.x) - bbox_buf
            max_x = max(a.x, b.x) + bbox_buf
            min_y = min(a.y, b.y) - bbox_buf
            max_y = max(a.y, b.y) + bbox_buf

        bounds = ctx.world_bounds
        self._bbox = ctx.make_rectangle(
            max(bounds.min_x, min_x),
            min(bounds.max_x, max_x),
            max(bounds.min_y, min_y),
            min(bounds.max_y, max_y),
        )

    @staticmethod
    def expand_buf_for_longitude_skew(a: Point, b: Point, buf: float) -> float:
        """Buffer widened for the shrinking of longitude degrees toward the poles.

        Uses the latitude of whichever end point is farther from the equator,
        which over-buffers the rest of the segment.
        """
        max_lat = max(abs(a.y), abs(b.y))
        return DistanceUtils.calc_lon_degrees_at_lat(max_lat, buf)

    @property
    def is_empty(self) -> bool:
        return self.a.is_empty

    @property
    def bounding_box(self) -> Rectangle:
        return self._bbox

    @property
    def has_area(self) -> bool:
        return self.buf > 0

    def get_area(self, ctx: Optional["SpatialContext"] = None) -> float:
        return self.line_primary.buf * self.line_perp.buf * 4

    @property
    def center(self) -> Point:
        return self._bbox.center

    def get_buffered(self, distance: float, ctx: "SpatialContext") -> Shape:
        return BufferedLine(self.a, self.b, self.buf + distance, ctx)

    def contains(self, p: Point) -> bool:
        return self.line_primary.contains(p) and self.line_perp.contains(p)

    def relate(self, other: Shape) -> SpatialRelation:
        """Relation to a point or rectangle; other kinds ask the other shape.

        Raises:
            UnsupportedRelationError: For circles and other buffered lines,
                which cannot compute this relation either
        """
        if self.is_empty or other.is_empty:
            return SpatialRelation.DISJOINT
        if isinstance(other, Point):
            return SpatialRelation.CONTAINS if self.contains(other) else SpatialRelation.DISJOINT
        if isinstance(other, Rectangle):
            return self.relate_rectangle(other)
        if isinstance(other, (Circle, BufferedLine)):
            raise UnsupportedRelationError(f"Cannot relate {type(self).__name__} to {type(other).__name__}")
        return other.relate(self).transpose()

    def relate_rectangle(self, r: Rectangle) -> SpatialRelation:
        """Both buffered lines must agree for CONTAINS; disagreement INTERSECTS."""
        bbox_r = self._bbox.relate(r)
        if bbox_r in (SpatialRelation.DISJOINT, SpatialRelation.WITHIN):
            return bbox_r
        if bbox_r is SpatialRelation.CONTAINS and self._bbox == r:
            # r is our bbox, which covers the whole segment
            return SpatialRelation.WITHIN

        r_center = r.center
        result = self.line_primary.relate(r, r_center)
        if result is SpatialRelation.DISJOINT:
            return SpatialRelation.DISJOINT
        result_opp = self.line_perp.relate(r, r_center)
        if result_opp is SpatialRelation.DISJOINT:
            return SpatialRelation.DISJOINT
        if result is result_opp:
            return result
        return SpatialRelation.INTERSECTS

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, BufferedLine):
            return NotImplemented
        return self.a == other.a and self.b == other.b and coord_key(self.buf) == coord_key(other.buf)

    def __hash__(self) -> int:
        return hash((self.a, self.b, coord_key(self.buf)))

    def __repr__(self) -> str:
        return f"BufferedLine({self.a}, {self.b} b={self.buf})"


def _slope(rise: float, run: float) -> float:
    """rise / run, infinite for a vertical run of 0."""
    if run == 0:
        return math.inf
    return rise / run
