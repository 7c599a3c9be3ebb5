"""Point - The zero-dimensional shape.

A NaN x coordinate marks the empty point. Empty points are equal to each
other and disjoint from everything.
"""

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from spatial_shapes.core.spatial_relation import SpatialRelation
from spatial_shapes.model.shape import Shape, coord_key

if TYPE_CHECKING:
    from spatial_shapes.context import SpatialContext
    from spatial_shapes.model.rectangle import Rectangle


@dataclass(eq=False)
class Point(Shape):
    """A point at (x, y); (lon, lat) in degrees in geo mode.

    Attributes:
        x: X coordinate (longitude in geo mode)
        y: Y coordinate (latitude in geo mode)
        ctx: Owning context; None for scratch points

    Example:
        point = ctx.make_point(10.0, 20.0)
    """

    x: float
    y: float
    ctx: Optional["SpatialContext"] = field(default=None, repr=False)

    def reset(self, x: float, y: float) -> None:
        """Move this point in place. Not thread-safe; for hot loops only."""
        assert not self.is_empty, "Cannot reset an empty point"
        self.x = x
        self.y = y

    @property
    def is_empty(self) -> bool:
        return math.isnan(self.x)

    def relate(self, other: Shape) -> SpatialRelation:
        """Equal points INTERSECT; for other shapes ask them and transpose."""
        if self.is_empty or other.is_empty:
            return SpatialRelation.DISJOINT
        if isinstance(other, Point):
            return SpatialRelation.INTERSECTS if self == other else SpatialRelation.DISJOINT
        return other.relate(self).transpose()

    @property
    def bounding_box(self) -> "Rectangle":
        from spatial_shapes.model.rectangle import Rectangle

        return Rectangle(self.x, self.x, self.y, self.y, self.ctx)

    @property
    def has_area(self) -> bool:
        return False

    def get_area(self, ctx: Optional["SpatialContext"] = None) -> float:
        return 0.0

    @property
    def center(self) -> "Point":
        return self

    def get_buffered(self, distance: float, ctx: "SpatialContext") -> Shape:
        """Circle of radius distance around this point."""
        return ctx.make_circle_from_point(self, distance)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Point):
            return NotImplemented
        return (coord_key(self.x), coord_key(self.y)) == (coord_key(other.x), coord_key(other.y))

    def __hash__(self) -> int:
        return hash((coord_key(self.x), coord_key(self.y)))

    def __repr__(self) -> str:
        return f"Pt(x={self.x},y={self.y})"
