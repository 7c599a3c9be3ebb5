"""Circle - Point-radius shape.

The radius is in degrees of arc in geo mode (see GeoCircle) and in
coordinate units on a plane. The enclosing bounding box is computed once by
the context's distance calculator and reused by every relation.
"""

import math
from typing import TYPE_CHECKING, Optional

from spatial_shapes.core.spatial_relation import SpatialRelation
from spatial_shapes.model.point import Point
from spatial_shapes.model.rectangle import Rectangle
from spatial_shapes.model.shape import Shape, coord_key

if TYPE_CHECKING:
    from spatial_shapes.context import SpatialContext


class Circle(Shape):
    """Circle of radius_deg around a center point.

    Attributes:
        center: Center point
        radius: Radius (degrees of arc in geo mode)
        bounding_box: Cached enclosing rectangle

    Example:
        circle = ctx.make_circle(10.0, 20.0, 5.0)
    """

    def __init__(self, point: Point, radius_deg: float, ctx: "SpatialContext") -> None:
        # Validation already happened in the context factory
        self.ctx = ctx
        self._point = point
        self._radius_deg = radius_deg
        self._enclosing_box = self._calc_enclosing_box(None)

    def _calc_enclosing_box(self, reuse: Optional[Rectangle]) -> Rectangle:
        if self._point.is_empty:
            return Rectangle(math.nan, math.nan, math.nan, math.nan, self.ctx)
        return self.ctx.dist_calc.calc_box_by_dist_from_pt(self._point, self._radius_deg, self.ctx, reuse)

    def reset(self, x: float, y: float, radius_deg: float) -> None:
        """Move and resize in place, recomputing cached fields. Not thread-safe.

        The center may be shared with the point it was built from, so it is
        replaced rather than moved.
        """
        assert not self.is_empty, "Cannot reset an empty circle"
        self._point = Point(x, y, self.ctx)
        self._radius_deg = radius_deg
        self._enclosing_box = self._calc_enclosing_box(self._enclosing_box)

    @property
    def center(self) -> Point:
        return self._point

    @property
    def radius(self) -> float:
        return self._radius_deg

    @property
    def bounding_box(self) -> Rectangle:
        return self._enclosing_box

    @property
    def is_empty(self) -> bool:
        return self._point.is_empty

    @property
    def has_area(self) -> bool:
        return self._radius_deg > 0

    def get_area(self, ctx: Optional["SpatialContext"] = None) -> float:
        if ctx is None:
            return math.pi * self._radius_deg * self._radius_deg
        return ctx.dist_calc.area_circle(self)

    def get_buffered(self, distance: float, ctx: "SpatialContext") -> Shape:
        return ctx.make_circle_from_point(self._point, distance + self._radius_deg)

    def contains_xy(self, x: float, y: float) -> bool:
        return self.ctx.dist_calc.within(self._point, x, y, self._radius_deg)

    @property
    def x_axis(self) -> float:
        """X of the vertical line through the circle's widest extent."""
        return self._point.x

    @property
    def y_axis(self) -> float:
        """Y of the horizontal line through the circle's widest extent."""
        return self._point.y

    def relate(self, other: Shape) -> SpatialRelation:
        if self.is_empty or other.is_empty:
            return SpatialRelation.DISJOINT
        if isinstance(other, Point):
            return self.relate_point(other)
        if isinstance(other, Rectangle):
            return self.relate_rectangle(other)
        if isinstance(other, Circle):
            return self.relate_circle(other)
        return other.relate(self).transpose()

    def relate_point(self, point: Point) -> SpatialRelation:
        return SpatialRelation.CONTAINS if self.contains_xy(point.x, point.y) else SpatialRelation.DISJOINT

    def relate_rectangle(self, r: Rectangle) -> SpatialRelation:
        """Relation to a rectangle, using the cached bbox before any distance math.

        Phase 1: the bbox relation decides DISJOINT and WITHIN outright.
        Phase 2: corner distance tests decide DISJOINT, CONTAINS or INTERSECTS.
        """
        bbox_sect = self._enclosing_box.relate(r)
        if bbox_sect in (SpatialRelation.DISJOINT, SpatialRelation.WITHIN):
            return bbox_sect
        if bbox_sect is SpatialRelation.CONTAINS and self._enclosing_box == r:
            # The rectangle equals our bbox, so it reaches past the circle
            return SpatialRelation.WITHIN
        return self.relate_rectangle_phase2(r, bbox_sect)

    def relate_rectangle_phase2(self, r: Rectangle, bbox_sect: SpatialRelation) -> SpatialRelation:
        """Corner tests for a rectangle overlapping the bbox.

        Does not handle the dateline or a world-wrapping bbox; GeoCircle routes
        those cases elsewhere. The circle cannot be WITHIN r here since its bbox
        is not.

        Algorithm:
        1. Per axis, find the rectangle coordinate closest to and farthest from
           the circle's axis
        2. If r straddles neither axis, the closest corner outside means DISJOINT
        3. CONTAINS needs the bbox to contain r and the farthest corner inside
        4. On a sphere the widest latitude is off-center, so a rectangle
           straddling it also needs its other Y corner checked
        """
        x_axis = self.x_axis
        if x_axis < r.min_x:
            closest_x, farthest_x = r.min_x, r.max_x
        elif x_axis > r.max_x:
            closest_x, farthest_x = r.max_x, r.min_x
        else:
            closest_x = x_axis
            farthest_x = r.max_x if r.max_x - x_axis > x_axis - r.min_x else r.min_x

        y_axis = self.y_axis
        if y_axis < r.min_y:
            closest_y, farthest_y = r.min_y, r.max_y
        elif y_axis > r.max_y:
            closest_y, farthest_y = r.max_y, r.min_y
        else:
            closest_y = y_axis
            farthest_y = r.max_y if r.max_y - y_axis > y_axis - r.min_y else r.min_y

        # Spanning an axis can't be disjoint; the bbox check ruled that out
        if x_axis != closest_x and y_axis != closest_y:
            if not self.contains_xy(closest_x, closest_y):
                return SpatialRelation.DISJOINT

        if bbox_sect is not SpatialRelation.CONTAINS:
            return SpatialRelation.INTERSECTS

        if not self.contains_xy(farthest_x, farthest_y):
            return SpatialRelation.INTERSECTS

        if self._point.y != y_axis and y_axis == closest_y:
            other_y = r.min_y if farthest_y == r.max_y else r.max_y
            if not self.contains_xy(farthest_x, other_y):
                return SpatialRelation.INTERSECTS

        return SpatialRelation.CONTAINS

    def relate_circle(self, circle: "Circle") -> SpatialRelation:
        cross_dist = self.ctx.dist_calc.distance(self._point, circle.center)
        a_dist = self._radius_deg
        b_dist = circle.radius
        if cross_dist > a_dist + b_dist:
            return SpatialRelation.DISJOINT
        if cross_dist == 0 and a_dist == b_dist:
            return SpatialRelation.CONTAINS
        if cross_dist + b_dist <= a_dist:
            return SpatialRelation.CONTAINS
        if cross_dist + a_dist <= b_dist:
            return SpatialRelation.WITHIN
        return SpatialRelation.INTERSECTS

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Circle):
            return NotImplemented
        return self._point == other.center and coord_key(self._radius_deg) == coord_key(other.radius)

    def __hash__(self) -> int:
        return hash((self._point, coord_key(self._radius_deg)))

    def __repr__(self) -> str:
        return f"Circle({self._point}, d={self._radius_deg:.1f}°)"
