"""Rectangle - Axis-aligned rectangle, dateline-aware in geo mode.

In geo mode min_x > max_x is legal and means the rectangle crosses the
antimeridian: it covers [min_x, 180] and [-180, max_x].

Relations between rectangles are decomposed into one interval relation per
axis. X intervals are unwrapped and shifted by 360 before comparing so that
dateline-crossing ranges line up.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from spatial_shapes.constants import GeoConfig
from spatial_shapes.core.distance_utils import DistanceUtils
from spatial_shapes.core.spatial_relation import SpatialRelation
from spatial_shapes.model.point import Point
from spatial_shapes.model.shape import Shape, coord_key

if TYPE_CHECKING:
    from spatial_shapes.context import SpatialContext

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Rectangle(Shape):
    """Axis-aligned rectangle.

    Attributes:
        min_x: West edge (longitude in geo mode)
        max_x: East edge; less than min_x when crossing the dateline
        min_y: South edge
        max_y: North edge, always >= min_y
        ctx: Owning context; None means planar semantics

    Computed Properties:
        width: max_x - min_x, plus 360 when crossing the dateline
        height: max_y - min_y
        crosses_dateline: min_x > max_x
    """

    min_x: float
    max_x: float
    min_y: float
    max_y: float
    ctx: Optional["SpatialContext"] = field(default=None, repr=False)

    def reset(self, min_x: float, max_x: float, min_y: float, max_y: float) -> None:
        """Move this rectangle in place. Not thread-safe; for hot loops only."""
        assert not self.is_empty, "Cannot reset an empty rectangle"
        assert min_y <= max_y or math.isnan(min_y), f"min_y, max_y: {min_y}, {max_y}"
        self.min_x = min_x
        self.max_x = max_x
        self.min_y = min_y
        self.max_y = max_y

    @property
    def is_geo(self) -> bool:
        return self.ctx is not None and self.ctx.is_geo

    @property
    def is_empty(self) -> bool:
        return math.isnan(self.min_x)

    @property
    def crosses_dateline(self) -> bool:
        return self.min_x > self.max_x

    @property
    def width(self) -> float:
        w = self.max_x - self.min_x
        if w < 0:
            # Only when crossing the dateline
            w += GeoConfig.LONGITUDE_SPAN
        return w

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def has_area(self) -> bool:
        return self.max_x != self.min_x and self.max_y != self.min_y

    def get_area(self, ctx: Optional["SpatialContext"] = None) -> float:
        if ctx is None:
            return self.width * self.height
        return ctx.dist_calc.area_rectangle(self)

    @property
    def bounding_box(self) -> "Rectangle":
        return self

    @property
    def center(self) -> Point:
        """Midpoint; the x is normalized when the rectangle crosses the dateline."""
        if self.is_empty:
            return Point(math.nan, math.nan, self.ctx)
        y = self.height / 2 + self.min_y
        x = self.width / 2 + self.min_x
        if self.crosses_dateline:
            x = DistanceUtils.norm_lon_deg(x)
        return Point(x, y, self.ctx)

    def get_buffered(self, distance: float, ctx: "SpatialContext") -> Shape:
        """Rectangle grown by distance on every side.

        Geo mode:
        1. Reaching a pole gives a full-longitude band down/up from that pole
        2. Otherwise longitude grows by the circle bbox half-width taken at the
           edge closest to a pole, collapsing to full longitude at >= 360 wide

        Plane mode clips the result to the world bounds.
        """
        if self.is_empty:
            return self
        if ctx.is_geo:
            if self.max_y + distance >= GeoConfig.GEO_MAX_Y:
                return ctx.make_rectangle(-180, 180, max(-90.0, self.min_y - distance), 90)
            if self.min_y - distance <= GeoConfig.GEO_MIN_Y:
                return ctx.make_rectangle(-180, 180, -90, min(90.0, self.max_y + distance))

            closest_to_pole_y = self.max_y if abs(self.max_y) >= abs(self.min_y) else self.min_y
            lon_distance = DistanceUtils.calc_box_by_dist_from_pt_delta_lon_deg(
                closest_to_pole_y, self.min_x, distance
            )
            if lon_distance * 2 + self.width >= GeoConfig.LONGITUDE_SPAN:
                logger.debug(f"Buffered {self} by {distance} wraps the world longitudinally")
                return ctx.make_rectangle(-180, 180, self.min_y - distance, self.max_y + distance)
            return ctx.make_rectangle(
                DistanceUtils.norm_lon_deg(self.min_x - lon_distance),
                DistanceUtils.norm_lon_deg(self.max_x + lon_distance),
                self.min_y - distance,
                self.max_y + distance,
            )

        bounds = ctx.world_bounds
        return ctx.make_rectangle(
            max(bounds.min_x, self.min_x - distance),
            min(bounds.max_x, self.max_x + distance),
            max(bounds.min_y, self.min_y - distance),
            min(bounds.max_y, self.max_y + distance),
        )

    def relate(self, other: Shape) -> SpatialRelation:
        if self.is_empty or other.is_empty:
            return SpatialRelation.DISJOINT
        if isinstance(other, Point):
            return self.relate_point(other)
        if isinstance(other, Rectangle):
            return self.relate_rectangle(other)
        return other.relate(self).transpose()

    def relate_point(self, point: Point) -> SpatialRelation:
        """CONTAINS if the point is inside or on the boundary, else DISJOINT."""
        if point.y > self.max_y or point.y < self.min_y:
            return SpatialRelation.DISJOINT

        min_x = self.min_x
        max_x = self.max_x
        p_x = point.x
        if self.is_geo:
            # Unwrap the dateline, then shift the point by 360 to overlap
            if max_x < min_x:
                max_x += GeoConfig.LONGITUDE_SPAN
            if p_x < min_x:
                p_x += GeoConfig.LONGITUDE_SPAN
            elif p_x > max_x:
                p_x -= GeoConfig.LONGITUDE_SPAN
            else:
                return SpatialRelation.CONTAINS

        if p_x < min_x or p_x > max_x:
            return SpatialRelation.DISJOINT
        return SpatialRelation.CONTAINS

    def relate_rectangle(self, rect: "Rectangle") -> SpatialRelation:
        """Combine the per-axis relations into a 2D relation.

        Algorithm:
        1. DISJOINT on either axis is DISJOINT
        2. Agreement of both axes is that relation
        3. Equal bounds on one axis defer to the other axis
        4. Anything else INTERSECTS
        """
        y_intersect = self.relate_y_range(rect.min_y, rect.max_y)
        if y_intersect is SpatialRelation.DISJOINT:
            return SpatialRelation.DISJOINT

        x_intersect = self.relate_x_range(rect.min_x, rect.max_x)
        if x_intersect is SpatialRelation.DISJOINT:
            return SpatialRelation.DISJOINT

        if x_intersect is y_intersect:
            return x_intersect

        # A 360 wide rectangle has equal X extent whatever its min_x
        if (self.min_x == rect.min_x and self.max_x == rect.max_x) or (
            self.is_geo and self.width == 360 and rect.width == 360
        ):
            return y_intersect
        if self.min_y == rect.min_y and self.max_y == rect.max_y:
            return x_intersect

        return SpatialRelation.INTERSECTS

    def relate_y_range(self, ext_min_y: float, ext_max_y: float) -> SpatialRelation:
        return _relate_range(self.min_y, self.max_y, ext_min_y, ext_max_y)

    def relate_x_range(self, ext_min_x: float, ext_max_x: float) -> SpatialRelation:
        """Relation of this rectangle's X interval to [ext_min_x, ext_max_x].

        In geo mode both intervals are unwrapped so min <= max, a full 360
        interval short-circuits, and one interval is shifted by 360 to line
        up with the other.
        """
        min_x = self.min_x
        max_x = self.max_x
        if self.is_geo:
            raw_width = max_x - min_x
            if raw_width == 360:
                return SpatialRelation.CONTAINS
            if raw_width < 0:
                max_x += GeoConfig.LONGITUDE_SPAN

            ext_raw_width = ext_max_x - ext_min_x
            if ext_raw_width == 360:
                return SpatialRelation.WITHIN
            if ext_raw_width < 0:
                ext_max_x += GeoConfig.LONGITUDE_SPAN

            if max_x < ext_min_x:
                min_x += GeoConfig.LONGITUDE_SPAN
                max_x += GeoConfig.LONGITUDE_SPAN
            elif ext_max_x < min_x:
                ext_min_x += GeoConfig.LONGITUDE_SPAN
                ext_max_x += GeoConfig.LONGITUDE_SPAN

        return _relate_range(min_x, max_x, ext_min_x, ext_max_x)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Rectangle):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def _key(self) -> tuple:
        return (coord_key(self.min_x), coord_key(self.max_x), coord_key(self.min_y), coord_key(self.max_y))

    def __repr__(self) -> str:
        return f"Rect(minX={self.min_x},maxX={self.max_x},minY={self.min_y},maxY={self.max_y})"


def _relate_range(int_min: float, int_max: float, ext_min: float, ext_max: float) -> SpatialRelation:
    """Relation of the interval [int_min, int_max] to [ext_min, ext_max]."""
    if ext_min > int_max or ext_max < int_min:
        return SpatialRelation.DISJOINT
    if ext_min >= int_min and ext_max <= int_max:
        return SpatialRelation.CONTAINS
    if ext_min <= int_min and ext_max >= int_max:
        return SpatialRelation.WITHIN
    return SpatialRelation.INTERSECTS
