"""GeoCircle - Circle on a sphere, with pole and dateline handling.

Geodetic circles differ from planar ones in three ways:
- Past 90 degrees the circle covers more than a hemisphere; relations are
  computed on the smaller antipodal circle and inverted.
- A circle containing a pole has a bbox spanning all longitudes, so corner
  tests need the front and back meridians of the circle.
- The widest latitude of the circle is poleward of its center.

Reference: gis.stackexchange.com/questions/19221 (widest point of a circle)
"""

import logging
import math
from typing import TYPE_CHECKING, Optional

from spatial_shapes.constants import DistanceConfig
from spatial_shapes.core.distance_utils import DistanceUtils
from spatial_shapes.core.spatial_relation import SpatialRelation
from spatial_shapes.model.circle import Circle
from spatial_shapes.model.point import Point
from spatial_shapes.model.rectangle import Rectangle

if TYPE_CHECKING:
    from spatial_shapes.context import SpatialContext

logger = logging.getLogger(__name__)


class GeoCircle(Circle):
    """Circle in geo mode with a radius in degrees of arc, at most 180.

    Attributes:
        inverse_circle: Antipodal circle covering the complement, when
            90 < radius < 180; None otherwise
        horiz_axis_y: Latitude of the circle's widest point, clamped into the
            enclosing box
    """

    def __init__(self, point: Point, radius_deg: float, ctx: "SpatialContext") -> None:
        assert ctx.is_geo, "GeoCircle requires a geo context"
        self.inverse_circle: Optional[GeoCircle] = None
        self.horiz_axis_y = point.y
        super().__init__(point, radius_deg, ctx)
        self._init_derived()

    def reset(self, x: float, y: float, radius_deg: float) -> None:
        super().reset(x, y, radius_deg)
        self._init_derived()

    def _init_derived(self) -> None:
        if self.is_empty:
            self.inverse_circle = None
            self.horiz_axis_y = math.nan
            return

        if self.radius > 90:
            # Spans more than half the globe
            back_radius = 180 - self.radius
            if back_radius > 0:
                back_x = DistanceUtils.norm_lon_deg(self.center.x + 180)
                back_y = DistanceUtils.norm_lat_deg(self.center.y + 180)
                # Shrink by one ulp so the inverse never overlaps the circle's edge
                back_radius -= max(math.ulp(abs(back_y) + back_radius), math.ulp(abs(back_x) + back_radius))
                if self.inverse_circle is not None:
                    self.inverse_circle.reset(back_x, back_y, back_radius)
                else:
                    self.inverse_circle = GeoCircle(Point(back_x, back_y, self.ctx), back_radius, self.ctx)
                logger.debug(f"{self} relates through inverse circle {self.inverse_circle}")
            else:
                # Whole globe
                self.inverse_circle = None
            self.horiz_axis_y = self.center.y
            return

        self.inverse_circle = None
        horiz_axis_y = self.ctx.dist_calc.calc_box_by_dist_from_pt_y_horiz_axis_deg(self.center, self.radius, self.ctx)
        # Rounding can put it barely outside the box
        box = self.bounding_box
        self.horiz_axis_y = min(box.max_y, max(box.min_y, horiz_axis_y))

    @property
    def y_axis(self) -> float:
        return self.horiz_axis_y

    def relate_rectangle_phase2(self, r: Rectangle, bbox_sect: SpatialRelation) -> SpatialRelation:
        """Corner tests for a rectangle overlapping the bbox, in spherical terms.

        Algorithm:
        1. Radius > 90: relate the antipodal circle and invert the answer
        2. Bbox spans 360: the circle wraps a pole, see _relate_rectangle_circle_wraps_pole
        3. No dateline crossing on either side: the planar corner tests
        4. Otherwise count rectangle corners inside the circle; with none inside,
           test whether either circle axis crosses the rectangle
        """
        if self.inverse_circle is not None:
            return self.inverse_circle.relate(r).inverse()

        if self.bounding_box.width == 360:
            return self._relate_rectangle_circle_wraps_pole(r)

        if not self.bounding_box.crosses_dateline and not r.crosses_dateline:
            return super().relate_rectangle_phase2(r, bbox_sect)

        # A full longitude band has no corners to test
        if r.width == 360:
            return SpatialRelation.INTERSECTS

        corners_intersect = self.num_corners_intersect(r)
        if corners_intersect == 4:
            # If r's x range exceeds ours, r wraps round to touch the other side
            x_intersect = r.relate_x_range(self.bounding_box.min_x, self.bounding_box.max_x)
            if x_intersect is SpatialRelation.WITHIN:
                return SpatialRelation.CONTAINS
            return SpatialRelation.INTERSECTS

        if corners_intersect > 0:
            return SpatialRelation.INTERSECTS

        # No corners inside: does an axis of the circle cross r?
        if (
            r.relate_y_range(self.y_axis, self.y_axis).intersects()
            and r.relate_x_range(self.bounding_box.min_x, self.bounding_box.max_x).intersects()
        ):
            return SpatialRelation.INTERSECTS

        if r.relate_x_range(self.x_axis, self.x_axis).intersects():
            y_top = self.center.y + self.radius
            y_bot = self.center.y - self.radius
            if r.relate_y_range(y_bot, y_top).intersects():
                return SpatialRelation.INTERSECTS

        return SpatialRelation.DISJOINT

    def _relate_rectangle_circle_wraps_pole(self, r: Rectangle) -> SpatialRelation:
        """Relation to r when the circle wraps exactly one pole.

        Both poles are handled by the inverse circle, except the whole globe.

        Algorithm:
        1. Radius 180 covers everything
        2. r inside the latitude band beyond the circle's pole overlap: CONTAINS
        3. A 360 wide r: INTERSECTS
        4. All 4 corners inside: INTERSECTS if r crosses the back meridian
        5. No corners inside: INTERSECTS if r crosses the front meridian
        """
        if self.radius == 180:
            return SpatialRelation.CONTAINS

        y_top = self.center.y + self.radius
        if y_top > 90:
            y_top_overlap = y_top - 90
            if r.min_y >= 90 - y_top_overlap:
                return SpatialRelation.CONTAINS
        else:
            y_bot = self.center.y - self.radius
            if y_bot < -90:
                y_bot_overlap = -90 - y_bot
                if r.max_y <= -90 + y_bot_overlap:
                    return SpatialRelation.CONTAINS
            # Otherwise the circle just touches a pole

        if r.width == 360:
            return SpatialRelation.INTERSECTS

        corners_intersect = self.num_corners_intersect(r)
        front_x = self.center.x
        if corners_intersect == 4:
            back_x = front_x + 180 if front_x <= 0 else front_x - 180
            if r.relate_x_range(back_x, back_x).intersects():
                return SpatialRelation.INTERSECTS
            return SpatialRelation.CONTAINS
        if corners_intersect == 0:
            if r.relate_x_range(front_x, front_x).intersects():
                return SpatialRelation.INTERSECTS
            return SpatialRelation.DISJOINT
        return SpatialRelation.INTERSECTS

    def num_corners_intersect(self, r: Rectangle) -> int:
        """Number of r's corners inside the circle: 0, 4, or 1 for any partial count.

        Stops at the first corner that disagrees with the first one.
        """
        first = self.contains_xy(r.min_x, r.min_y)
        for x, y in ((r.min_x, r.max_y), (r.max_x, r.min_y), (r.max_x, r.max_y)):
            if self.contains_xy(x, y) != first:
                return 1
        return 4 if first else 0

    def __repr__(self) -> str:
        dist_km = DistanceUtils.degrees_to_dist(self.radius, DistanceConfig.EARTH_MEAN_RADIUS_KM)
        return f"Circle({self.center}, d={self.radius:.1f}° {dist_km:.2f}km)"
