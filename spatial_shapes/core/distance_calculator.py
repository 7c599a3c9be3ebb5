"""Distance calculators - Distance, bearing, bounding box and area per coordinate model.

Two families:
- CartesianDistCalc: Euclidean plane, optionally returning squared distances
- GeodesicSphereDistCalc: sphere, with Haversine, LawOfCosines and Vincenty variants

All distances are in degrees of arc on the sphere, coordinate units on the plane.
Use DistanceUnits to convert to kilometers or miles.
"""

import math
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

import numpy as np

from spatial_shapes.constants import ContextConfig
from spatial_shapes.core.distance_utils import DistanceUtils

if TYPE_CHECKING:
    from spatial_shapes.context import SpatialContext
    from spatial_shapes.model.circle import Circle
    from spatial_shapes.model.point import Point
    from spatial_shapes.model.rectangle import Rectangle
    from spatial_shapes.model.shape import Shape


class DistanceCalculator(ABC):
    """Abstract base for distance calculators.

    Calculators are stateless value objects: two calculators of the same
    variant are equal.
    """

    def distance(self, from_pt: "Point", to_pt: "Point") -> float:
        """Distance between two points."""
        return self.distance_xy(from_pt, to_pt.x, to_pt.y)

    @abstractmethod
    def distance_xy(self, from_pt: "Point", to_x: float, to_y: float) -> float:
        """Distance from a point to the coordinate (to_x, to_y)."""
        raise NotImplementedError

    def within(self, from_pt: "Point", to_x: float, to_y: float, distance: float) -> bool:
        """True if (to_x, to_y) is no farther than distance from from_pt."""
        return self.distance_xy(from_pt, to_x, to_y) <= distance

    @abstractmethod
    def point_on_bearing(
        self,
        from_pt: "Point",
        dist_deg: float,
        bearing_deg: float,
        ctx: "SpatialContext",
        reuse: Optional["Point"] = None,
    ) -> "Point":
        """Point reached by travelling dist_deg from from_pt on bearing_deg.

        Args:
            from_pt: Start point
            dist_deg: Distance to travel
            bearing_deg: Bearing clockwise from North (degrees)
            ctx: Context used to build the result
            reuse: Optional point to reset in place instead of allocating

        Returns:
            The destination point. from_pt itself when dist_deg is 0 and
            reuse is None.
        """
        raise NotImplementedError

    @abstractmethod
    def calc_box_by_dist_from_pt(
        self,
        from_pt: "Point",
        dist_deg: float,
        ctx: "SpatialContext",
        reuse: Optional["Rectangle"] = None,
    ) -> "Rectangle":
        """Bounding box of the circle of radius dist_deg around from_pt."""
        raise NotImplementedError

    @abstractmethod
    def calc_box_by_dist_from_pt_y_horiz_axis_deg(
        self,
        from_pt: "Point",
        dist_deg: float,
        ctx: "SpatialContext",
    ) -> float:
        """Y coordinate at which the circle around from_pt is widest."""
        raise NotImplementedError

    def area(self, shape: "Shape") -> float:
        """Area of a rectangle or circle in this coordinate model.

        Raises:
            TypeError: For any other shape kind
        """
        from spatial_shapes.model.circle import Circle
        from spatial_shapes.model.rectangle import Rectangle

        if isinstance(shape, Rectangle):
            return self.area_rectangle(shape)
        if isinstance(shape, Circle):
            return self.area_circle(shape)
        raise TypeError(f"No area formula for {type(shape).__name__}")

    @abstractmethod
    def area_rectangle(self, rect: "Rectangle") -> float:
        raise NotImplementedError

    @abstractmethod
    def area_circle(self, circle: "Circle") -> float:
        raise NotImplementedError

    @abstractmethod
    def distances(self, from_pt: "Point", xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        """Distances from one point to many coordinates.

        Args:
            from_pt: Origin point
            xs: X coordinates (longitudes in geo mode)
            ys: Y coordinates (latitudes in geo mode)

        Returns:
            Array of distances, same shape as xs.
        """
        raise NotImplementedError

    def __repr__(self) -> str:
        return type(self).__name__


class CartesianDistCalc(DistanceCalculator):
    """Euclidean distance on a plane.

    With squared=True, distance() returns the squared distance. That is only
    useful for sorting; within() is unaffected.
    """

    def __init__(self, squared: bool = False) -> None:
        self.squared = squared

    def distance_xy(self, from_pt: "Point", to_x: float, to_y: float) -> float:
        dx = from_pt.x - to_x
        dy = from_pt.y - to_y
        result = dx * dx + dy * dy
        if self.squared:
            return result
        return math.sqrt(result)

    def within(self, from_pt: "Point", to_x: float, to_y: float, distance: float) -> bool:
        dx = from_pt.x - to_x
        dy = from_pt.y - to_y
        return dx * dx + dy * dy <= distance * distance

    def point_on_bearing(
        self,
        from_pt: "Point",
        dist_deg: float,
        bearing_deg: float,
        ctx: "SpatialContext",
        reuse: Optional["Point"] = None,
    ) -> "Point":
        if dist_deg == 0:
            if reuse is None:
                return from_pt
            reuse.reset(from_pt.x, from_pt.y)
            return reuse
        bearing_rad = DistanceUtils.to_radians(bearing_deg)
        x = from_pt.x + math.sin(bearing_rad) * dist_deg
        y = from_pt.y + math.cos(bearing_rad) * dist_deg
        if reuse is None:
            return ctx.make_point(x, y)
        reuse.reset(x, y)
        return reuse

    def calc_box_by_dist_from_pt(
        self,
        from_pt: "Point",
        dist_deg: float,
        ctx: "SpatialContext",
        reuse: Optional["Rectangle"] = None,
    ) -> "Rectangle":
        """Square of side 2*dist_deg around from_pt, clipped to the world bounds."""
        bounds = ctx.world_bounds
        min_x = max(bounds.min_x, from_pt.x - dist_deg)
        max_x = min(bounds.max_x, from_pt.x + dist_deg)
        min_y = max(bounds.min_y, from_pt.y - dist_deg)
        max_y = min(bounds.max_y, from_pt.y + dist_deg)
        if reuse is None:
            return ctx.make_rectangle(min_x, max_x, min_y, max_y)
        reuse.reset(min_x, max_x, min_y, max_y)
        return reuse

    def calc_box_by_dist_from_pt_y_horiz_axis_deg(
        self,
        from_pt: "Point",
        dist_deg: float,
        ctx: "SpatialContext",
    ) -> float:
        return from_pt.y

    def area_rectangle(self, rect: "Rectangle") -> float:
        return rect.get_area(None)

    def area_circle(self, circle: "Circle") -> float:
        return circle.get_area(None)

    def distances(self, from_pt: "Point", xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        dx = np.asarray(xs, dtype=float) - from_pt.x
        dy = np.asarray(ys, dtype=float) - from_pt.y
        result = dx * dx + dy * dy
        if self.squared:
            return result
        return np.sqrt(result)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CartesianDistCalc):
            return NotImplemented
        return self.squared == other.squared

    def __hash__(self) -> int:
        return hash((CartesianDistCalc, self.squared))

    def __repr__(self) -> str:
        return "CartesianDistCalc(squared)" if self.squared else "CartesianDistCalc"


class GeodesicSphereDistCalc(DistanceCalculator):
    """Great-circle calculations on a sphere, in degrees of arc.

    Subclasses supply the core distance formula in radians.
    """

    # Sphere radius measured in degrees of arc: one radian
    RADIUS_DEG = DistanceUtils.to_degrees(1)

    @abstractmethod
    def distance_lat_lon_rad(self, lat1: float, lon1: float, lat2: float, lon2: float) -> float:
        raise NotImplementedError

    @abstractmethod
    def distances_lat_lon_rad(
        self,
        lat1: float,
        lon1: float,
        lats2: np.ndarray,
        lons2: np.ndarray,
    ) -> np.ndarray:
        raise NotImplementedError

    def distance_xy(self, from_pt: "Point", to_x: float, to_y: float) -> float:
        return DistanceUtils.to_degrees(
            self.distance_lat_lon_rad(
                DistanceUtils.to_radians(from_pt.y),
                DistanceUtils.to_radians(from_pt.x),
                DistanceUtils.to_radians(to_y),
                DistanceUtils.to_radians(to_x),
            )
        )

    def point_on_bearing(
        self,
        from_pt: "Point",
        dist_deg: float,
        bearing_deg: float,
        ctx: "SpatialContext",
        reuse: Optional["Point"] = None,
    ) -> "Point":
        if dist_deg == 0:
            if reuse is None:
                return from_pt
            reuse.reset(from_pt.x, from_pt.y)
            return reuse
        lon_rad, lat_rad = DistanceUtils.point_on_bearing_rad(
            DistanceUtils.to_radians(from_pt.y),
            DistanceUtils.to_radians(from_pt.x),
            DistanceUtils.to_radians(dist_deg),
            DistanceUtils.to_radians(bearing_deg),
        )
        x = DistanceUtils.norm_lon_deg(DistanceUtils.to_degrees(lon_rad))
        y = DistanceUtils.norm_lat_deg(DistanceUtils.to_degrees(lat_rad))
        if reuse is None:
            return ctx.make_point(x, y)
        reuse.reset(x, y)
        return reuse

    def calc_box_by_dist_from_pt(
        self,
        from_pt: "Point",
        dist_deg: float,
        ctx: "SpatialContext",
        reuse: Optional["Rectangle"] = None,
    ) -> "Rectangle":
        min_x, max_x, min_y, max_y = DistanceUtils.calc_box_by_dist_from_pt_deg(from_pt.y, from_pt.x, dist_deg)
        if reuse is None:
            return ctx.make_rectangle(min_x, max_x, min_y, max_y)
        reuse.reset(min_x, max_x, min_y, max_y)
        return reuse

    def calc_box_by_dist_from_pt_y_horiz_axis_deg(
        self,
        from_pt: "Point",
        dist_deg: float,
        ctx: "SpatialContext",
    ) -> float:
        return DistanceUtils.calc_box_by_dist_from_pt_lat_horiz_axis_deg(from_pt.y, from_pt.x, dist_deg)

    def area_rectangle(self, rect: "Rectangle") -> float:
        """Spherical band area (mathforum.org/library/drmath/view/63767.html)."""
        lat1 = DistanceUtils.to_radians(rect.min_y)
        lat2 = DistanceUtils.to_radians(rect.max_y)
        return (
            math.pi / 180
            * self.RADIUS_DEG
            * self.RADIUS_DEG
            * abs(math.sin(lat1) - math.sin(lat2))
            * rect.width
        )

    def area_circle(self, circle: "Circle") -> float:
        """Spherical cap area: the band formula specialised to a cap."""
        lat = DistanceUtils.to_radians(90 - circle.radius)
        return 2 * math.pi * self.RADIUS_DEG * self.RADIUS_DEG * (1 - math.sin(lat))

    def distances(self, from_pt: "Point", xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        lats2 = np.radians(np.asarray(ys, dtype=float))
        lons2 = np.radians(np.asarray(xs, dtype=float))
        result = self.distances_lat_lon_rad(
            DistanceUtils.to_radians(from_pt.y),
            DistanceUtils.to_radians(from_pt.x),
            lats2,
            lons2,
        )
        # Identical coordinates are exactly 0, matching distance_xy
        same = (lats2 == DistanceUtils.to_radians(from_pt.y)) & (lons2 == DistanceUtils.to_radians(from_pt.x))
        return np.degrees(np.where(same, 0.0, result))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DistanceCalculator):
            return NotImplemented
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))


class Haversine(GeodesicSphereDistCalc):
    """Haversine formula: well conditioned for small distances."""

    def distance_lat_lon_rad(self, lat1: float, lon1: float, lat2: float, lon2: float) -> float:
        return DistanceUtils.dist_haversine_rad(lat1, lon1, lat2, lon2)

    def distances_lat_lon_rad(
        self,
        lat1: float,
        lon1: float,
        lats2: np.ndarray,
        lons2: np.ndarray,
    ) -> np.ndarray:
        return DistanceUtils.dist_haversine_rad_array(lat1, lon1, lats2, lons2)


class LawOfCosines(GeodesicSphereDistCalc):
    """Spherical Law of Cosines: cheapest, inaccurate below ~1 meter."""

    def distance_lat_lon_rad(self, lat1: float, lon1: float, lat2: float, lon2: float) -> float:
        return DistanceUtils.dist_law_of_cosines_rad(lat1, lon1, lat2, lon2)

    def distances_lat_lon_rad(
        self,
        lat1: float,
        lon1: float,
        lats2: np.ndarray,
        lons2: np.ndarray,
    ) -> np.ndarray:
        return DistanceUtils.dist_law_of_cosines_rad_array(lat1, lon1, lats2, lons2)


class Vincenty(GeodesicSphereDistCalc):
    """Vincenty formula on a sphere: accurate at every distance."""

    def distance_lat_lon_rad(self, lat1: float, lon1: float, lat2: float, lon2: float) -> float:
        return DistanceUtils.dist_vincenty_rad(lat1, lon1, lat2, lon2)

    def distances_lat_lon_rad(
        self,
        lat1: float,
        lon1: float,
        lats2: np.ndarray,
        lons2: np.ndarray,
    ) -> np.ndarray:
        return DistanceUtils.dist_vincenty_rad_array(lat1, lon1, lats2, lons2)


def calculator_by_name(name: str) -> DistanceCalculator:
    """Build a calculator from its configuration name (case-insensitive).

    Raises:
        ValueError: If the name is unknown
    """
    calculators = {
        ContextConfig.CALC_HAVERSINE.lower(): Haversine,
        ContextConfig.CALC_LAW_OF_COSINES.lower(): LawOfCosines,
        ContextConfig.CALC_VINCENTY.lower(): Vincenty,
        ContextConfig.CALC_CARTESIAN.lower(): CartesianDistCalc,
    }
    key = name.lower()
    if key == ContextConfig.CALC_CARTESIAN_SQUARED.lower():
        return CartesianDistCalc(squared=True)
    if key not in calculators:
        raise ValueError(f"Unknown calculator '{name}'")
    return calculators[key]()
