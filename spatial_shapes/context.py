"""SpatialContext - Coordinate model and shape factory.

A context fixes three things every shape depends on:
- geo (longitude/latitude degrees on a sphere) or plane coordinates
- the DistanceCalculator used for circles and areas
- the world bounds that coordinates must fall within

Shapes should be built through a context so that coordinates are validated
and normalized consistently. SpatialContextFactory builds contexts from
string configuration.
"""

import logging
from typing import Optional

from spatial_shapes.constants import ContextConfig, GeoConfig
from spatial_shapes.core.distance_calculator import (
    CartesianDistCalc,
    DistanceCalculator,
    Haversine,
    calculator_by_name,
)
from spatial_shapes.core.distance_utils import DistanceUtils
from spatial_shapes.exceptions import InvalidShapeError
from spatial_shapes.model.buffered_line_string import BufferedLineString
from spatial_shapes.model.circle import Circle
from spatial_shapes.model.geo_circle import GeoCircle
from spatial_shapes.model.point import Point
from spatial_shapes.model.rectangle import Rectangle
from spatial_shapes.model.shape import Shape
from spatial_shapes.model.shape_collection import ShapeCollection

logger = logging.getLogger(__name__)


class SpatialContext:
    """Coordinate model, distance calculator and world bounds for shapes.

    Attributes:
        is_geo: True for longitude/latitude degrees
        dist_calc: Calculator for distances, circle boxes and areas
        world_bounds: Rectangle all coordinates must lie in; never crosses the dateline
        norm_wrap_longitude: In geo mode, wrap out-of-range coordinates instead
            of rejecting them

    Example:
        ctx = SpatialContext(geo=False)
        rect = ctx.make_rectangle(0, 10, 0, 10)
    """

    GEO: "SpatialContext"

    def __init__(
        self,
        geo: bool = ContextConfig.DEFAULT_GEO,
        calculator: Optional[DistanceCalculator] = None,
        world_bounds: Optional[Rectangle] = None,
        norm_wrap_longitude: bool = ContextConfig.DEFAULT_NORM_WRAP_LONGITUDE,
    ) -> None:
        """Initialize the context.

        Args:
            geo: Geodetic (True) or planar (False) coordinates
            calculator: Defaults to Haversine in geo mode, Cartesian otherwise
            world_bounds: Defaults to the whole globe, or the float range on a plane
            norm_wrap_longitude: Wrap geo coordinates into range instead of
                raising InvalidShapeError

        Raises:
            ValueError: If world_bounds crosses the dateline, or differs from
                the globe in geo mode
        """
        self.is_geo = geo
        self.norm_wrap_longitude = norm_wrap_longitude
        if calculator is None:
            calculator = Haversine() if geo else CartesianDistCalc()
        self.dist_calc = calculator

        if world_bounds is None:
            if geo:
                bounds = (GeoConfig.GEO_MIN_X, GeoConfig.GEO_MAX_X, GeoConfig.GEO_MIN_Y, GeoConfig.GEO_MAX_Y)
            else:
                bounds = (GeoConfig.PLANE_MIN_X, GeoConfig.PLANE_MAX_X, GeoConfig.PLANE_MIN_Y, GeoConfig.PLANE_MAX_Y)
        else:
            if world_bounds.crosses_dateline:
                raise ValueError(f"World bounds shouldn't cross the dateline: {world_bounds}")
            bounds = (world_bounds.min_x, world_bounds.max_x, world_bounds.min_y, world_bounds.max_y)
            if geo and bounds != (GeoConfig.GEO_MIN_X, GeoConfig.GEO_MAX_X, GeoConfig.GEO_MIN_Y, GeoConfig.GEO_MAX_Y):
                raise ValueError(f"Geo world bounds must be the whole globe: {world_bounds}")
        # Built directly: make_rectangle validates against these bounds
        self.world_bounds = Rectangle(*bounds, ctx=self)

    # =========================================================================
    # Coordinate normalization and validation
    # =========================================================================

    def norm_x(self, x: float) -> float:
        """Longitude wrapped into [-180, 180] when wrapping is enabled; else x."""
        if self.is_geo and self.norm_wrap_longitude:
            return DistanceUtils.norm_lon_deg(x)
        return x

    def norm_y(self, y: float) -> float:
        """Latitude reflected into [-90, 90] when wrapping is enabled; else y."""
        if self.is_geo and self.norm_wrap_longitude:
            return DistanceUtils.norm_lat_deg(y)
        return y

    def verify_x(self, x: float) -> None:
        """Raise InvalidShapeError if x is outside the world bounds. NaN passes."""
        bounds = self.world_bounds
        if x < bounds.min_x or x > bounds.max_x:
            raise InvalidShapeError(f"Bad X value {x} is not in boundary {bounds}")

    def verify_y(self, y: float) -> None:
        """Raise InvalidShapeError if y is outside the world bounds. NaN passes."""
        bounds = self.world_bounds
        if y < bounds.min_y or y > bounds.max_y:
            raise InvalidShapeError(f"Bad Y value {y} is not in boundary {bounds}")

    # =========================================================================
    # Shape factories
    # =========================================================================

    def make_point(self, x: float, y: float) -> Point:
        """Validated point at (x, y).

        Raises:
            InvalidShapeError: If the coordinates are outside the world bounds
        """
        x = self.norm_x(float(x))
        y = self.norm_y(float(y))
        self.verify_x(x)
        self.verify_y(y)
        return Point(x, y, self)

    def make_rectangle(self, min_x: float, max_x: float, min_y: float, max_y: float) -> Rectangle:
        """Validated rectangle.

        In geo mode min_x > max_x crosses the dateline. A width of 360 or more
        becomes the full longitude range, and an edge lying exactly on the
        antimeridian is flipped so a non-degenerate rectangle doesn't cross it.

        Raises:
            InvalidShapeError: If min_y > max_y, min_x > max_x on a plane, or
                any coordinate is outside the world bounds
        """
        min_x = self.norm_x(float(min_x))
        max_x = self.norm_x(float(max_x))
        min_y = self.norm_y(float(min_y))
        max_y = self.norm_y(float(max_y))
        self.verify_x(min_x)
        self.verify_x(max_x)
        self.verify_y(min_y)
        self.verify_y(max_y)

        if self.is_geo:
            delta = max_x - min_x
            if delta < 0:
                delta += GeoConfig.LONGITUDE_SPAN
            if delta >= GeoConfig.LONGITUDE_SPAN:
                min_x = GeoConfig.GEO_MIN_X
                max_x = GeoConfig.GEO_MAX_X
            elif delta > 0:
                if min_x == GeoConfig.GEO_MAX_X:
                    logger.debug(f"Flipping west edge 180 to -180 for width {delta}")
                    min_x = GeoConfig.GEO_MIN_X
                    max_x = GeoConfig.GEO_MIN_X + delta
                elif max_x == GeoConfig.GEO_MIN_X:
                    logger.debug(f"Flipping east edge -180 to 180 for width {delta}")
                    max_x = GeoConfig.GEO_MAX_X
                    min_x = GeoConfig.GEO_MAX_X - delta
        elif min_x > max_x:
            raise InvalidShapeError(f"min_x {min_x} > max_x {max_x}")

        if min_y > max_y:
            raise InvalidShapeError(f"min_y {min_y} > max_y {max_y}")
        return Rectangle(min_x, max_x, min_y, max_y, self)

    def make_rectangle_from_points(self, lower_left: Point, upper_right: Point) -> Rectangle:
        return self.make_rectangle(lower_left.x, upper_right.x, lower_left.y, upper_right.y)

    def make_circle(self, x: float, y: float, distance: float) -> Circle:
        return self.make_circle_from_point(self.make_point(x, y), distance)

    def make_circle_from_point(self, point: Point, distance: float) -> Circle:
        """Circle of radius distance around point; a GeoCircle in geo mode.

        Geo radii are in degrees of arc and capped at 180.

        Raises:
            InvalidShapeError: If distance is negative
        """
        if distance < 0:
            raise InvalidShapeError(f"distance must be >= 0; got {distance}")
        if self.is_geo:
            if distance > 180:
                distance = 180.0
            return GeoCircle(point, distance, self)
        return Circle(point, distance, self)

    def make_line_string(self, points: list[Point]) -> BufferedLineString:
        return self.make_buffered_line_string(points, 0.0)

    def make_buffered_line_string(self, points: list[Point], buf: float) -> BufferedLineString:
        """Polyline through points buffered by buf.

        Raises:
            InvalidShapeError: If buf is negative
        """
        if buf < 0:
            raise InvalidShapeError(f"buf must be >= 0; got {buf}")
        return BufferedLineString(points, buf, self)

    def make_collection(self, shapes: list[Shape]) -> ShapeCollection:
        return ShapeCollection(shapes, self)

    def __repr__(self) -> str:
        if self is SpatialContext.GEO:
            return "SpatialContext.GEO"
        return (
            f"SpatialContext(geo={self.is_geo}, calculator={self.dist_calc}, "
            f"world_bounds={self.world_bounds}, norm_wrap_longitude={self.norm_wrap_longitude})"
        )


SpatialContext.GEO = SpatialContext(geo=True)


class SpatialContextFactory:
    """Builds a SpatialContext from string configuration.

    Recognized keys (see ContextConfig):
        geo: "true" or "false"
        distCalculator: haversine, lawOfCosines, vincentySphere, cartesian, cartesian^2
        worldBounds: ENVELOPE(minX, maxX, maxY, minY)
        normWrapLongitude: "true" or "false"

    Example:
        ctx = SpatialContextFactory.make_spatial_context({"geo": "false"})
    """

    @staticmethod
    def make_spatial_context(args: Optional[dict[str, str]] = None) -> SpatialContext:
        """Create a context from args; missing keys take their defaults.

        Raises:
            ValueError: For an unknown calculator name or a malformed boolean
            ShapeParseError: For unparseable world bounds
        """
        args = args or {}
        geo = _parse_bool(args, ContextConfig.ARG_GEO, ContextConfig.DEFAULT_GEO)
        norm_wrap = _parse_bool(
            args, ContextConfig.ARG_NORM_WRAP_LONGITUDE, ContextConfig.DEFAULT_NORM_WRAP_LONGITUDE
        )

        calc_name = args.get(ContextConfig.ARG_DIST_CALCULATOR)
        if calc_name is None:
            calc_name = ContextConfig.DEFAULT_GEO_CALCULATOR if geo else ContextConfig.DEFAULT_PLANE_CALCULATOR
        calculator = calculator_by_name(calc_name)

        world_bounds: Optional[Rectangle] = None
        bounds_text = args.get(ContextConfig.ARG_WORLD_BOUNDS)
        if bounds_text:
            # Parse with an unbounded plane context; the new context re-validates
            from spatial_shapes.io.wkt import read_shape

            parsed = read_shape(SpatialContext(geo=False), bounds_text)
            if not isinstance(parsed, Rectangle):
                raise ValueError(f"{ContextConfig.ARG_WORLD_BOUNDS} must be a rectangle: {bounds_text}")
            world_bounds = parsed

        ctx = SpatialContext(geo, calculator, world_bounds, norm_wrap)
        logger.info(f"Created {ctx}")
        return ctx


def _parse_bool(args: dict[str, str], key: str, default: bool) -> bool:
    value = args.get(key)
    if value is None:
        return default
    lowered = value.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise ValueError(f"{key} must be 'true' or 'false'; got '{value}'")
