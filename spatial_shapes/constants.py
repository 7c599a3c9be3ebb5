"""Configuration constants for Spatial Shapes.

All tunable parameters and physical constants are centralized here.

Classes:
    DistanceConfig: Earth radii and unit conversion factors
    GeoConfig: World bounds for geodetic and planar coordinate models
    ContextConfig: Defaults and calculator names for SpatialContextFactory
    CollectionConfig: ShapeCollection relate behavior
    GeohashConfig: Geohash alphabet and precision limits
    WktConfig: Text formatting for the WKT writer
"""

import math
import sys


class DistanceConfig:
    """Earth radii and unit conversion factors."""

    DEGREES_TO_RADIANS = math.pi / 180
    RADIANS_TO_DEGREES = 1 / DEGREES_TO_RADIANS

    KILOMETERS_TO_MILES = 0.621371192
    MILES_TO_KILOMETERS = 1 / KILOMETERS_TO_MILES  # ~1.609

    # Mean radius is used for all spherical distance conversions
    EARTH_MEAN_RADIUS_KM = 6371.0087714
    EARTH_EQUATORIAL_RADIUS_KM = 6378.1370
    EARTH_MEAN_RADIUS_MI = EARTH_MEAN_RADIUS_KM * KILOMETERS_TO_MILES
    EARTH_EQUATORIAL_RADIUS_MI = EARTH_EQUATORIAL_RADIUS_KM * KILOMETERS_TO_MILES

    # One degree of arc on the mean-radius sphere ≈ 111.195 km
    DEGREES_TO_KILOMETERS = DEGREES_TO_RADIANS * EARTH_MEAN_RADIUS_KM
    KILOMETERS_TO_DEGREES = 1 / DEGREES_TO_KILOMETERS

    # Circumferences used by DistanceUnits
    EARTH_CIRCUMFERENCE_KM = 40076
    EARTH_CIRCUMFERENCE_MI = 24902


class GeoConfig:
    """World bounds for geodetic and planar coordinate models."""

    # Geodetic bounds: longitude then latitude, degrees
    GEO_MIN_X = -180.0
    GEO_MAX_X = 180.0
    GEO_MIN_Y = -90.0
    GEO_MAX_Y = 90.0

    # Planar default: effectively unbounded
    PLANE_MIN_X = -sys.float_info.max
    PLANE_MAX_X = sys.float_info.max
    PLANE_MIN_Y = -sys.float_info.max
    PLANE_MAX_Y = sys.float_info.max

    LONGITUDE_SPAN = 360.0  # Full wrap used by dateline arithmetic


class ContextConfig:
    """Defaults and calculator names for SpatialContextFactory."""

    # Keys accepted in the factory args dict
    ARG_GEO = "geo"
    ARG_DIST_CALCULATOR = "distCalculator"
    ARG_WORLD_BOUNDS = "worldBounds"
    ARG_NORM_WRAP_LONGITUDE = "normWrapLongitude"

    # Calculator names (matched case-insensitively)
    CALC_HAVERSINE = "haversine"
    CALC_LAW_OF_COSINES = "lawOfCosines"
    CALC_VINCENTY = "vincentySphere"
    CALC_CARTESIAN = "cartesian"
    CALC_CARTESIAN_SQUARED = "cartesian^2"

    DEFAULT_GEO = True
    DEFAULT_GEO_CALCULATOR = CALC_HAVERSINE
    DEFAULT_PLANE_CALCULATOR = CALC_CARTESIAN
    DEFAULT_NORM_WRAP_LONGITUDE = False


class CollectionConfig:
    """ShapeCollection relate behavior."""

    # Stop folding member relations at the first CONTAINS.
    # Order-dependent when members overlap; see ShapeCollection.relate.
    RELATE_CONTAINS_SHORT_CIRCUITS = True

    # Above this member count the mutual-disjoint check logs a warning (O(n^2))
    MUTUAL_DISJOINT_WARN_SIZE = 1000

    # String form truncates after this many characters
    REPR_MAX_LEN = 150


class GeohashConfig:
    """Geohash alphabet and precision limits."""

    BASE_32 = "0123456789bcdefghjkmnpqrstuvwxyz"  # Sorted
    BITS = (16, 8, 4, 2, 1)
    MAX_PRECISION = 24  # Beyond this the cells are far below float resolution
    DEFAULT_PRECISION = 12


class WktConfig:
    """Text formatting for the WKT writer."""

    # Decimal places written for coordinates and distances
    COORDINATE_DECIMALS = 6
