"""Core building blocks: relation algebra, ranges and distance math.

- SpatialRelation: DISJOINT / INTERSECTS / CONTAINS / WITHIN and their algebra
- Range, LongitudeRange: 1-D intervals, the latter wrapping at the dateline
- DistanceUtils: Spherical trigonometry and degree/radian/distance conversions
- DistanceCalculator: Cartesian and spherical (Haversine, LawOfCosines, Vincenty)
- DistanceUnits: Kilometers, miles, radians
- GeohashUtils: Geohash encoding and decoding
"""

from spatial_shapes.core.distance_calculator import (
    CartesianDistCalc,
    DistanceCalculator,
    GeodesicSphereDistCalc,
    Haversine,
    LawOfCosines,
    Vincenty,
    calculator_by_name,
)
from spatial_shapes.core.distance_units import DistanceUnits
from spatial_shapes.core.distance_utils import DistanceUtils
from spatial_shapes.core.geohash import GeohashUtils
from spatial_shapes.core.range import WORLD_180E180W, LongitudeRange, Range
from spatial_shapes.core.spatial_relation import SpatialRelation

__all__ = [
    # Relations
    "SpatialRelation",
    # Ranges
    "Range",
    "LongitudeRange",
    "WORLD_180E180W",
    # Distance
    "DistanceUtils",
    "DistanceUnits",
    "DistanceCalculator",
    "CartesianDistCalc",
    "GeodesicSphereDistCalc",
    "Haversine",
    "LawOfCosines",
    "Vincenty",
    "calculator_by_name",
    # Geohash
    "GeohashUtils",
]
