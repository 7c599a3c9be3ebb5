"""DistanceUnits - Physical units for converting degrees of arc to distances."""

import math
from enum import Enum

from spatial_shapes.constants import DistanceConfig
from spatial_shapes.core.distance_utils import DistanceUtils


class DistanceUnits(Enum):
    """Distance units with the earth radius and circumference expressed in them.

    CARTESIAN has no earth: its radius and circumference are -1.
    """

    KILOMETERS = ("km", DistanceConfig.EARTH_MEAN_RADIUS_KM, DistanceConfig.EARTH_CIRCUMFERENCE_KM)
    MILES = ("miles", DistanceConfig.EARTH_MEAN_RADIUS_MI, DistanceConfig.EARTH_CIRCUMFERENCE_MI)
    RADIANS = ("radians", 1.0, 2 * math.pi)
    CARTESIAN = ("u", -1.0, -1.0)

    def __init__(self, units: str, earth_radius: float, earth_circumference: float) -> None:
        self.units = units
        self.earth_radius = earth_radius
        self.earth_circumference = earth_circumference

    @property
    def is_geo(self) -> bool:
        return self.earth_radius > 0

    @classmethod
    def find(cls, unit: str) -> "DistanceUnits":
        """Look up a unit by name (case-insensitive); "mi" and "" are accepted.

        Raises:
            ValueError: If the name is not a known unit
        """
        name = unit.lower()
        if name in (cls.MILES.units, "mi"):
            return cls.MILES
        if name == cls.KILOMETERS.units:
            return cls.KILOMETERS
        if name == cls.RADIANS.units:
            return cls.RADIANS
        if name in (cls.CARTESIAN.units, ""):
            return cls.CARTESIAN
        raise ValueError(f"Unknown distance unit '{unit}'")

    def convert(self, distance: float, from_units: "DistanceUnits") -> float:
        """Convert a distance given in from_units into this unit.

        Raises:
            ValueError: If either side is CARTESIAN and the units differ
        """
        if from_units is self:
            return distance
        if DistanceUnits.CARTESIAN in (self, from_units):
            raise ValueError(f"Can't convert cartesian distances: {from_units.units} -> {self.units}")
        return distance * self.earth_radius / from_units.earth_radius

    def to_degrees(self, distance: float) -> float:
        """Degrees of arc spanned by a surface distance in this unit."""
        if not self.is_geo:
            return distance
        return DistanceUtils.dist_to_degrees(distance, self.earth_radius)

    def from_degrees(self, degrees: float) -> float:
        """Surface distance in this unit spanned by degrees of arc."""
        if not self.is_geo:
            return degrees
        return DistanceUtils.degrees_to_dist(degrees, self.earth_radius)
