"""Spherical trigonometry helpers for shape relations.

Provides the formulas behind the distance calculators:
- Degree/radian and distance/degree conversion
- Longitude and latitude normalization (dateline wrap, pole reflection)
- Destination point from start, bearing and distance
- Bounding box of a circle on a sphere, and its widest-point latitude
- Great-circle distances (Haversine, Law of Cosines, Vincenty)

Distances along the sphere are angles. Radian helpers work on radians,
everything else on degrees. Inputs pushed slightly out of a trig domain by
rounding are clamped instead of raising.
"""

import math

import numpy as np

from spatial_shapes.constants import DistanceConfig

DEG_90_AS_RADIANS = math.pi / 2
DEG_180_AS_RADIANS = math.pi


class DistanceUtils:
    """Static methods for spherical distance and bounding box calculations.

    Coordinates are (lon, lat) = (x, y). Degree methods take decimal degrees,
    *_rad methods take radians.
    """

    @staticmethod
    def to_radians(degrees: float) -> float:
        return degrees * DistanceConfig.DEGREES_TO_RADIANS

    @staticmethod
    def to_degrees(radians: float) -> float:
        return radians * DistanceConfig.RADIANS_TO_DEGREES

    @staticmethod
    def dist_to_degrees(dist: float, radius: float) -> float:
        """Convert a surface distance to degrees of arc.

        Args:
            dist: Distance in the same unit as radius
            radius: Sphere radius (e.g. EARTH_MEAN_RADIUS_KM)
        """
        return DistanceUtils.to_degrees(DistanceUtils.dist_to_radians(dist, radius))

    @staticmethod
    def degrees_to_dist(degrees: float, radius: float) -> float:
        """Convert degrees of arc to a surface distance in radius units."""
        return DistanceUtils.radians_to_dist(DistanceUtils.to_radians(degrees), radius)

    @staticmethod
    def dist_to_radians(dist: float, radius: float) -> float:
        return dist / radius

    @staticmethod
    def radians_to_dist(radians: float, radius: float) -> float:
        return radians * radius

    @staticmethod
    def norm_lon_deg(lon_deg: float) -> float:
        """Wrap a longitude into [-180, 180].

        Values already in range are returned untouched to avoid float drift.
        A positive multiple of 180 wraps to +180, a negative one to -180.
        """
        if -180 <= lon_deg <= 180:
            return lon_deg
        off = (lon_deg + 180) % 360
        if off == 0 and lon_deg > 0:
            return 180.0
        return -180 + off

    @staticmethod
    def norm_lat_deg(lat_deg: float) -> float:
        """Fold a latitude into [-90, 90] by reflecting across the poles."""
        if -90 <= lat_deg <= 90:
            return lat_deg
        off = abs(math.fmod(lat_deg + 90, 360))
        return (off if off <= 180 else 360 - off) - 90

    @staticmethod
    def point_on_bearing_rad(
        start_lat: float,
        start_lon: float,
        distance_rad: float,
        bearing_rad: float,
    ) -> tuple[float, float]:
        """Calculate destination given start, bearing and angular distance.

        Formula:
            lat2 = asin(sin(lat1)*cos(d) + cos(lat1)*sin(d)*cos(θ))
            lon2 = lon1 + atan2(sin(θ)*sin(d)*cos(lat1), cos(d) − sin(lat1)*sin(lat2))

        The result longitude is wrapped into [-π, π]; a latitude overshooting
        a pole is reflected back and the longitude moved to the far side.

        Args:
            start_lat: Start latitude (radians)
            start_lon: Start longitude (radians)
            distance_rad: Angular distance (radians)
            bearing_rad: Bearing clockwise from North (radians)

        Returns:
            (lon, lat) in radians.
        """
        cos_ang_dist = math.cos(distance_rad)
        cos_start_lat = math.cos(start_lat)
        sin_ang_dist = math.sin(distance_rad)
        sin_start_lat = math.sin(start_lat)
        sin_lat2 = sin_start_lat * cos_ang_dist + cos_start_lat * sin_ang_dist * math.cos(bearing_rad)
        lat2 = math.asin(max(-1.0, min(1.0, sin_lat2)))
        lon2 = start_lon + math.atan2(
            math.sin(bearing_rad) * sin_ang_dist * cos_start_lat,
            cos_ang_dist - sin_start_lat * sin_lat2,
        )

        # Longitude first
        if lon2 > DEG_180_AS_RADIANS:
            lon2 = -1.0 * (DEG_180_AS_RADIANS - (lon2 - DEG_180_AS_RADIANS))
        elif lon2 < -DEG_180_AS_RADIANS:
            lon2 = (lon2 + DEG_180_AS_RADIANS) + DEG_180_AS_RADIANS

        # Latitude may flip over a pole
        if lat2 > DEG_90_AS_RADIANS:
            lat2 = DEG_90_AS_RADIANS - (lat2 - DEG_90_AS_RADIANS)
            lon2 = lon2 + DEG_180_AS_RADIANS if lon2 < 0 else lon2 - DEG_180_AS_RADIANS
        elif lat2 < -DEG_90_AS_RADIANS:
            lat2 = -DEG_90_AS_RADIANS - (lat2 + DEG_90_AS_RADIANS)
            lon2 = lon2 + DEG_180_AS_RADIANS if lon2 < 0 else lon2 - DEG_180_AS_RADIANS

        return (lon2, lat2)

    @staticmethod
    def calc_box_by_dist_from_pt_deg(
        lat: float,
        lon: float,
        dist_deg: float,
    ) -> tuple[float, float, float, float]:
        """Bounding box of all points within dist_deg of (lon, lat) on a sphere.

        Algorithm (janmatuschek.de/LatitudeLongitudeBoundingCoordinates):
        1. Latitude extent is lat ± dist
        2. If that reaches a pole, longitude spans the whole world; if the pole
           is only touched, it spans the half band lon ± 90
        3. Otherwise longitude extent is lon ± asin(sin(dist)/cos(lat))

        Args:
            lat: Center latitude (degrees)
            lon: Center longitude (degrees)
            dist_deg: Radius in degrees of arc

        Returns:
            (min_x, max_x, min_y, max_y) in degrees. min_x > max_x when the box
            crosses the antimeridian.
        """
        if dist_deg == 0:
            return (lon, lon, lat, lat)
        if dist_deg >= 180:
            return (-180.0, 180.0, -90.0, 90.0)

        max_y = lat + dist_deg
        min_y = lat - dist_deg
        if max_y >= 90 or min_y <= -90:
            # Touches a pole
            min_x, max_x = -180.0, 180.0
            if max_y <= 90 and min_y >= -90:
                min_x = DistanceUtils.norm_lon_deg(lon - 90)
                max_x = DistanceUtils.norm_lon_deg(lon + 90)
            max_y = min(max_y, 90.0)
            min_y = max(min_y, -90.0)
        else:
            lon_delta_deg = DistanceUtils.calc_box_by_dist_from_pt_delta_lon_deg(lat, lon, dist_deg)
            min_x = DistanceUtils.norm_lon_deg(lon - lon_delta_deg)
            max_x = DistanceUtils.norm_lon_deg(lon + lon_delta_deg)
        return (min_x, max_x, min_y, max_y)

    @staticmethod
    def calc_box_by_dist_from_pt_delta_lon_deg(lat: float, lon: float, dist_deg: float) -> float:
        """Half the longitude width of a circle's bounding box.

        Returns 90 when the circle is too close to a pole for the formula.
        """
        if dist_deg == 0:
            return 0.0
        lat_rad = DistanceUtils.to_radians(lat)
        dist_rad = DistanceUtils.to_radians(dist_deg)
        cos_lat = math.cos(lat_rad)
        if cos_lat == 0:
            return 90.0
        ratio = math.sin(dist_rad) / cos_lat
        if math.isnan(ratio) or abs(ratio) > 1:
            return 90.0
        return DistanceUtils.to_degrees(math.asin(ratio))

    @staticmethod
    def calc_box_by_dist_from_pt_lat_horiz_axis_deg(lat: float, lon: float, dist_deg: float) -> float:
        """Latitude of a circle's widest point (where its bbox touches east and west).

        On a sphere this lies poleward of the center. Returns ±90 when the
        circle reaches a pole or rounding leaves asin's domain.

        Args:
            lat: Center latitude (degrees)
            lon: Center longitude (degrees), unused on a sphere
            dist_deg: Radius in degrees of arc

        Returns:
            Latitude in degrees.
        """
        if dist_deg == 0:
            return lat
        # Exact at the poles; the formula gives ±89.9999...
        if lat + dist_deg >= 90:
            return 90.0
        if lat - dist_deg <= -90:
            return -90.0

        lat_rad = DistanceUtils.to_radians(lat)
        dist_rad = DistanceUtils.to_radians(dist_deg)
        ratio = math.sin(lat_rad) / math.cos(dist_rad)
        if -1 <= ratio <= 1:
            return DistanceUtils.to_degrees(math.asin(ratio))
        if lat > 0:
            return 90.0
        if lat < 0:
            return -90.0
        return lat

    @staticmethod
    def calc_lon_degrees_at_lat(lat: float, dist: float) -> float:
        """Longitude span covered by travelling dist degrees due east from lat.

        Point-on-bearing specialised for a bearing of 90 degrees.
        """
        distance_rad = DistanceUtils.to_radians(dist)
        start_lat = DistanceUtils.to_radians(lat)
        cos_ang_dist = math.cos(distance_rad)
        cos_start_lat = math.cos(start_lat)
        sin_ang_dist = math.sin(distance_rad)
        sin_start_lat = math.sin(start_lat)
        lon_delta = math.atan2(
            sin_ang_dist * cos_start_lat,
            cos_ang_dist * (1 - sin_start_lat * sin_start_lat),
        )
        return DistanceUtils.to_degrees(lon_delta)

    @staticmethod
    def dist_haversine_rad(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
        """Great-circle distance using the Haversine formula.

        Args:
            lat1: Latitude of first point (radians)
            lon1: Longitude of first point (radians)
            lat2: Latitude of second point (radians)
            lon2: Longitude of second point (radians)

        Returns:
            Angular distance in radians.
        """
        if lat1 == lat2 and lon1 == lon2:
            return 0.0
        hsin_x = math.sin((lon1 - lon2) * 0.5)
        hsin_y = math.sin((lat1 - lat2) * 0.5)
        h = hsin_y * hsin_y + math.cos(lat1) * math.cos(lat2) * hsin_x * hsin_x
        h = min(1.0, h)
        return 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))

    @staticmethod
    def dist_law_of_cosines_rad(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
        """Great-circle distance using the spherical Law of Cosines.

        Poorly conditioned for very small distances; prefer Haversine there.
        """
        if lat1 == lat2 and lon1 == lon2:
            return 0.0
        # cos(x) == cos(-x), so dateline crossing needs no care
        d_lon = lon2 - lon1
        a = DEG_90_AS_RADIANS - lat1
        c = DEG_90_AS_RADIANS - lat2
        cos_b = math.cos(a) * math.cos(c) + math.sin(a) * math.sin(c) * math.cos(d_lon)
        if cos_b < -1.0:
            return math.pi
        if cos_b >= 1.0:
            return 0.0
        return math.acos(cos_b)

    @staticmethod
    def dist_vincenty_rad(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
        """Great-circle distance using the Vincenty formula for a sphere.

        Well conditioned at all distances, including antipodes.
        """
        if lat1 == lat2 and lon1 == lon2:
            return 0.0
        cos_lat1 = math.cos(lat1)
        cos_lat2 = math.cos(lat2)
        sin_lat1 = math.sin(lat1)
        sin_lat2 = math.sin(lat2)
        d_lon = lon2 - lon1
        cos_d_lon = math.cos(d_lon)
        sin_d_lon = math.sin(d_lon)

        a = cos_lat2 * sin_d_lon
        b = cos_lat1 * sin_lat2 - sin_lat1 * cos_lat2 * cos_d_lon
        c = sin_lat1 * sin_lat2 + cos_lat1 * cos_lat2 * cos_d_lon
        return math.atan2(math.sqrt(a * a + b * b), c)

    @staticmethod
    def dist_haversine_rad_array(
        lat1: float,
        lon1: float,
        lats2: np.ndarray,
        lons2: np.ndarray,
    ) -> np.ndarray:
        """Vectorized Haversine from one point to many, in radians."""
        hsin_x = np.sin((lon1 - lons2) * 0.5)
        hsin_y = np.sin((lat1 - lats2) * 0.5)
        h = hsin_y * hsin_y + np.cos(lat1) * np.cos(lats2) * hsin_x * hsin_x
        h = np.minimum(h, 1.0)
        return 2 * np.arctan2(np.sqrt(h), np.sqrt(1 - h))

    @staticmethod
    def dist_law_of_cosines_rad_array(
        lat1: float,
        lon1: float,
        lats2: np.ndarray,
        lons2: np.ndarray,
    ) -> np.ndarray:
        """Vectorized Law of Cosines from one point to many, in radians."""
        a = DEG_90_AS_RADIANS - lat1
        c = DEG_90_AS_RADIANS - lats2
        cos_b = np.cos(a) * np.cos(c) + np.sin(a) * np.sin(c) * np.cos(lons2 - lon1)
        return np.arccos(np.clip(cos_b, -1.0, 1.0))

    @staticmethod
    def dist_vincenty_rad_array(
        lat1: float,
        lon1: float,
        lats2: np.ndarray,
        lons2: np.ndarray,
    ) -> np.ndarray:
        """Vectorized Vincenty (sphere) from one point to many, in radians."""
        d_lon = lons2 - lon1
        cos_lat2 = np.cos(lats2)
        sin_lat2 = np.sin(lats2)
        a = cos_lat2 * np.sin(d_lon)
        b = math.cos(lat1) * sin_lat2 - math.sin(lat1) * cos_lat2 * np.cos(d_lon)
        c = math.sin(lat1) * sin_lat2 + math.cos(lat1) * cos_lat2 * np.cos(d_lon)
        return np.arctan2(np.sqrt(a * a + b * b), c)
