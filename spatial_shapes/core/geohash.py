"""Geohash encoding and decoding.

A geohash interleaves longitude and latitude bisection bits, longitude first,
and writes them five at a time in a base-32 alphabet. Each extra character
shrinks the cell by 8 in one axis and 4 in the other, alternating.

Reference: en.wikipedia.org/wiki/Geohash
"""

from typing import TYPE_CHECKING

from spatial_shapes.constants import GeohashConfig
from spatial_shapes.exceptions import ShapeParseError

if TYPE_CHECKING:
    from spatial_shapes.context import SpatialContext
    from spatial_shapes.model.point import Point
    from spatial_shapes.model.rectangle import Rectangle

_BASE_32_INDEX = {char: i for i, char in enumerate(GeohashConfig.BASE_32)}


def _cell_sizes(first: float, odd_divisor: int, even_divisor: int) -> list[float]:
    sizes = [first]
    even = False
    for _ in range(GeohashConfig.MAX_PRECISION):
        sizes.append(sizes[-1] / (even_divisor if even else odd_divisor))
        even = not even
    return sizes


# Cell size in degrees by hash length, index 0 being the whole world
_HASH_LEN_TO_LAT_HEIGHT = _cell_sizes(180.0, 4, 8)
_HASH_LEN_TO_LON_WIDTH = _cell_sizes(360.0, 8, 4)


class GeohashUtils:
    """Geohash encode/decode between strings and points or cells."""

    @staticmethod
    def encode_lat_lon(latitude: float, longitude: float, precision: int = GeohashConfig.DEFAULT_PRECISION) -> str:
        """Geohash of the cell containing (latitude, longitude).

        Args:
            latitude: Latitude in degrees
            longitude: Longitude in degrees
            precision: Number of characters

        Returns:
            Lower-case geohash of length precision.
        """
        lat_interval = [-90.0, 90.0]
        lon_interval = [-180.0, 180.0]
        chars = []
        is_even = True
        bit = 0
        ch = 0
        while len(chars) < precision:
            if is_even:
                mid = (lon_interval[0] + lon_interval[1]) / 2
                if longitude > mid:
                    ch |= GeohashConfig.BITS[bit]
                    lon_interval[0] = mid
                else:
                    lon_interval[1] = mid
            else:
                mid = (lat_interval[0] + lat_interval[1]) / 2
                if latitude > mid:
                    ch |= GeohashConfig.BITS[bit]
                    lat_interval[0] = mid
                else:
                    lat_interval[1] = mid
            is_even = not is_even
            if bit < 4:
                bit += 1
            else:
                chars.append(GeohashConfig.BASE_32[ch])
                bit = 0
                ch = 0
        return "".join(chars)

    @staticmethod
    def decode(geohash: str, ctx: "SpatialContext") -> "Point":
        """Center point of the geohash cell."""
        rect = GeohashUtils.decode_boundary(geohash, ctx)
        latitude = (rect.min_y + rect.max_y) / 2
        longitude = (rect.min_x + rect.max_x) / 2
        return ctx.make_point(longitude, latitude)

    @staticmethod
    def decode_boundary(geohash: str, ctx: "SpatialContext") -> "Rectangle":
        """Cell covered by the geohash; case-insensitive.

        Raises:
            ShapeParseError: If geohash contains a character outside the alphabet
        """
        min_y, max_y, min_x, max_x = -90.0, 90.0, -180.0, 180.0
        is_even = True
        for char in geohash.lower():
            cd = _BASE_32_INDEX.get(char)
            if cd is None:
                raise ShapeParseError(f"Invalid geohash character '{char}'", geohash)
            for mask in GeohashConfig.BITS:
                if is_even:
                    if cd & mask:
                        min_x = (min_x + max_x) / 2
                    else:
                        max_x = (min_x + max_x) / 2
                else:
                    if cd & mask:
                        min_y = (min_y + max_y) / 2
                    else:
                        max_y = (min_y + max_y) / 2
                is_even = not is_even
        return ctx.make_rectangle(min_x, max_x, min_y, max_y)

    @staticmethod
    def get_sub_geohashes(base_geohash: str) -> list[str]:
        """The 32 child cells of base_geohash, in sorted order."""
        return [base_geohash + char for char in GeohashConfig.BASE_32]

    @staticmethod
    def lookup_degrees_size_for_hash_len(hash_len: int) -> tuple[float, float]:
        """(latitude height, longitude width) in degrees of a cell of hash_len characters."""
        return (_HASH_LEN_TO_LAT_HEIGHT[hash_len], _HASH_LEN_TO_LON_WIDTH[hash_len])

    @staticmethod
    def lookup_hash_len_for_width_height(lon_err: float, lat_err: float) -> int:
        """Shortest hash length whose cells are smaller than both errors.

        Returns MAX_PRECISION if no length is fine enough.
        """
        for length in range(1, GeohashConfig.MAX_PRECISION):
            if _HASH_LEN_TO_LAT_HEIGHT[length] < lat_err and _HASH_LEN_TO_LON_WIDTH[length] < lon_err:
                return length
        return GeohashConfig.MAX_PRECISION
