"""Shape text formats: WKT with ENVELOPE and BUFFER extensions."""

from spatial_shapes.io.wkt import from_shapely, read_shape, write_shape

__all__ = [
    "read_shape",
    "write_shape",
    "from_shapely",
]
