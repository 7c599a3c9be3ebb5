"""Shape classes.

Every shape implements the Shape interface (relate, bounding_box, center,
area, buffering):
- Point: A location; NaN coordinates mark the empty point
- Rectangle: Axis-aligned, may cross the dateline in geo mode
- Circle / GeoCircle: Planar and spherical circles
- InfBufLine: Infinite buffered line, building block of BufferedLine
- BufferedLine: Segment with a buffer
- BufferedLineString: Polyline with a buffer
- ShapeCollection: Sequence of shapes acting as one

Build shapes through a SpatialContext rather than directly.
"""

from spatial_shapes.model.buffered_line import BufferedLine
from spatial_shapes.model.buffered_line_string import BufferedLineString
from spatial_shapes.model.circle import Circle
from spatial_shapes.model.geo_circle import GeoCircle
from spatial_shapes.model.inf_buf_line import InfBufLine
from spatial_shapes.model.point import Point
from spatial_shapes.model.rectangle import Rectangle
from spatial_shapes.model.shape import Shape
from spatial_shapes.model.shape_collection import ShapeCollection

__all__ = [
    "Shape",
    "Point",
    "Rectangle",
    "Circle",
    "GeoCircle",
    "InfBufLine",
    "BufferedLine",
    "BufferedLineString",
    "ShapeCollection",
]
