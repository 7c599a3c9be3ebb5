"""WKT reading and writing for shapes.

Standard WKT (POINT, LINESTRING, POLYGON, MULTI*) is parsed by shapely and
converted to shapes of a SpatialContext. Two extensions cover shapes WKT
cannot express:
- ENVELOPE(minX, maxX, maxY, minY): a rectangle, which may cross the dateline
- BUFFER(shape, distance): shape.get_buffered(distance), e.g. a circle from a point

GEOMETRYCOLLECTION is split here rather than by shapely so that its members
may use the extensions.
"""

import math
import re
from typing import TYPE_CHECKING

import shapely.wkt
from shapely.errors import ShapelyError
from shapely.geometry import LineString as ShapelyLineString
from shapely.geometry import Point as ShapelyPoint
from shapely.geometry import box
from shapely.geometry.base import BaseGeometry, BaseMultipartGeometry

from spatial_shapes.constants import WktConfig
from spatial_shapes.exceptions import ShapeParseError
from spatial_shapes.model.buffered_line import BufferedLine
from spatial_shapes.model.buffered_line_string import BufferedLineString
from spatial_shapes.model.circle import Circle
from spatial_shapes.model.point import Point
from spatial_shapes.model.rectangle import Rectangle
from spatial_shapes.model.shape import Shape
from spatial_shapes.model.shape_collection import ShapeCollection

if TYPE_CHECKING:
    from spatial_shapes.context import SpatialContext

_SHAPE_NAME = re.compile(r"^\s*([A-Za-z]+)\s*(.*?)\s*$", re.DOTALL)


def read_shape(ctx: "SpatialContext", text: str) -> Shape:
    """Parse WKT text into a shape of ctx.

    Args:
        ctx: Context building the shapes
        text: WKT, optionally using ENVELOPE and BUFFER

    Returns:
        Point, Rectangle, Circle, BufferedLineString or ShapeCollection.

    Raises:
        ShapeParseError: If the text is not valid WKT or has an unsupported geometry
        InvalidShapeError: If coordinates are outside ctx's world bounds
    """
    match = _SHAPE_NAME.match(text)
    if match is None:
        raise ShapeParseError("Expected a shape name", text)
    name = match.group(1).upper()
    body = match.group(2)

    if name == "ENVELOPE":
        if body.upper() == "EMPTY":
            return Rectangle(math.nan, math.nan, math.nan, math.nan, ctx)
        min_x, max_x, max_y, min_y = _parse_numbers(_unwrap_parens(body, text), 4, text)
        return ctx.make_rectangle(min_x, max_x, min_y, max_y)

    if name == "BUFFER":
        args = _split_top_level(_unwrap_parens(body, text))
        if len(args) != 2:
            raise ShapeParseError("BUFFER expects a shape and a distance", text)
        (distance,) = _parse_numbers(args[1], 1, text)
        return read_shape(ctx, args[0]).get_buffered(distance, ctx)

    if name == "GEOMETRYCOLLECTION":
        if body.upper() == "EMPTY":
            return ctx.make_collection([])
        members = _split_top_level(_unwrap_parens(body, text))
        return ctx.make_collection([read_shape(ctx, member) for member in members])

    try:
        geom = shapely.wkt.loads(text)
    except (ShapelyError, ValueError) as e:
        raise ShapeParseError(f"Invalid WKT ({e})", text) from e
    return from_shapely(ctx, geom, text)


def from_shapely(ctx: "SpatialContext", geom: BaseGeometry, text: str = "") -> Shape:
    """Convert a shapely geometry into a shape of ctx.

    Polygons must be axis-aligned rectangles without holes.

    Raises:
        ShapeParseError: For other polygons and unsupported geometry types
    """
    geom_type = geom.geom_type
    if geom_type == "Point":
        if geom.is_empty:
            return Point(math.nan, math.nan, ctx)
        return ctx.make_point(geom.x, geom.y)

    if geom_type == "LineString":
        return ctx.make_line_string([ctx.make_point(x, y) for x, y, *_ in geom.coords])

    if geom_type == "Polygon":
        if geom.is_empty:
            return Rectangle(math.nan, math.nan, math.nan, math.nan, ctx)
        if geom.interiors or not geom.equals(box(*geom.bounds)):
            raise ShapeParseError("Only axis-aligned rectangular polygons are supported", text)
        min_x, min_y, max_x, max_y = geom.bounds
        return ctx.make_rectangle(min_x, max_x, min_y, max_y)

    if isinstance(geom, BaseMultipartGeometry):
        return ctx.make_collection([from_shapely(ctx, part, text) for part in geom.geoms])

    raise ShapeParseError(f"Unsupported geometry type {geom_type}", text)


def write_shape(shape: Shape) -> str:
    """Format a shape as WKT text that read_shape parses back.

    Rectangles are written as ENVELOPE, circles and buffered lines as BUFFER.
    A lone BufferedLine reads back as a two point BufferedLineString.

    Raises:
        TypeError: For shape types without a text form
    """
    if isinstance(shape, Point):
        if shape.is_empty:
            return "POINT EMPTY"
        return _dumps(ShapelyPoint(shape.x, shape.y))

    if isinstance(shape, Rectangle):
        if shape.is_empty:
            return "ENVELOPE EMPTY"
        coords = ", ".join(_fmt(v) for v in (shape.min_x, shape.max_x, shape.max_y, shape.min_y))
        return f"ENVELOPE({coords})"

    if isinstance(shape, Circle):
        return f"BUFFER({write_shape(shape.center)}, {_fmt(shape.radius)})"

    if isinstance(shape, BufferedLineString):
        points = shape.points
        if not points:
            line_text = "LINESTRING EMPTY"
        else:
            if len(points) == 1:
                points = points * 2
            line_text = _dumps(ShapelyLineString([(p.x, p.y) for p in points]))
        if shape.buf == 0:
            return line_text
        return f"BUFFER({line_text}, {_fmt(shape.buf)})"

    if isinstance(shape, BufferedLine):
        line_text = _dumps(ShapelyLineString([(shape.a.x, shape.a.y), (shape.b.x, shape.b.y)]))
        return f"BUFFER({line_text}, {_fmt(shape.buf)})"

    if isinstance(shape, ShapeCollection):
        if shape.is_empty:
            return "GEOMETRYCOLLECTION EMPTY"
        return f"GEOMETRYCOLLECTION ({', '.join(write_shape(s) for s in shape)})"

    raise TypeError(f"Cannot write {type(shape).__name__} as WKT")


def _dumps(geom: BaseGeometry) -> str:
    return shapely.wkt.dumps(geom, trim=True, rounding_precision=WktConfig.COORDINATE_DECIMALS)


def _fmt(value: float) -> str:
    text = f"{round(value, WktConfig.COORDINATE_DECIMALS) + 0.0:.{WktConfig.COORDINATE_DECIMALS}f}"
    return text.rstrip("0").rstrip(".")


def _unwrap_parens(body: str, text: str) -> str:
    """Contents of a parenthesized body, "(...)" -> "..."."""
    body = body.strip()
    if not body.startswith("(") or not body.endswith(")"):
        raise ShapeParseError("Expected parentheses", text)
    return body[1:-1]


def _split_top_level(body: str) -> list[str]:
    """Split on commas that are not nested inside parentheses."""
    parts = []
    depth = 0
    start = 0
    for i, char in enumerate(body):
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif char == "," and depth == 0:
            parts.append(body[start:i].strip())
            start = i + 1
    parts.append(body[start:].strip())
    return parts


def _parse_numbers(body: str, count: int, text: str) -> list[float]:
    parts = [p.strip() for p in body.split(",")]
    if len(parts) != count:
        raise ShapeParseError(f"Expected {count} comma separated numbers", text)
    try:
        return [float(p) for p in parts]
    except ValueError as e:
        raise ShapeParseError(f"Invalid number ({e})", text) from e
