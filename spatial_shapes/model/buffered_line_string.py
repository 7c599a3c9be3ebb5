"""BufferedLineString - Polyline buffered by a distance.

Made of one BufferedLine per consecutive pair of points, held in a
ShapeCollection that answers every geometric question.
"""

from typing import TYPE_CHECKING, Optional

from spatial_shapes.core.spatial_relation import SpatialRelation
from spatial_shapes.model.buffered_line import BufferedLine
from spatial_shapes.model.point import Point
from spatial_shapes.model.rectangle import Rectangle
from spatial_shapes.model.shape import Shape, coord_key
from spatial_shapes.model.shape_collection import ShapeCollection

if TYPE_CHECKING:
    from spatial_shapes.context import SpatialContext


class BufferedLineString(Shape):
    """Buffered polyline through points.

    N points give N - 1 segments. A single point gives one zero-length
    segment, and no points give an empty shape.

    Attributes:
        segments: ShapeCollection of BufferedLine segments
        buf: Buffer distance
    """

    def __init__(
        self,
        points: list[Point],
        buf: float,
        ctx: "SpatialContext",
        expand_buf_for_longitude_skew: bool = False,
    ) -> None:
        """Build the segments.

        Args:
            points: Control points in order
            buf: Buffer distance
            ctx: Owning context
            expand_buf_for_longitude_skew: Widen each segment's buffer for its
                latitude (geo mode). Over-buffers near joints.
        """
        self.buf = buf
        segments: list[Shape] = []
        prev_point: Optional[Point] = None
        for point in points:
            if prev_point is not None:
                seg_buf = buf
                if expand_buf_for_longitude_skew:
                    seg_buf = BufferedLine.expand_buf_for_longitude_skew(prev_point, point, buf)
                segments.append(BufferedLine(prev_point, point, seg_buf, ctx))
            prev_point = point
        if prev_point is not None and not segments:
            segments.append(BufferedLine(prev_point, prev_point, buf, ctx))
        self.segments = ctx.make_collection(segments)

    @property
    def points(self) -> list[Point]:
        """Control points the line string was built from."""
        if not self.segments:
            return []
        lines = self.segments.shapes
        first: BufferedLine = lines[0]
        if len(lines) == 1 and first.a == first.b:
            return [first.a]
        return [first.a] + [line.b for line in lines]

    @property
    def is_empty(self) -> bool:
        return self.segments.is_empty

    @property
    def bounding_box(self) -> Rectangle:
        return self.segments.bounding_box

    @property
    def center(self) -> Point:
        return self.segments.center

    @property
    def has_area(self) -> bool:
        return self.segments.has_area

    def get_area(self, ctx: Optional["SpatialContext"] = None) -> float:
        return self.segments.get_area(ctx)

    def get_buffered(self, distance: float, ctx: "SpatialContext") -> Shape:
        return ctx.make_buffered_line_string(self.points, self.buf + distance)

    def relate(self, other: Shape) -> SpatialRelation:
        return self.segments.relate(other)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, BufferedLineString):
            return NotImplemented
        return coord_key(self.buf) == coord_key(other.buf) and self.segments == other.segments

    def __hash__(self) -> int:
        return hash((self.segments, coord_key(self.buf)))

    def __repr__(self) -> str:
        pts = ", ".join(f"{p.x} {p.y}" for p in self.points)
        return f"BufferedLineString(buf={self.buf} pts={pts})"
