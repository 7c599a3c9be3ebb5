"""ShapeCollection - Ordered, heterogeneous collection of shapes acting as one shape.

The collection holds the list it is given by reference. Its bounding box is
the minimal box over the members; in geo mode the X extent may wrap the
dateline instead of jumping to the whole world.

Relations fold the member relations with SpatialRelation.combine. Stopping
at the first CONTAINS is fast but order-dependent when members overlap.
"""

import logging
import math
from collections.abc import Sequence
from typing import TYPE_CHECKING, Optional, Union

from spatial_shapes.constants import CollectionConfig
from spatial_shapes.core.range import Range
from spatial_shapes.core.spatial_relation import SpatialRelation
from spatial_shapes.model.point import Point
from spatial_shapes.model.rectangle import Rectangle
from spatial_shapes.model.shape import Shape

if TYPE_CHECKING:
    from spatial_shapes.context import SpatialContext

logger = logging.getLogger(__name__)


class ShapeCollection(Sequence, Shape):
    """A read-only sequence of shapes that is itself a shape.

    Attributes:
        shapes: Member shapes (the caller's list, not a copy)
        relate_contains_short_circuits: Whether relate() stops at the first
            member that CONTAINS the other shape

    Example:
        coll = ctx.make_collection([ctx.make_point(1, 2), ctx.make_rectangle(0, 5, 0, 5)])
    """

    def __init__(
        self,
        shapes: list[Shape],
        ctx: "SpatialContext",
        check_mutual_disjoint: bool = False,
    ) -> None:
        """Initialize the collection and compute its bounding box.

        Args:
            shapes: Member shapes, owned by reference
            ctx: Context for the bounding box
            check_mutual_disjoint: Run the O(n²) disjointness check and only
                short-circuit on CONTAINS if no two members intersect
        """
        self.shapes = shapes
        self.ctx = ctx
        self._bbox = self.compute_bounding_box(shapes, ctx)
        if check_mutual_disjoint:
            if len(shapes) > CollectionConfig.MUTUAL_DISJOINT_WARN_SIZE:
                logger.warning(f"Mutual disjoint check on {len(shapes)} shapes is O(n^2)")
            self.relate_contains_short_circuits = self.compute_mutual_disjoint(shapes)
            logger.debug(f"Collection of {len(shapes)} mutually disjoint: {self.relate_contains_short_circuits}")
        else:
            self.relate_contains_short_circuits = CollectionConfig.RELATE_CONTAINS_SHORT_CIRCUITS

    @staticmethod
    def compute_bounding_box(shapes: list[Shape], ctx: "SpatialContext") -> Rectangle:
        """Minimal box over non-empty members; an empty box if there are none."""
        x_range: Optional[Range] = None
        min_y = math.inf
        max_y = -math.inf
        for shape in shapes:
            if shape.is_empty:
                continue
            r = shape.bounding_box
            x_range2 = Range.x_range(r, ctx)
            x_range = x_range2 if x_range is None else x_range.expand_to(x_range2)
            min_y = min(min_y, r.min_y)
            max_y = max(max_y, r.max_y)
        if x_range is None:
            return Rectangle(math.nan, math.nan, math.nan, math.nan, ctx)
        return ctx.make_rectangle(x_range.min, x_range.max, min_y, max_y)

    @staticmethod
    def compute_mutual_disjoint(shapes: list[Shape]) -> bool:
        """True if no two shapes intersect. O(n²)."""
        for i in range(1, len(shapes)):
            shape_i = shapes[i]
            for shape_j in shapes[:i]:
                if shape_j.relate(shape_i).intersects():
                    return False
        return True

    def __getitem__(self, index: Union[int, slice]) -> Union[Shape, list[Shape]]:
        return self.shapes[index]

    def __len__(self) -> int:
        return len(self.shapes)

    @property
    def is_empty(self) -> bool:
        return not self.shapes

    @property
    def bounding_box(self) -> Rectangle:
        return self._bbox

    @property
    def center(self) -> Point:
        return self._bbox.center

    @property
    def has_area(self) -> bool:
        return any(shape.has_area for shape in self.shapes)

    def get_area(self, ctx: Optional["SpatialContext"] = None) -> float:
        """Sum of member areas, capped at the bounding box area (members may overlap)."""
        max_area = self._bbox.get_area(ctx)
        total = 0.0
        for shape in self.shapes:
            total += shape.get_area(ctx)
            if total >= max_area:
                return max_area
        return total

    def get_buffered(self, distance: float, ctx: "SpatialContext") -> Shape:
        return ctx.make_collection([shape.get_buffered(distance, ctx) for shape in self.shapes])

    def relate(self, other: Shape) -> SpatialRelation:
        """Fold member relations to other with combine().

        Algorithm:
        1. The bounding box decides DISJOINT and WITHIN outright
        2. Fold member relations, stopping at the first INTERSECTS
        3. Also stop at CONTAINS when other is a point, or short-circuiting is on
        """
        if self.is_empty or other.is_empty:
            return SpatialRelation.DISJOINT
        bbox_sect = self._bbox.relate(other)
        if bbox_sect in (SpatialRelation.DISJOINT, SpatialRelation.WITHIN):
            return bbox_sect

        contains_will_short_circuit = isinstance(other, Point) or self.relate_contains_short_circuits
        sect: Optional[SpatialRelation] = None
        for shape in self.shapes:
            next_sect = shape.relate(other)
            sect = next_sect if sect is None else sect.combine(next_sect)
            if sect is SpatialRelation.INTERSECTS:
                return SpatialRelation.INTERSECTS
            if sect is SpatialRelation.CONTAINS and contains_will_short_circuit:
                return SpatialRelation.CONTAINS
        assert sect is not None
        return sect

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, ShapeCollection):
            return NotImplemented
        return type(self) is type(other) and list(self.shapes) == list(other.shapes)

    def __hash__(self) -> int:
        return hash(tuple(self.shapes))

    def __repr__(self) -> str:
        text = "ShapeCollection("
        for i, shape in enumerate(self.shapes):
            if i > 0:
                text += ", "
            text += repr(shape)
            if len(text) > CollectionConfig.REPR_MAX_LEN:
                text += f" ...{len(self.shapes)}"
                break
        return text + ")"
