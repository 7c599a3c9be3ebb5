"""Tests for ShapeCollection.

Tests: bounding box across the dateline, relation folding, area capping, sequence protocol
"""

import logging
import math

import pytest

from spatial_shapes.constants import CollectionConfig
from spatial_shapes.context import SpatialContext
from spatial_shapes.core.spatial_relation import SpatialRelation
from spatial_shapes.model.point import Point
from spatial_shapes.model.rectangle import Rectangle
from spatial_shapes.model.shape_collection import ShapeCollection


def bounds(rect: Rectangle) -> tuple[float, float, float, float]:
    return (rect.min_x, rect.max_x, rect.min_y, rect.max_y)


@pytest.fixture
def two_boxes(plane_ctx: SpatialContext) -> ShapeCollection:
    """[0,10]x[0,10] and [20,30]x[0,10]."""
    return plane_ctx.make_collection([plane_ctx.make_rectangle(0, 10, 0, 10), plane_ctx.make_rectangle(20, 30, 0, 10)])


class TestCollectionBoundingBox:
    """compute_bounding_box - minimal box over members."""

    def test_plane(self, two_boxes: ShapeCollection) -> None:
        """Plain min/max."""
        assert bounds(two_boxes.bounding_box) == (0.0, 30.0, 0.0, 10.0)
        assert two_boxes.center == Point(15.0, 5.0)

    def test_hemispheres_make_world(self, geo_ctx: SpatialContext) -> None:
        """West and east hemispheres together span all longitudes."""
        coll = geo_ctx.make_collection(
            [geo_ctx.make_rectangle(-180, 0, -90, 90), geo_ctx.make_rectangle(0, 180, -90, 90)]
        )
        assert bounds(coll.bounding_box) == (-180.0, 180.0, -90.0, 90.0)

    def test_dateline_members_wrap(self, geo_ctx: SpatialContext) -> None:
        """Boxes either side of 180 give a narrow crossing box, not the world."""
        coll = geo_ctx.make_collection(
            [geo_ctx.make_rectangle(170, 175, 0, 1), geo_ctx.make_rectangle(-175, -170, 0, 1)]
        )
        assert bounds(coll.bounding_box) == (170.0, -170.0, 0.0, 1.0)
        assert coll.relate(geo_ctx.make_point(-172, 0.5)) is SpatialRelation.CONTAINS
        assert coll.relate(geo_ctx.make_point(180, 0.5)) is SpatialRelation.DISJOINT

    def test_empty_members_skipped(self, plane_ctx: SpatialContext) -> None:
        """NaN shapes don't stretch the box."""
        coll = plane_ctx.make_collection([Point(math.nan, math.nan, plane_ctx), plane_ctx.make_rectangle(0, 10, 0, 10)])
        assert bounds(coll.bounding_box) == (0.0, 10.0, 0.0, 10.0)

    def test_empty_collection(self, plane_ctx: SpatialContext, unit_square: Rectangle) -> None:
        """No members: empty box, DISJOINT to everything."""
        coll = plane_ctx.make_collection([])
        assert coll.is_empty
        assert len(coll) == 0
        assert coll.bounding_box.is_empty
        assert coll.relate(unit_square) is SpatialRelation.DISJOINT


class TestCollectionRelate:
    """relate - bbox first, then combine() over members."""

    @pytest.mark.parametrize(
        "rect,expected",
        [
            ((2, 3, 2, 3), SpatialRelation.CONTAINS),
            ((5, 25, 2, 3), SpatialRelation.INTERSECTS),
            ((12, 18, 2, 3), SpatialRelation.DISJOINT),
            ((50, 60, 0, 10), SpatialRelation.DISJOINT),
            ((-5, 40, -5, 15), SpatialRelation.WITHIN),
        ],
    )
    def test_rectangles(
        self,
        plane_ctx: SpatialContext,
        two_boxes: ShapeCollection,
        rect: tuple[float, float, float, float],
        expected: SpatialRelation,
    ) -> None:
        """Collection vs rectangle, and the transpose."""
        r = plane_ctx.make_rectangle(*rect)
        assert two_boxes.relate(r) is expected
        assert r.relate(two_boxes) is expected.transpose()

    def test_points(self, plane_ctx: SpatialContext, two_boxes: ShapeCollection) -> None:
        """Inside a member, or in the gap between members."""
        assert two_boxes.relate(plane_ctx.make_point(5, 5)) is SpatialRelation.CONTAINS
        assert two_boxes.relate(plane_ctx.make_point(15, 5)) is SpatialRelation.DISJOINT
        assert plane_ctx.make_point(25, 5).relate(two_boxes) is SpatialRelation.WITHIN

    def test_point_on_wrapped_bbox_edge(self, geo_ctx: SpatialContext) -> None:
        """A point a member contains passes the dateline-crossing bbox check."""
        edge = -177.0238620954515
        coll = geo_ctx.make_collection(
            [
                geo_ctx.make_rectangle(145.72783487298506, 170.87914773565674, 83.17, 90),
                geo_ctx.make_rectangle(edge, edge, -81.93, -34.95),
            ]
        )
        point = geo_ctx.make_point(edge, -50)
        assert coll[1].relate(point) is SpatialRelation.CONTAINS
        assert coll.bounding_box.relate(point) is SpatialRelation.CONTAINS
        assert coll.relate(point) is SpatialRelation.CONTAINS

    def test_mutual_disjoint_check(self, plane_ctx: SpatialContext) -> None:
        """Overlapping members turn CONTAINS short-circuiting off."""
        a = plane_ctx.make_rectangle(0, 10, 0, 10)
        apart = plane_ctx.make_rectangle(20, 30, 0, 10)
        overlapping = plane_ctx.make_rectangle(5, 15, 0, 10)
        assert ShapeCollection([a, apart], plane_ctx, check_mutual_disjoint=True).relate_contains_short_circuits
        assert not ShapeCollection([a, overlapping], plane_ctx, check_mutual_disjoint=True).relate_contains_short_circuits
        assert ShapeCollection([a, overlapping], plane_ctx).relate_contains_short_circuits

    def test_large_mutual_disjoint_check_warns(
        self, plane_ctx: SpatialContext, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        """The quadratic check logs a warning past the configured size."""
        monkeypatch.setattr(CollectionConfig, "MUTUAL_DISJOINT_WARN_SIZE", 2)
        points = [plane_ctx.make_point(i, 0) for i in range(3)]
        with caplog.at_level(logging.WARNING, logger="spatial_shapes.model.shape_collection"):
            coll = ShapeCollection(points, plane_ctx, check_mutual_disjoint=True)
        assert coll.relate_contains_short_circuits
        assert "O(n^2)" in caplog.text


class TestCollectionProperties:
    """Area, buffering, sequence behavior, equality and repr."""

    def test_area_sums_members(self, two_boxes: ShapeCollection) -> None:
        """Disjoint members add up."""
        assert two_boxes.get_area() == 200.0
        assert two_boxes.has_area

    def test_area_capped_by_bbox(self, plane_ctx: SpatialContext) -> None:
        """Overlapping copies can't exceed the bounding box area."""
        coll = plane_ctx.make_collection([plane_ctx.make_rectangle(0, 2, 0, 2) for _ in range(3)])
        assert coll.get_area() == 4.0

    def test_points_have_no_area(self, plane_ctx: SpatialContext) -> None:
        """Only areal members count."""
        coll = plane_ctx.make_collection([plane_ctx.make_point(0, 0), plane_ctx.make_point(1, 1)])
        assert not coll.has_area

    def test_buffered(self, plane_ctx: SpatialContext, two_boxes: ShapeCollection) -> None:
        """Every member is buffered."""
        buffered = two_boxes.get_buffered(1.0, plane_ctx)
        assert isinstance(buffered, ShapeCollection)
        assert bounds(buffered[0]) == (-1.0, 11.0, -1.0, 11.0)
        assert bounds(buffered.bounding_box) == (-1.0, 31.0, -1.0, 11.0)

    def test_sequence_protocol(self, plane_ctx: SpatialContext, two_boxes: ShapeCollection) -> None:
        """len, indexing, slicing, iteration and membership."""
        first = plane_ctx.make_rectangle(0, 10, 0, 10)
        assert len(two_boxes) == 2
        assert two_boxes[0] == first
        assert two_boxes[-1] == plane_ctx.make_rectangle(20, 30, 0, 10)
        assert two_boxes[:1] == [first]
        assert list(two_boxes) == two_boxes.shapes
        assert first in two_boxes

    def test_equality(self, plane_ctx: SpatialContext, two_boxes: ShapeCollection) -> None:
        """Members in order decide equality."""
        same = plane_ctx.make_collection(list(two_boxes.shapes))
        assert two_boxes == same
        assert hash(two_boxes) == hash(same)
        assert two_boxes != plane_ctx.make_collection(list(reversed(two_boxes.shapes)))

    def test_repr_truncated(self, plane_ctx: SpatialContext) -> None:
        """Long collections end with the member count."""
        coll = plane_ctx.make_collection([plane_ctx.make_point(i, i) for i in range(50)])
        text = repr(coll)
        assert text.startswith("ShapeCollection(Pt(x=0.0,y=0.0), ")
        assert text.endswith(" ...50)")
