"""Tests for GeoCircle.

Tests: relations to rectangles near the dateline and the poles, inverse circles
Focus: Circles larger than a hemisphere and circles wrapping a pole
"""

import math

import pytest

from spatial_shapes.context import SpatialContext
from spatial_shapes.core.spatial_relation import SpatialRelation
from spatial_shapes.model.geo_circle import GeoCircle
from spatial_shapes.model.point import Point


class TestGeoCircleBasics:
    """Construction, bbox and the widest latitude."""

    def test_radius_clamped_to_180(self, geo_ctx: SpatialContext) -> None:
        """Anything past the antipode is the whole globe."""
        circle = geo_ctx.make_circle(0, 0, 200)
        assert circle.radius == 180.0
        box = circle.bounding_box
        assert (box.min_x, box.max_x, box.min_y, box.max_y) == (-180.0, 180.0, -90.0, 90.0)

    def test_horizontal_axis_poleward(self, geo_ctx: SpatialContext) -> None:
        """A northern circle is widest north of its center, inside its bbox."""
        circle = geo_ctx.make_circle(0, 45, 10)
        assert 45.0 < circle.y_axis < circle.bounding_box.max_y
        assert circle.x_axis == 0.0

    def test_empty(self, geo_ctx: SpatialContext) -> None:
        """An empty center has no inverse and relates to nothing."""
        empty = GeoCircle(Point(math.nan, math.nan, geo_ctx), 10.0, geo_ctx)
        assert empty.is_empty
        assert empty.inverse_circle is None
        assert empty.relate(geo_ctx.make_rectangle(-10, 10, -10, 10)) is SpatialRelation.DISJOINT

    def test_repr_has_kilometers(self, geo_ctx: SpatialContext) -> None:
        """The radius is shown in degrees and kilometers."""
        text = repr(geo_ctx.make_circle(0, 0, 1))
        assert text.startswith("Circle(Pt(x=0.0,y=0.0), d=1.0° 111.")
        assert text.endswith("km)")

    def test_reset_updates_inverse(self, geo_ctx: SpatialContext) -> None:
        """Growing past 90 degrees creates the inverse circle; shrinking drops it."""
        circle = geo_ctx.make_circle(0, 0, 10)
        assert circle.inverse_circle is None
        circle.reset(0.0, 0.0, 120.0)
        assert circle.inverse_circle is not None
        assert circle.inverse_circle.radius == pytest.approx(60.0)
        circle.reset(0.0, 0.0, 30.0)
        assert circle.inverse_circle is None


class TestGeoCircleRelateRectangle:
    """relate(rectangle) on the sphere."""

    def test_hemisphere_contains_small_box(self, geo_ctx: SpatialContext) -> None:
        """A 90° circle at the origin contains a box around the origin."""
        circle = geo_ctx.make_circle(0, 0, 90)
        assert circle.relate(geo_ctx.make_rectangle(-10, 10, -10, 10)) is SpatialRelation.CONTAINS

    def test_whole_globe_contains_everything(self, geo_ctx: SpatialContext) -> None:
        """Radius 180 contains even a box touching the pole."""
        circle = geo_ctx.make_circle(-64, 32, 180)
        assert circle.relate(geo_ctx.make_rectangle(47, 47, -14, 90)) is SpatialRelation.CONTAINS

    def test_dateline_circle(self, geo_ctx: SpatialContext) -> None:
        """A circle at 175°E covers a box and a point just west of the antimeridian."""
        circle = geo_ctx.make_circle(175, 0, 10)
        assert circle.bounding_box.crosses_dateline
        assert circle.relate(geo_ctx.make_rectangle(-179, -177, -1, 1)) is SpatialRelation.CONTAINS
        assert circle.relate(geo_ctx.make_point(-178, 0)) is SpatialRelation.CONTAINS
        assert circle.relate(geo_ctx.make_point(-160, 0)) is SpatialRelation.DISJOINT

    def test_dateline_circle_partial_overlap(self, geo_ctx: SpatialContext) -> None:
        """Some corners in, some out."""
        circle = geo_ctx.make_circle(175, 0, 10)
        assert circle.relate(geo_ctx.make_rectangle(-179, -160, -1, 1)) is SpatialRelation.INTERSECTS


class TestGeoCircleInverse:
    """Circles over 90 degrees relate through the antipodal circle."""

    def test_inverse_circle_at_antipode(self, geo_ctx: SpatialContext) -> None:
        """Radius 135 at the origin has a ~45 degree inverse at (180, 0)."""
        circle = geo_ctx.make_circle(0, 0, 135)
        inverse = circle.inverse_circle
        assert inverse is not None
        assert abs(inverse.center.x) == 180.0
        assert inverse.center.y == pytest.approx(0.0)
        assert inverse.radius == pytest.approx(45.0)
        assert inverse.radius < 45.0

    def test_antipodal_box_disjoint(self, geo_ctx: SpatialContext) -> None:
        """A box around the antipode lies in the hole."""
        circle = geo_ctx.make_circle(0, 0, 135)
        assert circle.relate(geo_ctx.make_rectangle(170, -170, -10, 10)) is SpatialRelation.DISJOINT

    def test_near_box_contained(self, geo_ctx: SpatialContext) -> None:
        """A box around the center is far from the hole."""
        circle = geo_ctx.make_circle(0, 0, 135)
        assert circle.relate(geo_ctx.make_rectangle(-10, 10, -10, 10)) is SpatialRelation.CONTAINS


class TestGeoCircleWrapsPole:
    """A circle whose bbox spans every longitude because it covers a pole."""

    @pytest.mark.parametrize(
        "rect,expected",
        [
            ((-10, 10, 85, 88), SpatialRelation.CONTAINS),
            ((170, 175, 65, 70), SpatialRelation.DISJOINT),
            ((-5, 5, 62, 65), SpatialRelation.CONTAINS),
            ((-5, 5, 55, 65), SpatialRelation.INTERSECTS),
        ],
    )
    def test_cases(
        self, geo_ctx: SpatialContext, rect: tuple[float, float, float, float], expected: SpatialRelation
    ) -> None:
        """Circle at (0, 80) of radius 20, reaching 10 degrees past the pole."""
        circle = geo_ctx.make_circle(0, 80, 20)
        assert circle.bounding_box.width == 360
        assert circle.relate(geo_ctx.make_rectangle(*rect)) is expected

    def test_point_over_pole(self, geo_ctx: SpatialContext) -> None:
        """Points on the far side of the pole are still inside."""
        circle = geo_ctx.make_circle(0, 80, 20)
        assert circle.relate(geo_ctx.make_point(100, 85)) is SpatialRelation.CONTAINS
        assert circle.relate(geo_ctx.make_point(180, 60)) is SpatialRelation.DISJOINT


class TestGeoCircleRelateCircle:
    """Circle-circle relations by great-circle center distance."""

    @pytest.mark.parametrize(
        "other,expected",
        [
            ((5, 0, 2), SpatialRelation.CONTAINS),
            ((30, 0, 5), SpatialRelation.DISJOINT),
            ((15, 0, 10), SpatialRelation.INTERSECTS),
            ((0, 0, 20), SpatialRelation.WITHIN),
        ],
    )
    def test_cases(
        self, geo_ctx: SpatialContext, other: tuple[float, float, float], expected: SpatialRelation
    ) -> None:
        """Against a 10 degree circle at the origin."""
        circle = geo_ctx.make_circle(0, 0, 10)
        assert circle.relate(geo_ctx.make_circle(*other)) is expected
