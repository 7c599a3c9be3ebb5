"""Property-based tests with Hypothesis.

Tests: relation symmetry on the plane and across the dateline, planar
rectangle relations against shapely, bounding boxes containing their shapes,
circle relations against corner distances, destinations staying inside circle
bounding boxes, distance symmetry
"""

import math

import shapely.geometry
from hypothesis import assume, given, settings, strategies as st

from spatial_shapes.context import SpatialContext
from spatial_shapes.core.distance_calculator import Haversine, Vincenty
from spatial_shapes.core.spatial_relation import SpatialRelation
from spatial_shapes.model.buffered_line import BufferedLine
from spatial_shapes.model.circle import Circle
from spatial_shapes.model.point import Point
from spatial_shapes.model.rectangle import Rectangle
from spatial_shapes.model.shape import Shape

# Module-level contexts: Hypothesis can't reuse function-scoped fixtures
GEO = SpatialContext.GEO
PLANE = SpatialContext(geo=False)

longitudes = st.floats(min_value=-179.0, max_value=179.0, allow_nan=False)
latitudes = st.floats(min_value=-89.0, max_value=89.0, allow_nan=False)
bearings = st.floats(min_value=0.0, max_value=360.0, allow_nan=False)


@st.composite
def plane_rects(draw: st.DrawFn) -> Rectangle:
    """Rectangles with integer corners and positive area."""
    min_x = draw(st.integers(min_value=-50, max_value=50))
    min_y = draw(st.integers(min_value=-50, max_value=50))
    width = draw(st.integers(min_value=1, max_value=30))
    height = draw(st.integers(min_value=1, max_value=30))
    return PLANE.make_rectangle(min_x, min_x + width, min_y, min_y + height)


def to_shapely(rect: Rectangle) -> shapely.geometry.Polygon:
    return shapely.geometry.box(rect.min_x, rect.min_y, rect.max_x, rect.max_y)


class TestRelationProperties:
    """Relations agree from both sides and with shapely's predicates."""

    @given(a=plane_rects(), b=plane_rects())
    @settings(max_examples=30)
    def test_rectangle_symmetry(self, a: Rectangle, b: Rectangle) -> None:
        """b.relate(a) is the transpose of a.relate(b) for distinct rectangles."""
        assume(a != b)
        assert b.relate(a) is a.relate(b).transpose()

    @given(a=plane_rects(), b=plane_rects())
    @settings(max_examples=30)
    def test_rectangle_matches_shapely(self, a: Rectangle, b: Rectangle) -> None:
        """CONTAINS/WITHIN are boundary-inclusive covers; DISJOINT is not intersecting."""
        sa = to_shapely(a)
        sb = to_shapely(b)
        relation = a.relate(b)
        if sa.covers(sb):
            assert relation is SpatialRelation.CONTAINS
        elif sb.covers(sa):
            assert relation is SpatialRelation.WITHIN
        elif sa.intersects(sb):
            assert relation is SpatialRelation.INTERSECTS
        else:
            assert relation is SpatialRelation.DISJOINT

    @given(a=plane_rects(), x=st.integers(min_value=-60, max_value=90), y=st.integers(min_value=-60, max_value=90))
    @settings(max_examples=30)
    def test_point_in_rectangle_both_ways(self, a: Rectangle, x: int, y: int) -> None:
        """A point is WITHIN exactly the rectangles that CONTAIN it."""
        p = PLANE.make_point(x, y)
        inside = a.min_x <= x <= a.max_x and a.min_y <= y <= a.max_y
        assert (a.relate(p) is SpatialRelation.CONTAINS) is inside
        assert p.relate(a) is a.relate(p).transpose()


class TestDistanceProperties:
    """Spherical distance and destination properties."""

    @given(lon=longitudes, lat=latitudes, dist=st.floats(min_value=0.0, max_value=180.0), bearing=bearings)
    @settings(max_examples=30)
    def test_destination_inside_circle_bbox(self, lon: float, lat: float, dist: float, bearing: float) -> None:
        """Travelling dist on any bearing stays in the bbox of the circle of radius dist."""
        center = GEO.make_point(lon, lat)
        calc = Haversine()
        dest = calc.point_on_bearing(center, dist, bearing, GEO)
        box = calc.calc_box_by_dist_from_pt(center, dist, GEO)
        # Absorb rounding for destinations on the circle's edge
        assert box.get_buffered(1e-6, GEO).relate(dest) is SpatialRelation.CONTAINS

    @given(lon=longitudes, lat=latitudes, dist=st.floats(min_value=0.0, max_value=170.0), bearing=bearings)
    @settings(max_examples=30)
    def test_destination_distance(self, lon: float, lat: float, dist: float, bearing: float) -> None:
        """The destination lies at the travelled distance."""
        center = GEO.make_point(lon, lat)
        dest = Vincenty().point_on_bearing(center, dist, bearing, GEO)
        assert math.isclose(Vincenty().distance(center, dest), dist, abs_tol=1e-5)

    @given(lon1=longitudes, lat1=latitudes, lon2=longitudes, lat2=latitudes)
    @settings(max_examples=30)
    def test_distance_symmetric(self, lon1: float, lat1: float, lon2: float, lat2: float) -> None:
        """d(p, q) == d(q, p), within [0, 180]."""
        p = GEO.make_point(lon1, lat1)
        q = GEO.make_point(lon2, lat2)
        d = Haversine().distance(p, q)
        assert 0.0 <= d <= 180.0
        assert math.isclose(d, Haversine().distance(q, p), rel_tol=1e-12, abs_tol=1e-12)

    @given(lon=longitudes, lat=latitudes, radius=st.floats(min_value=0.5, max_value=170.0))
    @settings(max_examples=30)
    def test_circle_contains_its_center(self, lon: float, lat: float, radius: float) -> None:
        """Every non-empty circle contains its center, and its bbox contains it too."""
        circle = GEO.make_circle(lon, lat, radius)
        assert circle.relate(circle.center) is SpatialRelation.CONTAINS
        assert circle.bounding_box.relate(circle.center) is SpatialRelation.CONTAINS


# =============================================================================
# GEO SHAPES
# =============================================================================


@st.composite
def geo_rects(draw: st.DrawFn) -> Rectangle:
    """Geo rectangles; min_x > max_x crosses the dateline."""
    min_x = draw(longitudes)
    max_x = draw(longitudes)
    y1 = draw(latitudes)
    y2 = draw(latitudes)
    return GEO.make_rectangle(min_x, max_x, min(y1, y2), max(y1, y2))


@st.composite
def geo_circles(draw: st.DrawFn) -> Circle:
    """Geo circles from small to far beyond a hemisphere."""
    return GEO.make_circle(draw(longitudes), draw(latitudes), draw(st.floats(min_value=0.1, max_value=170.0)))


@st.composite
def geo_points(draw: st.DrawFn) -> Point:
    return GEO.make_point(draw(longitudes), draw(latitudes))


@st.composite
def geo_lines(draw: st.DrawFn) -> BufferedLine:
    """Buffered segments kept clear of the dateline and poles."""
    coords = st.floats(min_value=-150.0, max_value=150.0)
    lats = st.floats(min_value=-70.0, max_value=70.0)
    a = GEO.make_point(draw(coords), draw(lats))
    b = GEO.make_point(draw(coords), draw(lats))
    return BufferedLine(a, b, draw(st.floats(min_value=0.0, max_value=5.0)), GEO)


def corners(rect: Rectangle) -> list[tuple[float, float]]:
    return [(rect.min_x, rect.min_y), (rect.min_x, rect.max_y), (rect.max_x, rect.min_y), (rect.max_x, rect.max_y)]


class TestGeoProperties:
    """Dateline and pole aware relations on the sphere."""

    @given(a=geo_rects(), b=geo_rects())
    @settings(max_examples=100)
    def test_rectangle_symmetry(self, a: Rectangle, b: Rectangle) -> None:
        """Transposition holds for rectangles crossing the dateline too."""
        assume(a != b)
        assert b.relate(a) is a.relate(b).transpose()

    @given(a=geo_rects())
    @settings(max_examples=100)
    def test_rectangle_edges_contain_points(self, a: Rectangle) -> None:
        """Points on the west and east edges are contained, wherever the edges lie."""
        for y in (a.min_y, (a.min_y + a.max_y) / 2, a.max_y):
            assert a.relate(GEO.make_point(a.min_x, y)) is SpatialRelation.CONTAINS
            assert a.relate(GEO.make_point(a.max_x, y)) is SpatialRelation.CONTAINS

    @given(shape=st.one_of(geo_points(), geo_rects(), geo_circles(), geo_lines()))
    @settings(max_examples=100)
    def test_bounding_box_contains_shape(self, shape: Shape) -> None:
        """Every non-empty shape is CONTAINED by its bounding box."""
        assert shape.bounding_box.relate(shape) is SpatialRelation.CONTAINS

    @given(circle=geo_circles(), rect=geo_rects())
    @settings(max_examples=100)
    def test_circle_rectangle_consistent_with_corners(self, circle: Circle, rect: Rectangle) -> None:
        """CONTAINS puts every corner inside the circle, DISJOINT none; both sides agree."""
        relation = circle.relate(rect)
        assert rect.relate(circle) is relation.transpose()
        calc = GEO.dist_calc
        distances = [calc.distance_xy(circle.center, x, y) for x, y in corners(rect)]
        if relation is SpatialRelation.CONTAINS:
            assert all(d <= circle.radius + 1e-7 for d in distances)
        elif relation is SpatialRelation.DISJOINT:
            assert all(d > circle.radius - 1e-7 for d in distances)
            assert rect.relate(circle.center) is SpatialRelation.DISJOINT

    @given(members=st.lists(st.one_of(geo_points(), geo_rects(), geo_circles()), min_size=1, max_size=5))
    @settings(max_examples=100)
    def test_collection_bbox_contains_members(self, members: list[Shape]) -> None:
        """The aggregate bbox contains each member; point members still intersect the whole."""
        coll = GEO.make_collection(members)
        for member in members:
            assert coll.bounding_box.relate(member) is SpatialRelation.CONTAINS
            if isinstance(member, Point):
                assert coll.relate(member).intersects()
