"""Spatial Shapes - Geometric shapes and their relations, on a plane or a sphere.

Answers "how does shape A relate to shape B" (disjoint, intersects,
contains, within) for points, rectangles, circles, buffered lines and
collections of them, with the antimeridian and the poles handled in geo mode:
- Distance calculations with interchangeable spherical formulas
- Dateline-aware rectangles and longitude ranges
- Geodetic circles that may span a pole or more than a hemisphere
- WKT reading and writing, and geohash encoding

Modules:
    context: SpatialContext (coordinate model and shape factory) and SpatialContextFactory
    core: Relation algebra, ranges, distance calculators and units, geohash
    model: Shape classes (Point, Rectangle, Circle, BufferedLine, ...)
    io: WKT reader and writer

Example:
    from spatial_shapes.context import SpatialContext
    from spatial_shapes.core import SpatialRelation

    ctx = SpatialContext.GEO
    rect = ctx.make_rectangle(160, -170, 0, 10)
    assert rect.relate(ctx.make_point(-180, 5)) is SpatialRelation.CONTAINS
"""
