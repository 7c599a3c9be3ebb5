"""Shared pytest fixtures for spatial_shapes tests.

Provides geo and plane contexts and a few reusable shapes.

COORDINATE SYSTEMS:
    geo_ctx uses longitude/latitude degrees on a sphere; distances and radii
    are degrees of arc (1° ≈ 111.195 km on the mean-radius sphere).
    plane_ctx uses unitless Euclidean coordinates with effectively no bounds;
    bounded_plane_ctx limits them to [-100, 100] on both axes.
"""

import pytest

from spatial_shapes.context import SpatialContext
from spatial_shapes.core.distance_calculator import CartesianDistCalc
from spatial_shapes.model.rectangle import Rectangle

# =============================================================================
# CONTEXT FIXTURES
# =============================================================================


@pytest.fixture
def geo_ctx() -> SpatialContext:
    """Default geodetic context: Haversine, whole-globe bounds, no wrapping."""
    return SpatialContext.GEO


@pytest.fixture
def wrapping_geo_ctx() -> SpatialContext:
    """Geodetic context that wraps out-of-range coordinates instead of rejecting them."""
    return SpatialContext(geo=True, norm_wrap_longitude=True)


@pytest.fixture
def plane_ctx() -> SpatialContext:
    """Planar context with Cartesian distances and float-range bounds."""
    return SpatialContext(geo=False)


@pytest.fixture
def bounded_plane_ctx() -> SpatialContext:
    """Planar context bounded to [-100, 100] x [-100, 100]."""
    return SpatialContext(
        geo=False,
        calculator=CartesianDistCalc(),
        world_bounds=Rectangle(-100.0, 100.0, -100.0, 100.0),
    )


# =============================================================================
# SHAPE FIXTURES
# =============================================================================


@pytest.fixture
def dateline_rect(geo_ctx: SpatialContext) -> Rectangle:
    """Rectangle 20° wide crossing the dateline: [170, -170] x [0, 10]."""
    return geo_ctx.make_rectangle(170, -170, 0, 10)


@pytest.fixture
def unit_square(plane_ctx: SpatialContext) -> Rectangle:
    """Planar rectangle [0, 10] x [0, 10]."""
    return plane_ctx.make_rectangle(0, 10, 0, 10)
