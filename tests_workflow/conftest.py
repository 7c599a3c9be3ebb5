"""Shared pytest fixtures for spatial_shapes workflow tests.

Workflow tests go end to end: configuration strings build a context, WKT text
builds shapes, and the shapes are related, buffered and written back.

COORDINATE SYSTEM:
    The geo fixtures use longitude/latitude degrees; radii are degrees of arc.
    The plane fixture is a bounded [-1000, 1000] square built from config strings.
"""

import pytest

from spatial_shapes.context import SpatialContext, SpatialContextFactory

# =============================================================================
# CONTEXTS BUILT FROM CONFIGURATION
# =============================================================================


@pytest.fixture
def geo_context() -> SpatialContext:
    """Geo context from an explicit configuration, Vincenty distances."""
    return SpatialContextFactory.make_spatial_context({"geo": "true", "distCalculator": "vincentySphere"})


@pytest.fixture
def wrapping_context() -> SpatialContext:
    """Geo context that wraps out-of-range input coordinates."""
    return SpatialContextFactory.make_spatial_context({"normWrapLongitude": "true"})


@pytest.fixture
def plane_context() -> SpatialContext:
    """Bounded planar context."""
    return SpatialContextFactory.make_spatial_context(
        {"geo": "false", "worldBounds": "ENVELOPE(-1000, 1000, 1000, -1000)"}
    )
