"""SpatialRelation - The four-valued topological relation between two shapes.

Relations are always read as "this shape <relation> other shape":
- DISJOINT: no shared points
- INTERSECTS: some shared points, neither contains the other
- CONTAINS: the other shape lies entirely inside this one
- WITHIN: this shape lies entirely inside the other

There is no EQUALS. Identical areal shapes relate as CONTAINS,
identical points as INTERSECTS.
"""

from enum import Enum


class SpatialRelation(Enum):
    """Topological relation of one shape to another."""

    DISJOINT = "disjoint"
    INTERSECTS = "intersects"
    CONTAINS = "contains"
    WITHIN = "within"

    def transpose(self) -> "SpatialRelation":
        """Relation of B to A, given this relation of A to B.

        Swaps CONTAINS and WITHIN. Wrong for equal shapes, which both report
        CONTAINS; callers must special-case equality.
        """
        if self is SpatialRelation.CONTAINS:
            return SpatialRelation.WITHIN
        if self is SpatialRelation.WITHIN:
            return SpatialRelation.CONTAINS
        return self

    def combine(self, other: "SpatialRelation") -> "SpatialRelation":
        """Relation of a shape to the union of two shapes it relates to separately.

        Args:
            other: Relation of the same shape to the second member

        Returns:
            Self when both agree; CONTAINS when one is DISJOINT and the other
            CONTAINS; INTERSECTS for any other mix.
        """
        if self is other:
            return self
        if {self, other} == {SpatialRelation.DISJOINT, SpatialRelation.CONTAINS}:
            return SpatialRelation.CONTAINS
        return SpatialRelation.INTERSECTS

    def intersects(self) -> bool:
        """True for every relation except DISJOINT."""
        return self is not SpatialRelation.DISJOINT

    def inverse(self) -> "SpatialRelation":
        """Relation of this shape's geometric complement to the same other shape.

        Not an involution: WITHIN and INTERSECTS both map to INTERSECTS.
        """
        if self is SpatialRelation.DISJOINT:
            return SpatialRelation.CONTAINS
        if self is SpatialRelation.CONTAINS:
            return SpatialRelation.DISJOINT
        return SpatialRelation.INTERSECTS
