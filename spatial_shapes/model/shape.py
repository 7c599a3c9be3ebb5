"""Shape - Abstract base of every shape.

A shape can report its relation to any other shape, its bounding box, area,
center and a buffered (grown) copy of itself. Relations between kinds a shape
does not know about are delegated to the other shape and transposed.

Empty shapes (NaN coordinates) relate as DISJOINT to everything.
"""

import math
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional, Union

from spatial_shapes.core.spatial_relation import SpatialRelation

if TYPE_CHECKING:
    from spatial_shapes.context import SpatialContext
    from spatial_shapes.model.point import Point
    from spatial_shapes.model.rectangle import Rectangle


def coord_key(value: float) -> Union[float, None]:
    """Equality/hash key for a coordinate: NaN maps to None so NaN equals NaN."""
    return None if math.isnan(value) else value


class Shape(ABC):
    """Abstract base class for shapes in a SpatialContext."""

    @abstractmethod
    def relate(self, other: "Shape") -> SpatialRelation:
        """Relation of this shape to other.

        Symmetric up to transpose: a.relate(b) == b.relate(a).transpose(),
        except when a == b.
        """
        raise NotImplementedError

    @property
    @abstractmethod
    def bounding_box(self) -> "Rectangle":
        """Smallest rectangle containing the shape (may cross the dateline)."""
        raise NotImplementedError

    @property
    @abstractmethod
    def has_area(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def get_area(self, ctx: Optional["SpatialContext"] = None) -> float:
        """Area of the shape.

        Args:
            ctx: Context whose calculator measures the area. Without one the
                area is planar in coordinate units.
        """
        raise NotImplementedError

    @property
    @abstractmethod
    def center(self) -> "Point":
        raise NotImplementedError

    @abstractmethod
    def get_buffered(self, distance: float, ctx: "SpatialContext") -> "Shape":
        """Shape grown outward by distance (may be approximated)."""
        raise NotImplementedError

    @property
    @abstractmethod
    def is_empty(self) -> bool:
        raise NotImplementedError
