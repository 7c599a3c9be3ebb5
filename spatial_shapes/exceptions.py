"""Exceptions raised by Spatial Shapes.

Construction-time validation is the only failure mode of the geometry core.
Relations never raise for NaN (empty) inputs; they return DISJOINT instead.
"""

from typing import Optional


class InvalidShapeError(ValueError):
    """A shape could not be built from the given coordinates or distances.

    Raised for out-of-world-bounds coordinates, min_y > max_y,
    planar min_x > max_x, or a negative radius.
    """


class ShapeParseError(InvalidShapeError):
    """Text could not be parsed into a shape.

    Attributes:
        text: The offending input text
    """

    def __init__(self, message: str, text: Optional[str] = None) -> None:
        super().__init__(message if text is None else f"{message}: {text!r}")
        self.text = text


class UnsupportedRelationError(NotImplementedError):
    """Neither shape of a pair knows how to compute their relation."""
