"""
Graphics description layer.

Builds declarative, keyed primitives for the chart host. Nothing here
draws; the host does.
"""

from .coords import DataUnit, Operation, PixelUnit, du, op, px, resolve
from .primitives import (
    EMPTY_OUTPUT,
    Container,
    ContourShapes,
    FillStyle,
    IndicatorOutput,
    LineStyle,
    Point,
    Polygon,
    Shapes,
    Text,
    TextStyle,
)
from .render import bar_box_corners, bar_key, format_count, pick_color, round_half_up, text_row

__all__ = [
    # Coordinates
    "DataUnit",
    "PixelUnit",
    "Operation",
    "du",
    "px",
    "op",
    "resolve",
    # Primitives
    "Point",
    "TextStyle",
    "FillStyle",
    "LineStyle",
    "Text",
    "Polygon",
    "Shapes",
    "ContourShapes",
    "Container",
    "IndicatorOutput",
    "EMPTY_OUTPUT",
    # Helpers
    "bar_key",
    "round_half_up",
    "format_count",
    "pick_color",
    "bar_box_corners",
    "text_row",
]
