"""
Rendering helpers shared by the indicators.

Keys, display rounding, three-way delta colors, and bar-aligned box
corners.
"""

import math

from .coords import CoordLike, du
from .primitives import FontWeight, Point, Text, TextStyle


def bar_key(prefix: str, index: int) -> str:
    """Key of a primitive for one bar, stable across redraws."""
    return f"{prefix}_{index}"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +infinity (2.5 -> 3, -2.5 -> -2)."""
    floor = math.floor(value)
    return floor + 1 if value - floor >= 0.5 else floor


def format_count(value: float) -> str:
    """Display form of a volume or delta value."""
    return str(round_half_up(value))


def pick_color(value: float, positive: str, negative: str, neutral: str) -> str:
    """Positive color above zero, negative color below, neutral at exactly zero."""
    if value > 0:
        return positive
    if value < 0:
        return negative
    return neutral


def bar_box_corners(index: int, price: float, tick_size: float) -> tuple[Point, ...]:
    """
    Corners of a one-tick box spanning one bar, in data units.

    Goes half a bar either side of the index and from price up one tick,
    so the box stays aligned to the bar and tick grid at any zoom.
    """
    left = du(index - 0.5)
    right = du(index + 0.5)
    bottom = du(price)
    top = du(price + tick_size)
    return (
        Point(left, bottom),
        Point(right, bottom),
        Point(right, top),
        Point(left, top),
    )


def text_row(
    key: str,
    x: CoordLike,
    y: CoordLike,
    text: str,
    font_size: int,
    fill: str,
    font_weight: FontWeight = "normal",
) -> Text:
    """Centered text label."""
    return Text(
        key=key,
        point=Point(x, y),
        text=text,
        style=TextStyle(font_size=font_size, fill=fill, font_weight=font_weight),
    )
