"""
Coordinate Mapper.

Chart positions mix two units:
- Data units: bar index on x, price on y. Follow the chart's axes.
- Pixel units: fixed screen offsets, independent of zoom.

du(), px() and op() build the host's coordinate expressions. An
Operation keeps its operands in order (data-unit base first, pixel
adjustment second); the host resolves the base through its axis scale
before applying the pixel nudge, so the two cannot be swapped.

Example:
    # 8 px above the candle high
    y = op(du(bar.high), "-", px(8))
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal, Union

Operator = Literal["+", "-"]

_OPERATORS = ("+", "-")


class Coord:
    """Base class for coordinate expressions."""

    def __add__(self, other: "Coord") -> "Operation":
        return op(self, "+", other)

    def __sub__(self, other: "Coord") -> "Operation":
        return op(self, "-", other)

    def to_dict(self) -> dict:
        raise NotImplementedError


@dataclass(frozen=True)
class DataUnit(Coord):
    """Position on the chart's data axis (bar index or price)."""

    value: float

    def to_dict(self) -> dict:
        return {"du": self.value}


@dataclass(frozen=True)
class PixelUnit(Coord):
    """Screen-space distance in pixels."""

    value: float

    def to_dict(self) -> dict:
        return {"px": self.value}


@dataclass(frozen=True)
class Operation(Coord):
    """Ordered sum or difference of two coordinates."""

    lhs: "CoordLike"
    operator: Operator
    rhs: "CoordLike"

    def to_dict(self) -> dict:
        return {"op": self.operator, "lhs": self.lhs.to_dict(), "rhs": self.rhs.to_dict()}


CoordLike = Union[DataUnit, PixelUnit, Operation]


def du(value: float) -> DataUnit:
    """Data-unit coordinate."""
    return DataUnit(value)


def px(value: float) -> PixelUnit:
    """Pixel-unit coordinate."""
    return PixelUnit(value)


def op(lhs: CoordLike, operator: str, rhs: CoordLike) -> Operation:
    """
    Combine two coordinates with + or -.

    Raises:
        ValueError: If operator is not "+" or "-"
    """
    if operator not in _OPERATORS:
        raise ValueError(f"Unsupported coordinate operator '{operator}'. Use '+' or '-'")
    return Operation(lhs, operator, rhs)


def resolve(coord: CoordLike, to_pixels: Callable[[float], float]) -> float:
    """
    Evaluate a coordinate to a screen position.

    Args:
        coord: Coordinate expression
        to_pixels: Axis scale mapping a data value to a pixel position

    Returns:
        Screen position in pixels
    """
    if isinstance(coord, DataUnit):
        return to_pixels(coord.value)
    if isinstance(coord, PixelUnit):
        return coord.value
    if isinstance(coord, Operation):
        lhs = resolve(coord.lhs, to_pixels)
        rhs = resolve(coord.rhs, to_pixels)
        return lhs + rhs if coord.operator == "+" else lhs - rhs
    raise TypeError(f"Not a coordinate: {coord!r}")
