"""
Render Primitives.

Immutable descriptions of what the host should draw for one bar. Each
top-level item carries a key that is stable across redraws of the same
bar, so the host can reuse its existing graphics objects.

to_dict() produces the host wire form (camelCase attribute names).
"""

from dataclasses import dataclass, field
from typing import Literal, Union

from .coords import CoordLike

TextAlignment = Literal["centerMiddle", "leftMiddle", "rightMiddle"]
FontWeight = Literal["normal", "bold"]


@dataclass(frozen=True)
class Point:
    """Position of a primitive."""

    x: CoordLike
    y: CoordLike

    def to_dict(self) -> dict:
        return {"x": self.x.to_dict(), "y": self.y.to_dict()}


@dataclass(frozen=True)
class TextStyle:
    font_size: int
    fill: str
    font_weight: FontWeight = "normal"

    def to_dict(self) -> dict:
        return {"fontSize": self.font_size, "fontWeight": self.font_weight, "fill": self.fill}


@dataclass(frozen=True)
class FillStyle:
    color: str
    opacity: float = 1.0  # 0-1

    def to_dict(self) -> dict:
        return {"color": self.color, "opacity": self.opacity}


@dataclass(frozen=True)
class LineStyle:
    color: str
    line_width: int = 1

    def to_dict(self) -> dict:
        return {"color": self.color, "lineWidth": self.line_width}


@dataclass(frozen=True)
class Text:
    """Text label anchored at a point."""

    key: str
    point: Point
    text: str
    style: TextStyle
    text_alignment: TextAlignment = "centerMiddle"

    def to_dict(self) -> dict:
        return {
            "tag": "Text",
            "key": self.key,
            "point": self.point.to_dict(),
            "text": self.text,
            "style": self.style.to_dict(),
            "textAlignment": self.text_alignment,
        }


@dataclass(frozen=True)
class Polygon:
    """Closed polygon through explicit corner points."""

    points: tuple[Point, ...]

    def to_dict(self) -> dict:
        return {"tag": "Polygon", "points": [p.to_dict() for p in self.points]}


@dataclass(frozen=True)
class Shapes:
    """Filled shapes."""

    key: str
    primitives: tuple[Polygon, ...]
    fill_style: FillStyle

    def to_dict(self) -> dict:
        return {
            "tag": "Shapes",
            "key": self.key,
            "primitives": [p.to_dict() for p in self.primitives],
            "fillStyle": self.fill_style.to_dict(),
        }


@dataclass(frozen=True)
class ContourShapes:
    """Outlined shapes."""

    key: str
    primitives: tuple[Polygon, ...]
    line_style: LineStyle

    def to_dict(self) -> dict:
        return {
            "tag": "ContourShapes",
            "key": self.key,
            "primitives": [p.to_dict() for p in self.primitives],
            "lineStyle": self.line_style.to_dict(),
        }


@dataclass(frozen=True)
class Container:
    """Group of items drawn together under one key."""

    key: str
    children: tuple["GraphicsItem", ...]

    def to_dict(self) -> dict:
        return {
            "tag": "Container",
            "key": self.key,
            "children": [c.to_dict() for c in self.children],
        }


GraphicsItem = Union[Text, Shapes, ContourShapes, Container]


def iter_keys(items: tuple[GraphicsItem, ...]):
    """Yield every key in a tree of items, depth first."""
    for item in items:
        yield item.key
        if isinstance(item, Container):
            yield from iter_keys(item.children)


@dataclass(frozen=True)
class IndicatorOutput:
    """
    Everything an indicator returns for one bar.

    An output with no items and no plot values means "draw nothing".
    """

    items: tuple[GraphicsItem, ...] = ()
    plots: dict[str, float] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.items and not self.plots

    @property
    def keys(self) -> list[str]:
        return list(iter_keys(self.items))

    def to_dict(self) -> dict:
        if self.is_empty:
            return {}
        result: dict = dict(self.plots)
        if self.items:
            result["graphics"] = {"items": [item.to_dict() for item in self.items]}
        return result


EMPTY_OUTPUT = IndicatorOutput()
