"""Graphic primitives shared by boards (``gr_*``) and footprints (``fp_*``).

``Graphic`` is a closed union of eight variants. Every variant carries a layer,
a stroke, a lock flag and a uuid, plus its own geometry, and knows its own
bounding box.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from ..constants import TEXT_PLACEHOLDER_HEIGHT, TEXT_PLACEHOLDER_WIDTH
from .common import BoundingBox, Point, Position, Stroke, TextEffects
from .geometry import (
    arc_bounding_box,
    circle_bounding_box,
    points_bounding_box,
    segment_bounding_box,
    text_bounding_box,
)


def _points_to_list(points: list[Point]) -> list[dict[str, Any]]:
    return [p.to_dict() for p in points]


@dataclass
class GraphicBase:
    """Fields every graphic variant carries."""

    kind: str = "fp"  # tag family: "fp" in footprints, "gr" on the board
    layer: str = ""
    stroke: Stroke = field(default_factory=Stroke)
    locked: bool = False
    uuid: str = ""

    def _base_dict(self, shape: str) -> dict[str, Any]:
        return {
            "shape": shape,
            "kind": self.kind,
            "layer": self.layer,
            "stroke": self.stroke.to_dict(),
            "locked": self.locked,
            "uuid": self.uuid,
        }


class TextType(Enum):
    REFERENCE = "reference"
    VALUE = "value"
    USER = "user"


@dataclass
class Text(GraphicBase):
    text_type: TextType = TextType.USER
    text: str = ""
    position: Position = field(default_factory=Position)
    unlocked: bool = False
    hide: bool = False
    effects: TextEffects = field(default_factory=TextEffects)

    def bounding_box(self) -> BoundingBox:
        # TODO: size from font metrics once effects carry a glyph table
        return text_bounding_box(
            self.position.point, TEXT_PLACEHOLDER_WIDTH, TEXT_PLACEHOLDER_HEIGHT
        )

    def to_dict(self) -> dict[str, Any]:
        d = self._base_dict("text")
        d.update(
            {
                "text_type": self.text_type.value,
                "text": self.text,
                "position": self.position.to_dict(),
                "unlocked": self.unlocked,
                "hide": self.hide,
                "effects": self.effects.to_dict(),
            }
        )
        return d


@dataclass
class TextBox(GraphicBase):
    """Boxed text (KiCad 7+). Cardinal boxes use start/end, rotated ones use points."""

    text: str = ""
    start: Point | None = None
    end: Point | None = None
    points: list[Point] = field(default_factory=list)
    angle: float | None = None
    border: bool | None = None
    effects: TextEffects = field(default_factory=TextEffects)

    def bounding_box(self) -> BoundingBox:
        if self.start is not None:
            return segment_bounding_box(self.start, self.end or self.start)
        return points_bounding_box(self.points)

    def to_dict(self) -> dict[str, Any]:
        d = self._base_dict("text_box")
        d["text"] = self.text
        if self.start is not None:
            d["start"] = self.start.to_dict()
        if self.end is not None:
            d["end"] = self.end.to_dict()
        if self.points:
            d["points"] = _points_to_list(self.points)
        if self.angle is not None:
            d["angle"] = self.angle
        if self.border is not None:
            d["border"] = self.border
        d["effects"] = self.effects.to_dict()
        return d


@dataclass
class Line(GraphicBase):
    start: Point = field(default_factory=Point)
    end: Point = field(default_factory=Point)
    width: float | None = None  # stroke width before version 7

    def bounding_box(self) -> BoundingBox:
        return segment_bounding_box(self.start, self.end)

    def to_dict(self) -> dict[str, Any]:
        d = self._base_dict("line")
        d.update({"start": self.start.to_dict(), "end": self.end.to_dict()})
        return d


@dataclass
class Rectangle(GraphicBase):
    start: Point = field(default_factory=Point)
    end: Point = field(default_factory=Point)
    fill: bool = False
    width: float | None = None

    def bounding_box(self) -> BoundingBox:
        return segment_bounding_box(self.start, self.end)

    def to_dict(self) -> dict[str, Any]:
        d = self._base_dict("rect")
        d.update({"start": self.start.to_dict(), "end": self.end.to_dict(), "fill": self.fill})
        return d


@dataclass
class Circle(GraphicBase):
    center: Point = field(default_factory=Point)
    end: Point = field(default_factory=Point)  # any point on the rim
    fill: bool = False
    width: float | None = None

    @property
    def radius(self) -> float:
        return ((self.end.x - self.center.x) ** 2 + (self.end.y - self.center.y) ** 2) ** 0.5

    def bounding_box(self) -> BoundingBox:
        return circle_bounding_box(self.center, self.end)

    def to_dict(self) -> dict[str, Any]:
        d = self._base_dict("circle")
        d.update(
            {
                "center": self.center.to_dict(),
                "end": self.end.to_dict(),
                "radius": self.radius,
                "fill": self.fill,
            }
        )
        return d


@dataclass
class Arc(GraphicBase):
    start: Point = field(default_factory=Point)
    mid: Point = field(default_factory=Point)
    end: Point = field(default_factory=Point)
    width: float | None = None

    def bounding_box(self) -> BoundingBox:
        return arc_bounding_box(self.start, self.mid, self.end)

    def to_dict(self) -> dict[str, Any]:
        d = self._base_dict("arc")
        d.update(
            {
                "start": self.start.to_dict(),
                "mid": self.mid.to_dict(),
                "end": self.end.to_dict(),
            }
        )
        return d


@dataclass
class Polygon(GraphicBase):
    points: list[Point] = field(default_factory=list)
    fill: bool = False
    width: float | None = None

    def bounding_box(self) -> BoundingBox:
        return points_bounding_box(self.points)

    def to_dict(self) -> dict[str, Any]:
        d = self._base_dict("poly")
        d.update({"points": _points_to_list(self.points), "fill": self.fill})
        return d


@dataclass
class Curve(GraphicBase):
    """Cubic Bezier; ``points`` holds the four control points."""

    points: list[Point] = field(default_factory=list)
    width: float | None = None

    def bounding_box(self) -> BoundingBox:
        # A Bezier curve stays inside the hull of its control points.
        return points_bounding_box(self.points)

    def to_dict(self) -> dict[str, Any]:
        d = self._base_dict("curve")
        d["points"] = _points_to_list(self.points)
        return d


Graphic = Union[Text, TextBox, Line, Rectangle, Circle, Arc, Polygon, Curve]
