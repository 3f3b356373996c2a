"""Common typed data models shared by boards and footprints."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class Point:
    """2D point in board coordinates (mm)."""

    x: float = 0.0
    y: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class Position:
    """2D position (mm) with an optional rotation in degrees."""

    x: float = 0.0
    y: float = 0.0
    angle: float | None = None

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"x": self.x, "y": self.y}
        if self.angle is not None:
            d["angle"] = self.angle
        return d


@dataclass
class BoundingBox:
    """Axis-aligned bounding box (mm).

    ``BoundingBox()`` is the empty box (min = +inf, max = -inf); it stays empty
    until the first call to :meth:`envelop`.
    """

    min_x: float = math.inf
    min_y: float = math.inf
    max_x: float = -math.inf
    max_y: float = -math.inf

    @classmethod
    def empty(cls) -> BoundingBox:
        return cls()

    @classmethod
    def from_points(cls, points: Iterable[Point]) -> BoundingBox:
        """Smallest box containing every point (empty if there are none)."""
        box = cls()
        for point in points:
            box.envelop(cls(point.x, point.y, point.x, point.y))
        return box

    @property
    def is_empty(self) -> bool:
        return self.min_x > self.max_x or self.min_y > self.max_y

    @property
    def x(self) -> float:
        return self.min_x

    @property
    def y(self) -> float:
        return self.min_y

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> Point:
        return Point(
            x=(self.min_x + self.max_x) / 2,
            y=(self.min_y + self.max_y) / 2,
        )

    def envelop(self, other: BoundingBox) -> BoundingBox:
        """Grow this box to also cover ``other``. Never shrinks."""
        self.min_x = min(self.min_x, other.min_x)
        self.min_y = min(self.min_y, other.min_y)
        self.max_x = max(self.max_x, other.max_x)
        self.max_y = max(self.max_y, other.max_y)
        return self

    def move_by(self, dx: float, dy: float) -> BoundingBox:
        """Translate both corners by (dx, dy)."""
        self.min_x += dx
        self.min_y += dy
        self.max_x += dx
        self.max_y += dy
        return self

    def to_dict(self) -> dict[str, Any]:
        if self.is_empty:
            return {"empty": True}
        return {
            "min_x": self.min_x,
            "min_y": self.min_y,
            "max_x": self.max_x,
            "max_y": self.max_y,
            "width": self.width,
            "height": self.height,
        }

    def __str__(self) -> str:
        if self.is_empty:
            return "BoundingBox (empty)"
        return f"BoundingBox at {self.x}:{self.y} {self.width}mm {self.height}mm"


class StrokeType(Enum):
    DEFAULT = "default"
    SOLID = "solid"
    DASH = "dash"
    DASH_DOT = "dash_dot"
    DASH_DOT_DOT = "dash_dot_dot"
    DOT = "dot"


@dataclass(frozen=True)
class RgbaColor:
    """Color with 0-255 channels and an alpha in 0..1."""

    r: int = 0
    g: int = 0
    b: int = 0
    a: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {"r": self.r, "g": self.g, "b": self.b, "a": self.a}


@dataclass
class Stroke:
    """Outline style: width, dash pattern and optional color."""

    width: float = 0.0
    line_type: StrokeType = StrokeType.DEFAULT
    color: RgbaColor | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"width": self.width, "type": self.line_type.value}
        if self.color is not None:
            d["color"] = self.color.to_dict()
        return d


@dataclass
class Font:
    face: str | None = None
    size: tuple[float, float] = (1.0, 1.0)  # (height, width)
    thickness: float | None = None
    bold: bool = False
    italic: bool = False
    line_spacing: float | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "size": {"height": self.size[0], "width": self.size[1]},
            "bold": self.bold,
            "italic": self.italic,
        }
        if self.face is not None:
            d["face"] = self.face
        if self.thickness is not None:
            d["thickness"] = self.thickness
        if self.line_spacing is not None:
            d["line_spacing"] = self.line_spacing
        return d


class HorizontalJustify(Enum):
    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"


class VerticalJustify(Enum):
    TOP = "top"
    BOTTOM = "bottom"
    CENTER = "center"


@dataclass
class TextEffects:
    """Font, justification and visibility of a text item."""

    font: Font = field(default_factory=Font)
    horizontal: HorizontalJustify = HorizontalJustify.CENTER
    vertical: VerticalJustify = VerticalJustify.CENTER
    mirror: bool = False
    hide: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "font": self.font.to_dict(),
            "justify": {
                "horizontal": self.horizontal.value,
                "vertical": self.vertical.value,
            },
            "mirror": self.mirror,
            "hide": self.hide,
        }
