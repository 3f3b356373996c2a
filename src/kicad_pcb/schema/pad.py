"""Typed data models for footprint pads."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .common import Point, Position
from .graphics import Graphic


class PadType(Enum):
    THROUGH_HOLE = "thru_hole"
    SMD = "smd"
    CONNECT = "connect"
    NP_THROUGH_HOLE = "np_thru_hole"


class PadShape(Enum):
    CIRCLE = "circle"
    RECTANGLE = "rect"
    OVAL = "oval"
    TRAPEZOID = "trapezoid"
    ROUNDRECT = "roundrect"
    CUSTOM = "custom"


class PadProperty(Enum):
    BGA = "pad_prop_bga"
    FIDUCIAL_GLOBAL = "pad_prop_fiducial_glob"
    FIDUCIAL_LOCAL = "pad_prop_fiducial_loc"
    TESTPOINT = "pad_prop_testpoint"
    HEATSINK = "pad_prop_heatsink"
    CASTELLATED = "pad_prop_castellated"
    MECHANICAL = "pad_prop_mechanical"
    PRESSFIT = "pad_prop_pressfit"


class PadCorner(Enum):
    TOP_LEFT = "top_left"
    TOP_RIGHT = "top_right"
    BOTTOM_LEFT = "bottom_left"
    BOTTOM_RIGHT = "bottom_right"


class ZoneConnect(Enum):
    """How a pad joins a copper zone (the integer KiCad writes)."""

    NONE = 0
    THERMAL = 1
    SOLID = 2
    THT_THERMAL = 3


class CustomPadClearance(Enum):
    OUTLINE = "outline"
    CONVEX_HULL = "convexhull"


@dataclass
class Drill:
    """Drill hole; ``width`` is only set for oval holes."""

    oval: bool = False
    diameter: float = 0.0
    width: float | None = None
    offset: Point | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"oval": self.oval, "diameter": self.diameter}
        if self.width is not None:
            d["width"] = self.width
        if self.offset is not None:
            d["offset"] = self.offset.to_dict()
        return d


@dataclass
class NetBinding:
    """The (ordinal, name) net a pad or track is connected to."""

    ordinal: int
    name: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"number": self.ordinal, "name": self.name}


@dataclass
class CustomPadOptions:
    clearance: CustomPadClearance = CustomPadClearance.OUTLINE
    anchor: PadShape = PadShape.RECTANGLE

    def to_dict(self) -> dict[str, Any]:
        return {"clearance": self.clearance.value, "anchor": self.anchor.value}


@dataclass
class CustomPadPrimitives:
    """Graphic items that make up a custom pad shape."""

    graphics: list[Graphic] = field(default_factory=list)
    width: float | None = None
    fill: bool = False

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "graphics": [g.to_dict() for g in self.graphics],
            "fill": self.fill,
        }
        if self.width is not None:
            d["width"] = self.width
        return d


@dataclass
class Pad:
    """A pad on a footprint. Position is relative to the footprint anchor."""

    number: str = ""
    pad_type: PadType = PadType.SMD
    shape: PadShape = PadShape.RECTANGLE
    position: Position = field(default_factory=Position)
    locked: bool = False
    size: tuple[float, float] = (0.0, 0.0)
    drill: Drill | None = None
    layers: list[str] = field(default_factory=list)
    properties: list[PadProperty] = field(default_factory=list)
    remove_unused_layers: bool = False
    keep_end_layers: bool = False
    roundrect_rratio: float | None = None
    chamfer_ratio: float | None = None
    chamfer: list[PadCorner] = field(default_factory=list)
    net: NetBinding | None = None
    uuid: str = ""
    pin_function: str | None = None
    pin_type: str | None = None
    die_length: float | None = None
    solder_mask_margin: float | None = None
    solder_paste_margin: float | None = None
    solder_paste_margin_ratio: float | None = None
    clearance: float | None = None
    zone_connect: ZoneConnect | None = None
    thermal_width: float | None = None
    thermal_gap: float | None = None
    thermal_bridge_angle: float | None = None
    custom_options: CustomPadOptions | None = None
    custom_primitives: CustomPadPrimitives | None = None

    @property
    def is_through_hole(self) -> bool:
        return self.pad_type in (PadType.THROUGH_HOLE, PadType.NP_THROUGH_HOLE)

    def consistency_issues(self) -> list[str]:
        """Non-fatal problems KiCad itself tolerates."""
        issues: list[str] = []
        if self.is_through_hole and self.drill is None:
            issues.append(f"pad {self.number!r} is {self.pad_type.value} but has no drill")
        return issues

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "number": self.number,
            "type": self.pad_type.value,
            "shape": self.shape.value,
            "position": self.position.to_dict(),
            "size": {"width": self.size[0], "height": self.size[1]},
            "layers": self.layers,
        }
        if self.drill is not None:
            d["drill"] = self.drill.to_dict()
        if self.net is not None:
            d["net"] = self.net.to_dict()
        if self.properties:
            d["properties"] = [p.value for p in self.properties]
        if self.chamfer:
            d["chamfer"] = [c.value for c in self.chamfer]
        for key in (
            "roundrect_rratio",
            "chamfer_ratio",
            "pin_function",
            "pin_type",
            "die_length",
            "solder_mask_margin",
            "solder_paste_margin",
            "solder_paste_margin_ratio",
            "clearance",
            "thermal_width",
            "thermal_gap",
            "thermal_bridge_angle",
        ):
            value = getattr(self, key)
            if value is not None:
                d[key] = value
        if self.zone_connect is not None:
            d["zone_connect"] = self.zone_connect.value
        if self.custom_options is not None:
            d["options"] = self.custom_options.to_dict()
        if self.custom_primitives is not None:
            d["primitives"] = self.custom_primitives.to_dict()
        if self.uuid:
            d["uuid"] = self.uuid
        return d
