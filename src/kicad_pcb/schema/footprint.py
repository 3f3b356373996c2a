"""Typed data models for footprints (``footprint``, ``module`` before version 6)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..constants import FRONT_FAB_LAYER
from .common import BoundingBox, Position
from .graphics import Graphic
from .pad import Pad, ZoneConnect


class FootprintType(Enum):
    SMD = "smd"
    THROUGH_HOLE = "through_hole"


@dataclass
class FootprintAttributes:
    """The ``(attr ...)`` flags of a footprint."""

    footprint_type: FootprintType | None = None
    board_only: bool = False
    exclude_from_pos_files: bool = False
    exclude_from_bom: bool = False
    allow_missing_courtyard: bool = False
    dnp: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.footprint_type.value if self.footprint_type else None,
            "board_only": self.board_only,
            "exclude_from_pos_files": self.exclude_from_pos_files,
            "exclude_from_bom": self.exclude_from_bom,
            "allow_missing_courtyard": self.allow_missing_courtyard,
            "dnp": self.dnp,
        }


@dataclass
class Model3D:
    """Reference to a 3D model file with its placement transform."""

    file: str = ""
    offset: tuple[float, float, float] = (0.0, 0.0, 0.0)
    scale: tuple[float, float, float] = (1.0, 1.0, 1.0)
    rotate: tuple[float, float, float] = (0.0, 0.0, 0.0)
    hide: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file,
            "offset": list(self.offset),
            "scale": list(self.scale),
            "rotate": list(self.rotate),
            "hide": self.hide,
        }


@dataclass
class Zone:
    """Placeholder for a footprint keep-out zone; only the tag is kept."""

    tag: str = "zone"


@dataclass
class Group:
    """Placeholder for a footprint group; only the tag is kept."""

    tag: str = "group"


@dataclass
class Footprint:
    """A component footprint, standalone or placed on a board."""

    library_link: str | None = None
    locked: bool = False
    placed: bool = False
    layer: str = "F.Cu"
    tedit: str | None = None
    uuid: str | None = None
    position: Position | None = None
    description: str | None = None
    tags: str | None = None
    properties: dict[str, str] = field(default_factory=dict)
    path: str | None = None
    sheetname: str | None = None
    sheetfile: str | None = None
    autoplace_cost90: int | None = None
    autoplace_cost180: int | None = None
    solder_mask_margin: float | None = None
    solder_paste_margin: float | None = None
    solder_paste_ratio: float | None = None
    clearance: float | None = None
    zone_connect: ZoneConnect | None = None
    thermal_width: float | None = None
    thermal_gap: float | None = None
    attributes: FootprintAttributes | None = None
    private_layers: list[str] = field(default_factory=list)
    net_tie_pad_groups: list[list[str]] = field(default_factory=list)
    graphics: list[Graphic] = field(default_factory=list)
    pads: list[Pad] = field(default_factory=list)
    zones: list[Zone] = field(default_factory=list)
    groups: list[Group] = field(default_factory=list)
    models: list[Model3D] = field(default_factory=list)

    @property
    def reference(self) -> str | None:
        return self.properties.get("Reference")

    @property
    def value(self) -> str | None:
        return self.properties.get("Value")

    def bounding_box(self) -> BoundingBox:
        """Envelope of the footprint's graphics in board coordinates.

        Fabrication-layer graphics are left out. The result stays empty when
        no other graphic exists.
        """
        box = BoundingBox.empty()
        for graphic in self.graphics:
            if graphic.layer == FRONT_FAB_LAYER:
                continue
            box.envelop(graphic.bounding_box())
        if self.position is not None:
            box.move_by(self.position.x, self.position.y)
        return box

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "library": self.library_link,
            "reference": self.reference,
            "value": self.value,
            "layer": self.layer,
            "locked": self.locked,
            "placed": self.placed,
            "properties": dict(self.properties),
            "graphics": [g.to_dict() for g in self.graphics],
            "pads": [p.to_dict() for p in self.pads],
            "models": [m.to_dict() for m in self.models],
        }
        if self.position is not None:
            d["position"] = self.position.to_dict()
        if self.uuid is not None:
            d["uuid"] = self.uuid
        if self.description is not None:
            d["description"] = self.description
        if self.attributes is not None:
            d["attributes"] = self.attributes.to_dict()
        return d
