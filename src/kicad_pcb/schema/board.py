"""Typed data models for KiCad PCB board files (.kicad_pcb)."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..constants import EDGE_CUTS_LAYER
from .common import BoundingBox, Point, Position
from .footprint import Footprint
from .graphics import Graphic
from .pad import NetBinding


@dataclass
class Net:
    """A net (electrical connection) on the board."""

    ordinal: int
    name: str

    def to_dict(self) -> dict[str, Any]:
        return {"number": self.ordinal, "name": self.name}


class LayerType(Enum):
    USER = "user"
    JUMPER = "jumper"
    MIXED = "mixed"
    POWER = "power"
    SIGNAL = "signal"


@dataclass
class Layer:
    """A layer declaration: ``(ordinal name type [user_name])``."""

    ordinal: int
    name: str
    layer_type: LayerType = LayerType.USER
    user_name: str | None = None  # e.g. "F.Silkscreen" for "F.SilkS"

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "number": self.ordinal,
            "name": self.name,
            "type": self.layer_type.value,
        }
        if self.user_name:
            d["user_name"] = self.user_name
        return d


@dataclass
class GeneralSettings:
    thickness: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"thickness": self.thickness}


@dataclass
class TitleBlock:
    title: str = ""
    date: str = ""
    rev: str = ""
    company: str = ""
    comments: dict[int, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "date": self.date,
            "rev": self.rev,
            "company": self.company,
            "comments": {str(k): v for k, v in self.comments.items()},
        }


class EdgeConnector(Enum):
    YES = "yes"
    BEVELLED = "bevelled"


@dataclass
class StackupSettings:
    """Manufacturing flags from ``(setup (stackup ...))``."""

    copper_finish: str | None = None
    dielectric_constraints: bool | None = None
    edge_connector: EdgeConnector | None = None
    castellated_pads: bool | None = None
    edge_plating: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "copper_finish": self.copper_finish,
            "dielectric_constraints": self.dielectric_constraints,
            "edge_connector": self.edge_connector.value if self.edge_connector else None,
            "castellated_pads": self.castellated_pads,
            "edge_plating": self.edge_plating,
        }


@dataclass
class Setup:
    """Board setup values relevant to manufacturing."""

    stackup: StackupSettings | None = None
    pad_to_mask_clearance: float | None = None
    solder_mask_min_width: float | None = None
    pad_to_paste_clearance: float | None = None
    pad_to_paste_clearance_ratio: float | None = None
    aux_axis_origin: Point | None = None
    grid_origin: Point | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "stackup": self.stackup.to_dict() if self.stackup else None,
            "pad_to_mask_clearance": self.pad_to_mask_clearance,
            "solder_mask_min_width": self.solder_mask_min_width,
            "pad_to_paste_clearance": self.pad_to_paste_clearance,
            "pad_to_paste_clearance_ratio": self.pad_to_paste_clearance_ratio,
            "aux_axis_origin": self.aux_axis_origin.to_dict() if self.aux_axis_origin else None,
            "grid_origin": self.grid_origin.to_dict() if self.grid_origin else None,
        }


@dataclass
class Segment:
    """A track segment (copper trace)."""

    start: Point = field(default_factory=Point)
    end: Point = field(default_factory=Point)
    width: float = 0.0
    layer: str = ""
    net: int = 0
    locked: bool = False
    uuid: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "start": self.start.to_dict(),
            "end": self.end.to_dict(),
            "width": self.width,
            "layer": self.layer,
            "net": self.net,
        }


@dataclass
class Via:
    position: Position = field(default_factory=Position)
    size: float = 0.0
    drill: float = 0.0
    layers: list[str] = field(default_factory=list)
    net: int = 0
    via_type: str | None = None  # "blind" or "micro"; None for through vias
    locked: bool = False
    uuid: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "position": self.position.to_dict(),
            "size": self.size,
            "drill": self.drill,
            "layers": self.layers,
            "net": self.net,
            "type": self.via_type or "through",
        }


@dataclass
class Board:
    """A parsed ``kicad_pcb`` file."""

    version: str = ""
    generator: str = ""
    generator_version: str = ""
    paper: str = ""
    general: GeneralSettings = field(default_factory=GeneralSettings)
    title_block: TitleBlock | None = None
    layers: list[Layer] = field(default_factory=list)
    setup: Setup | None = None
    properties: dict[str, str] = field(default_factory=dict)
    nets: list[Net] = field(default_factory=list)
    graphics: list[Graphic] = field(default_factory=list)
    footprints: list[Footprint] = field(default_factory=list)
    segments: list[Segment] = field(default_factory=list)
    vias: list[Via] = field(default_factory=list)

    @property
    def copper_layers(self) -> list[str]:
        return [lyr.name for lyr in self.layers if lyr.name.endswith(".Cu")]

    def net_by_ordinal(self, ordinal: int) -> Net | None:
        for net in self.nets:
            if net.ordinal == ordinal:
                return net
        return None

    def net_name(self, binding: NetBinding | int) -> str | None:
        ordinal = binding.ordinal if isinstance(binding, NetBinding) else binding
        net = self.net_by_ordinal(ordinal)
        return net.name if net else None

    def bounding_box(self) -> BoundingBox:
        """Envelope of the board outline (board-level Edge.Cuts graphics)."""
        box = BoundingBox.empty()
        for graphic in self.graphics:
            if graphic.layer != EDGE_CUTS_LAYER:
                continue
            box.envelop(graphic.bounding_box())
        return box

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "version": self.version,
            "generator": self.generator,
            "generator_version": self.generator_version,
            "paper": self.paper,
            "general": self.general.to_dict(),
            "layers": [lyr.to_dict() for lyr in self.layers],
            "copper_layers": self.copper_layers,
            "properties": dict(self.properties),
            "nets": [n.to_dict() for n in self.nets],
            "graphics": [g.to_dict() for g in self.graphics],
            "footprints": [f.to_dict() for f in self.footprints],
            "segments": [s.to_dict() for s in self.segments],
            "vias": [v.to_dict() for v in self.vias],
            "bounding_box": self.bounding_box().to_dict(),
        }
        if self.title_block is not None:
            d["title_block"] = self.title_block.to_dict()
        if self.setup is not None:
            d["setup"] = self.setup.to_dict()
        return d
