"""Typed data models for KiCad board and footprint files."""

from .board import (
    Board,
    GeneralSettings,
    Layer,
    LayerType,
    Net,
    Segment,
    Setup,
    StackupSettings,
    TitleBlock,
    Via,
)
from .common import (
    BoundingBox,
    Font,
    Point,
    Position,
    RgbaColor,
    Stroke,
    StrokeType,
    TextEffects,
)
from .context import Diagnostic
from .extract import extract_board
from .extract_footprint import extract_footprint, extract_pad
from .extract_graphics import extract_graphic
from .footprint import Footprint, FootprintAttributes, FootprintType, Model3D
from .geometry import arc_sweep_bounding_box, bounding_box
from .graphics import (
    Arc,
    Circle,
    Curve,
    Graphic,
    Line,
    Polygon,
    Rectangle,
    Text,
    TextBox,
    TextType,
)
from .pad import Drill, NetBinding, Pad, PadShape, PadType

__all__ = [
    "Arc",
    "Board",
    "BoundingBox",
    "Circle",
    "Curve",
    "Diagnostic",
    "Drill",
    "Font",
    "Footprint",
    "FootprintAttributes",
    "FootprintType",
    "GeneralSettings",
    "Graphic",
    "Layer",
    "LayerType",
    "Line",
    "Model3D",
    "Net",
    "NetBinding",
    "Pad",
    "PadShape",
    "PadType",
    "Point",
    "Polygon",
    "Position",
    "Rectangle",
    "RgbaColor",
    "Segment",
    "Setup",
    "StackupSettings",
    "Stroke",
    "StrokeType",
    "Text",
    "TextBox",
    "TextEffects",
    "TextType",
    "TitleBlock",
    "Via",
    "arc_sweep_bounding_box",
    "bounding_box",
    "extract_board",
    "extract_footprint",
    "extract_graphic",
    "extract_pad",
]
