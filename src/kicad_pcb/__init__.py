"""Read KiCad printed circuit board files into typed Python objects."""

from .config import ParserConfig
from .exceptions import (
    InvalidLayerError,
    KicadPcbError,
    LeftoverError,
    LexError,
    ParseError,
    UnexpectedEndError,
    UnexpectedNodeError,
    UnexpectedTagError,
)
from .reader import parse_board, parse_footprint
from .schema import Board, BoundingBox, Diagnostic, Footprint, bounding_box
from .validation import ConsistencyIssue, check_board

__version__ = "0.1.0"

__all__ = [
    "Board",
    "BoundingBox",
    "ConsistencyIssue",
    "Diagnostic",
    "Footprint",
    "InvalidLayerError",
    "KicadPcbError",
    "LeftoverError",
    "LexError",
    "ParseError",
    "ParserConfig",
    "UnexpectedEndError",
    "UnexpectedNodeError",
    "UnexpectedTagError",
    "bounding_box",
    "check_board",
    "parse_board",
    "parse_footprint",
]
