"""S-expression reader and cursor for KiCad file formats."""

from .cursor import Cursor, convert, describe, render
from .parser import HexInteger, Node, Number, QuotedValue, SList, Symbol, parse, parse_all

__all__ = [
    "Cursor",
    "HexInteger",
    "Node",
    "Number",
    "QuotedValue",
    "SList",
    "Symbol",
    "convert",
    "describe",
    "parse",
    "parse_all",
    "render",
]
