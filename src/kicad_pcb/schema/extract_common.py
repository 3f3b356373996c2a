"""Extraction routines for the small records shared across entities.

Each routine takes the list node for one record, e.g. ``(at 1 2 90)``, and
returns the typed value. Positional, fixed-arity records reject leftovers;
records with optional attributes skip the ones they do not model.
"""

from __future__ import annotations

from enum import Enum
from typing import TypeVar

from ..exceptions import UnexpectedNodeError
from ..sexp import Cursor, Node, Number, SList, Symbol, convert, describe
from .common import (
    Font,
    HorizontalJustify,
    Point,
    Position,
    RgbaColor,
    Stroke,
    StrokeType,
    TextEffects,
    VerticalJustify,
)
from .context import check_layer, entity, report_unknown
from .pad import NetBinding

E = TypeVar("E", bound=Enum)
T = TypeVar("T")


def is_symbol(node: Node | None, name: str) -> bool:
    return isinstance(node, Symbol) and node.name == name


def child_tag(node: SList) -> str:
    """Tag of a nested attribute list; a list without one is malformed."""
    return Cursor(node).peek_tag()


def enum_value(enum_cls: type[E], raw: object, expected: str) -> E:
    """Look up ``raw`` in ``enum_cls`` or raise UnexpectedNodeError."""
    try:
        return enum_cls(raw)
    except ValueError:
        raise UnexpectedNodeError(expected, repr(raw)) from None


def first_value(node: SList, kind: type[T]) -> T:
    """Value of a single-value record such as ``(width 0.12)``."""
    return Cursor(node).discard(1).next_as(kind)


def flag_value(node: SList) -> bool:
    """A boolean attribute list: ``(hide yes)``, ``(locked no)`` or a bare ``(hide)``."""
    value = Cursor(node).discard(1).next_maybe_as(bool)
    return True if value is None else value


def text_value(node: Node) -> str:
    """Text of an atom that KiCad may write quoted, bare or numeric."""
    if isinstance(node, Number):
        return node.to_sexpr()
    return convert(node, str)


@entity("at")
def extract_position(node: SList) -> Position:
    """``(at x y [angle] [unlocked])``."""
    cursor = Cursor(node)
    cursor.discard(1)
    x = cursor.next_as(float)
    y = cursor.next_as(float)
    angle = None
    if isinstance(cursor.peek(), Number):
        angle = cursor.next_as(float)
    if is_symbol(cursor.peek(), "unlocked"):
        cursor.discard(1)
    cursor.expect_end()
    return Position(x=x, y=y, angle=angle)


@entity("xy")
def extract_point(node: SList) -> Point:
    """Any two-coordinate record: ``(xy x y)``, ``(start x y)``, ``(end x y)``..."""
    cursor = Cursor(node)
    cursor.discard(1)
    x = cursor.next_as(float)
    y = cursor.next_as(float)
    cursor.expect_end()
    return Point(x=x, y=y)


@entity("xyz")
def extract_xyz(node: SList) -> tuple[float, float, float]:
    cursor = Cursor(node)
    cursor.expect_tag("xyz")
    xyz = (cursor.next_as(float), cursor.next_as(float), cursor.next_as(float))
    cursor.expect_end()
    return xyz


@entity("pts")
def extract_points(node: SList) -> list[Point]:
    """``(pts (xy ..) ...)``. Arc items contribute their start, mid and end."""
    cursor = Cursor(node)
    cursor.expect_tag("pts")
    points: list[Point] = []
    for child in cursor:
        item = convert(child, SList)
        tag = child_tag(item)
        if tag == "xy":
            points.append(extract_point(item))
        elif tag == "arc":
            points.extend(_arc_points(item))
        else:
            report_unknown("pts", item)
    return points


@entity("arc")
def _arc_points(node: SList) -> list[Point]:
    points: list[Point] = []
    cursor = Cursor(node)
    cursor.discard(1)
    for child in cursor:
        item = convert(child, SList)
        if child_tag(item) in ("start", "mid", "end"):
            points.append(extract_point(item))
        else:
            report_unknown("arc", item)
    return points


@entity("size")
def extract_size(node: SList) -> tuple[float, float]:
    cursor = Cursor(node)
    cursor.discard(1)
    size = (cursor.next_as(float), cursor.next_as(float))
    cursor.expect_end()
    return size


@entity("layer")
def extract_layer(node: SList) -> str:
    """``(layer "F.Cu")``; a trailing ``knockout`` flag is accepted."""
    cursor = Cursor(node)
    cursor.expect_tag("layer")
    name = check_layer(cursor.next_as(str))
    if is_symbol(cursor.peek(), "knockout"):
        cursor.discard(1)
    cursor.expect_end()
    return name


@entity("layers")
def extract_layer_list(node: SList) -> list[str]:
    """``(layers "F.Cu" "F.Paste" ...)`` as used by pads, vias and private layers."""
    cursor = Cursor(node)
    cursor.discard(1)
    return [check_layer(convert(child, str)) for child in cursor]


@entity("uuid")
def extract_uuid(node: SList) -> str:
    """``(uuid "...")`` or the older ``(tstamp ...)``; must not be empty."""
    cursor = Cursor(node)
    cursor.expect_tag("uuid", "tstamp")
    value = cursor.next_as(str)
    if not value:
        raise UnexpectedNodeError("non-empty uuid", '""')
    cursor.expect_end()
    return value


def extract_fill(node: SList) -> bool:
    """``(fill yes)`` is the only filled form; ``none``, ``solid`` etc. are not."""
    cursor = Cursor(node)
    cursor.discard(1)
    return is_symbol(cursor.next_maybe(), "yes")


@entity("color")
def extract_color(node: SList) -> RgbaColor:
    cursor = Cursor(node)
    cursor.expect_tag("color")
    channels = []
    for _ in range(3):
        channel = cursor.next_as(int)
        if not 0 <= channel <= 255:
            raise UnexpectedNodeError("color channel 0-255", str(channel))
        channels.append(channel)
    alpha = cursor.next_as(float)
    cursor.expect_end()
    return RgbaColor(r=channels[0], g=channels[1], b=channels[2], a=alpha)


@entity("stroke")
def extract_stroke(node: SList) -> Stroke:
    """``(stroke (width w) (type t) [(color r g b a)])``."""
    cursor = Cursor(node)
    cursor.expect_tag("stroke")
    stroke = Stroke()
    for child in cursor:
        item = convert(child, SList)
        tag = child_tag(item)
        if tag == "width":
            stroke.width = first_value(item, float)
        elif tag == "type":
            stroke.line_type = enum_value(StrokeType, first_value(item, str), "stroke type")
        elif tag == "color":
            stroke.color = extract_color(item)
        else:
            report_unknown("stroke", item)
    return stroke


@entity("font")
def extract_font(node: SList) -> Font:
    cursor = Cursor(node)
    cursor.expect_tag("font")
    font = Font()
    for child in cursor:
        if is_symbol(child, "bold"):
            font.bold = True
        elif is_symbol(child, "italic"):
            font.italic = True
        elif isinstance(child, SList):
            tag = child_tag(child)
            if tag == "face":
                font.face = first_value(child, str)
            elif tag == "size":
                font.size = extract_size(child)
            elif tag == "thickness":
                font.thickness = first_value(child, float)
            elif tag == "line_spacing":
                font.line_spacing = first_value(child, float)
            elif tag == "bold":
                font.bold = flag_value(child)
            elif tag == "italic":
                font.italic = flag_value(child)
            else:
                report_unknown("font", child)
        else:
            report_unknown("font", child)
    return font


_HORIZONTAL = {"left": HorizontalJustify.LEFT, "right": HorizontalJustify.RIGHT}
_VERTICAL = {"top": VerticalJustify.TOP, "bottom": VerticalJustify.BOTTOM}


@entity("effects")
def extract_effects(node: SList) -> TextEffects:
    """``(effects (font ...) (justify left top mirror) hide)``."""
    cursor = Cursor(node)
    cursor.expect_tag("effects")
    effects = TextEffects()
    for child in cursor:
        if is_symbol(child, "hide"):
            effects.hide = True
        elif isinstance(child, SList):
            tag = child_tag(child)
            if tag == "font":
                effects.font = extract_font(child)
            elif tag == "justify":
                _apply_justify(effects, child)
            elif tag == "hide":
                effects.hide = flag_value(child)
            else:
                report_unknown("effects", child)
        else:
            report_unknown("effects", child)
    return effects


@entity("justify")
def _apply_justify(effects: TextEffects, node: SList) -> None:
    cursor = Cursor(node)
    cursor.discard(1)
    for child in cursor:
        word = convert(child, Symbol).name
        if word in _HORIZONTAL:
            effects.horizontal = _HORIZONTAL[word]
        elif word in _VERTICAL:
            effects.vertical = _VERTICAL[word]
        elif word == "mirror":
            effects.mirror = True
        else:
            raise UnexpectedNodeError("justification", describe(child))


@entity("net")
def extract_net_binding(node: SList) -> NetBinding:
    """``(net ordinal ["name"])`` as it appears on pads."""
    cursor = Cursor(node)
    cursor.expect_tag("net")
    ordinal = net_ordinal(cursor.next())
    name = cursor.next_maybe_as(str) or ""
    cursor.expect_end()
    return NetBinding(ordinal=ordinal, name=name)


def net_ordinal(node: Node) -> int:
    ordinal = convert(node, int)
    if ordinal < 0:
        raise UnexpectedNodeError("non-negative net ordinal", describe(node))
    return ordinal
