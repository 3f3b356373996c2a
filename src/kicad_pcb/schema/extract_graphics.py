"""Extract ``fp_*`` / ``gr_*`` graphic items.

Board and footprint graphics share one grammar; only the tag prefix differs.
Dispatch happens on the tag suffix, so ``fp_line`` and ``gr_line`` both reach
:func:`extract_line`.
"""

from __future__ import annotations

from collections.abc import Callable

from ..exceptions import UnexpectedTagError
from ..sexp import Cursor, Node, QuotedValue, SList, Symbol, convert
from .context import entity, report_unknown
from .extract_common import (
    child_tag,
    extract_effects,
    extract_fill,
    extract_layer,
    extract_point,
    extract_points,
    extract_position,
    extract_stroke,
    extract_uuid,
    first_value,
    flag_value,
    is_symbol,
)
from .graphics import (
    Arc,
    Circle,
    Curve,
    Graphic,
    GraphicBase,
    Line,
    Polygon,
    Rectangle,
    Text,
    TextBox,
    TextType,
)


def _family(tag: str) -> str:
    return tag.split("_", 1)[0]


def _apply_common(graphic: GraphicBase, tag: str, item: SList) -> bool:
    """Handle the attributes every variant accepts. False if ``tag`` is not one."""
    if tag == "layer":
        graphic.layer = extract_layer(item)
    elif tag == "stroke":
        graphic.stroke = extract_stroke(item)
    elif tag in ("uuid", "tstamp"):
        graphic.uuid = extract_uuid(item)
    elif tag == "locked":
        graphic.locked = flag_value(item)
    else:
        return False
    return True


def _apply_symbol(graphic: GraphicBase, tag: str, node: Node) -> None:
    if is_symbol(node, "locked"):
        graphic.locked = True
    else:
        report_unknown(tag, node)


_TEXT_TYPES = {t.value for t in TextType}


@entity("text")
def extract_text(node: SList) -> Text:
    """``(fp_text reference "R1" (at ..) (layer ..) (effects ..) [hide])``."""
    cursor = Cursor(node)
    tag = cursor.expect_tag_suffix("_text")
    text = Text(kind=_family(tag))
    for child in cursor:
        if isinstance(child, QuotedValue):
            text.text = child.value
        elif isinstance(child, Symbol) and child.name in _TEXT_TYPES:
            text.text_type = TextType(child.name)
        elif isinstance(child, SList):
            attr = child_tag(child)
            if attr == "at":
                text.position = extract_position(child)
                text.unlocked = any(is_symbol(n, "unlocked") for n in child.children)
            elif attr == "effects":
                text.effects = extract_effects(child)
                text.hide = text.hide or text.effects.hide
            elif attr == "hide":
                text.hide = flag_value(child)
            elif attr == "unlocked":
                text.unlocked = flag_value(child)
            elif not _apply_common(text, attr, child):
                report_unknown(tag, child)
        elif is_symbol(child, "hide"):
            text.hide = True
        else:
            _apply_symbol(text, tag, child)
    return text


@entity("text_box")
def extract_text_box(node: SList) -> TextBox:
    """``(fp_text_box "txt" (start ..) (end ..) | (pts ..) [(angle a)] ...)``."""
    cursor = Cursor(node)
    tag = cursor.expect_tag_suffix("_text_box")
    box = TextBox(kind=_family(tag))
    for child in cursor:
        if isinstance(child, QuotedValue):
            box.text = child.value
        elif isinstance(child, SList):
            attr = child_tag(child)
            if attr == "start":
                box.start = extract_point(child)
            elif attr == "end":
                box.end = extract_point(child)
            elif attr == "pts":
                box.points = extract_points(child)
            elif attr == "angle":
                box.angle = first_value(child, float)
            elif attr == "border":
                box.border = flag_value(child)
            elif attr == "effects":
                box.effects = extract_effects(child)
            elif not _apply_common(box, attr, child):
                report_unknown(tag, child)
        else:
            _apply_symbol(box, tag, child)
    return box


@entity("line")
def extract_line(node: SList) -> Line:
    cursor = Cursor(node)
    tag = cursor.expect_tag_suffix("_line")
    line = Line(kind=_family(tag))
    for child in cursor:
        if isinstance(child, SList):
            attr = child_tag(child)
            if attr == "start":
                line.start = extract_point(child)
            elif attr == "end":
                line.end = extract_point(child)
            elif attr == "width":
                line.width = first_value(child, float)
            elif not _apply_common(line, attr, child):
                report_unknown(tag, child)
        else:
            _apply_symbol(line, tag, child)
    return line


@entity("rect")
def extract_rect(node: SList) -> Rectangle:
    cursor = Cursor(node)
    tag = cursor.expect_tag_suffix("_rect")
    rect = Rectangle(kind=_family(tag))
    for child in cursor:
        if isinstance(child, SList):
            attr = child_tag(child)
            if attr == "start":
                rect.start = extract_point(child)
            elif attr == "end":
                rect.end = extract_point(child)
            elif attr == "width":
                rect.width = first_value(child, float)
            elif attr == "fill":
                rect.fill = extract_fill(child)
            elif not _apply_common(rect, attr, child):
                report_unknown(tag, child)
        else:
            _apply_symbol(rect, tag, child)
    return rect


@entity("circle")
def extract_circle(node: SList) -> Circle:
    cursor = Cursor(node)
    tag = cursor.expect_tag_suffix("_circle")
    circle = Circle(kind=_family(tag))
    for child in cursor:
        if isinstance(child, SList):
            attr = child_tag(child)
            if attr == "center":
                circle.center = extract_point(child)
            elif attr == "end":
                circle.end = extract_point(child)
            elif attr == "width":
                circle.width = first_value(child, float)
            elif attr == "fill":
                circle.fill = extract_fill(child)
            elif not _apply_common(circle, attr, child):
                report_unknown(tag, child)
        else:
            _apply_symbol(circle, tag, child)
    return circle


@entity("arc")
def extract_arc(node: SList) -> Arc:
    cursor = Cursor(node)
    tag = cursor.expect_tag_suffix("_arc")
    arc = Arc(kind=_family(tag))
    for child in cursor:
        if isinstance(child, SList):
            attr = child_tag(child)
            if attr == "start":
                arc.start = extract_point(child)
            elif attr == "mid":
                arc.mid = extract_point(child)
            elif attr == "end":
                arc.end = extract_point(child)
            elif attr == "width":
                arc.width = first_value(child, float)
            elif not _apply_common(arc, attr, child):
                report_unknown(tag, child)
        else:
            _apply_symbol(arc, tag, child)
    return arc


@entity("poly")
def extract_poly(node: SList) -> Polygon:
    cursor = Cursor(node)
    tag = cursor.expect_tag_suffix("_poly")
    poly = Polygon(kind=_family(tag))
    for child in cursor:
        if isinstance(child, SList):
            attr = child_tag(child)
            if attr == "pts":
                poly.points = extract_points(child)
            elif attr == "width":
                poly.width = first_value(child, float)
            elif attr == "fill":
                poly.fill = extract_fill(child)
            elif not _apply_common(poly, attr, child):
                report_unknown(tag, child)
        else:
            _apply_symbol(poly, tag, child)
    return poly


@entity("curve")
def extract_curve(node: SList) -> Curve:
    cursor = Cursor(node)
    tag = cursor.expect_tag_suffix("_curve")
    curve = Curve(kind=_family(tag))
    for child in cursor:
        if isinstance(child, SList):
            attr = child_tag(child)
            if attr == "pts":
                curve.points = extract_points(child)
            elif attr == "width":
                curve.width = first_value(child, float)
            elif not _apply_common(curve, attr, child):
                report_unknown(tag, child)
        else:
            _apply_symbol(curve, tag, child)
    return curve


# "_text_box" must be tried before "_text".
_BY_SUFFIX: list[tuple[str, Callable[[SList], Graphic]]] = [
    ("_text_box", extract_text_box),
    ("_text", extract_text),
    ("_line", extract_line),
    ("_rect", extract_rect),
    ("_circle", extract_circle),
    ("_arc", extract_arc),
    ("_poly", extract_poly),
    ("_curve", extract_curve),
]


def extract_graphic(node: Node) -> Graphic:
    """Dispatch a graphic item to the routine for its variant."""
    item = convert(node, SList)
    tag = child_tag(item)
    for suffix, extract in _BY_SUFFIX:
        if tag.endswith(suffix):
            return extract(item)
    raise UnexpectedTagError("graphic item (*_text, *_line, *_rect, ...)", tag).add_context(tag)
