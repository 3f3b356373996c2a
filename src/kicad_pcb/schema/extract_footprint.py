"""Extract footprints and their pads."""

from __future__ import annotations

from ..exceptions import UnexpectedNodeError
from ..sexp import Cursor, Number, QuotedValue, SList, Symbol, convert
from .context import entity, numbered, report_unknown
from .extract_common import (
    child_tag,
    enum_value,
    extract_fill,
    extract_layer,
    extract_layer_list,
    extract_net_binding,
    extract_point,
    extract_position,
    extract_size,
    extract_uuid,
    extract_xyz,
    first_value,
    flag_value,
    is_symbol,
    text_value,
)
from .extract_graphics import extract_graphic
from .footprint import (
    Footprint,
    FootprintAttributes,
    FootprintType,
    Group,
    Model3D,
    Zone,
)
from .pad import (
    CustomPadClearance,
    CustomPadOptions,
    CustomPadPrimitives,
    Drill,
    Pad,
    PadCorner,
    PadProperty,
    PadShape,
    PadType,
    ZoneConnect,
)

_PAD_TYPES = {t.value: t for t in PadType}
_PAD_SHAPES = {s.value: s for s in PadShape}
_PAD_PROPERTIES = {p.value: p for p in PadProperty}


def _zone_connect(node: SList) -> ZoneConnect:
    return enum_value(ZoneConnect, first_value(node, int), "zone connection 0-3")


@entity("drill")
def extract_drill(node: SList) -> Drill:
    """``(drill [oval] diameter [width] [(offset x y)])``."""
    cursor = Cursor(node)
    cursor.expect_tag("drill")
    drill = Drill()
    sizes: list[float] = []
    for child in cursor:
        if is_symbol(child, "oval"):
            drill.oval = True
        elif isinstance(child, Number):
            sizes.append(child.value)
        elif isinstance(child, SList) and child_tag(child) == "offset":
            drill.offset = extract_point(child)
        else:
            report_unknown("drill", child)
    if not sizes:
        raise UnexpectedNodeError("drill diameter", "nothing")
    drill.diameter = sizes[0]
    if len(sizes) > 1:
        drill.width = sizes[1]
    return drill


@entity("options")
def extract_custom_options(node: SList) -> CustomPadOptions:
    cursor = Cursor(node)
    cursor.expect_tag("options")
    options = CustomPadOptions()
    for child in cursor:
        item = convert(child, SList)
        tag = child_tag(item)
        if tag == "clearance":
            options.clearance = enum_value(
                CustomPadClearance, first_value(item, str), "custom pad clearance"
            )
        elif tag == "anchor":
            options.anchor = enum_value(PadShape, first_value(item, str), "pad shape")
        else:
            report_unknown("options", item)
    return options


@entity("primitives")
def extract_custom_primitives(node: SList) -> CustomPadPrimitives:
    """``(primitives (gr_poly ..) (gr_line ..) [(width w)] [(fill yes)])``."""
    cursor = Cursor(node)
    cursor.expect_tag("primitives")
    primitives = CustomPadPrimitives()
    for index, child in enumerate(cursor, start=1):
        item = convert(child, SList)
        tag = child_tag(item)
        if tag == "width":
            primitives.width = first_value(item, float)
        elif tag == "fill":
            primitives.fill = extract_fill(item)
        elif tag.startswith("gr_"):
            with numbered(index):
                primitives.graphics.append(extract_graphic(item))
        else:
            report_unknown("primitives", item)
    return primitives


def _apply_pad_attribute(pad: Pad, tag: str, item: SList) -> None:
    if tag == "at":
        pad.position = extract_position(item)
    elif tag == "size":
        pad.size = extract_size(item)
    elif tag == "drill":
        pad.drill = extract_drill(item)
    elif tag == "layers":
        pad.layers = extract_layer_list(item)
    elif tag == "property":
        value = Cursor(item).discard(1).next()
        prop = _PAD_PROPERTIES.get(convert(value, str))
        if prop is None:
            report_unknown("pad", value)
        else:
            pad.properties.append(prop)
    elif tag == "remove_unused_layers":
        pad.remove_unused_layers = flag_value(item)
    elif tag == "keep_end_layers":
        pad.keep_end_layers = flag_value(item)
    elif tag == "roundrect_rratio":
        pad.roundrect_rratio = first_value(item, float)
    elif tag == "chamfer_ratio":
        pad.chamfer_ratio = first_value(item, float)
    elif tag == "chamfer":
        corners = Cursor(item).discard(1)
        pad.chamfer = [enum_value(PadCorner, convert(c, str), "pad corner") for c in corners]
    elif tag == "net":
        pad.net = extract_net_binding(item)
    elif tag in ("uuid", "tstamp"):
        pad.uuid = extract_uuid(item)
    elif tag == "pinfunction":
        pad.pin_function = first_value(item, str)
    elif tag == "pintype":
        pad.pin_type = first_value(item, str)
    elif tag == "die_length":
        pad.die_length = first_value(item, float)
    elif tag == "solder_mask_margin":
        pad.solder_mask_margin = first_value(item, float)
    elif tag == "solder_paste_margin":
        pad.solder_paste_margin = first_value(item, float)
    elif tag == "solder_paste_margin_ratio":
        pad.solder_paste_margin_ratio = first_value(item, float)
    elif tag == "clearance":
        pad.clearance = first_value(item, float)
    elif tag == "zone_connect":
        pad.zone_connect = _zone_connect(item)
    elif tag in ("thermal_width", "thermal_bridge_width"):
        pad.thermal_width = first_value(item, float)
    elif tag == "thermal_gap":
        pad.thermal_gap = first_value(item, float)
    elif tag == "thermal_bridge_angle":
        pad.thermal_bridge_angle = first_value(item, float)
    elif tag == "options":
        pad.custom_options = extract_custom_options(item)
    elif tag == "primitives":
        pad.custom_primitives = extract_custom_primitives(item)
    elif tag == "locked":
        pad.locked = flag_value(item)
    else:
        report_unknown("pad", item)


@entity("pad")
def extract_pad(node: SList) -> Pad:
    """``(pad "1" smd roundrect (at ..) (size ..) (layers ..) ...)``."""
    cursor = Cursor(node)
    cursor.expect_tag("pad")
    pad = Pad()
    has_number = False
    for child in cursor:
        if isinstance(child, SList):
            _apply_pad_attribute(pad, child_tag(child), child)
        elif isinstance(child, Symbol) and child.name in _PAD_TYPES:
            pad.pad_type = _PAD_TYPES[child.name]
        elif isinstance(child, Symbol) and child.name in _PAD_SHAPES:
            pad.shape = _PAD_SHAPES[child.name]
        elif is_symbol(child, "locked"):
            pad.locked = True
        elif not has_number and isinstance(child, (QuotedValue, Number, Symbol)):
            pad.number = text_value(child)
            has_number = True
        else:
            report_unknown("pad", child)
    return pad


@entity("attr")
def extract_attributes(node: SList) -> FootprintAttributes:
    cursor = Cursor(node)
    cursor.expect_tag("attr")
    attributes = FootprintAttributes()
    for child in cursor:
        word = convert(child, Symbol).name
        if word == "smd":
            attributes.footprint_type = FootprintType.SMD
        elif word == "through_hole":
            attributes.footprint_type = FootprintType.THROUGH_HOLE
        elif word == "board_only":
            attributes.board_only = True
        elif word == "exclude_from_pos_files":
            attributes.exclude_from_pos_files = True
        elif word == "exclude_from_bom":
            attributes.exclude_from_bom = True
        elif word == "allow_missing_courtyard":
            attributes.allow_missing_courtyard = True
        elif word == "dnp":
            attributes.dnp = True
        else:
            report_unknown("attr", child)
    return attributes


def _model_vector(node: SList) -> tuple[float, float, float]:
    """``(offset (xyz x y z))`` and friends."""
    cursor = Cursor(node)
    cursor.discard(1)
    xyz = extract_xyz(cursor.next_as(SList))
    cursor.expect_end()
    return xyz


@entity("model")
def extract_model(node: SList) -> Model3D:
    cursor = Cursor(node)
    cursor.expect_tag("model")
    model = Model3D(file=cursor.next_as(str))
    for child in cursor:
        if is_symbol(child, "hide"):
            model.hide = True
        elif isinstance(child, SList):
            tag = child_tag(child)
            if tag in ("offset", "at"):
                model.offset = _model_vector(child)
            elif tag == "scale":
                model.scale = _model_vector(child)
            elif tag == "rotate":
                model.rotate = _model_vector(child)
            elif tag == "hide":
                model.hide = flag_value(child)
            else:
                report_unknown("model", child)
        else:
            report_unknown("model", child)
    return model


@entity("property")
def extract_property(node: SList) -> tuple[str, str]:
    """``(property "key" "value" ...)``; trailing render attributes are ignored."""
    cursor = Cursor(node)
    cursor.expect_tag("property")
    key = cursor.next_as(str)
    value = text_value(cursor.next())
    return key, value


@entity("net_tie_pad_groups")
def _net_tie_pad_groups(node: SList) -> list[list[str]]:
    cursor = Cursor(node)
    cursor.discard(1)
    groups: list[list[str]] = []
    for child in cursor:
        group = convert(child, str)
        groups.append([name.strip() for name in group.split(",") if name.strip()])
    return groups


def _apply_footprint_attribute(footprint: Footprint, tag: str, item: SList) -> None:
    if tag == "layer":
        footprint.layer = extract_layer(item)
    elif tag == "tedit":
        footprint.tedit = text_value(Cursor(item).discard(1).next())
    elif tag in ("uuid", "tstamp"):
        footprint.uuid = extract_uuid(item)
    elif tag == "at":
        footprint.position = extract_position(item)
    elif tag == "descr":
        footprint.description = first_value(item, str)
    elif tag == "tags":
        footprint.tags = first_value(item, str)
    elif tag == "property":
        key, value = extract_property(item)
        footprint.properties[key] = value
    elif tag == "path":
        footprint.path = first_value(item, str)
    elif tag == "sheetname":
        footprint.sheetname = first_value(item, str)
    elif tag == "sheetfile":
        footprint.sheetfile = first_value(item, str)
    elif tag == "autoplace_cost90":
        footprint.autoplace_cost90 = first_value(item, int)
    elif tag == "autoplace_cost180":
        footprint.autoplace_cost180 = first_value(item, int)
    elif tag == "solder_mask_margin":
        footprint.solder_mask_margin = first_value(item, float)
    elif tag == "solder_paste_margin":
        footprint.solder_paste_margin = first_value(item, float)
    elif tag in ("solder_paste_ratio", "solder_paste_margin_ratio"):
        footprint.solder_paste_ratio = first_value(item, float)
    elif tag == "clearance":
        footprint.clearance = first_value(item, float)
    elif tag == "zone_connect":
        footprint.zone_connect = _zone_connect(item)
    elif tag == "thermal_width":
        footprint.thermal_width = first_value(item, float)
    elif tag == "thermal_gap":
        footprint.thermal_gap = first_value(item, float)
    elif tag == "attr":
        footprint.attributes = extract_attributes(item)
    elif tag == "private_layers":
        footprint.private_layers = extract_layer_list(item)
    elif tag == "net_tie_pad_groups":
        footprint.net_tie_pad_groups = _net_tie_pad_groups(item)
    elif tag == "model":
        footprint.models.append(extract_model(item))
    elif tag == "zone":
        footprint.zones.append(Zone())
    elif tag == "group":
        footprint.groups.append(Group())
    elif tag == "locked":
        footprint.locked = flag_value(item)
    elif tag == "placed":
        footprint.placed = flag_value(item)
    else:
        report_unknown("footprint", item)


@entity("footprint")
def extract_footprint(node: SList) -> Footprint:
    """``(footprint "Lib:Name" [locked] [placed] (layer ..) (at ..) ...)``.

    ``module`` is the pre-6.0 spelling of the same entity.
    """
    cursor = Cursor(node)
    cursor.expect_tag("footprint", "module")
    footprint = Footprint()
    graphic_count = 0
    pad_count = 0
    for child in cursor:
        if isinstance(child, QuotedValue):
            footprint.library_link = child.value
        elif is_symbol(child, "locked"):
            footprint.locked = True
        elif is_symbol(child, "placed"):
            footprint.placed = True
        elif isinstance(child, SList):
            tag = child_tag(child)
            if tag.startswith("fp_"):
                graphic_count += 1
                with numbered(graphic_count):
                    footprint.graphics.append(extract_graphic(child))
            elif tag == "pad":
                pad_count += 1
                with numbered(pad_count):
                    footprint.pads.append(extract_pad(child))
            else:
                _apply_footprint_attribute(footprint, tag, child)
        else:
            report_unknown("footprint", child)
    return footprint

