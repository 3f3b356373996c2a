"""Extract a typed Board from a parsed ``kicad_pcb`` tree.

Converts raw S-expression nodes into the structured dataclasses of
:mod:`kicad_pcb.schema.board`.
"""

from __future__ import annotations

from ..sexp import Cursor, Number, SList, convert
from .board import (
    Board,
    EdgeConnector,
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
from .context import check_layer, entity, numbered, report_unknown
from .extract_common import (
    child_tag,
    enum_value,
    extract_layer,
    extract_layer_list,
    extract_point,
    extract_position,
    extract_uuid,
    first_value,
    flag_value,
    is_symbol,
    net_ordinal,
    text_value,
)
from .extract_footprint import extract_footprint, extract_property
from .extract_graphics import extract_graphic


@entity("net")
def extract_net(node: SList) -> Net:
    """``(net ordinal "name")`` from the board's net table."""
    cursor = Cursor(node)
    cursor.expect_tag("net")
    ordinal = net_ordinal(cursor.next())
    name = cursor.next_as(str)
    cursor.expect_end()
    return Net(ordinal=ordinal, name=name)


@entity("layer record")
def extract_layer_record(node: SList) -> Layer:
    """``(ordinal "name" type ["user name"])``; the fields are positional."""
    cursor = Cursor(node)
    ordinal = cursor.next_as(int)
    name = check_layer(cursor.next_as(str))
    layer_type = enum_value(LayerType, cursor.next_symbol(), "layer type")
    user_name = cursor.next_maybe_as(str)
    cursor.expect_end()
    return Layer(ordinal=ordinal, name=name, layer_type=layer_type, user_name=user_name)


@entity("layers")
def extract_layers(node: SList) -> list[Layer]:
    cursor = Cursor(node)
    cursor.expect_tag("layers")
    layers: list[Layer] = []
    for index, child in enumerate(cursor, start=1):
        with numbered(index):
            layers.append(extract_layer_record(convert(child, SList)))
    return layers


@entity("general")
def extract_general(node: SList) -> GeneralSettings:
    cursor = Cursor(node)
    cursor.expect_tag("general")
    general = GeneralSettings()
    for child in cursor:
        item = convert(child, SList)
        if child_tag(item) == "thickness":
            general.thickness = first_value(item, float)
        else:
            report_unknown("general", item)
    return general


@entity("title_block")
def extract_title_block(node: SList) -> TitleBlock:
    cursor = Cursor(node)
    cursor.expect_tag("title_block")
    title_block = TitleBlock()
    for child in cursor:
        item = convert(child, SList)
        tag = child_tag(item)
        if tag == "title":
            title_block.title = first_value(item, str)
        elif tag == "date":
            title_block.date = text_value(Cursor(item).discard(1).next())
        elif tag == "rev":
            title_block.rev = text_value(Cursor(item).discard(1).next())
        elif tag == "company":
            title_block.company = first_value(item, str)
        elif tag == "comment":
            comment = Cursor(item).discard(1)
            number = comment.next_as(int)
            title_block.comments[number] = comment.next_as(str)
        else:
            report_unknown("title_block", item)
    return title_block


@entity("stackup")
def extract_stackup(node: SList) -> StackupSettings:
    cursor = Cursor(node)
    cursor.expect_tag("stackup")
    stackup = StackupSettings()
    for child in cursor:
        item = convert(child, SList)
        tag = child_tag(item)
        if tag == "layer":
            # Per-layer stackup entries (dielectrics, thicknesses) are not modelled.
            continue
        if tag == "copper_finish":
            stackup.copper_finish = first_value(item, str)
        elif tag == "dielectric_constraints":
            stackup.dielectric_constraints = flag_value(item)
        elif tag == "edge_connector":
            stackup.edge_connector = enum_value(
                EdgeConnector, first_value(item, str), "edge connector type"
            )
        elif tag == "castellated_pads":
            stackup.castellated_pads = flag_value(item)
        elif tag == "edge_plating":
            stackup.edge_plating = flag_value(item)
        else:
            report_unknown("stackup", item)
    return stackup


@entity("setup")
def extract_setup(node: SList) -> Setup:
    cursor = Cursor(node)
    cursor.expect_tag("setup")
    setup = Setup()
    for child in cursor:
        item = convert(child, SList)
        tag = child_tag(item)
        if tag == "stackup":
            setup.stackup = extract_stackup(item)
        elif tag == "pad_to_mask_clearance":
            setup.pad_to_mask_clearance = first_value(item, float)
        elif tag == "solder_mask_min_width":
            setup.solder_mask_min_width = first_value(item, float)
        elif tag == "pad_to_paste_clearance":
            setup.pad_to_paste_clearance = first_value(item, float)
        elif tag == "pad_to_paste_clearance_ratio":
            setup.pad_to_paste_clearance_ratio = first_value(item, float)
        elif tag == "aux_axis_origin":
            setup.aux_axis_origin = extract_point(item)
        elif tag == "grid_origin":
            setup.grid_origin = extract_point(item)
        else:
            report_unknown("setup", item)
    return setup


def _track_net(node: SList) -> int:
    return net_ordinal(Cursor(node).discard(1).next())


@entity("segment")
def extract_segment(node: SList) -> Segment:
    cursor = Cursor(node)
    cursor.expect_tag("segment")
    segment = Segment()
    for child in cursor:
        if is_symbol(child, "locked"):
            segment.locked = True
            continue
        item = convert(child, SList)
        tag = child_tag(item)
        if tag == "start":
            segment.start = extract_point(item)
        elif tag == "end":
            segment.end = extract_point(item)
        elif tag == "width":
            segment.width = first_value(item, float)
        elif tag == "layer":
            segment.layer = extract_layer(item)
        elif tag == "net":
            segment.net = _track_net(item)
        elif tag in ("uuid", "tstamp"):
            segment.uuid = extract_uuid(item)
        elif tag == "locked":
            segment.locked = flag_value(item)
        else:
            report_unknown("segment", item)
    return segment


@entity("via")
def extract_via(node: SList) -> Via:
    cursor = Cursor(node)
    cursor.expect_tag("via")
    via = Via()
    for child in cursor:
        if is_symbol(child, "locked"):
            via.locked = True
        elif is_symbol(child, "blind") or is_symbol(child, "micro"):
            via.via_type = convert(child, str)
        elif isinstance(child, SList):
            tag = child_tag(child)
            if tag == "at":
                via.position = extract_position(child)
            elif tag == "size":
                via.size = first_value(child, float)
            elif tag == "drill":
                via.drill = first_value(child, float)
            elif tag == "layers":
                via.layers = extract_layer_list(child)
            elif tag == "net":
                via.net = _track_net(child)
            elif tag in ("uuid", "tstamp"):
                via.uuid = extract_uuid(child)
            elif tag == "locked":
                via.locked = flag_value(child)
            else:
                report_unknown("via", child)
        else:
            report_unknown("via", child)
    return via


def _version_text(node: SList) -> str:
    value = Cursor(node).discard(1).next()
    if isinstance(value, Number):
        return str(convert(value, int))
    return convert(value, str)


@entity("kicad_pcb")
def extract_board(node: SList) -> Board:
    """Build a Board from the root ``(kicad_pcb ...)`` list."""
    cursor = Cursor(node)
    cursor.expect_tag("kicad_pcb")
    board = Board()
    counts = {"graphic": 0, "footprint": 0, "net": 0, "segment": 0, "via": 0}

    def next_index(kind: str) -> int:
        counts[kind] += 1
        return counts[kind]

    for child in cursor:
        item = convert(child, SList)
        tag = child_tag(item)
        if tag == "version":
            board.version = _version_text(item)
        elif tag == "generator":
            board.generator = first_value(item, str)
        elif tag == "generator_version":
            board.generator_version = first_value(item, str)
        elif tag == "paper":
            board.paper = first_value(item, str)
        elif tag == "general":
            board.general = extract_general(item)
        elif tag == "title_block":
            board.title_block = extract_title_block(item)
        elif tag == "layers":
            board.layers = extract_layers(item)
        elif tag == "setup":
            board.setup = extract_setup(item)
        elif tag == "property":
            key, value = extract_property(item)
            board.properties[key] = value
        elif tag == "net":
            with numbered(next_index("net")):
                board.nets.append(extract_net(item))
        elif tag in ("footprint", "module"):
            with numbered(next_index("footprint")):
                board.footprints.append(extract_footprint(item))
        elif tag.startswith("gr_"):
            with numbered(next_index("graphic")):
                board.graphics.append(extract_graphic(item))
        elif tag == "segment":
            with numbered(next_index("segment")):
                board.segments.append(extract_segment(item))
        elif tag == "via":
            with numbered(next_index("via")):
                board.vias.append(extract_via(item))
        else:
            report_unknown("kicad_pcb", item)
    return board
