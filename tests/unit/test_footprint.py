"""Tests for footprint and pad extraction."""

from __future__ import annotations

import pytest

from kicad_pcb import Diagnostic, parse_footprint
from kicad_pcb.exceptions import (
    ParseError,
    UnexpectedEndError,
    UnexpectedNodeError,
    UnexpectedTagError,
)
from kicad_pcb.schema import FootprintType, Pad, PadShape, PadType, extract_pad
from kicad_pcb.schema.common import Point
from kicad_pcb.schema.context import parse_session
from kicad_pcb.schema.pad import CustomPadClearance, PadCorner, PadProperty, ZoneConnect
from kicad_pcb.sexp import parse

FOOTPRINT = """
(footprint "Resistor_SMD:R_0603_1608Metric"
  (layer "F.Cu")
  (descr "Resistor SMD 0603")
  (tags "resistor")
  (property "Reference" "REF**" (at 0 -1.43 0) (layer "F.SilkS"))
  (property "Value" "R_0603" (at 0 1.43 0) (layer "F.Fab"))
  (attr smd exclude_from_bom)
  (fp_line (start -0.237 -0.5225) (end 0.237 -0.5225)
    (stroke (width 0.12) (type solid)) (layer "F.SilkS"))
  (fp_rect (start -1.48 -0.73) (end 1.48 0.73)
    (stroke (width 0.05) (type solid)) (fill none) (layer "F.CrtYd"))
  (fp_rect (start -0.8 -0.4125) (end 0.8 0.4125)
    (stroke (width 0.1) (type solid)) (fill none) (layer "F.Fab"))
  (pad "1" smd roundrect (at -0.825 0) (size 0.8 0.95)
    (layers "F.Cu" "F.Mask" "F.Paste") (roundrect_rratio 0.25))
  (pad "2" smd roundrect (at 0.825 0) (size 0.8 0.95)
    (layers "F.Cu" "F.Mask" "F.Paste") (roundrect_rratio 0.25))
  (model "${KICAD8_3DMODEL_DIR}/Resistor_SMD.3dshapes/R_0603_1608Metric.wrl"
    (offset (xyz 0 0 0)) (scale (xyz 1 1 1)) (rotate (xyz 0 0 0)))
)
"""


class TestFootprint:
    def test_fields(self) -> None:
        fp = parse_footprint(FOOTPRINT)
        assert fp.library_link == "Resistor_SMD:R_0603_1608Metric"
        assert fp.layer == "F.Cu"
        assert fp.description == "Resistor SMD 0603"
        assert fp.tags == "resistor"
        assert fp.reference == "REF**"
        assert fp.value == "R_0603"
        assert fp.position is None

    def test_properties_keep_order(self) -> None:
        fp = parse_footprint(FOOTPRINT)
        assert list(fp.properties) == ["Reference", "Value"]

    def test_attributes(self) -> None:
        fp = parse_footprint(FOOTPRINT)
        assert fp.attributes is not None
        assert fp.attributes.footprint_type is FootprintType.SMD
        assert fp.attributes.exclude_from_bom is True
        assert fp.attributes.board_only is False

    def test_graphics_and_pads(self) -> None:
        fp = parse_footprint(FOOTPRINT)
        assert len(fp.graphics) == 3
        assert [p.number for p in fp.pads] == ["1", "2"]

    def test_model(self) -> None:
        fp = parse_footprint(FOOTPRINT)
        assert len(fp.models) == 1
        assert fp.models[0].file.endswith("R_0603_1608Metric.wrl")
        assert fp.models[0].scale == (1.0, 1.0, 1.0)

    def test_bounding_box_skips_fab(self) -> None:
        box = parse_footprint(FOOTPRINT).bounding_box()
        assert (box.min_x, box.min_y, box.max_x, box.max_y) == (-1.48, -0.73, 1.48, 0.73)

    def test_bounding_box_moves_by_position(self) -> None:
        fp = parse_footprint(
            '(footprint "X" (at 10 20) (fp_line (start 0 0) (end 1 2) (layer "F.SilkS")))'
        )
        box = fp.bounding_box()
        assert (box.min_x, box.min_y, box.max_x, box.max_y) == (10, 20, 11, 22)

    def test_fab_only_footprint_has_empty_box(self) -> None:
        fp = parse_footprint('(footprint "X" (fp_line (start 0 0) (end 1 1) (layer "F.Fab")))')
        assert fp.bounding_box().is_empty

    def test_legacy_module_tag(self) -> None:
        fp = parse_footprint('(module "Old:Part" locked (layer F.Cu) (tedit 5F0C8A2B))')
        assert fp.library_link == "Old:Part"
        assert fp.locked is True
        assert fp.tedit == "5F0C8A2B"

    def test_flags_and_optional_values(self) -> None:
        fp = parse_footprint(
            '(footprint "X" placed (at 1 2 180) (solder_mask_margin 0.05) (clearance 0.2)'
            ' (zone_connect 2) (autoplace_cost90 3) (private_layers "User.1")'
            ' (net_tie_pad_groups "1, 2" "3,4") (attr through_hole board_only dnp))'
        )
        assert fp.placed is True
        assert fp.position is not None and fp.position.angle == 180
        assert fp.solder_mask_margin == 0.05
        assert fp.clearance == 0.2
        assert fp.zone_connect is ZoneConnect.SOLID
        assert fp.autoplace_cost90 == 3
        assert fp.private_layers == ["User.1"]
        assert fp.net_tie_pad_groups == [["1", "2"], ["3", "4"]]
        assert fp.attributes is not None
        assert fp.attributes.footprint_type is FootprintType.THROUGH_HOLE
        assert fp.attributes.dnp is True

    def test_unknown_field_is_tolerated_and_reported(self) -> None:
        diagnostics: list[Diagnostic] = []
        fp = parse_footprint(
            '(footprint "X" (future_field 1 2) (layer "F.Cu"))', diagnostics=diagnostics
        )
        assert fp.layer == "F.Cu"
        assert diagnostics == [Diagnostic(entity="footprint", tag="future_field")]

    def test_pressfit_pad_on_footprint(self) -> None:
        fp = parse_footprint(
            '(footprint "X" (layer "F.Cu") (pad "1" thru_hole circle (at 0 0) (size 1 1)'
            ' (drill 0.5) (property pad_prop_pressfit) (layers "*.Cu")))'
        )
        assert fp.pads[0].properties == [PadProperty.PRESSFIT]

    def test_unknown_graphic_keeps_position(self) -> None:
        with pytest.raises(UnexpectedTagError) as exc_info:
            parse_footprint('(footprint "X" (fp_line (start 0 0) (end 1 1)) (fp_blob (start 0 0)))')
        assert exc_info.value.context == ["fp_blob #2", "footprint"]

    def test_wrong_root_tag(self) -> None:
        with pytest.raises(ParseError, match="footprint"):
            parse_footprint("(pad 1 smd rect)")


class TestPad:
    def _pad(self, text: str) -> Pad:
        return extract_pad(parse(text))

    def test_smd_pad(self) -> None:
        pad = self._pad(
            '(pad "1" smd roundrect (at -0.95 0) (size 1 1.45) (layers "F.Cu" "F.Mask" "F.Paste")'
            ' (roundrect_rratio 0.25) (net 1 "VCC") (pinfunction "A") (pintype "passive")'
            ' (uuid "u1"))'
        )
        assert pad.number == "1"
        assert pad.pad_type is PadType.SMD
        assert pad.shape is PadShape.ROUNDRECT
        assert pad.position.x == -0.95
        assert pad.size == (1.0, 1.45)
        assert pad.layers == ["F.Cu", "F.Mask", "F.Paste"]
        assert pad.roundrect_rratio == 0.25
        assert pad.net is not None
        assert (pad.net.ordinal, pad.net.name) == (1, "VCC")
        assert pad.pin_function == "A"
        assert pad.uuid == "u1"
        assert pad.drill is None

    def test_numeric_pad_number(self) -> None:
        pad = self._pad("(pad 3 thru_hole circle (at 0 0) (size 1.7 1.7) (drill 1))")
        assert pad.number == "3"
        assert pad.is_through_hole

    def test_empty_pad_number(self) -> None:
        pad = self._pad('(pad "" np_thru_hole circle (at 0 0) (size 3 3) (drill 3))')
        assert pad.number == ""
        assert pad.pad_type is PadType.NP_THROUGH_HOLE

    def test_oval_drill_with_offset(self) -> None:
        pad = self._pad(
            '(pad "1" thru_hole oval (at 0 0) (size 2 3) (drill oval 1 2 (offset 0.1 -0.2)))'
        )
        assert pad.drill is not None
        assert pad.drill.oval is True
        assert (pad.drill.diameter, pad.drill.width) == (1.0, 2.0)
        assert pad.drill.offset == Point(0.1, -0.2)

    def test_drill_without_size(self) -> None:
        with pytest.raises(UnexpectedNodeError, match="drill diameter"):
            self._pad('(pad "1" thru_hole circle (drill oval))')

    def test_properties_and_chamfer(self) -> None:
        pad = self._pad(
            '(pad "1" smd roundrect (property pad_prop_heatsink) (chamfer_ratio 0.2)'
            " (chamfer top_left bottom_right) (zone_connect 0) (thermal_bridge_width 0.5)"
            " (thermal_gap 0.3) (thermal_bridge_angle 45) (remove_unused_layers yes))"
        )
        assert pad.properties == [PadProperty.HEATSINK]
        assert pad.chamfer == [PadCorner.TOP_LEFT, PadCorner.BOTTOM_RIGHT]
        assert pad.zone_connect is ZoneConnect.NONE
        assert pad.thermal_width == 0.5
        assert pad.thermal_bridge_angle == 45
        assert pad.remove_unused_layers is True

    def test_custom_pad(self) -> None:
        pad = self._pad(
            '(pad "1" smd custom (at 0 0) (size 1 1) (layers "F.Cu")'
            " (options (clearance convexhull) (anchor circle))"
            " (primitives (gr_poly (pts (xy 0 0) (xy 1 0) (xy 1 1)) (width 0) (fill yes))"
            " (gr_circle (center 0 0) (end 0.5 0)) (width 0.1)))"
        )
        assert pad.shape is PadShape.CUSTOM
        assert pad.custom_options is not None
        assert pad.custom_options.clearance is CustomPadClearance.CONVEX_HULL
        assert pad.custom_options.anchor is PadShape.CIRCLE
        assert pad.custom_primitives is not None
        assert len(pad.custom_primitives.graphics) == 2
        assert pad.custom_primitives.width == 0.1

    def test_error_inside_primitive_has_context(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            self._pad(
                '(pad "1" smd custom (primitives (gr_line (start 0 0) (end 1 1))'
                " (gr_poly (pts (xy 0 0) (xy 1)))))"
            )
        assert exc_info.value.context == ["xy", "pts", "gr_poly #2", "primitives", "pad"]
        assert isinstance(exc_info.value, UnexpectedEndError)

    def test_negative_net_ordinal(self) -> None:
        with pytest.raises(UnexpectedNodeError, match="non-negative"):
            self._pad('(pad "1" smd rect (net -1 "X"))')

    def test_bad_zone_connect(self) -> None:
        with pytest.raises(UnexpectedNodeError, match="zone connection"):
            self._pad('(pad "1" smd rect (zone_connect 7))')

    def test_pressfit_property(self) -> None:
        pad = self._pad(
            '(pad "1" thru_hole circle (at 0 0) (size 1 1) (drill 0.5)'
            ' (property pad_prop_pressfit) (layers "*.Cu"))'
        )
        assert pad.properties == [PadProperty.PRESSFIT]

    def test_unknown_property_is_reported(self) -> None:
        diagnostics: list[Diagnostic] = []
        with parse_session(diagnostics=diagnostics):
            pad = self._pad('(pad "1" smd rect (property pad_prop_future) (property pad_prop_bga))')
        assert pad.properties == [PadProperty.BGA]
        assert diagnostics == [Diagnostic(entity="pad", tag="pad_prop_future")]

    def test_consistency_issue_for_missing_drill(self) -> None:
        pad = self._pad('(pad "5" thru_hole circle (at 0 0) (size 1 1))')
        assert pad.consistency_issues() == ["pad '5' is thru_hole but has no drill"]
