"""Tests for graphic item extraction and per-variant bounding boxes."""

from __future__ import annotations

from typing import Any

import pytest

from kicad_pcb.exceptions import ParseError, UnexpectedNodeError, UnexpectedTagError
from kicad_pcb.schema import (
    Arc,
    Circle,
    Curve,
    Line,
    Polygon,
    Rectangle,
    StrokeType,
    Text,
    TextBox,
    TextType,
    extract_graphic,
)
from kicad_pcb.schema.common import HorizontalJustify, Point, VerticalJustify
from kicad_pcb.sexp import parse


def _graphic(text: str) -> Any:
    return extract_graphic(parse(text))


class TestLine:
    def test_fp_line(self) -> None:
        line = _graphic(
            '(fp_line (start 0 0) (end 1 1) (stroke (width 0.12) (type solid)) (layer "F.SilkS")'
            ' (uuid "a1"))'
        )
        assert isinstance(line, Line)
        assert line.kind == "fp"
        assert line.start == Point(0, 0)
        assert line.end == Point(1, 1)
        assert line.layer == "F.SilkS"
        assert line.stroke.width == 0.12
        assert line.stroke.line_type is StrokeType.SOLID
        assert line.uuid == "a1"

    def test_gr_line_legacy_width_and_tstamp(self) -> None:
        line = _graphic(
            "(gr_line (start 1 2) (end 3 4) (layer Edge.Cuts) (width 0.1) (tstamp 5e1a))"
        )
        assert isinstance(line, Line)
        assert line.kind == "gr"
        assert line.width == 0.1
        assert line.uuid == "5e1a"

    def test_locked_symbol(self) -> None:
        line = _graphic("(fp_line locked (start 0 0) (end 1 0) (layer F.SilkS))")
        assert line.locked is True

    def test_locked_list(self) -> None:
        line = _graphic("(fp_line (start 0 0) (end 1 0) (locked yes) (layer F.SilkS))")
        assert line.locked is True

    def test_box_uses_min_max(self) -> None:
        line = _graphic("(fp_line (start 5 4) (end 1 2) (layer F.SilkS))")
        box = line.bounding_box()
        assert (box.min_x, box.min_y, box.max_x, box.max_y) == (1, 2, 5, 4)

    def test_point_with_extra_value_is_rejected(self) -> None:
        with pytest.raises(ParseError, match="leftover") as exc_info:
            _graphic("(fp_line (start 0 0 0) (end 1 1))")
        assert exc_info.value.context == ["start", "fp_line"]


class TestRectAndCircle:
    def test_rect_fill_yes(self) -> None:
        rect = _graphic("(gr_rect (start 0 0) (end 2 3) (fill yes) (layer Edge.Cuts))")
        assert isinstance(rect, Rectangle)
        assert rect.fill is True

    @pytest.mark.parametrize("fill", ["no", "none", "solid"])
    def test_rect_fill_other_values(self, fill: str) -> None:
        rect = _graphic(f"(gr_rect (start 0 0) (end 2 3) (fill {fill}))")
        assert rect.fill is False

    def test_circle(self) -> None:
        circle = _graphic("(fp_circle (center 0 0) (end 3 0) (layer F.SilkS) (fill none))")
        assert isinstance(circle, Circle)
        assert circle.radius == 3.0
        box = circle.bounding_box()
        assert (box.min_x, box.min_y, box.max_x, box.max_y) == (-3, -3, 3, 3)


class TestArcPolyCurve:
    def test_arc(self) -> None:
        arc = _graphic("(gr_arc (start -1 0) (mid 0 -1) (end 1 0) (layer Edge.Cuts))")
        assert isinstance(arc, Arc)
        assert arc.mid == Point(0, -1)
        box = arc.bounding_box()
        assert (box.min_x, box.min_y, box.max_x, box.max_y) == (-1, -1, 1, 0)

    def test_poly(self) -> None:
        poly = _graphic(
            "(fp_poly (pts (xy 0 0) (xy 4 0) (xy 2 3)) (stroke (width 0) (type solid))"
            " (fill yes) (layer F.Cu))"
        )
        assert isinstance(poly, Polygon)
        assert len(poly.points) == 3
        assert poly.fill is True
        box = poly.bounding_box()
        assert (box.width, box.height) == (4, 3)

    def test_poly_with_arc_segment(self) -> None:
        poly = _graphic(
            "(gr_poly (pts (xy 0 0) (arc (start 1 0) (mid 2 1) (end 1 2)) (xy 0 2)))"
        )
        assert poly.points[1:4] == [Point(1, 0), Point(2, 1), Point(1, 2)]

    def test_curve(self) -> None:
        curve = _graphic("(fp_curve (pts (xy 0 0) (xy 1 2) (xy 3 2) (xy 4 0)) (layer F.SilkS))")
        assert isinstance(curve, Curve)
        assert len(curve.points) == 4
        assert curve.bounding_box().height == 2


class TestText:
    def test_fp_text(self) -> None:
        text = _graphic(
            '(fp_text reference "R1" (at 0 -1.5 90 unlocked) (layer "F.SilkS") hide'
            " (effects (font (size 1 1) (thickness 0.15) bold) (justify left bottom mirror)))"
        )
        assert isinstance(text, Text)
        assert text.text_type is TextType.REFERENCE
        assert text.text == "R1"
        assert text.position.angle == 90
        assert text.unlocked is True
        assert text.hide is True
        assert text.effects.font.bold is True
        assert text.effects.font.thickness == 0.15
        assert text.effects.horizontal is HorizontalJustify.LEFT
        assert text.effects.vertical is VerticalJustify.BOTTOM
        assert text.effects.mirror is True

    def test_gr_text_has_no_type(self) -> None:
        text = _graphic('(gr_text "hello" (at 10 20) (layer "F.SilkS"))')
        assert text.kind == "gr"
        assert text.text_type is TextType.USER
        assert text.text == "hello"

    def test_hide_in_effects(self) -> None:
        text = _graphic('(fp_text value "10k" (at 0 0) (effects (font (size 1 1)) hide))')
        assert text.hide is True

    def test_placeholder_box(self) -> None:
        text = _graphic('(gr_text "x" (at 10 20))')
        box = text.bounding_box()
        assert (box.min_x, box.min_y, box.max_x, box.max_y) == (10, 17.5, 20, 22.5)

    def test_bad_justify(self) -> None:
        with pytest.raises(UnexpectedNodeError, match="justification"):
            _graphic('(fp_text user "x" (at 0 0) (effects (justify sideways)))')


class TestTextBox:
    def test_checked_before_text(self) -> None:
        box = _graphic(
            '(gr_text_box "notes" (start 0 0) (end 20 10) (angle 0) (border yes)'
            ' (layer "Cmts.User") (effects (font (size 1 1))))'
        )
        assert isinstance(box, TextBox)
        assert box.text == "notes"
        assert box.border is True
        bbox = box.bounding_box()
        assert (bbox.width, bbox.height) == (20, 10)

    def test_rotated_box_uses_points(self) -> None:
        box = _graphic('(fp_text_box "r" (pts (xy 0 0) (xy 4 1) (xy 3 5) (xy -1 4)))')
        bbox = box.bounding_box()
        assert (bbox.min_x, bbox.max_x, bbox.min_y, bbox.max_y) == (-1, 4, 0, 5)


class TestStroke:
    def test_color(self) -> None:
        line = _graphic(
            "(gr_line (start 0 0) (end 1 0) (stroke (width 0.2) (type dash) (color 255 0 0 0.5)))"
        )
        assert line.stroke.line_type is StrokeType.DASH
        assert line.stroke.color is not None
        assert (line.stroke.color.r, line.stroke.color.a) == (255, 0.5)

    def test_color_out_of_range(self) -> None:
        with pytest.raises(UnexpectedNodeError, match="0-255"):
            _graphic("(gr_line (stroke (color 256 0 0 1)))")

    def test_unknown_stroke_type(self) -> None:
        with pytest.raises(UnexpectedNodeError, match="stroke type"):
            _graphic("(gr_line (stroke (type wavy)))")


class TestDispatch:
    def test_unknown_suffix(self) -> None:
        with pytest.raises(UnexpectedTagError) as exc_info:
            _graphic("(gr_blob (start 0 0))")
        assert exc_info.value.context == ["gr_blob"]
        assert str(exc_info.value).endswith("(in gr_blob)")

    def test_unknown_attribute_is_tolerated(self) -> None:
        line = _graphic("(fp_line (start 0 0) (end 1 0) (future_field 1 2) (layer F.SilkS))")
        assert line.layer == "F.SilkS"

    def test_list_without_tag_is_rejected(self) -> None:
        with pytest.raises(UnexpectedNodeError, match="tag symbol"):
            _graphic("(fp_line (1 2))")
