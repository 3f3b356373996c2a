"""Tests for the S-expression reader."""

from __future__ import annotations

from pathlib import Path

import pytest

from kicad_pcb.exceptions import LexError
from kicad_pcb.sexp import HexInteger, Number, QuotedValue, SList, Symbol, parse, parse_all

FIXTURE_PATH = Path(__file__).parent.parent / "fixtures" / "minimal_board.kicad_pcb"


class TestParseAtoms:
    def test_symbol(self) -> None:
        node = parse("(F.Cu)")
        assert node.children == (Symbol("F.Cu"),)

    def test_symbol_punctuation(self) -> None:
        node = parse("(a_b-c?d!e.f)")
        assert node.children == (Symbol("a_b-c?d!e.f"),)

    def test_quoted_string(self) -> None:
        node = parse('("hello world")')
        assert node.children == (QuotedValue("hello world"),)

    def test_empty_quoted_string(self) -> None:
        node = parse('(net 0 "")')
        assert node.children[2] == QuotedValue("")

    def test_quoted_with_escapes(self) -> None:
        node = parse(r'("say \"hi\"" "a\\b")')
        assert node.children == (QuotedValue('say "hi"'), QuotedValue("a\\b"))

    def test_quoted_string_keeps_parens_and_spaces(self) -> None:
        node = parse('("(not a list)")')
        assert node.children == (QuotedValue("(not a list)"),)

    @pytest.mark.parametrize(
        ("text", "value"),
        [("1", 1.0), ("-0.5", -0.5), ("1e-3", 0.001), (".5", 0.5), ("+2", 2.0), ("3.", 3.0)],
    )
    def test_numbers(self, text: str, value: float) -> None:
        node = parse(f"({text})")
        assert node.children == (Number(value),)

    def test_hex_with_separators(self) -> None:
        node = parse("(0x00000000_00000000_55555555_5755f5ff)")
        assert node.children == (HexInteger(0x555555555755F5FF),)

    def test_hex_max_value(self) -> None:
        node = parse("(0xffffffffffffffff)")
        assert node.children == (HexInteger(2**64 - 1),)

    def test_digit_led_uuid_is_symbol(self) -> None:
        node = parse("(tstamp 0a3c2b17-1d2e-4f00-9a6b-3c4d5e6f7a8b)")
        assert node.children[1] == Symbol("0a3c2b17-1d2e-4f00-9a6b-3c4d5e6f7a8b")

    def test_number_followed_by_paren(self) -> None:
        node = parse("(a 1(b 2))")
        assert node.children == (Symbol("a"), Number(1.0), SList((Symbol("b"), Number(2.0))))


class TestParseExpressions:
    def test_empty_list(self) -> None:
        assert parse("()") == SList(())

    def test_flat_list(self) -> None:
        node = parse("(1 2 3)")
        assert node.children == (Number(1.0), Number(2.0), Number(3.0))

    def test_nested_list(self) -> None:
        node = parse('(1 (2 3) "bar")')
        assert node.children == (
            Number(1.0),
            SList((Number(2.0), Number(3.0))),
            QuotedValue("bar"),
        )

    def test_tag(self) -> None:
        node = parse("(version 20241229)")
        assert node.tag == "version"
        assert len(node) == 2

    def test_tag_absent(self) -> None:
        assert parse("(1 2)").tag is None
        assert parse("()").tag is None

    def test_order_is_preserved(self) -> None:
        node = parse("(layers (0 F.Cu signal) (2 B.Cu signal))")
        first, second = node.children[1], node.children[2]
        assert isinstance(first, SList) and isinstance(second, SList)
        assert first.children[0] == Number(0.0)
        assert second.children[0] == Number(2.0)

    def test_whitespace_is_insignificant(self) -> None:
        assert parse("(a\t(b\r\n c)  )") == parse("(a (b c))")

    def test_deep_nesting(self) -> None:
        depth = 20000
        node = parse("(" * depth + ")" * depth)
        for _ in range(depth - 1):
            assert len(node.children) == 1
            child = node.children[0]
            assert isinstance(child, SList)
            node = child
        assert node == SList(())


class TestLexErrors:
    def test_unterminated_list(self) -> None:
        with pytest.raises(LexError, match="Unterminated list") as exc_info:
            parse("(1 2")
        assert exc_info.value.offset == 0

    def test_unterminated_string(self) -> None:
        with pytest.raises(LexError, match="Unterminated quoted string"):
            parse('("unterminated')

    def test_unexpected_close(self) -> None:
        with pytest.raises(LexError, match=r"Unexpected '\)'"):
            parse(")")

    def test_empty_input(self) -> None:
        with pytest.raises(LexError, match="Unexpected end of input"):
            parse("   ")

    def test_trailing_input(self) -> None:
        with pytest.raises(LexError, match="Unparsed trailing input"):
            parse("(a) (b)")

    def test_root_must_be_list(self) -> None:
        with pytest.raises(LexError, match="Root must be a list"):
            parse("hello")

    def test_unexpected_character(self) -> None:
        with pytest.raises(LexError, match="Unexpected character") as exc_info:
            parse("(a b$c)")
        assert exc_info.value.column == 5

    def test_malformed_number(self) -> None:
        with pytest.raises(LexError, match="Malformed numeric literal"):
            parse("(net +3V3)")

    def test_malformed_hex(self) -> None:
        with pytest.raises(LexError, match="Malformed hex literal"):
            parse("(0x12zz)")

    def test_hex_too_wide(self) -> None:
        with pytest.raises(LexError, match="64 bits"):
            parse("(0x1_00000000_00000000)")

    def test_line_and_column(self) -> None:
        with pytest.raises(LexError) as exc_info:
            parse('(kicad_pcb\n  (version 1)\n  (net "x)\n')
        error = exc_info.value
        assert error.line == 3
        assert error.column == 8
        assert "line 3, column 8" in str(error)

    def test_error_to_dict(self) -> None:
        with pytest.raises(LexError) as exc_info:
            parse(")")
        d = exc_info.value.to_dict()
        assert d["error_code"] == "LEX_ERROR"
        assert d["line"] == 1
        assert d["column"] == 1


class TestToSexpr:
    def test_renders_back(self) -> None:
        text = '(pad "1" smd (at -0.95 0) (size 1 1.45))'
        assert parse(text).to_sexpr() == text

    def test_quotes_are_escaped(self) -> None:
        assert QuotedValue('a "b"').to_sexpr() == r'"a \"b\""'

    def test_hex_renders_lowercase(self) -> None:
        assert HexInteger(255).to_sexpr() == "0xff"

    def test_empty_list(self) -> None:
        assert parse("()").to_sexpr() == "()"

    def test_deep_nesting_renders(self) -> None:
        text = "(" * 5000 + ")" * 5000
        assert parse(text).to_sexpr() == text

    def test_limit_stops_early(self) -> None:
        tree = parse("(a (b c) d)")
        assert tree.to_sexpr(limit=6) == "(a ..."
        assert tree.to_sexpr(limit=100) == "(a (b c) d)"

    def test_limit_on_deep_nesting(self) -> None:
        text = parse("(" * 5000 + ")" * 5000).to_sexpr(limit=60)
        assert text == "(" * 57 + "..."


class TestParseAll:
    def test_multiple_expressions(self) -> None:
        nodes = parse_all("(a 1) (b 2) (c 3)")
        assert len(nodes) == 3
        assert [n.tag for n in nodes if isinstance(n, SList)] == ["a", "b", "c"]

    def test_empty_text(self) -> None:
        assert parse_all("  \n") == []


class TestBoardFixture:
    @pytest.fixture()
    def tree(self) -> SList:
        return parse(FIXTURE_PATH.read_text(encoding="utf-8"))

    def test_root_tag(self, tree: SList) -> None:
        assert tree.tag == "kicad_pcb"

    def test_version(self, tree: SList) -> None:
        version = tree.children[1]
        assert version == SList((Symbol("version"), Number(20241229.0)))

    def test_hex_layer_selection(self, tree: SList) -> None:
        text = tree.to_sexpr()
        assert "0x555555555755f5ff" in text
