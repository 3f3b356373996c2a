"""S-expression reader for KiCad board files.

KiCad uses S-expressions (Lisp-like syntax) for its file formats. This reader
produces a generic, ordered tree with no knowledge of board semantics:

- ``SList``: parenthesized list; child order is significant
- ``QuotedValue``: ``"..."`` string, escapes resolved
- ``Symbol``: bare identifier such as ``F.Cu`` or ``smd``
- ``Number``: floating point literal
- ``HexInteger``: ``0x``-prefixed unsigned 64-bit integer, ``_`` separators allowed

Usage::

    tree = parse('(kicad_pcb (version 20241229) (generator "pcbnew"))')
    tree.tag                 # "kicad_pcb"
    tree.children[1]         # SList((Symbol("version"), Number(20241229.0)))
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Union

from ..constants import MAX_HEX_VALUE
from ..exceptions import LexError


@dataclass(frozen=True)
class Symbol:
    """A bare identifier, used both as data and as a dispatch tag."""

    name: str

    def to_sexpr(self) -> str:
        return self.name


@dataclass(frozen=True)
class QuotedValue:
    """A double-quoted string."""

    value: str

    def to_sexpr(self) -> str:
        escaped = self.value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'


@dataclass(frozen=True)
class Number:
    """A floating point literal."""

    value: float

    def to_sexpr(self) -> str:
        if self.value.is_integer():
            return str(int(self.value))
        return repr(self.value)


@dataclass(frozen=True)
class HexInteger:
    """An unsigned 64-bit integer written as ``0x...``."""

    value: int

    def to_sexpr(self) -> str:
        return f"0x{self.value:x}"


@dataclass(frozen=True)
class SList:
    """A parenthesized list of nodes."""

    children: tuple[Node, ...] = ()

    @property
    def tag(self) -> str | None:
        """Name of the leading symbol, e.g. ``"at"`` for ``(at 1 2)``."""
        if self.children and isinstance(self.children[0], Symbol):
            return self.children[0].name
        return None

    def __len__(self) -> int:
        return len(self.children)

    def to_sexpr(self, limit: int | None = None) -> str:
        """Render back to text without recursing into nested lists.

        With ``limit``, rendering stops once the text is longer than ``limit``
        characters and the result is cut to ``limit`` with a trailing ``...``.
        """
        out: list[str] = []
        size = 0
        need_space = False
        stack: list[Iterator[Node]] = [iter((self,))]
        while stack:
            node = next(stack[-1], None)
            if node is None:
                stack.pop()
                if stack:
                    out.append(")")
                    size += 1
                    need_space = True
                continue
            if need_space:
                out.append(" ")
                size += 1
            if isinstance(node, SList):
                out.append("(")
                size += 1
                stack.append(iter(node.children))
                need_space = False
            else:
                text = node.to_sexpr()
                out.append(text)
                size += len(text)
                need_space = True
            if limit is not None and size > limit:
                return "".join(out)[: max(limit - 3, 0)] + "..."
        return "".join(out)


Node = Union[SList, Symbol, QuotedValue, Number, HexInteger]

_WHITESPACE = " \t\r\n"
_TOKEN_END = _WHITESPACE + '()"'
_SYMBOL_PUNCTUATION = "_-?!."
_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?\Z")
_NUMBER_START_RE = re.compile(r"[+-]?\.?\d")
_HEX_RE = re.compile(r"0x[0-9A-Fa-f_]+\Z")


def _is_symbol_char(ch: str) -> bool:
    return ch.isalnum() or ch in _SYMBOL_PUNCTUATION


class _Tokenizer:
    """Low-level tokenizer for S-expression strings."""

    __slots__ = ("_text", "_pos", "_length")

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0
        self._length = len(text)

    def error(self, message: str, offset: int | None = None) -> LexError:
        """Build a LexError pointing at ``offset`` (default: current position)."""
        if offset is None:
            offset = self._pos
        line = self._text.count("\n", 0, offset) + 1
        column = offset - (self._text.rfind("\n", 0, offset) + 1) + 1
        return LexError(message, line=line, column=column, offset=offset)

    def _skip_whitespace(self) -> None:
        pos = self._pos
        text = self._text
        length = self._length
        while pos < length and text[pos] in _WHITESPACE:
            pos += 1
        self._pos = pos

    def peek(self) -> str | None:
        self._skip_whitespace()
        if self._pos >= self._length:
            return None
        return self._text[self._pos]

    def next_token(self) -> tuple[str, Node | None, int] | None:
        """Return (token_type, node, offset) or None at EOF.

        Token types: 'OPEN', 'CLOSE', 'ATOM'
        """
        self._skip_whitespace()
        if self._pos >= self._length:
            return None

        start = self._pos
        ch = self._text[start]

        if ch == "(":
            self._pos += 1
            return ("OPEN", None, start)

        if ch == ")":
            self._pos += 1
            return ("CLOSE", None, start)

        if ch == '"':
            return ("ATOM", QuotedValue(self._read_quoted_string()), start)

        return ("ATOM", self._read_bare(), start)

    def _read_quoted_string(self) -> str:
        """Read a double-quoted string, handling escape sequences."""
        start = self._pos
        self._pos += 1  # skip opening quote
        result: list[str] = []
        while self._pos < self._length:
            ch = self._text[self._pos]
            if ch == "\\":
                self._pos += 1
                if self._pos < self._length:
                    result.append(self._text[self._pos])
                    self._pos += 1
                continue
            if ch == '"':
                self._pos += 1
                return "".join(result)
            result.append(ch)
            self._pos += 1
        raise self.error("Unterminated quoted string", start)

    def _read_bare(self) -> Node:
        """Read an unquoted token and classify it as hex, number or symbol."""
        start = self._pos
        while self._pos < self._length and self._text[self._pos] not in _TOKEN_END:
            self._pos += 1
        raw = self._text[start : self._pos]

        if raw.startswith("0x"):
            digits = raw[2:].replace("_", "")
            if not _HEX_RE.match(raw) or not digits:
                raise self.error(f"Malformed hex literal {raw!r}", start)
            value = int(digits, 16)
            if value > MAX_HEX_VALUE:
                raise self.error(f"Hex literal {raw!r} does not fit in 64 bits", start)
            return HexInteger(value)

        if _NUMBER_RE.match(raw):
            return Number(float(raw))

        # Anything else made of symbol characters is a symbol, including
        # digit-led identifiers such as unquoted KiCad 7 uuids.
        for index, ch in enumerate(raw):
            if not _is_symbol_char(ch):
                if _NUMBER_START_RE.match(raw):
                    raise self.error(f"Malformed numeric literal {raw!r}", start)
                raise self.error(f"Unexpected character {ch!r}", start + index)
        return Symbol(raw)


def parse(text: str) -> SList:
    """Parse an S-expression string into a tree.

    Args:
        text: The S-expression string to parse.

    Returns:
        The root list.

    Raises:
        LexError: If the input is malformed, has trailing input, or its root
            is not a list.
    """
    tokenizer = _Tokenizer(text)
    root = _parse_expr(tokenizer)
    if tokenizer.peek() is not None:
        raise tokenizer.error("Unparsed trailing input")
    if not isinstance(root, SList):
        raise tokenizer.error(f"Root must be a list, found {root.to_sexpr()!r}", 0)
    return root


def parse_all(text: str) -> list[Node]:
    """Parse text that may contain multiple top-level S-expressions."""
    tokenizer = _Tokenizer(text)
    results: list[Node] = []
    while tokenizer.peek() is not None:
        results.append(_parse_expr(tokenizer))
    return results


def _parse_expr(tokenizer: _Tokenizer) -> Node:
    """Parse a single S-expression from the tokenizer.

    Nesting is tracked on an explicit stack so the depth of the input is not
    bounded by the interpreter's recursion limit.
    """
    stack: list[tuple[int, list[Node]]] = []

    while True:
        token = tokenizer.next_token()
        if token is None:
            if stack:
                raise tokenizer.error("Unterminated list", stack[-1][0])
            raise tokenizer.error("Unexpected end of input")

        token_type, node, offset = token

        if token_type == "OPEN":
            stack.append((offset, []))
            continue

        if token_type == "CLOSE":
            if not stack:
                raise tokenizer.error("Unexpected ')'", offset)
            _, children = stack.pop()
            node = SList(tuple(children))

        assert node is not None
        if not stack:
            return node
        stack[-1][1].append(node)
