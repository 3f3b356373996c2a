"""Sequential, consumable view over the children of one list.

The typed layer reads every entity front to back::

    cursor = Cursor(tree)            # (at 1.5 2 90)
    cursor.expect_tag("at")
    x = cursor.next_as(float)        # 1.5
    y = cursor.next_as(float)        # 2.0
    angle = cursor.next_maybe_as(float)
    cursor.expect_end()
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any, TypeVar, cast

from ..exceptions import (
    LeftoverError,
    UnexpectedEndError,
    UnexpectedNodeError,
    UnexpectedTagError,
)
from .parser import HexInteger, Node, Number, QuotedValue, SList, Symbol

T = TypeVar("T")

_NODE_NAMES: dict[type, str] = {
    SList: "list",
    Symbol: "symbol",
    QuotedValue: "quoted string",
    Number: "number",
    HexInteger: "hex integer",
    float: "number",
    int: "integer",
    str: "string or symbol",
    bool: "yes/no symbol",
}

_BOOL_SYMBOLS = {"yes": True, "true": True, "no": False, "false": False}


def render(node: Node, limit: int = 60) -> str:
    """Text of a node cut to ``limit`` characters; lists stop rendering early."""
    text = node.to_sexpr(limit) if isinstance(node, SList) else node.to_sexpr()
    if len(text) > limit:
        text = text[: limit - 3] + "..."
    return text


def describe(node: Node, limit: int = 60) -> str:
    """Short human readable rendering of a node for error messages."""
    return f"{_NODE_NAMES[type(node)]} {render(node, limit)}"


def convert(node: Node, kind: type[T]) -> T:
    """Convert a node to ``kind``, raising UnexpectedNodeError on mismatch.

    ``kind`` is either a node class (returned unchanged after the check) or
    one of ``float``, ``int``, ``str``, ``bool``.
    """
    value: Any = None
    if kind in (SList, Symbol, QuotedValue, Number, HexInteger):
        if isinstance(node, kind):
            value = node
    elif kind is float:
        if isinstance(node, Number):
            value = node.value
    elif kind is int:
        if isinstance(node, HexInteger):
            value = node.value
        elif isinstance(node, Number) and node.value.is_integer():
            value = int(node.value)
    elif kind is str:
        if isinstance(node, QuotedValue):
            value = node.value
        elif isinstance(node, Symbol):
            value = node.name
    elif kind is bool:
        if isinstance(node, Symbol):
            value = _BOOL_SYMBOLS.get(node.name)
    else:
        raise TypeError(f"Unsupported conversion target: {kind!r}")

    if value is None:
        raise UnexpectedNodeError(_NODE_NAMES[kind], describe(node))
    return cast(T, value)


class Cursor:
    """Front-consumable sequence over a list's children."""

    __slots__ = ("_nodes", "_pos")

    def __init__(self, source: SList | Sequence[Node]) -> None:
        self._nodes: Sequence[Node] = source.children if isinstance(source, SList) else source
        self._pos = 0

    def __len__(self) -> int:
        return len(self._nodes) - self._pos

    def __bool__(self) -> bool:
        return self._pos < len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        while self:
            node = self._nodes[self._pos]
            self._pos += 1
            yield node

    def __repr__(self) -> str:
        return f"Cursor(remaining={len(self)})"

    @property
    def remaining(self) -> tuple[Node, ...]:
        """The nodes not consumed yet."""
        return tuple(self._nodes[self._pos :])

    def discard(self, amount: int = 1) -> Cursor:
        """Drop the first ``amount`` nodes."""
        if amount > len(self):
            raise UnexpectedEndError(f"{amount} more element(s)")
        self._pos += amount
        return self

    def peek(self) -> Node | None:
        """Return the front node without consuming it."""
        if not self:
            return None
        return self._nodes[self._pos]

    def next_maybe(self) -> Node | None:
        """Pop the front node, or return None when empty."""
        if not self:
            return None
        node = self._nodes[self._pos]
        self._pos += 1
        return node

    def next(self) -> Node:
        """Pop the front node, raising UnexpectedEndError when empty."""
        node = self.next_maybe()
        if node is None:
            raise UnexpectedEndError()
        return node

    def next_as(self, kind: type[T]) -> T:
        """Pop the front node and convert it to ``kind``."""
        node = self.next_maybe()
        if node is None:
            raise UnexpectedEndError(_NODE_NAMES.get(kind, kind.__name__))
        return convert(node, kind)

    def next_maybe_as(self, kind: type[T]) -> T | None:
        """Like next_as, but None when the cursor is already empty."""
        node = self.next_maybe()
        if node is None:
            return None
        return convert(node, kind)

    def next_symbol(self) -> str:
        return self.next_as(Symbol).name

    def next_list(self) -> Cursor:
        return Cursor(self.next_as(SList))

    def peek_tag_maybe(self) -> str | None:
        """Symbol text of the front node, or None if it is not a symbol."""
        node = self.peek()
        if isinstance(node, Symbol):
            return node.name
        return None

    def peek_tag(self) -> str:
        """Symbol text of the front node, without consuming it."""
        node = self.peek()
        if node is None:
            raise UnexpectedEndError("tag symbol")
        if not isinstance(node, Symbol):
            raise UnexpectedNodeError("tag symbol", describe(node))
        return node.name

    def expect_tag(self, *expected: str) -> str:
        """Consume the leading tag and check it is one of ``expected``."""
        found = self.next_as(Symbol).name
        if found not in expected:
            raise UnexpectedTagError(" | ".join(expected), found)
        return found

    def expect_tag_suffix(self, suffix: str) -> str:
        """Consume the leading tag and check it ends with ``suffix``."""
        found = self.next_as(Symbol).name
        if not found.endswith(suffix):
            raise UnexpectedTagError(f"*{suffix}", found)
        return found

    def expect_end(self) -> None:
        """Raise LeftoverError if any node has not been consumed."""
        if self:
            raise LeftoverError([render(node) for node in self.remaining])
