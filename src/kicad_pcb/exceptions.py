"""Exception hierarchy for board parsing.

Lexical errors come from the s-expression reader and carry a text position.
Parse errors come from the typed layer and carry a context trail naming the
chain of entities that were being read when the failure happened.
"""

from __future__ import annotations

from typing import Any


class KicadPcbError(Exception):
    """Base exception for all kicad_pcb errors."""

    error_code: str = ""

    def __init__(self, message: str, error_code: str | None = None, **kwargs: Any):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.__dict__.update(kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to a serializable dict."""
        result: dict[str, Any] = {
            "error": True,
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": str(self),
        }
        result.update(
            {
                k: _plain(v)
                for k, v in self.__dict__.items()
                if k not in ["message", "error_code"]
            }
        )
        return result


def _plain(value: Any) -> Any:
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return str(value)


class LexError(KicadPcbError):
    """Raised when the raw text is not a well-formed s-expression."""

    error_code = "LEX_ERROR"

    def __init__(self, message: str, line: int, column: int, offset: int, **kwargs: Any):
        super().__init__(message, "LEX_ERROR", line=line, column=column, offset=offset, **kwargs)

    def __str__(self) -> str:
        return f"{self.message} at line {self.line}, column {self.column}"


class ParseError(KicadPcbError):
    """Raised when a well-formed tree does not match the board schema."""

    error_code = "PARSE_ERROR"

    def __init__(self, message: str, error_code: str | None = None, **kwargs: Any):
        super().__init__(message, error_code or "PARSE_ERROR", **kwargs)
        self.context: list[str] = []

    def add_context(self, context: str) -> ParseError:
        """Append the entity being parsed one level further out."""
        self.context.append(context)
        return self

    def __str__(self) -> str:
        if not self.context:
            return self.message
        return f"{self.message} (in {' <- '.join(self.context)})"


class UnexpectedNodeError(ParseError):
    """Raised when a node has the wrong shape (list vs. symbol vs. number...)."""

    error_code = "UNEXPECTED_NODE"

    def __init__(self, expected: str, found: str, **kwargs: Any):
        super().__init__(
            f"Expected {expected}, found {found}",
            "UNEXPECTED_NODE",
            expected=expected,
            found=found,
            **kwargs,
        )


class UnexpectedEndError(ParseError):
    """Raised when a list runs out of children before a required field."""

    error_code = "UNEXPECTED_END"

    def __init__(self, expected: str = "another element", **kwargs: Any):
        super().__init__(
            f"Unexpected end of list, expected {expected}",
            "UNEXPECTED_END",
            expected=expected,
            **kwargs,
        )


class LeftoverError(ParseError):
    """Raised when a fixed-shape record has unconsumed trailing nodes."""

    error_code = "LEFTOVER"

    def __init__(self, leftover: list[str], **kwargs: Any):
        super().__init__(
            f"Unexpected leftover elements: {' '.join(leftover)}",
            "LEFTOVER",
            leftover=leftover,
            **kwargs,
        )


class UnexpectedTagError(ParseError):
    """Raised when the leading keyword of a list is not the one required."""

    error_code = "UNEXPECTED_TAG"

    def __init__(self, expected: str, found: str, **kwargs: Any):
        super().__init__(
            f"Expected tag {expected!r}, found {found!r}",
            "UNEXPECTED_TAG",
            expected=expected,
            found=found,
            **kwargs,
        )


class InvalidLayerError(ParseError):
    """Raised in strict layer mode for a name outside the canonical set."""

    error_code = "INVALID_LAYER"

    def __init__(self, layer: str, **kwargs: Any):
        super().__init__(
            f"Unknown layer name {layer!r}",
            "INVALID_LAYER",
            layer=layer,
            **kwargs,
        )


__all__ = [
    "KicadPcbError",
    "LexError",
    "ParseError",
    "UnexpectedNodeError",
    "UnexpectedEndError",
    "LeftoverError",
    "UnexpectedTagError",
    "InvalidLayerError",
]
