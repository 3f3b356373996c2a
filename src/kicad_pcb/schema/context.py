"""Per-parse state shared by the extraction routines.

A parse runs inside :func:`parse_session`, which publishes the active config
and diagnostics sink through a ContextVar. Concurrent parses in other threads
or tasks each see their own session.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, TypeVar

from ..config import ParserConfig
from ..constants import CANONICAL_LAYERS
from ..exceptions import InvalidLayerError, ParseError
from ..logging_config import create_logger, source_ctx
from ..sexp import Node, SList, Symbol, render

logger = create_logger(__name__)

R = TypeVar("R")


@dataclass(frozen=True)
class Diagnostic:
    """An attribute the parser recognised as well-formed but does not model."""

    entity: str
    tag: str

    @property
    def message(self) -> str:
        return f"Ignoring unknown field {self.tag!r} in {self.entity}"


@dataclass
class ParseSession:
    config: ParserConfig = field(default_factory=ParserConfig)
    diagnostics: list[Diagnostic] | None = None


_DEFAULT_SESSION = ParseSession()
_session_ctx: ContextVar[ParseSession | None] = ContextVar("parse_session", default=None)


def current_session() -> ParseSession:
    """The session of the parse in progress, or a default one."""
    return _session_ctx.get() or _DEFAULT_SESSION


@contextmanager
def parse_session(
    config: ParserConfig | None = None,
    diagnostics: list[Diagnostic] | None = None,
    source: str | None = None,
) -> Iterator[ParseSession]:
    """Activate a session for the duration of one parse."""
    session = ParseSession(config=config or ParserConfig(), diagnostics=diagnostics)
    token = _session_ctx.set(session)
    source_token = source_ctx.set(source)
    try:
        yield session
    finally:
        source_ctx.reset(source_token)
        _session_ctx.reset(token)


def report_unknown(entity: str, node: Node) -> None:
    """Record an unmodelled attribute without failing the parse."""
    if isinstance(node, SList):
        tag = node.tag or render(node)
    elif isinstance(node, Symbol):
        tag = node.name
    else:
        tag = render(node)
    diagnostic = Diagnostic(entity=entity, tag=tag)
    logger.debug(diagnostic.message)
    sink = current_session().diagnostics
    if sink is not None:
        sink.append(diagnostic)


def check_layer(name: str) -> str:
    """Return ``name``, validating it in strict layer mode."""
    if current_session().config.strict_layers and name not in CANONICAL_LAYERS:
        raise InvalidLayerError(name)
    return name


def entity(default: str) -> Callable[[Callable[..., R]], Callable[..., R]]:
    """Decorate an extraction routine so errors name the entity being read.

    The list's own tag is used when it has one, ``default`` otherwise.
    """

    def decorator(func: Callable[..., R]) -> Callable[..., R]:
        @functools.wraps(func)
        def wrapper(node: Node, *args: Any, **kwargs: Any) -> R:
            try:
                return func(node, *args, **kwargs)
            except ParseError as e:
                tag = node.tag if isinstance(node, SList) else None
                e.add_context(tag or default)
                raise

        return wrapper

    return decorator


@contextmanager
def numbered(index: int) -> Iterator[None]:
    """Suffix the innermost context entry with ``#index`` (1-based)."""
    try:
        yield
    except ParseError as e:
        if e.context:
            e.context[-1] = f"{e.context[-1]} #{index}"
        raise
