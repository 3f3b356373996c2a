"""Entry points: text in, typed Board or Footprint out.

Example::

    from kicad_pcb import parse_board

    board = parse_board(Path("demo.kicad_pcb").read_text(), source="demo.kicad_pcb")
    print(board.bounding_box())
"""

from __future__ import annotations

from .config import ParserConfig
from .exceptions import KicadPcbError
from .logging_config import create_logger
from .schema.board import Board
from .schema.context import Diagnostic, parse_session
from .schema.extract import extract_board
from .schema.extract_footprint import extract_footprint
from .schema.footprint import Footprint
from .sexp import parse
from .validation import check_board

logger = create_logger(__name__)


def parse_board(
    text: str,
    *,
    config: ParserConfig | None = None,
    diagnostics: list[Diagnostic] | None = None,
    source: str | None = None,
) -> Board:
    """Parse the full text of a ``.kicad_pcb`` file.

    Args:
        text: The file contents.
        config: Parser options. Defaults to ``ParserConfig()``.
        diagnostics: Optional list that receives one Diagnostic per
            attribute that was skipped because it is not modelled.
        source: Name of the input, shown in log records.

    Returns:
        The parsed Board.

    Raises:
        LexError: The text is not a well-formed s-expression.
        ParseError: The tree does not have the shape of a board.
    """
    config = config or ParserConfig()
    with parse_session(config, diagnostics, source or "<string>"):
        logger.debug(f"Parsing board ({len(text)} chars)")
        try:
            board = extract_board(parse(text))
        except KicadPcbError as e:
            logger.debug(f"Board parse failed: {e}")
            raise

        if config.check_consistency:
            for issue in check_board(board):
                logger.warning(f"Consistency: {issue.message}")

        logger.debug(
            f"Parsed board: {len(board.footprints)} footprints, "
            f"{len(board.graphics)} graphics, {len(board.nets)} nets"
        )
        return board


def parse_footprint(
    text: str,
    *,
    config: ParserConfig | None = None,
    diagnostics: list[Diagnostic] | None = None,
    source: str | None = None,
) -> Footprint:
    """Parse a standalone footprint, e.g. the contents of a ``.kicad_mod`` file.

    Accepts the same keyword arguments as :func:`parse_board`.
    """
    with parse_session(config, diagnostics, source or "<string>"):
        logger.debug(f"Parsing footprint ({len(text)} chars)")
        footprint = extract_footprint(parse(text))
        logger.debug(
            f"Parsed footprint {footprint.library_link!r}: "
            f"{len(footprint.pads)} pads, {len(footprint.graphics)} graphics"
        )
        return footprint
