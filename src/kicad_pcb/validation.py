"""Consistency checks for parsed boards.

These catch problems KiCad itself tolerates on load:
- Duplicate layer ordinals
- Duplicate net ordinals
- Through-hole pads without a drill
- Pads, tracks and vias referring to a net ordinal the board never declares

Nothing here raises; each problem is reported as a ConsistencyIssue.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .schema.board import Board


class IssueKind(Enum):
    DUPLICATE_LAYER = "duplicate_layer"
    DUPLICATE_NET = "duplicate_net"
    MISSING_DRILL = "missing_drill"
    UNDECLARED_NET = "undeclared_net"


@dataclass(frozen=True)
class ConsistencyIssue:
    """A single non-fatal problem found in a board."""

    kind: IssueKind
    message: str
    reference: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"kind": self.kind.value, "message": self.message}
        if self.reference is not None:
            d["reference"] = self.reference
        return d


def _duplicates(values: list[int]) -> list[int]:
    return sorted(value for value, count in Counter(values).items() if count > 1)


def check_layers(board: Board) -> list[ConsistencyIssue]:
    return [
        ConsistencyIssue(
            IssueKind.DUPLICATE_LAYER,
            f"layer ordinal {ordinal} is declared more than once",
        )
        for ordinal in _duplicates([layer.ordinal for layer in board.layers])
    ]


def check_nets(board: Board) -> list[ConsistencyIssue]:
    return [
        ConsistencyIssue(
            IssueKind.DUPLICATE_NET,
            f"net ordinal {ordinal} is declared more than once",
        )
        for ordinal in _duplicates([net.ordinal for net in board.nets])
    ]


def check_pads(board: Board) -> list[ConsistencyIssue]:
    """Check every footprint pad for a drill and a declared net.

    Args:
        board: The parsed board.

    Returns:
        One issue per problem, in footprint then pad order.
    """
    declared = {net.ordinal for net in board.nets}
    issues: list[ConsistencyIssue] = []
    for footprint in board.footprints:
        reference = footprint.reference
        for pad in footprint.pads:
            for problem in pad.consistency_issues():
                issues.append(ConsistencyIssue(IssueKind.MISSING_DRILL, problem, reference))
            if pad.net is not None and pad.net.ordinal not in declared:
                issues.append(
                    ConsistencyIssue(
                        IssueKind.UNDECLARED_NET,
                        f"pad {pad.number!r} uses undeclared net {pad.net.ordinal}",
                        reference,
                    )
                )
    return issues


def check_tracks(board: Board) -> list[ConsistencyIssue]:
    declared = {net.ordinal for net in board.nets}
    issues: list[ConsistencyIssue] = []
    for segment in board.segments:
        if segment.net not in declared:
            issues.append(
                ConsistencyIssue(
                    IssueKind.UNDECLARED_NET,
                    f"segment on {segment.layer} uses undeclared net {segment.net}",
                )
            )
    for via in board.vias:
        if via.net not in declared:
            issues.append(
                ConsistencyIssue(
                    IssueKind.UNDECLARED_NET,
                    f"via at {via.position.x}:{via.position.y} uses undeclared net {via.net}",
                )
            )
    return issues


def check_board(board: Board) -> list[ConsistencyIssue]:
    """Run every consistency check on ``board``."""
    return check_layers(board) + check_nets(board) + check_pads(board) + check_tracks(board)
