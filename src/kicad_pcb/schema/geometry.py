"""Bounding-box math for board primitives.

All boxes are axis aligned, in board millimetres. The arc box used by the
aggregates spans only the three defining points and can under-estimate an arc
that bulges past its chord; :func:`arc_sweep_bounding_box` gives the exact box
when that matters.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Protocol

from .common import BoundingBox, Point


class HasBoundingBox(Protocol):
    def bounding_box(self) -> BoundingBox: ...


def bounding_box(entity: HasBoundingBox) -> BoundingBox:
    """Bounding box of a board, footprint or graphic."""
    return entity.bounding_box()


def points_bounding_box(points: Iterable[Point]) -> BoundingBox:
    """Min/max over a set of points; empty when there are none."""
    return BoundingBox.from_points(points)


def segment_bounding_box(start: Point, end: Point) -> BoundingBox:
    """Box spanning two corner or end points."""
    return BoundingBox(
        min_x=min(start.x, end.x),
        min_y=min(start.y, end.y),
        max_x=max(start.x, end.x),
        max_y=max(start.y, end.y),
    )


def circle_bounding_box(center: Point, end: Point) -> BoundingBox:
    """Box of a full circle given its center and a point on the rim."""
    radius = math.hypot(end.x - center.x, end.y - center.y)
    return BoundingBox(
        min_x=center.x - radius,
        min_y=center.y - radius,
        max_x=center.x + radius,
        max_y=center.y + radius,
    )


def arc_bounding_box(start: Point, mid: Point, end: Point) -> BoundingBox:
    """Approximate arc box: min/max over start, mid and end."""
    return points_bounding_box((start, mid, end))


def _circumcenter(a: Point, b: Point, c: Point) -> Point | None:
    d = 2 * (a.x * (b.y - c.y) + b.x * (c.y - a.y) + c.x * (a.y - b.y))
    if math.isclose(d, 0.0, abs_tol=1e-12):
        return None
    a2 = a.x**2 + a.y**2
    b2 = b.x**2 + b.y**2
    c2 = c.x**2 + c.y**2
    ux = (a2 * (b.y - c.y) + b2 * (c.y - a.y) + c2 * (a.y - b.y)) / d
    uy = (a2 * (c.x - b.x) + b2 * (a.x - c.x) + c2 * (b.x - a.x)) / d
    return Point(ux, uy)


def arc_sweep_bounding_box(start: Point, mid: Point, end: Point) -> BoundingBox:
    """Exact arc box, including the axis-aligned extremes the arc sweeps past.

    Collinear points degrade to the straight segment box.
    """
    box = arc_bounding_box(start, mid, end)
    center = _circumcenter(start, mid, end)
    if center is None:
        return box

    radius = math.hypot(start.x - center.x, start.y - center.y)
    tau = 2 * math.pi

    def angle(p: Point) -> float:
        return math.atan2(p.y - center.y, p.x - center.x) % tau

    a_start = angle(start)
    sweep_mid = (angle(mid) - a_start) % tau
    sweep_end = (angle(end) - a_start) % tau
    # The arc runs counter-clockwise from start when mid comes before end.
    ccw = sweep_mid <= sweep_end

    for quadrant in range(4):
        theta = quadrant * math.pi / 2
        offset = (theta - a_start) % tau
        inside = offset <= sweep_end if ccw else offset >= sweep_end or offset == 0.0
        if inside:
            x = center.x + radius * math.cos(theta)
            y = center.y + radius * math.sin(theta)
            box.envelop(BoundingBox(x, y, x, y))
    return box


def text_bounding_box(anchor: Point, width: float, height: float) -> BoundingBox:
    """Placeholder text box: ``width`` to the right of the anchor, centred vertically."""
    return BoundingBox(
        min_x=anchor.x,
        min_y=anchor.y - height / 2,
        max_x=anchor.x + width,
        max_y=anchor.y + height / 2,
    )
