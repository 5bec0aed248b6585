"""
Segment clipping against a rectangle (midpoint subdivision) and against a
convex polygon (Cyrus-Beck).
"""

import logging
from typing import List, Optional, Tuple

import numpy as np

from line_clip.debug import logger, log_polygon_clip, log_rect_clip
from line_clip.geometry import (
    BOTTOM,
    LEFT,
    RIGHT,
    TOP,
    AxisRect,
    ConvexPolygon,
    Point,
    Segment,
    outcode,
)

DEFAULT_EPSILON = 1e-3
DEFAULT_MAX_DEPTH = 50
PARALLEL_TOLERANCE = 1e-12


def clip_segment_midpoint(
    segment: Segment,
    rect: AxisRect,
    epsilon: float = DEFAULT_EPSILON,
    max_depth: int = DEFAULT_MAX_DEPTH
) -> List[Segment]:
    """
    Clip a segment against a rectangle by midpoint subdivision.

    Each branch is resolved in this order:
    1. Both endpoints inside: emit the branch unchanged
    2. Outcodes share a bit: discard (outside one half-plane)
    3. Depth above max_depth or Manhattan length below epsilon: discard
    4. Otherwise split at the midpoint and process both halves

    No boundary intersection is ever computed; the visible portion is
    approximated to within epsilon by the emitted pieces.

    Parameters:
        segment: Segment to clip
        rect: Closed clipping rectangle
        epsilon: Manhattan length below which a branch is dropped
        max_depth: Maximum subdivision depth

    Returns:
        Visible pieces in split order (left half before right half), may be empty
    """
    pieces: List[Segment] = []
    cutoffs = 0

    # LIFO work stack; the right half is pushed first so the left half is
    # resolved first and pieces come out in split order.
    stack: List[Tuple[Segment, int]] = [(segment, 0)]
    while stack:
        branch, depth = stack.pop()
        if rect.contains(branch.a) and rect.contains(branch.b):
            pieces.append(branch)
            continue

        if outcode(branch.a, rect) & outcode(branch.b, rect):
            continue

        if depth > max_depth or branch.manhattan_length < epsilon:
            cutoffs += 1
            continue

        mid = branch.a.midpoint(branch.b)
        stack.append((Segment(mid, branch.b), depth + 1))
        stack.append((Segment(branch.a, mid), depth + 1))

    if cutoffs and logger.isEnabledFor(logging.DEBUG):
        logger.debug("midpoint subdivision dropped %d unresolved branch(es)", cutoffs)
    log_rect_clip(segment, rect, pieces)
    return pieces


def cyrus_beck_interval(
    segment: Segment,
    polygon: ConvexPolygon,
    parallel_tolerance: float = PARALLEL_TOLERANCE
) -> Optional[Tuple[float, float]]:
    """
    Parametric interval of a segment visible inside a convex polygon.

    The segment is P(t) = a + t * (b - a), t in [0, 1]. Every edge
    (v_k, v_k+1) contributes the outward normal n = (ey, -ex), valid for
    counter-clockwise vertex order, and the half-plane n . (P - v_k) <= 0.
    Entering crossings raise t_enter, leaving crossings lower t_leave.

    Parameters:
        segment: Segment to clip
        polygon: Convex polygon with CCW vertices
        parallel_tolerance: |n . d| below this counts as parallel to the edge

    Returns:
        (t_enter, t_leave) with 0 <= t_enter <= t_leave <= 1, or None if
        no part of the segment is inside
    """
    vertices = polygon.vertices_array
    edges = np.roll(vertices, -1, axis=0) - vertices
    normals = np.column_stack((edges[:, 1], -edges[:, 0]))

    p1 = segment.a.array
    direction = segment.b.array - p1

    numerators = np.sum(normals * (p1 - vertices), axis=1)
    denominators = normals @ direction

    t_enter = 0.0
    t_leave = 1.0
    for k in range(vertices.shape[0]):
        numerator = float(numerators[k])
        denominator = float(denominators[k])

        if abs(denominator) < parallel_tolerance:
            # Parallel to this edge: either fully outside it or unconstrained
            if numerator > 0.0:
                if logger.isEnabledFor(logging.DEBUG):
                    logger.debug("segment parallel to and outside edge %d", k)
                return None
            continue

        t = -numerator / denominator
        if denominator < 0.0:
            t_enter = max(t_enter, t)
        else:
            t_leave = min(t_leave, t)

        if t_enter > t_leave:
            return None

    return t_enter, t_leave


def clip_segment_cyrus_beck(
    segment: Segment,
    polygon: ConvexPolygon,
    parallel_tolerance: float = PARALLEL_TOLERANCE
) -> Optional[Segment]:
    """
    Clip a segment against a convex polygon.

    Parameters:
        segment: Segment to clip
        polygon: Convex polygon with CCW vertices
        parallel_tolerance: Tolerance for the parallel-edge test

    Returns:
        Visible sub-segment P(t_enter) -> P(t_leave), or None
    """
    interval = cyrus_beck_interval(segment, polygon, parallel_tolerance)
    log_polygon_clip(segment, polygon, interval)
    if interval is None:
        return None
    return segment.sub_segment(*interval)


def clip_segment_cohen_sutherland(segment: Segment, rect: AxisRect) -> Optional[Segment]:
    """
    Exact rectangle clip by outcode-driven boundary intersection.

    While an endpoint is outside, it is moved onto the rectangle boundary
    it violates (top, bottom, right, then left) using the closed-form line
    equation, until the segment is trivially accepted or rejected.

    Parameters:
        segment: Segment to clip
        rect: Closed clipping rectangle

    Returns:
        The exact visible sub-segment, or None
    """
    x1, y1 = segment.a.x, segment.a.y
    x2, y2 = segment.b.x, segment.b.y
    code1 = outcode(segment.a, rect)
    code2 = outcode(segment.b, rect)

    while True:
        if not (code1 | code2):
            if (x1, y1, x2, y2) == (segment.a.x, segment.a.y, segment.b.x, segment.b.y):
                return segment
            return Segment(Point(x1, y1), Point(x2, y2))
        if code1 & code2:
            return None

        code_out = code1 if code1 else code2
        if code_out & TOP:
            x = x1 + (x2 - x1) * (rect.ymax - y1) / (y2 - y1)
            y = rect.ymax
        elif code_out & BOTTOM:
            x = x1 + (x2 - x1) * (rect.ymin - y1) / (y2 - y1)
            y = rect.ymin
        elif code_out & RIGHT:
            y = y1 + (y2 - y1) * (rect.xmax - x1) / (x2 - x1)
            x = rect.xmax
        else:
            y = y1 + (y2 - y1) * (rect.xmin - x1) / (x2 - x1)
            x = rect.xmin

        if code_out == code1:
            x1, y1 = x, y
            code1 = outcode(Point(x1, y1), rect)
        else:
            x2, y2 = x, y
            code2 = outcode(Point(x2, y2), rect)
