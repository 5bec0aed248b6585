"""
Geometry primitives, point classification and extent computation.

Value types are immutable and validated on construction. Polygons are
expected in counter-clockwise order; use ensure_counter_clockwise() to
normalize vertex lists coming from external sources.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

# Outcode flags
INSIDE = 0
LEFT = 1
RIGHT = 2
BOTTOM = 4
TOP = 8

EXTENT_MARGIN = 0.1
ZERO_SPAN_PAD = 1.0


class ValidationError(Exception):
    """Raised when input validation fails."""

    pass


def _as_coordinate(value: object, name: str) -> float:
    if not isinstance(value, Real):
        raise ValidationError(f"{name} must be a number, got {type(value).__name__}")
    result = float(value)
    if not math.isfinite(result):
        raise ValidationError(f"{name} must be finite, got {value}")
    return result


@dataclass(frozen=True)
class Point:
    """A point in the plane with finite real coordinates."""

    x: float
    y: float

    def __post_init__(self) -> None:
        # Use object.__setattr__ because the dataclass is frozen
        object.__setattr__(self, "x", _as_coordinate(self.x, "x"))
        object.__setattr__(self, "y", _as_coordinate(self.y, "y"))

    @property
    def array(self) -> NDArray[np.float64]:
        """Return the point as a numpy array of shape (2,)."""
        return np.array((self.x, self.y), dtype=np.float64)

    def midpoint(self, other: Point) -> Point:
        return Point((self.x + other.x) / 2.0, (self.y + other.y) / 2.0)


@dataclass(frozen=True)
class Segment:
    """
    Directed line segment from a to b.

    A zero-length segment (a == b) is valid and handled by both clippers.

    Attributes:
        a: Start point, parameter t = 0
        b: End point, parameter t = 1
    """

    a: Point
    b: Point

    def __post_init__(self) -> None:
        if not isinstance(self.a, Point) or not isinstance(self.b, Point):
            raise ValidationError("Segment endpoints must be Point instances")

    @classmethod
    def from_coords(cls, x1: float, y1: float, x2: float, y2: float) -> Segment:
        return cls(Point(x1, y1), Point(x2, y2))

    @property
    def dx(self) -> float:
        return self.b.x - self.a.x

    @property
    def dy(self) -> float:
        return self.b.y - self.a.y

    @property
    def manhattan_length(self) -> float:
        """|dx| + |dy|, the length measure used by the subdivision cutoff."""
        return abs(self.dx) + abs(self.dy)

    @property
    def length(self) -> float:
        return math.hypot(self.dx, self.dy)

    @property
    def is_degenerate(self) -> bool:
        return self.a == self.b

    @property
    def points_array(self) -> NDArray[np.float64]:
        """Return endpoints as a numpy array of shape (2, 2)."""
        return np.array(((self.a.x, self.a.y), (self.b.x, self.b.y)), dtype=np.float64)

    def point_at(self, t: float) -> Point:
        """
        Evaluate P(t) = a + t * (b - a).

        The endpoints are returned as-is for t == 0 and t == 1 so that an
        unclipped segment reproduces its input exactly.
        """
        if t == 0.0:
            return self.a
        if t == 1.0:
            return self.b
        return Point(self.a.x + t * self.dx, self.a.y + t * self.dy)

    def sub_segment(self, t_start: float, t_end: float) -> Segment:
        return Segment(self.point_at(t_start), self.point_at(t_end))


@dataclass(frozen=True)
class AxisRect:
    """
    Closed axis-aligned rectangle; boundary points count as inside.

    Raises:
        ValidationError: If a coordinate is not finite or min > max on an axis
    """

    xmin: float
    ymin: float
    xmax: float
    ymax: float

    def __post_init__(self) -> None:
        for name in ("xmin", "ymin", "xmax", "ymax"):
            object.__setattr__(self, name, _as_coordinate(getattr(self, name), name))
        if self.xmin > self.xmax:
            raise ValidationError(f"xmin ({self.xmin}) must not exceed xmax ({self.xmax})")
        if self.ymin > self.ymax:
            raise ValidationError(f"ymin ({self.ymin}) must not exceed ymax ({self.ymax})")

    @property
    def width(self) -> float:
        return self.xmax - self.xmin

    @property
    def height(self) -> float:
        return self.ymax - self.ymin

    @property
    def corners(self) -> Tuple[Point, Point, Point, Point]:
        """Corners in counter-clockwise order starting at (xmin, ymin)."""
        return (
            Point(self.xmin, self.ymin),
            Point(self.xmax, self.ymin),
            Point(self.xmax, self.ymax),
            Point(self.xmin, self.ymax),
        )

    def contains(self, p: Point) -> bool:
        return point_inside(p, self)

    def as_polygon(self) -> ConvexPolygon:
        """Return the same region as a 4-vertex CCW convex polygon."""
        return ConvexPolygon(self.corners)


@dataclass(frozen=True)
class ConvexPolygon:
    """
    Convex polygon with vertices in counter-clockwise order.

    Convexity and winding are preconditions and are not checked here; a
    clockwise vertex list makes the Cyrus-Beck clipper keep the complement
    of the intended region. Build instances through from_points() with
    normalize=True when the winding of the source data is unknown.

    Attributes:
        vertices: Ordered vertices; edges include the wrap-around pair

    Raises:
        ValidationError: If fewer than 3 vertices are given
    """

    vertices: Tuple[Point, ...]

    def __post_init__(self) -> None:
        vertices = tuple(self.vertices)
        if len(vertices) < 3:
            raise ValidationError(
                f"Polygon must have at least 3 vertices, got {len(vertices)}"
            )
        for i, vertex in enumerate(vertices):
            if not isinstance(vertex, Point):
                raise ValidationError(
                    f"vertices[{i}] must be a Point, got {type(vertex).__name__}"
                )
        object.__setattr__(self, "vertices", vertices)

    @classmethod
    def from_points(
        cls,
        points: Iterable[Sequence[float]],
        normalize: bool = False,
    ) -> ConvexPolygon:
        """
        Build a polygon from (x, y) pairs.

        Parameters:
            points: Iterable of (x, y) pairs
            normalize: If True, reverse clockwise input to counter-clockwise

        Returns:
            ConvexPolygon instance
        """
        vertices = [p if isinstance(p, Point) else Point(p[0], p[1]) for p in points]
        if normalize and len(vertices) >= 3:
            vertices = ensure_counter_clockwise(vertices)
        return cls(tuple(vertices))

    @property
    def num_vertices(self) -> int:
        return len(self.vertices)

    @property
    def vertices_array(self) -> NDArray[np.float64]:
        """Return vertices as a numpy array of shape (M, 2)."""
        return np.array([(v.x, v.y) for v in self.vertices], dtype=np.float64)

    @property
    def edges(self) -> Tuple[Segment, ...]:
        """The M consecutive vertex pairs, including (v[M-1], v[0])."""
        m = len(self.vertices)
        return tuple(
            Segment(self.vertices[i], self.vertices[(i + 1) % m]) for i in range(m)
        )

    @property
    def signed_area(self) -> float:
        return signed_area(self.vertices)

    @property
    def is_counter_clockwise(self) -> bool:
        return self.signed_area > 0.0


# =============================================================================
# Classification helpers
# =============================================================================

def point_inside(p: Point, rect: AxisRect) -> bool:
    """True iff p lies in the closed rectangle."""
    return rect.xmin <= p.x <= rect.xmax and rect.ymin <= p.y <= rect.ymax


def outcode(p: Point, rect: AxisRect) -> int:
    """
    Cohen-Sutherland region code of p relative to rect.

    Bits: LEFT (x < xmin), RIGHT (x > xmax), BOTTOM (y < ymin),
    TOP (y > ymax). A zero code means the point is inside.
    """
    code = INSIDE
    if p.x < rect.xmin:
        code |= LEFT
    elif p.x > rect.xmax:
        code |= RIGHT
    if p.y < rect.ymin:
        code |= BOTTOM
    elif p.y > rect.ymax:
        code |= TOP
    return code


# =============================================================================
# Polygon orientation
# =============================================================================

def signed_area(vertices: Sequence[Point]) -> float:
    """
    Shoelace signed area; positive for counter-clockwise vertex order.
    """
    if len(vertices) < 3:
        return 0.0
    coords = np.array([(v.x, v.y) for v in vertices], dtype=np.float64)
    x = coords[:, 0]
    y = coords[:, 1]
    return float(0.5 * (np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1))))


def is_counter_clockwise(vertices: Sequence[Point]) -> bool:
    return signed_area(vertices) > 0.0


def ensure_counter_clockwise(vertices: Sequence[Point]) -> list[Point]:
    """Return the vertices in CCW order, reversing them if they are clockwise."""
    vertices = list(vertices)
    if signed_area(vertices) < 0.0:
        vertices.reverse()
    return vertices


# =============================================================================
# Extents
# =============================================================================

def compute_bounding_box(
    points: NDArray[np.float64]
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """
    Compute axis-aligned bounding box of a point array.

    Parameters:
        points: Array of shape (N, 2)

    Returns:
        Tuple of (min_point, max_point), each shape (2,)
    """
    if points.shape[0] == 0:
        raise ValueError("points must contain at least one vertex")
    min_point = np.min(points, axis=0).astype(np.float64)
    max_point = np.max(points, axis=0).astype(np.float64)
    return min_point, max_point


def compute_extent(
    segments: Sequence[Segment],
    rect: Optional[AxisRect] = None,
    polygon: Optional[ConvexPolygon] = None,
    margin_ratio: float = EXTENT_MARGIN,
) -> AxisRect:
    """
    Extent of a scene, padded for display.

    Folds min/max over every segment endpoint and, when given, the
    rectangle corners or polygon vertices. Each axis is then widened on
    both sides by margin_ratio of its span, or by ZERO_SPAN_PAD when the
    span is zero.

    Parameters:
        segments: Segments to include
        rect: Optional clipping rectangle
        polygon: Optional clipping polygon
        margin_ratio: Fraction of the span added on each side

    Returns:
        Padded AxisRect

    Raises:
        ValueError: If there is nothing to measure
    """
    chunks = [seg.points_array for seg in segments]
    if rect is not None:
        chunks.append(np.array([(c.x, c.y) for c in rect.corners], dtype=np.float64))
    if polygon is not None:
        chunks.append(polygon.vertices_array)
    if not chunks:
        raise ValueError("compute_extent needs at least one segment or shape")

    min_point, max_point = compute_bounding_box(np.concatenate(chunks, axis=0))
    span = max_point - min_point
    pad = np.where(span > 0.0, span * margin_ratio, ZERO_SPAN_PAD)
    lo = min_point - pad
    hi = max_point + pad
    return AxisRect(float(lo[0]), float(lo[1]), float(hi[0]), float(hi[1]))
