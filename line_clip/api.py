"""
Public API for clipping batches of segments against one window.
"""

from dataclasses import dataclass
from typing import Dict, List, Literal, Optional, Sequence

from line_clip.clipping import (
    DEFAULT_EPSILON,
    DEFAULT_MAX_DEPTH,
    PARALLEL_TOLERANCE,
    clip_segment_cyrus_beck,
    clip_segment_midpoint,
)
from line_clip.config import ClipConfig
from line_clip.debug import log_clip_summary
from line_clip.geometry import AxisRect, ConvexPolygon, Segment
from line_clip.parsing import Scene


@dataclass
class ClipResult:
    """
    Result of clipping every segment of a scene.

    Attributes:
        mode: 'rectangle' (midpoint subdivision) or 'polygon' (Cyrus-Beck)
        visible: Input segment -> visible pieces, in input order. Polygon
            clips map to an empty list or a single piece.
    """
    mode: Literal["rectangle", "polygon"]
    visible: Dict[Segment, List[Segment]]

    @property
    def visible_segments(self) -> List[Segment]:
        """All visible pieces, grouped by input segment."""
        return [piece for pieces in self.visible.values() for piece in pieces]

    @property
    def visible_count(self) -> int:
        """Number of input segments with at least one visible piece."""
        return sum(1 for pieces in self.visible.values() if pieces)

    def __bool__(self) -> bool:
        """Returns True if anything is visible."""
        return self.visible_count > 0


def _validate_segments(segments: Sequence[Segment]) -> None:
    if len(segments) == 0:
        raise ValueError("segments must not be empty")
    for i, segment in enumerate(segments):
        if not isinstance(segment, Segment):
            raise ValueError(
                f"segments[{i}] must be a Segment, got {type(segment).__name__}"
            )


def clip_against_rectangle(
    segments: Sequence[Segment],
    window: AxisRect,
    epsilon: float = DEFAULT_EPSILON,
    max_depth: int = DEFAULT_MAX_DEPTH
) -> Dict[Segment, List[Segment]]:
    """
    Clip each segment against a rectangle by midpoint subdivision.

    Parameters:
        segments: Non-empty sequence of segments
        window: Clipping rectangle
        epsilon: Subdivision length cutoff
        max_depth: Subdivision depth cutoff

    Returns:
        Mapping from each input segment to its visible pieces (possibly empty).
        Equal input segments share one entry.

    Raises:
        ValueError: If segments is empty or window is not an AxisRect

    Example:
        >>> rect = AxisRect(0, 0, 5, 4)
        >>> seg = Segment.from_coords(1, 1, 4, 4)
        >>> clip_against_rectangle([seg], rect)[seg] == [seg]
        True
    """
    _validate_segments(segments)
    if not isinstance(window, AxisRect):
        raise ValueError(f"window must be an AxisRect, got {type(window).__name__}")

    return {
        segment: clip_segment_midpoint(segment, window, epsilon, max_depth)
        for segment in segments
    }


def clip_against_convex_polygon(
    segments: Sequence[Segment],
    window: ConvexPolygon,
    parallel_tolerance: float = PARALLEL_TOLERANCE
) -> Dict[Segment, Optional[Segment]]:
    """
    Clip each segment against a convex, counter-clockwise polygon (Cyrus-Beck).

    Parameters:
        segments: Non-empty sequence of segments
        window: Convex polygon with CCW vertex order
        parallel_tolerance: Tolerance for the parallel-edge test

    Returns:
        Mapping from each input segment to its visible sub-segment or None

    Raises:
        ValueError: If segments is empty or window is not a ConvexPolygon
    """
    _validate_segments(segments)
    if not isinstance(window, ConvexPolygon):
        raise ValueError(f"window must be a ConvexPolygon, got {type(window).__name__}")

    return {
        segment: clip_segment_cyrus_beck(segment, window, parallel_tolerance)
        for segment in segments
    }


def clip_scene(scene: Scene, config: Optional[ClipConfig] = None) -> ClipResult:
    """
    Clip a scene with the algorithm matching its window.

    Parameters:
        scene: Segments plus a rectangle or a polygon
        config: Tuning parameters; defaults to ClipConfig()

    Returns:
        ClipResult for the whole scene
    """
    if config is None:
        config = ClipConfig()

    if scene.rect is not None:
        visible = clip_against_rectangle(
            scene.segments, scene.rect, config.epsilon, config.max_depth
        )
        result = ClipResult(mode="rectangle", visible=visible)
    else:
        assert scene.polygon is not None
        polygon_visible = clip_against_convex_polygon(
            scene.segments, scene.polygon, config.parallel_tolerance
        )
        result = ClipResult(
            mode="polygon",
            visible={
                segment: [] if piece is None else [piece]
                for segment, piece in polygon_visible.items()
            },
        )

    log_clip_summary(result)
    return result
