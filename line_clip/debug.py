"""
Debug logging helpers for the clipping engine.

The library only attaches a NullHandler; call setup_debug_logging() to see
per-segment clip decisions on stderr.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple

from line_clip.geometry import AxisRect, ConvexPolygon, Point, Segment

if TYPE_CHECKING:
    from line_clip.api import ClipResult

LOGGER_NAME = "line_clip"
DEFAULT_FORMAT = "[%(levelname)s] %(name)s - %(message)s"

logger = logging.getLogger(LOGGER_NAME)
logger.addHandler(logging.NullHandler())

_debug_handler: Optional[logging.Handler] = None


def setup_debug_logging(
    level: int = logging.DEBUG,
    fmt: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """
    Attach a stream handler to the package logger.

    Calling it again only updates the level.

    Parameters:
        level: Logging level for the package logger
        fmt: Format string for emitted records

    Returns:
        The package logger
    """
    global _debug_handler
    if _debug_handler is None:
        _debug_handler = logging.StreamHandler()
        _debug_handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(_debug_handler)
    logger.setLevel(level)
    return logger


def disable_debug_logging() -> None:
    """Remove the handler installed by setup_debug_logging()."""
    global _debug_handler
    if _debug_handler is not None:
        logger.removeHandler(_debug_handler)
        _debug_handler = None
    logger.setLevel(logging.NOTSET)


def format_point(p: Point, precision: int = 3) -> str:
    return f"({p.x:.{precision}f}, {p.y:.{precision}f})"


def format_segment(segment: Segment, precision: int = 3) -> str:
    return f"{format_point(segment.a, precision)} -> {format_point(segment.b, precision)}"


def format_polygon(vertices: Iterable[Point], precision: int = 3) -> str:
    return "[" + ", ".join(format_point(v, precision) for v in vertices) + "]"


def format_rect(rect: AxisRect, precision: int = 3) -> str:
    return (
        f"[{rect.xmin:.{precision}f}, {rect.xmax:.{precision}f}] x "
        f"[{rect.ymin:.{precision}f}, {rect.ymax:.{precision}f}]"
    )


def log_rect_clip(segment: Segment, rect: AxisRect, pieces: List[Segment]) -> None:
    """Log the outcome of one rectangle clip."""
    if not logger.isEnabledFor(logging.DEBUG):
        return
    if not pieces:
        logger.debug("rect %s: %s rejected", format_rect(rect), format_segment(segment))
        return
    logger.debug(
        "rect %s: %s -> %d piece(s) from %s to %s",
        format_rect(rect),
        format_segment(segment),
        len(pieces),
        format_point(pieces[0].a),
        format_point(pieces[-1].b),
    )


def log_polygon_clip(
    segment: Segment,
    polygon: ConvexPolygon,
    interval: Optional[Tuple[float, float]],
) -> None:
    """Log the parametric interval found for one polygon clip."""
    if not logger.isEnabledFor(logging.DEBUG):
        return
    if interval is None:
        logger.debug(
            "polygon %s: %s rejected",
            format_polygon(polygon.vertices),
            format_segment(segment),
        )
        return
    t_enter, t_leave = interval
    logger.debug(
        "polygon %s: %s visible for t in [%.6f, %.6f]",
        format_polygon(polygon.vertices),
        format_segment(segment),
        t_enter,
        t_leave,
    )


def log_clip_summary(result: ClipResult) -> None:
    """Log a one-line summary of a batch clip."""
    logger.info(
        "%s clip: %d segment(s) in, %d with visible parts, %d piece(s) out",
        result.mode,
        len(result.visible),
        result.visible_count,
        len(result.visible_segments),
    )
