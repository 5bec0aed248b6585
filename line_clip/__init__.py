"""
Line Segment Clipping
=====================

Clip 2-D line segments against an axis-aligned rectangle (midpoint
subdivision) or a convex polygon (Cyrus-Beck).
"""

from line_clip.api import (
    ClipResult,
    clip_against_rectangle,
    clip_against_convex_polygon,
    clip_scene,
)
from line_clip.clipping import (
    clip_segment_midpoint,
    clip_segment_cyrus_beck,
    clip_segment_cohen_sutherland,
    cyrus_beck_interval,
)
from line_clip.config import ClipConfig
from line_clip.debug import (
    format_point,
    format_segment,
    format_polygon,
    setup_debug_logging,
    disable_debug_logging,
)
from line_clip.geometry import (
    Point,
    Segment,
    AxisRect,
    ConvexPolygon,
    ValidationError,
    point_inside,
    outcode,
    signed_area,
    ensure_counter_clockwise,
    compute_extent,
)
from line_clip.parsing import Scene, ParseError, parse_scene, load_scene
from line_clip.viewport import Viewport

__all__ = [
    # Main API
    'clip_against_rectangle',
    'clip_against_convex_polygon',
    'clip_scene',
    'ClipResult',
    'ClipConfig',
    # Algorithms
    'clip_segment_midpoint',
    'clip_segment_cyrus_beck',
    'clip_segment_cohen_sutherland',
    'cyrus_beck_interval',
    # Geometry
    'Point',
    'Segment',
    'AxisRect',
    'ConvexPolygon',
    'point_inside',
    'outcode',
    'signed_area',
    'ensure_counter_clockwise',
    'compute_extent',
    'Viewport',
    # Input
    'Scene',
    'ParseError',
    'ValidationError',
    'parse_scene',
    'load_scene',
    # Debug utilities
    'format_point',
    'format_segment',
    'format_polygon',
    'setup_debug_logging',
    'disable_debug_logging',
]
__version__ = '0.1.0'
