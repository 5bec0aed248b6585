"""
Tests for the batch clipping API.
"""

import logging

import pytest

from line_clip.api import (
    ClipResult,
    clip_against_convex_polygon,
    clip_against_rectangle,
    clip_scene,
)
from line_clip.config import ClipConfig
from line_clip.geometry import AxisRect, ConvexPolygon, Segment
from line_clip.parsing import Scene


# =============================================================================
# Helper functions for creating test fixtures
# =============================================================================

def make_segments() -> list:
    return [
        Segment.from_coords(-5, -3, 8, 6),
        Segment.from_coords(-8, -8, -6, -6),
        Segment.from_coords(1, 1, 4, 4),
    ]


def make_square() -> ConvexPolygon:
    return ConvexPolygon.from_points([(0, 0), (5, 0), (5, 4), (0, 4)])


@pytest.fixture
def rect() -> AxisRect:
    return AxisRect(0, 0, 5, 4)


# =============================================================================
# clip_against_rectangle
# =============================================================================

class TestClipAgainstRectangle:
    """Tests for clip_against_rectangle()."""

    def test_mapping_per_segment(self, rect):
        segments = make_segments()
        result = clip_against_rectangle(segments, rect)

        assert list(result.keys()) == segments
        assert len(result[segments[0]]) >= 1
        assert result[segments[1]] == []
        assert result[segments[2]] == [segments[2]]

    def test_duplicate_segments_share_entry(self, rect):
        seg = Segment.from_coords(1, 1, 2, 2)
        result = clip_against_rectangle([seg, Segment.from_coords(1, 1, 2, 2)], rect)
        assert len(result) == 1

    def test_epsilon_passed_through(self, rect):
        seg = Segment.from_coords(-1, 2, 2, 2)
        assert clip_against_rectangle([seg], rect, epsilon=10.0)[seg] == []

    def test_max_depth_passed_through(self, rect):
        seg = Segment.from_coords(-1, 2, 2, 2)
        result = clip_against_rectangle([seg], rect, max_depth=0)
        assert result[seg] == [Segment.from_coords(0.5, 2, 2, 2)]

    def test_empty_segments_error(self, rect):
        with pytest.raises(ValueError, match="must not be empty"):
            clip_against_rectangle([], rect)

    def test_non_segment_error(self, rect):
        with pytest.raises(ValueError, match=r"segments\[1\] must be a Segment"):
            clip_against_rectangle([Segment.from_coords(0, 0, 1, 1), (0, 0, 1, 1)], rect)

    def test_wrong_window_error(self):
        with pytest.raises(ValueError, match="must be an AxisRect"):
            clip_against_rectangle(make_segments(), make_square())


# =============================================================================
# clip_against_convex_polygon
# =============================================================================

class TestClipAgainstConvexPolygon:
    """Tests for clip_against_convex_polygon()."""

    def test_mapping_per_segment(self):
        segments = make_segments()
        result = clip_against_convex_polygon(segments, make_square())

        assert list(result.keys()) == segments
        assert isinstance(result[segments[0]], Segment)
        assert result[segments[1]] is None
        assert result[segments[2]] == segments[2]

    def test_wrong_window_error(self, rect):
        with pytest.raises(ValueError, match="must be a ConvexPolygon"):
            clip_against_convex_polygon(make_segments(), rect)

    def test_empty_segments_error(self):
        with pytest.raises(ValueError, match="must not be empty"):
            clip_against_convex_polygon([], make_square())


# =============================================================================
# clip_scene
# =============================================================================

class TestClipScene:
    """Tests for clip_scene() and ClipResult."""

    def test_rectangle_scene(self, rect):
        scene = Scene(tuple(make_segments()), rect=rect)
        result = clip_scene(scene)

        assert result.mode == "rectangle"
        assert result.visible_count == 2
        assert bool(result)
        assert len(result.visible_segments) >= 2

    def test_polygon_scene(self):
        scene = Scene(tuple(make_segments()), polygon=make_square())
        result = clip_scene(scene)

        assert result.mode == "polygon"
        assert result.visible_count == 2
        assert len(result.visible_segments) == 2
        assert result.visible[scene.segments[1]] == []

    def test_nothing_visible(self, rect):
        scene = Scene((Segment.from_coords(-8, -8, -6, -6),), rect=rect)
        result = clip_scene(scene)
        assert not result
        assert result.visible_segments == []

    def test_config_applied(self, rect):
        scene = Scene((Segment.from_coords(-1, 2, 2, 2),), rect=rect)
        assert clip_scene(scene)
        assert not clip_scene(scene, ClipConfig(epsilon=10.0))

    def test_summary_logged(self, rect, caplog):
        caplog.set_level(logging.INFO, logger="line_clip")
        clip_scene(Scene(tuple(make_segments()), rect=rect))
        assert "rectangle clip: 3 segment(s) in, 2 with visible parts" in caplog.text

    def test_clip_result_flattening_order(self):
        a = Segment.from_coords(0, 0, 1, 0)
        b = Segment.from_coords(0, 1, 1, 1)
        result = ClipResult(mode="rectangle", visible={a: [a], b: [b, a]})
        assert result.visible_segments == [a, b, a]
        assert result.visible_count == 2
