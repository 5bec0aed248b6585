"""
Tests for the command line entry point.
"""

import pytest

from line_clip.cli import build_parser, main
from line_clip.visualize import HAS_CV2

RECT_SCENE = "2\n-5 -3 8 6\n-8 -8 -6 -6\n0 0 5 4\n"
POLYGON_SCENE = "2\n-5 -3 8 6\n-1 -1 6 -1\n0 0 5 0 5 4 0 4\n"


@pytest.fixture
def rect_file(tmp_path):
    path = tmp_path / "rect.txt"
    path.write_text(RECT_SCENE, encoding="utf-8")
    return path


@pytest.fixture
def polygon_file(tmp_path):
    path = tmp_path / "polygon.txt"
    path.write_text(POLYGON_SCENE, encoding="utf-8")
    return path


class TestBuildParser:
    """Tests for argument parsing."""

    def test_defaults(self):
        args = build_parser().parse_args(["scene.txt"])
        assert args.epsilon == 1e-3
        assert args.max_depth == 50
        assert args.output is None
        assert args.verbose == 0
        assert not args.keep_winding

    def test_options(self):
        args = build_parser().parse_args(
            ["scene.txt", "--epsilon", "0.01", "--max-depth", "10", "-vv", "--keep-winding"]
        )
        assert args.epsilon == 0.01
        assert args.max_depth == 10
        assert args.verbose == 2
        assert args.keep_winding


class TestMain:
    """Tests for main()."""

    def test_rectangle_output(self, rect_file, capsys):
        assert main([str(rect_file)]) == 0
        out = capsys.readouterr().out
        assert "window: rectangle" in out
        assert "segment 1: (-5.000, -3.000) -> (8.000, 6.000)" in out
        assert "visible" in out
        assert "not visible" in out

    def test_polygon_output(self, polygon_file, capsys):
        assert main([str(polygon_file)]) == 0
        out = capsys.readouterr().out
        assert "window: polygon" in out
        assert "0.461538) -> (5.000000, 3.923077)" in out
        assert out.count("not visible") == 1

    def test_missing_file(self, tmp_path):
        assert main([str(tmp_path / "missing.txt")]) == 1

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "bad.txt"
        path.write_text("1\n0 0 1\n0 0 5 4\n", encoding="utf-8")
        assert main([str(path)]) == 1

    def test_invalid_epsilon(self, rect_file):
        assert main([str(rect_file), "--epsilon", "0"]) == 1

    def test_invalid_utf8_file(self, tmp_path):
        path = tmp_path / "bad.txt"
        path.write_bytes(b"1\n0 0 1 1\n0 0 5 \xff\n")
        assert main([str(path)]) == 1

    def test_deep_max_depth(self, rect_file, capsys):
        assert main([str(rect_file), "--max-depth", "5000", "--epsilon", "1e-30"]) == 0
        assert "window: rectangle" in capsys.readouterr().out

    @pytest.mark.skipif(not HAS_CV2, reason="OpenCV not installed")
    def test_render_output(self, rect_file, tmp_path):
        out = tmp_path / "render.png"
        assert main([str(rect_file), "--output", str(out), "--width", "320", "--height", "240"]) == 0
        assert out.exists()
