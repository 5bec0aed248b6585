"""
Command line entry point: clip a scene file and print or render the result.

Usage:
    line-clip scene.txt
    line-clip scene.txt --output clipped.png --width 1000 --height 800
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence, TextIO

from line_clip.api import ClipResult, clip_scene
from line_clip.config import ClipConfig
from line_clip.debug import format_segment
from line_clip.geometry import ValidationError
from line_clip.parsing import Scene, load_scene
from line_clip.visualize import render_scene, save_image

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="line-clip",
        description="Clip line segments against a rectangle (midpoint subdivision) "
                    "or a convex polygon (Cyrus-Beck)",
    )
    parser.add_argument("input", type=Path, help="Scene file to clip")
    parser.add_argument(
        "--epsilon",
        type=float,
        default=ClipConfig.epsilon,
        help=f"Midpoint subdivision length cutoff (default: {ClipConfig.epsilon})"
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=ClipConfig.max_depth,
        help=f"Midpoint subdivision depth cutoff (default: {ClipConfig.max_depth})"
    )
    parser.add_argument(
        "--keep-winding",
        action="store_true",
        help="Do not reorder polygon vertices counter-clockwise"
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Write a rendering of the scene to this image file"
    )
    parser.add_argument("--width", type=int, default=800, help="Rendering width (default: 800)")
    parser.add_argument("--height", type=int, default=600, help="Rendering height (default: 600)")
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Log progress (-v) or every clip decision (-vv)"
    )
    return parser


def print_result(scene: Scene, result: ClipResult, stream: TextIO) -> None:
    """Write visible pieces per input segment, in input order."""
    print(f"window: {scene.window_kind}", file=stream)
    for index, segment in enumerate(scene.segments, start=1):
        pieces = result.visible[segment]
        print(f"segment {index}: {format_segment(segment)}", file=stream)
        if not pieces:
            print("  not visible", file=stream)
        for piece in pieces:
            print(f"  visible {format_segment(piece, precision=6)}", file=stream)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point; returns the process exit code."""
    args = build_parser().parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="[%(levelname)s] %(name)s - %(message)s")

    try:
        config = ClipConfig(
            epsilon=args.epsilon,
            max_depth=args.max_depth,
            normalize_winding=not args.keep_winding,
        )
        scene = load_scene(args.input, normalize_winding=config.normalize_winding)
        result = clip_scene(scene, config)
        print_result(scene, result, sys.stdout)

        if args.output is not None:
            image = render_scene(scene, result, args.width, args.height, config=config)
            save_image(image, args.output)
    except (ValidationError, OSError, ImportError) as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
