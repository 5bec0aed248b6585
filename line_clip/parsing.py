"""
Scene input format
==================

Plain text, whitespace separated, blank lines ignored::

    n
    x1 y1 x2 y2        (repeated n times, one segment per line)
    xmin ymin xmax ymax                (rectangle window)
    x1 y1 x2 y2 ... xm ym              (or: convex polygon, m >= 3)

The window line is a rectangle when it holds exactly 4 numbers and a
polygon when it holds an even count of at least 6.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Literal, Optional, Sequence, Tuple, Union

from line_clip.debug import logger
from line_clip.geometry import (
    EXTENT_MARGIN,
    AxisRect,
    ConvexPolygon,
    Segment,
    ValidationError,
    compute_extent,
)


class ParseError(ValidationError):
    """Raised when scene input is malformed.

    Attributes:
        line_number: 1-based line in the source text, or None when the
            problem is not tied to a single line
    """

    def __init__(self, message: str, line_number: Optional[int] = None) -> None:
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


@dataclass(frozen=True)
class Scene:
    """Segments plus exactly one clipping window.

    Attributes:
        segments: Segments to clip, in input order
        rect: Rectangle window, or None
        polygon: Convex polygon window, or None

    Raises:
        ValidationError: If both or neither window is given
    """

    segments: Tuple[Segment, ...]
    rect: Optional[AxisRect] = None
    polygon: Optional[ConvexPolygon] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "segments", tuple(self.segments))
        if (self.rect is None) == (self.polygon is None):
            raise ValidationError("Scene needs exactly one window: a rectangle or a polygon")

    @property
    def window_kind(self) -> Literal["rectangle", "polygon"]:
        return "rectangle" if self.rect is not None else "polygon"

    def extent(self, margin_ratio: float = EXTENT_MARGIN) -> AxisRect:
        """Padded bounding box of the segments and the window."""
        return compute_extent(self.segments, self.rect, self.polygon, margin_ratio)


def _to_floats(tokens: Sequence[str], line_number: int) -> List[float]:
    try:
        return [float(token) for token in tokens]
    except ValueError as e:
        raise ParseError(f"expected numbers, got {' '.join(tokens)!r}", line_number) from e


def parse_scene(text: str, normalize_winding: bool = True) -> Scene:
    """
    Parse a scene from text.

    Parameters:
        text: Scene description in the format documented in this module
        normalize_winding: If True, reorder polygon vertices counter-clockwise

    Returns:
        Parsed Scene

    Raises:
        ParseError: If the text is malformed or describes invalid geometry
    """
    rows = [
        (number, line.split())
        for number, line in enumerate(text.splitlines(), start=1)
        if line.strip()
    ]
    if not rows:
        raise ParseError("empty input")

    count_line, count_tokens = rows[0]
    try:
        count = int(count_tokens[0])
    except ValueError as e:
        raise ParseError(
            f"segment count must be an integer, got {count_tokens[0]!r}", count_line
        ) from e
    if count < 1:
        raise ParseError(f"segment count must be at least 1, got {count}", count_line)
    if len(rows) < count + 2:
        raise ParseError(
            f"expected {count} segment line(s) and a window line, "
            f"got {len(rows) - 1} line(s) after the count"
        )

    segments: List[Segment] = []
    for line_number, tokens in rows[1:count + 1]:
        if len(tokens) < 4:
            raise ParseError(
                f"segment line needs 4 numbers, got {len(tokens)}", line_number
            )
        values = _to_floats(tokens[:4], line_number)
        try:
            segments.append(Segment.from_coords(*values))
        except ValidationError as e:
            raise ParseError(str(e), line_number) from e

    window_line, window_tokens = rows[count + 1]
    values = _to_floats(window_tokens, window_line)
    is_rect = len(values) == 4
    if not is_rect and (len(values) < 6 or len(values) % 2):
        raise ParseError(
            "window line must hold 4 numbers (rectangle) or an even count "
            f">= 6 (polygon), got {len(values)}",
            window_line,
        )

    rect: Optional[AxisRect] = None
    polygon: Optional[ConvexPolygon] = None
    try:
        if is_rect:
            rect = AxisRect(*values)
        else:
            pairs = list(zip(values[0::2], values[1::2]))
            polygon = ConvexPolygon.from_points(pairs, normalize=normalize_winding)
    except ValidationError as e:
        raise ParseError(str(e), window_line) from e

    if len(rows) > count + 2:
        logger.warning("ignoring %d line(s) after the window line", len(rows) - count - 2)

    return Scene(tuple(segments), rect=rect, polygon=polygon)


def load_scene(path: Union[str, Path], normalize_winding: bool = True) -> Scene:
    """
    Read and parse a scene file.

    Raises:
        OSError: If the file cannot be read
        ParseError: If the contents are not valid UTF-8 or are malformed
    """
    path = Path(path)
    logger.info("Loading scene: %s", path)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ParseError(f"not valid UTF-8: {e}") from e
    return parse_scene(text, normalize_winding=normalize_winding)
