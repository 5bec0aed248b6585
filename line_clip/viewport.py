"""
World to screen mapping for rendering scenes onto images.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

import numpy as np
from numpy.typing import NDArray

from line_clip.geometry import AxisRect, Point, Segment, ValidationError


@dataclass(frozen=True)
class Viewport:
    """
    Maps a world-space extent onto a padded pixel area.

    The y axis is flipped so that world y grows upwards on screen. An axis
    with zero span maps every coordinate to the far edge of the drawable area.

    Attributes:
        extent: World rectangle shown in the drawable area
        width: Image width in pixels
        height: Image height in pixels
        padding: Blank border in pixels on every side

    Raises:
        ValidationError: If the padded drawable area is empty
    """

    extent: AxisRect
    width: int
    height: int
    padding: int = 40

    def __post_init__(self) -> None:
        if self.padding < 0:
            raise ValidationError(f"padding must be non-negative, got {self.padding}")
        if self.width - 2 * self.padding <= 0 or self.height - 2 * self.padding <= 0:
            raise ValidationError(
                f"image of {self.width}x{self.height} px leaves no room inside "
                f"a {self.padding} px padding"
            )

    @property
    def drawable_size(self) -> Tuple[int, int]:
        return self.width - 2 * self.padding, self.height - 2 * self.padding

    def world_to_screen(self, x: float, y: float) -> Tuple[float, float]:
        """Map a world coordinate to (column, row) pixel coordinates."""
        w, h = self.drawable_size
        span_x = self.extent.xmax - self.extent.xmin
        span_y = self.extent.ymax - self.extent.ymin
        sx = 1.0 if span_x == 0.0 else (x - self.extent.xmin) / span_x
        sy = 1.0 if span_y == 0.0 else (y - self.extent.ymin) / span_y
        return self.padding + sx * w, self.padding + (1.0 - sy) * h

    def point_to_pixel(self, p: Point) -> Tuple[int, int]:
        sx, sy = self.world_to_screen(p.x, p.y)
        return int(round(sx)), int(round(sy))

    def segment_to_pixels(self, segment: Segment) -> Tuple[Tuple[int, int], Tuple[int, int]]:
        return self.point_to_pixel(segment.a), self.point_to_pixel(segment.b)

    def polygon_to_pixels(self, vertices: Iterable[Point]) -> NDArray[np.int32]:
        """Return vertices as an (M, 1, 2) int32 array ready for cv2.polylines."""
        pixels = [self.point_to_pixel(v) for v in vertices]
        return np.array(pixels, dtype=np.int32).reshape(-1, 1, 2)
