"""
Rendering of scenes and clip results onto BGR images.

Original segments are drawn in gray, the window in blue (rectangle) or
green (polygon), and visible pieces in red (rectangle) or magenta
(polygon) on top.
"""

from pathlib import Path
from typing import Iterable, Optional, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from line_clip.api import ClipResult, clip_scene
from line_clip.config import ClipConfig
from line_clip.debug import logger
from line_clip.geometry import Segment
from line_clip.parsing import Scene
from line_clip.viewport import Viewport

# Try to import cv2, set flag if not available
try:
    import cv2

    HAS_CV2 = True
except ImportError:
    HAS_CV2 = False

Color = Tuple[int, int, int]

BACKGROUND_COLOR: Color = (250, 250, 250)
AXIS_COLOR: Color = (211, 211, 211)
ORIGINAL_COLOR: Color = (128, 128, 128)
RECT_WINDOW_COLOR: Color = (255, 0, 0)
POLYGON_WINDOW_COLOR: Color = (0, 160, 0)
RECT_CLIP_COLOR: Color = (0, 0, 255)
POLYGON_CLIP_COLOR: Color = (255, 0, 255)
TEXT_COLOR: Color = (40, 40, 40)


def _ensure_cv2() -> None:
    """Raise an error if cv2 is not available."""
    if not HAS_CV2:
        raise ImportError(
            "OpenCV (cv2) is required for visualization functions. "
            "Install with: pip install opencv-python-headless"
        )


def create_canvas(
    width: int,
    height: int,
    background: Color = BACKGROUND_COLOR
) -> NDArray[np.uint8]:
    """Return a blank (height, width, 3) BGR image."""
    image = np.empty((height, width, 3), dtype=np.uint8)
    image[:, :] = background
    return image


def draw_axes(
    image: NDArray[np.uint8],
    viewport: Viewport,
    color: Color = AXIS_COLOR
) -> NDArray[np.uint8]:
    """Draw the x = 0 and y = 0 lines when they fall inside the viewport extent."""
    _ensure_cv2()
    extent = viewport.extent
    if extent.xmin < 0 < extent.xmax:
        top = viewport.world_to_screen(0.0, extent.ymax)
        bottom = viewport.world_to_screen(0.0, extent.ymin)
        cv2.line(image, _pixel(bottom), _pixel(top), color, 1, cv2.LINE_AA)
    if extent.ymin < 0 < extent.ymax:
        left = viewport.world_to_screen(extent.xmin, 0.0)
        right = viewport.world_to_screen(extent.xmax, 0.0)
        cv2.line(image, _pixel(left), _pixel(right), color, 1, cv2.LINE_AA)
    return image


def draw_window(
    image: NDArray[np.uint8],
    viewport: Viewport,
    scene: Scene,
    fill_alpha: float = 0.07,
    thickness: int = 2
) -> NDArray[np.uint8]:
    """
    Draw the scene's clipping window with a translucent fill.

    Parameters:
        image: Image (H, W, 3) BGR, drawn in place
        viewport: World to screen mapping
        scene: Scene whose rectangle or polygon is drawn
        fill_alpha: Alpha of the fill (0.0 = no fill)
        thickness: Outline thickness

    Returns:
        The same image
    """
    _ensure_cv2()
    if scene.rect is not None:
        vertices = scene.rect.corners
        color = RECT_WINDOW_COLOR
    else:
        assert scene.polygon is not None
        vertices = scene.polygon.vertices
        color = POLYGON_WINDOW_COLOR
    pts = viewport.polygon_to_pixels(vertices)

    if fill_alpha > 0:
        overlay = image.copy()
        cv2.fillPoly(overlay, [pts], color)
        cv2.addWeighted(overlay, fill_alpha, image, 1.0 - fill_alpha, 0, dst=image)
    cv2.polylines(image, [pts], isClosed=True, color=color, thickness=thickness, lineType=cv2.LINE_AA)
    return image


def draw_segments(
    image: NDArray[np.uint8],
    viewport: Viewport,
    segments: Iterable[Segment],
    color: Color,
    thickness: int = 2
) -> NDArray[np.uint8]:
    """Draw segments in place and return the image."""
    _ensure_cv2()
    for segment in segments:
        start, end = viewport.segment_to_pixels(segment)
        cv2.line(image, start, end, color, thickness, cv2.LINE_AA)
    return image


def draw_legend(
    image: NDArray[np.uint8],
    mode: str,
    font_scale: float = 0.45
) -> NDArray[np.uint8]:
    """Write the color legend in the bottom-left corner."""
    _ensure_cv2()
    clip_name = "Red" if mode == "rectangle" else "Magenta"
    window_name = "Blue: clipping rectangle" if mode == "rectangle" else "Green: clipping polygon"
    lines = [
        "Gray: original segments",
        f"{clip_name}: visible parts",
        window_name,
    ]
    height = image.shape[0]
    for i, text in enumerate(lines):
        y = height - 12 - 18 * (len(lines) - 1 - i)
        cv2.putText(
            image, text, (12, y), cv2.FONT_HERSHEY_SIMPLEX, font_scale, TEXT_COLOR, 1, cv2.LINE_AA
        )
    return image


def render_scene(
    scene: Scene,
    result: Optional[ClipResult] = None,
    width: int = 800,
    height: int = 600,
    padding: int = 60,
    config: Optional[ClipConfig] = None
) -> NDArray[np.uint8]:
    """
    Render a scene and its clip result.

    Parameters:
        scene: Scene to draw
        result: Clip result; computed with clip_scene() when None
        width: Image width in pixels
        height: Image height in pixels
        padding: Blank border in pixels
        config: Clip configuration, also supplies the extent margin

    Returns:
        New (height, width, 3) BGR image
    """
    _ensure_cv2()
    if config is None:
        config = ClipConfig()
    if result is None:
        result = clip_scene(scene, config)

    viewport = Viewport(scene.extent(config.extent_margin), width, height, padding)
    image = create_canvas(width, height)
    draw_axes(image, viewport)
    draw_window(image, viewport, scene)
    draw_segments(image, viewport, scene.segments, ORIGINAL_COLOR, thickness=2)
    clip_color = RECT_CLIP_COLOR if result.mode == "rectangle" else POLYGON_CLIP_COLOR
    draw_segments(image, viewport, result.visible_segments, clip_color, thickness=3)
    draw_legend(image, result.mode)
    return image


def save_image(image: NDArray[np.uint8], path: Union[str, Path]) -> Path:
    """
    Write an image to disk.

    Raises:
        OSError: If OpenCV fails to encode or write the file
    """
    _ensure_cv2()
    path = Path(path)
    try:
        written = cv2.imwrite(str(path), image)
    except cv2.error as e:
        raise OSError(f"Could not write image to {path}: {e}") from e
    if not written:
        raise OSError(f"Could not write image to {path}")
    logger.info("Saved rendering to %s", path)
    return path


def _pixel(xy: Tuple[float, float]) -> Tuple[int, int]:
    return int(round(xy[0])), int(round(xy[1]))
