"""Source-over alpha compositing of a watermark onto a canvas."""

from __future__ import annotations

from typing import Iterable, Union

import numpy as np
from PIL import Image

from .position import Point


def new_canvas(base: Image.Image) -> np.ndarray:
    """Return a fresh, writable RGBA pixel array copied from ``base``."""
    rgba = base if base.mode == "RGBA" else base.convert("RGBA")
    return np.array(rgba, dtype=np.uint8)


def as_pixels(image: Union[Image.Image, np.ndarray]) -> np.ndarray:
    if isinstance(image, np.ndarray):
        return image
    rgba = image if image.mode == "RGBA" else image.convert("RGBA")
    return np.asarray(rgba, dtype=np.uint8)


def to_image(canvas: np.ndarray) -> Image.Image:
    return Image.fromarray(canvas, "RGBA")


def blend_over(src: np.ndarray, dst: np.ndarray) -> np.ndarray:
    """
    Blend ``src`` over ``dst`` (both uint8 RGBA, same shape).

    Args:
        src: Watermark pixels, straight alpha.
        dst: Canvas pixels, straight alpha.

    Returns:
        Blended uint8 RGBA pixels.
    """
    src_f = src.astype(np.float32) / 255.0
    dst_f = dst.astype(np.float32) / 255.0

    sa = src_f[..., 3:4]
    da = dst_f[..., 3:4]
    dst_weight = da * (1.0 - sa)

    out_a = sa + dst_weight
    premul = src_f[..., :3] * sa + dst_f[..., :3] * dst_weight
    out_rgb = np.divide(premul, out_a, out=np.zeros_like(premul), where=out_a > 0)

    blended = np.concatenate([out_rgb, out_a], axis=-1)
    return np.clip(np.rint(blended * 255.0), 0, 255).astype(np.uint8)


def draw_at(canvas: np.ndarray, watermark: Union[Image.Image, np.ndarray], point: Point) -> np.ndarray:
    """Composite ``watermark`` with its top-left corner at ``point``.

    Only the part overlapping the canvas is drawn.
    """
    wm = as_pixels(watermark)
    canvas_h, canvas_w = canvas.shape[:2]
    wm_h, wm_w = wm.shape[:2]
    x, y = point

    x0, y0 = max(x, 0), max(y, 0)
    x1, y1 = min(x + wm_w, canvas_w), min(y + wm_h, canvas_h)
    if x0 >= x1 or y0 >= y1:
        return canvas

    src = wm[y0 - y:y1 - y, x0 - x:x1 - x]
    canvas[y0:y1, x0:x1] = blend_over(src, canvas[y0:y1, x0:x1])
    return canvas


def composite_onto(
    canvas: np.ndarray,
    watermark: Union[Image.Image, np.ndarray],
    points: Iterable[Point],
) -> np.ndarray:
    """Draw the watermark at every point, in order; later draws cover earlier ones."""
    wm = as_pixels(watermark)
    for point in points:
        draw_at(canvas, wm, point)
    return canvas
