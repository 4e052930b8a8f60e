"""Watermark preparation: resize, rotate and fade before compositing."""

from __future__ import annotations

import math
import threading
from concurrent.futures import Future
from typing import Dict

import numpy as np
from PIL import Image

from .config import GeneralConfig, ResampleFilter
from .logger import log

TRANSPARENT = (0, 0, 0, 0)


def target_width(base_width: int, width_percent: float) -> int:
    """Watermark width in pixels for a base image of ``base_width``.

    For example, a 1000px base at 20 percent yields 200. Never below 1.
    """
    return max(1, math.floor(base_width * width_percent / 100))


def resize_watermark(
    watermark: Image.Image,
    width: int,
    resample_filter: ResampleFilter = ResampleFilter.BICUBIC,
) -> Image.Image:
    """Resize to ``width`` keeping the aspect ratio."""
    src_w, src_h = watermark.size
    height = max(1, math.floor(width * src_h / src_w + 0.5))
    if (width, height) == (src_w, src_h):
        return watermark.copy()
    return watermark.resize((width, height), resample_filter.resampling)


def rotate_watermark(watermark: Image.Image, degrees: float) -> Image.Image:
    """Rotate counter-clockwise about the centre.

    The bounding box grows to hold the rotated content and the uncovered
    corners are fully transparent.
    """
    rgba = watermark if watermark.mode == "RGBA" else watermark.convert("RGBA")
    return rgba.rotate(
        degrees,
        resample=Image.Resampling.BICUBIC,
        expand=True,
        fillcolor=TRANSPARENT,
    )


def apply_opacity(watermark: Image.Image, opacity: float) -> Image.Image:
    """Scale the alpha channel by ``opacity``.

    Colour channels are straight (not premultiplied) and left untouched.
    Each alpha value is rounded half up, so repeated application does not
    in general equal a single application of the product.
    """
    pixels = np.array(watermark.convert("RGBA"), dtype=np.uint8)
    alpha = pixels[..., 3].astype(np.float64)
    pixels[..., 3] = np.floor(alpha * opacity + 0.5).clip(0, 255).astype(np.uint8)
    return Image.fromarray(pixels, "RGBA")


def prepare_watermark(watermark: Image.Image, base_width: int, config: GeneralConfig) -> Image.Image:
    """
    Produce the watermark as it will be drawn on a base of ``base_width``.

    Steps run in a fixed order: resize, rotate, opacity. Rotation and opacity
    are skipped when they would not change any pixel.

    Args:
        watermark: Decoded watermark. Not modified.
        base_width: Width of the base image the watermark is sized against.
        config: General settings (width percent, rotation, opacity, filter).

    Returns:
        A new RGBA image.
    """
    width = target_width(base_width, config.width_percent)
    prepared = resize_watermark(watermark, width, config.resample_filter)

    if config.rotation_degrees != 0:
        prepared = rotate_watermark(prepared, config.rotation_degrees)

    if config.opacity < 1.0:
        prepared = apply_opacity(prepared, config.opacity)

    if prepared.mode != "RGBA":
        prepared = prepared.convert("RGBA")

    log.debug(
        f"Prepared watermark {watermark.size} -> {prepared.size} "
        f"(rotation={config.rotation_degrees}, opacity={config.opacity})"
    )
    return prepared


class WatermarkPreparer:
    """Shares one decoded watermark across many base images.

    Prepared buffers are memoized per target width, so bases of the same
    width reuse a single resized, rotated and faded watermark. Different
    widths are prepared concurrently; the lock only guards the claim on a
    width. Returned images are shared; callers must treat them as read-only.
    """

    def __init__(self, watermark: Image.Image, config: GeneralConfig):
        self.watermark = watermark
        self.config = config
        self._prepared: Dict[int, Future] = {}
        self._lock = threading.Lock()

    def prepare(self, base_width: int) -> Image.Image:
        width = target_width(base_width, self.config.width_percent)
        with self._lock:
            pending = self._prepared.get(width)
            owner = pending is None
            if owner:
                pending = Future()
                self._prepared[width] = pending

        if owner:
            try:
                pending.set_result(prepare_watermark(self.watermark, base_width, self.config))
            except Exception as e:
                # other tasks waiting on this width see the same error
                pending.set_exception(e)
                raise
        return pending.result()

    def __len__(self) -> int:
        return len(self._prepared)
