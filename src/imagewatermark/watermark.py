"""Apply a watermark to one base image, at a single position or as a grid."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Tuple

import numpy as np
from PIL import Image

from .compositor import composite_onto, new_canvas, to_image
from .config import GridConfig, SingleConfig, validate
from .io import ImageSource, load_image
from .logger import log
from .position import Point, position_grid, position_single
from .transform import prepare_watermark


def load_pair(base: ImageSource, watermark: ImageSource) -> Tuple[Image.Image, Image.Image]:
    """Decode the base and watermark in parallel.

    If both fail, the base image's LoadFailure is raised.
    """
    with ThreadPoolExecutor(max_workers=2) as executor:
        base_future = executor.submit(load_image, base)
        watermark_future = executor.submit(load_image, watermark)
        base_img = base_future.result()
        watermark_img = watermark_future.result()
    return base_img, watermark_img


def single_points(
    base_size: Tuple[int, int],
    watermark: Image.Image,
    config: SingleConfig,
    rng: Optional[np.random.Generator] = None,
) -> List[Point]:
    point = position_single(
        base_size,
        watermark.size,
        config.horizontal_align,
        config.vertical_align,
        config.spacing,
        rng,
    )
    return [point]


def grid_points(base_size: Tuple[int, int], watermark: Image.Image, config: GridConfig) -> List[Point]:
    return position_grid(
        base_size,
        watermark.size,
        config.grid_spacing_x,
        config.grid_spacing_y,
        config.offset_x,
        config.offset_y,
    )


def render(base: Image.Image, watermark: Image.Image, points: List[Point]) -> Image.Image:
    """Composite an already prepared watermark onto a copy of ``base``."""
    canvas = new_canvas(base)
    composite_onto(canvas, watermark, points)
    return to_image(canvas)


def apply_single(
    base: ImageSource,
    watermark: ImageSource,
    config: SingleConfig,
    rng: Optional[np.random.Generator] = None,
) -> Image.Image:
    """
    Overlay one watermark onto ``base`` at an aligned position.

    Args:
        base: Image to watermark (image, path or encoded bytes).
        watermark: Watermark image (image, path or encoded bytes).
        config: Single placement settings.
        rng: Random source used when an axis is randomly aligned.

    Returns:
        A new RGBA image. Neither input is modified.

    Raises:
        InvalidConfig: Before any image is read, if ``config`` is out of range.
        LoadFailure: If either source cannot be decoded.
    """
    validate(config)
    base_img, watermark_img = load_pair(base, watermark)

    prepared = prepare_watermark(watermark_img, base_img.width, config.general)
    points = single_points(base_img.size, prepared, config, rng)
    log.info(f"Applying watermark {prepared.size} at {points[0]} on {base_img.size} image")

    return render(base_img, prepared, points)


def apply_grid(base: ImageSource, watermark: ImageSource, config: GridConfig) -> Image.Image:
    """
    Tile the watermark across ``base``.

    The watermark is prepared once and reused for every tile. Tiles are drawn
    row by row, so with negative spacing later tiles cover earlier ones.

    Raises:
        InvalidConfig: Before any image is read, if ``config`` is out of range.
        LoadFailure: If either source cannot be decoded.
    """
    validate(config)
    base_img, watermark_img = load_pair(base, watermark)

    prepared = prepare_watermark(watermark_img, base_img.width, config.general)
    points = grid_points(base_img.size, prepared, config)
    log.info(f"Applying {len(points)} grid watermarks {prepared.size} on {base_img.size} image")

    return render(base_img, prepared, points)
