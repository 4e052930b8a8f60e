"""Apply one watermark configuration across many base images in parallel."""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence

import numpy as np
from PIL import Image

from .config import GeneralConfig, GridConfig, SingleConfig, validate
from .io import ImageSource, load_image
from .logger import log
from .settings import get_settings
from .transform import WatermarkPreparer
from .watermark import grid_points, render, single_points


def resolve_workers(config: GeneralConfig, task_count: int) -> int:
    """Worker count for a batch: config, then settings, then CPU count."""
    workers = config.max_workers or get_settings().max_workers or os.cpu_count() or 1
    return max(1, min(workers, task_count))


def _load_all(
    executor: ThreadPoolExecutor,
    bases: Sequence[ImageSource],
    watermark: ImageSource,
) -> tuple[List[Image.Image], Image.Image]:
    watermark_future = executor.submit(load_image, watermark)
    # map() re-raises the first failure in input order
    base_images = list(executor.map(load_image, bases))
    return base_images, watermark_future.result()


def _run_batch(
    bases: Sequence[ImageSource],
    watermark: ImageSource,
    general: GeneralConfig,
    task: Callable[[int, Image.Image, WatermarkPreparer], Image.Image],
) -> List[Image.Image]:
    workers = resolve_workers(general, len(bases))
    log.info(f"Watermarking {len(bases)} images with {workers} workers")

    with ThreadPoolExecutor(max_workers=workers) as executor:
        base_images, watermark_img = _load_all(executor, bases, watermark)
        preparer = WatermarkPreparer(watermark_img, general)

        futures = [
            executor.submit(task, index, base_img, preparer)
            for index, base_img in enumerate(base_images)
        ]
        results = [future.result() for future in futures]

    log.info(f"Watermarked {len(results)} images ({len(preparer)} watermark sizes prepared)")
    return results


def apply_batch_single(
    bases: Sequence[ImageSource],
    watermark: ImageSource,
    config: SingleConfig,
    seed: Optional[int] = None,
) -> List[Image.Image]:
    """
    Apply a single-position watermark to every base image.

    Args:
        bases: Base images (images, paths or encoded bytes).
        watermark: Watermark shared by every task.
        config: Single placement settings, validated once for the batch.
        seed: Seed for random alignment. Each image gets its own generator.

    Returns:
        Watermarked images in the same order as ``bases``.

    Raises:
        InvalidConfig: If ``config`` is out of range. Nothing is loaded.
        LoadFailure: For the first undecodable source. Nothing is composited.
    """
    validate(config)
    if not bases:
        return []

    generators = [np.random.default_rng(s) for s in np.random.SeedSequence(seed).spawn(len(bases))]

    def task(index: int, base_img: Image.Image, preparer: WatermarkPreparer) -> Image.Image:
        prepared = preparer.prepare(base_img.width)
        points = single_points(base_img.size, prepared, config, generators[index])
        return render(base_img, prepared, points)

    return _run_batch(bases, watermark, config.general, task)


def apply_batch_grid(
    bases: Sequence[ImageSource],
    watermark: ImageSource,
    config: GridConfig,
) -> List[Image.Image]:
    """Apply a tiled watermark to every base image, preserving input order."""
    validate(config)
    if not bases:
        return []

    def task(index: int, base_img: Image.Image, preparer: WatermarkPreparer) -> Image.Image:
        prepared = preparer.prepare(base_img.width)
        return render(base_img, prepared, grid_points(base_img.size, prepared, config))

    return _run_batch(bases, watermark, config.general, task)
