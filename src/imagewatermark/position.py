"""Placement geometry for single and tiled watermarks."""

from __future__ import annotations

from typing import Any, List, NamedTuple, Optional, Tuple

import numpy as np

from .config import HorizontalAlign, VerticalAlign, normalize_align
from .logger import log

Size = Tuple[int, int]


class Point(NamedTuple):
    """Top-left corner of a watermark on the canvas. May lie off-canvas."""
    x: int
    y: int


def _half(n: int) -> int:
    # Truncate toward zero, so an oversized watermark centres symmetrically.
    return -(-n // 2) if n < 0 else n // 2


def _random_between(low: int, high: int, rng: np.random.Generator) -> int:
    if high > low:
        return int(rng.integers(low, high, endpoint=True))
    return low


def _axis_position(
    align: str,
    base_size: int,
    wm_size: int,
    spacing: int,
    rng: Optional[np.random.Generator],
) -> int:
    if align == "start":
        return spacing
    if align == "end":
        return base_size - wm_size - spacing
    if align == "random":
        if rng is None:
            rng = np.random.default_rng()
        return _random_between(spacing, base_size - wm_size - spacing, rng)
    return _half(base_size - wm_size)


_HORIZONTAL_AXIS = {
    HorizontalAlign.LEFT: "start",
    HorizontalAlign.MIDDLE: "middle",
    HorizontalAlign.RIGHT: "end",
    HorizontalAlign.RANDOM: "random",
}

_VERTICAL_AXIS = {
    VerticalAlign.TOP: "start",
    VerticalAlign.MIDDLE: "middle",
    VerticalAlign.BOTTOM: "end",
    VerticalAlign.RANDOM: "random",
}


def position_single(
    base_size: Size,
    watermark_size: Size,
    horizontal_align: Any,
    vertical_align: Any,
    spacing: int,
    rng: Optional[np.random.Generator] = None,
) -> Point:
    """
    Compute where a single watermark goes on the base image.

    Args:
        base_size: (width, height) of the base image.
        watermark_size: (width, height) of the prepared watermark.
        horizontal_align: Left, middle, right or random. Anything else centres.
        vertical_align: Top, middle, bottom or random. Anything else centres.
        spacing: Padding in pixels from the aligned edge. Ignored for middle.
        rng: Random source for random alignment.

    Returns:
        Top-left Point of the watermark.

    Random alignment picks uniformly from ``[spacing, base - wm - spacing]``.
    When the watermark plus spacing does not fit, the result is ``spacing``.
    """
    base_w, base_h = base_size
    wm_w, wm_h = watermark_size
    h_align = normalize_align(horizontal_align, HorizontalAlign, "horizontal")
    v_align = normalize_align(vertical_align, VerticalAlign, "vertical")

    x = _axis_position(_HORIZONTAL_AXIS[h_align], base_w, wm_w, spacing, rng)
    y = _axis_position(_VERTICAL_AXIS[v_align], base_h, wm_h, spacing, rng)
    return Point(x, y)


def grid_step(watermark_dim: int, grid_spacing: int) -> int:
    """Distance between consecutive tiles on one axis, at least 1."""
    step = watermark_dim + grid_spacing
    if step <= 0:
        log.warning(
            f"Grid step {step} (watermark {watermark_dim}px, spacing {grid_spacing}px) "
            "does not advance, clamping to 1"
        )
        return 1
    return step


def position_grid(
    base_size: Size,
    watermark_size: Size,
    grid_spacing_x: int,
    grid_spacing_y: int,
    offset_x: int,
    offset_y: int,
) -> List[Point]:
    """Tile positions in row-major order, starting at the offset.

    Rows advance until y reaches the base height, columns until x reaches
    the base width. An offset at or beyond the base size yields no points.
    """
    base_w, base_h = base_size
    wm_w, wm_h = watermark_size

    if offset_x >= base_w or offset_y >= base_h:
        return []

    step_x = grid_step(wm_w, grid_spacing_x)
    step_y = grid_step(wm_h, grid_spacing_y)

    xs = range(offset_x, base_w, step_x)
    return [Point(x, y) for y in range(offset_y, base_h, step_y) for x in xs]
