"""Watermark compositing engine: single and grid placement, single image or batch."""

__version__ = "1.0.0"
__description__ = "Overlay a watermark image onto base images at aligned or tiled positions"

from .batch import apply_batch_grid, apply_batch_single
from .config import (
    GeneralConfig,
    GridConfig,
    HorizontalAlign,
    ResampleFilter,
    SingleConfig,
    VerticalAlign,
    validate,
)
from .config_loader import load_grid_config, load_single_config
from .errors import InvalidConfig, LoadFailure, WatermarkError
from .io import load_image
from .position import Point, position_grid, position_single
from .transform import prepare_watermark
from .watermark import apply_grid, apply_single

__all__ = [
    "GeneralConfig",
    "GridConfig",
    "HorizontalAlign",
    "InvalidConfig",
    "LoadFailure",
    "Point",
    "ResampleFilter",
    "SingleConfig",
    "VerticalAlign",
    "WatermarkError",
    "apply_batch_grid",
    "apply_batch_single",
    "apply_grid",
    "apply_single",
    "load_grid_config",
    "load_image",
    "load_single_config",
    "position_grid",
    "position_single",
    "prepare_watermark",
    "validate",
]
