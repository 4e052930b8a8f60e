"""Watermark configuration models and validation."""

from __future__ import annotations

from enum import Enum
from typing import Any, Union

from PIL import Image
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import InvalidConfig
from .logger import log


class HorizontalAlign(str, Enum):
    """Horizontal placement of a single watermark."""
    LEFT = "left"
    MIDDLE = "middle"
    RIGHT = "right"
    RANDOM = "random"


class VerticalAlign(str, Enum):
    """Vertical placement of a single watermark."""
    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"
    RANDOM = "random"


class ResampleFilter(str, Enum):
    """Resampling filters available for resizing the watermark."""
    NEAREST = "nearest"
    BOX = "box"
    BILINEAR = "bilinear"
    HAMMING = "hamming"
    BICUBIC = "bicubic"
    LANCZOS = "lanczos"

    @property
    def resampling(self) -> Image.Resampling:
        return Image.Resampling[self.name]


_ALIGN_ALIASES = {
    "mid": "middle",
    "center": "middle",
    "centre": "middle",
    "rand": "random",
}


def normalize_align(value: Any, enum_cls: type[Enum], axis: str) -> Enum:
    """Coerce a raw alignment into ``enum_cls``, falling back to middle.

    Unknown values are not an error: the watermark is centred on that axis.
    """
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        key = value.strip().lower()
        key = _ALIGN_ALIASES.get(key, key)
        try:
            return enum_cls(key)
        except ValueError:
            pass
    log.warning(f"Unknown {axis} alignment {value!r}, using middle")
    return enum_cls("middle")


class GeneralConfig(BaseModel):
    """Settings shared by every watermarking mode."""

    model_config = ConfigDict(frozen=True)

    opacity: float = Field(1.0, description="Watermark opacity, (0, 1]")
    width_percent: float = Field(20.0, description="Watermark width as a percentage of the base width, (0, 100]")
    rotation_degrees: float = Field(0.0, description="Counter-clockwise rotation in degrees, [0, 360)")
    resample_filter: ResampleFilter = Field(ResampleFilter.BICUBIC, description="Filter used to resize the watermark")
    max_workers: int = Field(0, description="Batch worker cap (0 = default parallelism)")

    def check(self) -> None:
        """Check every range, raising InvalidConfig for the first violation."""
        if not 0 < self.opacity <= 1:
            raise InvalidConfig("opacity", f"must be greater than 0 and at most 1, got {self.opacity}")
        if not 0 < self.width_percent <= 100:
            raise InvalidConfig(
                "width_percent", f"must be greater than 0 and at most 100, got {self.width_percent}"
            )
        if not 0 <= self.rotation_degrees < 360:
            raise InvalidConfig(
                "rotation_degrees", f"must be at least 0 and less than 360, got {self.rotation_degrees}"
            )
        if self.max_workers < 0:
            raise InvalidConfig("max_workers", f"must be a non-negative integer, got {self.max_workers}")


class SingleConfig(BaseModel):
    """Configuration for placing one watermark at an aligned position."""

    model_config = ConfigDict(frozen=True)

    general: GeneralConfig = Field(default_factory=GeneralConfig)
    horizontal_align: HorizontalAlign = HorizontalAlign.MIDDLE
    vertical_align: VerticalAlign = VerticalAlign.MIDDLE
    spacing: int = Field(0, description="Padding in pixels from the aligned edge")

    @field_validator("horizontal_align", mode="before")
    @classmethod
    def _coerce_horizontal(cls, v):
        return normalize_align(v, HorizontalAlign, "horizontal")

    @field_validator("vertical_align", mode="before")
    @classmethod
    def _coerce_vertical(cls, v):
        return normalize_align(v, VerticalAlign, "vertical")

    def check(self) -> None:
        self.general.check()
        if self.spacing < 0:
            raise InvalidConfig("spacing", f"must be a non-negative integer, got {self.spacing}")


class GridConfig(BaseModel):
    """Configuration for tiling the watermark across the base image.

    Spacing and offsets may be negative: negative spacing overlaps tiles and
    negative offsets start the grid partly off-canvas.
    """

    model_config = ConfigDict(frozen=True)

    general: GeneralConfig = Field(default_factory=GeneralConfig)
    grid_spacing_x: int = 0
    grid_spacing_y: int = 0
    offset_x: int = 0
    offset_y: int = 0

    def check(self) -> None:
        self.general.check()


WatermarkConfig = Union[SingleConfig, GridConfig]


def validate(config: Union[GeneralConfig, WatermarkConfig]) -> None:
    """Validate a configuration without touching any image data.

    Raises:
        InvalidConfig: naming the first field that is out of range.
    """
    config.check()
