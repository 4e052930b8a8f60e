"""Tests for watermark configuration validation."""

import math

import pytest
from pydantic import ValidationError

from imagewatermark.config import (
    GeneralConfig,
    GridConfig,
    HorizontalAlign,
    ResampleFilter,
    SingleConfig,
    VerticalAlign,
    validate,
)
from imagewatermark.errors import InvalidConfig


class TestGeneralConfig:
    """Range checks on the shared settings."""

    def test_defaults_are_valid(self):
        config = GeneralConfig()
        assert validate(config) is None
        assert config.resample_filter is ResampleFilter.BICUBIC

    @pytest.mark.parametrize("opacity", [0.0, -0.1, 1.01, math.nan])
    def test_opacity_out_of_range(self, opacity):
        with pytest.raises(InvalidConfig) as exc_info:
            validate(GeneralConfig(opacity=opacity))
        assert exc_info.value.field == "opacity"

    @pytest.mark.parametrize("opacity", [0.01, 0.5, 1.0])
    def test_opacity_in_range(self, opacity):
        validate(GeneralConfig(opacity=opacity))

    @pytest.mark.parametrize("percent", [0.0, -5.0, 100.5])
    def test_width_percent_out_of_range(self, percent):
        with pytest.raises(InvalidConfig) as exc_info:
            validate(GeneralConfig(width_percent=percent))
        assert exc_info.value.field == "width_percent"

    def test_width_percent_upper_bound_inclusive(self):
        validate(GeneralConfig(width_percent=100))

    @pytest.mark.parametrize("degrees", [-1.0, 360.0, 720.0])
    def test_rotation_out_of_range(self, degrees):
        with pytest.raises(InvalidConfig) as exc_info:
            validate(GeneralConfig(rotation_degrees=degrees))
        assert exc_info.value.field == "rotation_degrees"

    @pytest.mark.parametrize("degrees", [0.0, 45.0, 359.9])
    def test_rotation_in_range(self, degrees):
        validate(GeneralConfig(rotation_degrees=degrees))

    def test_negative_max_workers(self):
        with pytest.raises(InvalidConfig) as exc_info:
            validate(GeneralConfig(max_workers=-1))
        assert exc_info.value.field == "max_workers"
        assert "non-negative" in str(exc_info.value)

    def test_first_violation_wins(self):
        config = GeneralConfig(opacity=0, width_percent=0, rotation_degrees=400, max_workers=-1)
        with pytest.raises(InvalidConfig) as exc_info:
            validate(config)
        assert exc_info.value.field == "opacity"

        config = GeneralConfig(width_percent=0, rotation_degrees=400)
        with pytest.raises(InvalidConfig) as exc_info:
            validate(config)
        assert exc_info.value.field == "width_percent"

    def test_frozen(self):
        config = GeneralConfig()
        with pytest.raises(ValidationError):
            config.opacity = 0.5


class TestSingleConfig:

    def test_negative_spacing(self):
        with pytest.raises(InvalidConfig) as exc_info:
            validate(SingleConfig(spacing=-1))
        assert exc_info.value.field == "spacing"

    def test_general_checked_before_spacing(self):
        config = SingleConfig(general=GeneralConfig(opacity=2), spacing=-1)
        with pytest.raises(InvalidConfig) as exc_info:
            validate(config)
        assert exc_info.value.field == "opacity"

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("left", HorizontalAlign.LEFT),
            ("RIGHT", HorizontalAlign.RIGHT),
            ("mid", HorizontalAlign.MIDDLE),
            ("center", HorizontalAlign.MIDDLE),
            ("rand", HorizontalAlign.RANDOM),
            ("diagonal", HorizontalAlign.MIDDLE),
            (None, HorizontalAlign.MIDDLE),
        ],
    )
    def test_horizontal_alignment_coercion(self, raw, expected):
        assert SingleConfig(horizontal_align=raw).horizontal_align is expected

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("top", VerticalAlign.TOP),
            ("Bottom", VerticalAlign.BOTTOM),
            (" random ", VerticalAlign.RANDOM),
            (7, VerticalAlign.MIDDLE),
        ],
    )
    def test_vertical_alignment_coercion(self, raw, expected):
        assert SingleConfig(vertical_align=raw).vertical_align is expected

    def test_unknown_alignment_is_still_valid(self):
        validate(SingleConfig(horizontal_align="sideways", vertical_align="upwards"))


class TestGridConfig:

    def test_negative_spacing_and_offsets_allowed(self):
        config = GridConfig(grid_spacing_x=-50, grid_spacing_y=-5, offset_x=-100, offset_y=-1)
        assert validate(config) is None

    def test_delegates_to_general(self):
        with pytest.raises(InvalidConfig) as exc_info:
            validate(GridConfig(general=GeneralConfig(width_percent=101)))
        assert exc_info.value.field == "width_percent"


def test_invalid_config_message():
    error = InvalidConfig("opacity", "must be greater than 0")
    assert str(error) == "invalid opacity: must be greater than 0"
    assert error.reason == "must be greater than 0"


def test_resample_filter_maps_to_pillow():
    from PIL import Image

    assert ResampleFilter.LANCZOS.resampling is Image.Resampling.LANCZOS
    assert ResampleFilter("nearest").resampling is Image.Resampling.NEAREST
